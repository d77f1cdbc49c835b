from django.conf import settings
from django.core.management.base import BaseCommand

from apps.adminpanel.models import DEFAULT_SETTINGS, AppSettings
from apps.users.models import ROLE_ADMIN, PortalCredential


class Command(BaseCommand):
    help = "Create the default organisation settings and the admin portal login, if missing."

    def handle(self, *args, **options):
        if AppSettings.current() is None:
            AppSettings.objects.create(**DEFAULT_SETTINGS)
            self.stdout.write(self.style.SUCCESS("Created default settings"))

        username = settings.PORTAL_ADMIN_USERNAME
        password = settings.PORTAL_ADMIN_PASSWORD
        if not username or not password:
            self.stdout.write("PORTAL_ADMIN_USERNAME/PORTAL_ADMIN_PASSWORD not set, skipping admin portal login")
            return

        if PortalCredential.objects.filter(portal_key=ROLE_ADMIN, username=username).exists():
            self.stdout.write(f"Admin portal login '{username}' already exists")
            return

        credential = PortalCredential(portal_key=ROLE_ADMIN, username=username, is_active=True)
        credential.set_password(password)
        credential.save()
        self.stdout.write(self.style.SUCCESS(f"Created admin portal login '{username}'"))
