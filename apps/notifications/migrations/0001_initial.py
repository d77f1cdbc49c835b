import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("recipient_role", models.CharField(db_index=True, max_length=20)),
                ("notif_type", models.CharField(choices=[("project.approved", "Request Approved"), ("project.rejected", "Request Rejected"), ("donation.approved", "Donation Approved"), ("donation.rejected", "Donation Rejected"), ("progress.approved", "Progress Update Approved"), ("progress.rejected", "Progress Update Rejected"), ("receiver.verified", "Receiver Verified"), ("field.verified", "Field Worker Verified")], db_index=True, max_length=50)),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField(blank=True)),
                ("entity_type", models.CharField(blank=True, max_length=50)),
                ("entity_id", models.CharField(blank=True, max_length=64)),
                ("data", models.JSONField(blank=True, null=True)),
                ("read_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("actor", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to=settings.AUTH_USER_MODEL)),
                ("recipient", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "notifications",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["recipient", "-created_at"], name="notif_recipient_created_idx"),
                    models.Index(fields=["recipient", "read_at"], name="notif_recipient_read_idx"),
                ],
            },
        ),
    ]
