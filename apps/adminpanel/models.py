from django.db import models

DEFAULT_SETTINGS = {
    "name": "DonateFlow",
    "address": "",
    "phone": "",
    "logo_path": "",
}


class AppSettings(models.Model):
    """
    Organisation branding. The newest row is the live one.
    """
    name = models.CharField(max_length=255)
    address = models.TextField(blank=True)
    phone = models.CharField(max_length=32, blank=True)
    logo_path = models.CharField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "app_settings"
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "app settings"

    def __str__(self):
        return self.name

    @classmethod
    def current(cls):
        return cls.objects.order_by("-created_at", "-id").first()
