import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import apps.donations.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("projects", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Donation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(1)])),
                ("method", models.CharField(choices=[("paypal", "PayPal"), ("cash", "Cash"), ("bank", "Bank Transfer"), ("jazzcash", "JazzCash"), ("easypaisa", "EasyPaisa")], max_length=20)),
                ("payment_status", models.CharField(choices=[("initiated", "Initiated"), ("paid", "Paid"), ("failed", "Failed")], db_index=True, default="initiated", max_length=20)),
                ("verification_status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("flagged", "Flagged")], db_index=True, default="pending", max_length=20)),
                ("receiver_status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], db_index=True, default="pending", max_length=20)),
                ("receiver_remark", models.TextField(blank=True)),
                ("receiver_action_at", models.DateTimeField(blank=True, null=True)),
                ("paid_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("donor_account_name", models.CharField(blank=True, max_length=255)),
                ("donor_account_number_or_mobile", models.CharField(blank=True, max_length=64)),
                ("transaction_id", models.CharField(blank=True, max_length=128)),
                ("proof_paths", models.JSONField(blank=True, default=list)),
                ("provider_type", models.CharField(blank=True, max_length=20)),
                ("provider_order_id", models.CharField(blank=True, db_index=True, max_length=128)),
                ("provider_capture_id", models.CharField(blank=True, max_length=128)),
                ("admin_remark", models.TextField(blank=True)),
                ("receipt_no", models.CharField(default=apps.donations.models.make_receipt_no, max_length=40, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("donor", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="donations", to=settings.AUTH_USER_MODEL)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="donations", to="projects.project")),
            ],
            options={
                "db_table": "donations",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["donor", "-created_at"], name="donation_donor_created_idx")],
            },
        ),
    ]
