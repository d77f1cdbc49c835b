import django.core.validators
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
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(max_length=255)),
                ("father_or_org_name", models.CharField(max_length=255)),
                ("cnic_or_id_number", models.CharField(blank=True, max_length=64)),
                ("phone", models.CharField(max_length=32)),
                ("alternate_phone", models.CharField(blank=True, max_length=32)),
                ("city", models.CharField(max_length=120)),
                ("full_address", models.TextField()),
                ("title", models.CharField(max_length=255)),
                ("purpose", models.TextField()),
                ("required_amount", models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(1)])),
                ("collected_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("spent_amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("category", models.CharField(choices=[("education", "Education"), ("medical", "Medical"), ("food", "Food"), ("construction", "Construction"), ("emergency", "Emergency"), ("other", "Other")], max_length=20)),
                ("urgency_level", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High")], default="medium", max_length=10)),
                ("description", models.TextField()),
                ("usage_breakdown", models.TextField(blank=True)),
                ("duration_text", models.CharField(blank=True, max_length=255)),
                ("verification_media_paths", models.JSONField(blank=True, default=list)),
                ("timeline_start", models.DateTimeField(blank=True, null=True)),
                ("timeline_end", models.DateTimeField(blank=True, null=True)),
                ("steps", models.JSONField(blank=True, default=list)),
                ("bank_name", models.CharField(blank=True, max_length=255)),
                ("bank_account_holder_name", models.CharField(blank=True, max_length=255)),
                ("bank_account_number", models.CharField(blank=True, max_length=64)),
                ("bank_iban", models.CharField(blank=True, max_length=64)),
                ("jazzcash_account_name", models.CharField(blank=True, max_length=255)),
                ("jazzcash_mobile_number", models.CharField(blank=True, max_length=32)),
                ("easypaisa_account_name", models.CharField(blank=True, max_length=255)),
                ("easypaisa_mobile_number", models.CharField(blank=True, max_length=32)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected"), ("completed", "Completed")], db_index=True, default="pending", max_length=20)),
                ("admin_remark", models.TextField(blank=True)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("rejected_at", models.DateTimeField(blank=True, null=True)),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("progress_percent", models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("assigned_field_workers", models.ManyToManyField(blank=True, related_name="assigned_projects", to=settings.AUTH_USER_MODEL)),
                ("receiver", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="projects", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "projects",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["status", "-created_at"], name="project_status_created_idx")],
            },
        ),
    ]
