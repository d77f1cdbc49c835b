import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("projects", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ProgressUpdate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("step_key", models.CharField(max_length=64)),
                ("step_title", models.CharField(max_length=255)),
                ("work_status", models.CharField(choices=[("pending", "Pending"), ("ongoing", "Ongoing"), ("completed", "Completed")], default="pending", max_length=20)),
                ("percent_complete", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ("amount_used", models.DecimalField(decimal_places=2, default=0, max_digits=14, validators=[django.core.validators.MinValueValidator(0)])),
                ("notes", models.TextField(blank=True)),
                ("media_paths", models.JSONField(blank=True, default=list)),
                ("approval_status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], db_index=True, default="pending", max_length=20)),
                ("admin_remark", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("field_worker", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="progress_updates", to=settings.AUTH_USER_MODEL)),
                ("project", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="progress_updates", to="projects.project")),
            ],
            options={
                "db_table": "progress_updates",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["project", "-created_at"], name="progress_project_created_idx")],
            },
        ),
    ]
