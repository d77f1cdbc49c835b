from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

User = settings.AUTH_USER_MODEL


class ProgressUpdate(models.Model):
    """
    A field worker's report against one step of a project.
    """

    WORK_STATUS_CHOICES = (
        ("pending", "Pending"),
        ("ongoing", "Ongoing"),
        ("completed", "Completed"),
    )

    APPROVAL_PENDING = "pending"
    APPROVAL_APPROVED = "approved"
    APPROVAL_REJECTED = "rejected"

    APPROVAL_STATUS_CHOICES = (
        (APPROVAL_PENDING, "Pending"),
        (APPROVAL_APPROVED, "Approved"),
        (APPROVAL_REJECTED, "Rejected"),
    )

    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.PROTECT,
        related_name="progress_updates",
    )
    field_worker = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name="progress_updates",
    )

    # copied from the project's step list at submission time
    step_key = models.CharField(max_length=64)
    step_title = models.CharField(max_length=255)

    work_status = models.CharField(max_length=20, choices=WORK_STATUS_CHOICES, default="pending")
    percent_complete = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    amount_used = models.DecimalField(
        max_digits=14, decimal_places=2, default=0,
        validators=[MinValueValidator(0)],
    )

    notes = models.TextField(blank=True)
    media_paths = models.JSONField(default=list, blank=True)

    approval_status = models.CharField(
        max_length=20,
        choices=APPROVAL_STATUS_CHOICES,
        default=APPROVAL_PENDING,
        db_index=True,
    )
    admin_remark = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "progress_updates"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["project", "-created_at"], name="progress_project_created_idx"),
        ]

    def __str__(self):
        return f"ProgressUpdate #{self.id} | project {self.project_id} | {self.step_key}"
