from django.conf import settings
from django.db import models

PROJECT_APPROVED = "project.approved"
PROJECT_REJECTED = "project.rejected"
DONATION_APPROVED = "donation.approved"
DONATION_REJECTED = "donation.rejected"
PROGRESS_APPROVED = "progress.approved"
PROGRESS_REJECTED = "progress.rejected"
RECEIVER_VERIFIED = "receiver.verified"
FIELD_VERIFIED = "field.verified"


class Notification(models.Model):
    """
    One event for one user. Only `read_at` changes after creation.
    """

    NOTIFICATION_TYPES = [
        (PROJECT_APPROVED, "Request Approved"),
        (PROJECT_REJECTED, "Request Rejected"),
        (DONATION_APPROVED, "Donation Approved"),
        (DONATION_REJECTED, "Donation Rejected"),
        (PROGRESS_APPROVED, "Progress Update Approved"),
        (PROGRESS_REJECTED, "Progress Update Rejected"),
        (RECEIVER_VERIFIED, "Receiver Verified"),
        (FIELD_VERIFIED, "Field Worker Verified"),
    ]

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications"
    )
    recipient_role = models.CharField(max_length=20, db_index=True)

    notif_type = models.CharField(
        max_length=50,
        choices=NOTIFICATION_TYPES,
        db_index=True,
    )

    title = models.CharField(max_length=255)
    message = models.TextField(blank=True)

    # what the notification is about, e.g. ("donation", "42")
    entity_type = models.CharField(max_length=50, blank=True)
    entity_id = models.CharField(max_length=64, blank=True)

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    data = models.JSONField(null=True, blank=True)

    read_at = models.DateTimeField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "notifications"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["recipient", "-created_at"], name="notif_recipient_created_idx"),
            models.Index(fields=["recipient", "read_at"], name="notif_recipient_read_idx"),
        ]

    def __str__(self):
        return f"Notification({self.recipient_id}, {self.notif_type})"
