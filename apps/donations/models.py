import secrets
import string
import time

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.donations.constants import (
    PAYMENT_INITIATED,
    PAYMENT_STATUS_CHOICES,
    RECEIVER_PENDING,
    RECEIVER_STATUS_CHOICES,
    VERIFICATION_PENDING,
    VERIFICATION_STATUS_CHOICES,
    PaymentMethod,
)

User = settings.AUTH_USER_MODEL

_BASE36 = string.digits + string.ascii_uppercase


def to_base36(number):
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def make_receipt_no():
    """
    Example: RCPT-LX3K9Q2A-7F2KQ1
    """
    stamp = to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"RCPT-{stamp}-{suffix}"


class Donation(models.Model):
    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.PROTECT,
        related_name="donations",
    )
    donor = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name="donations",
    )

    amount = models.DecimalField(
        max_digits=14, decimal_places=2,
        validators=[MinValueValidator(1)],
    )
    method = models.CharField(max_length=20, choices=PaymentMethod.choices)

    payment_status = models.CharField(
        max_length=20,
        choices=PAYMENT_STATUS_CHOICES,
        default=PAYMENT_INITIATED,
        db_index=True,
    )
    verification_status = models.CharField(
        max_length=20,
        choices=VERIFICATION_STATUS_CHOICES,
        default=VERIFICATION_PENDING,
        db_index=True,
    )

    # Only the receiver who owns the project moves this, exactly once
    receiver_status = models.CharField(
        max_length=20,
        choices=RECEIVER_STATUS_CHOICES,
        default=RECEIVER_PENDING,
        db_index=True,
    )
    receiver_remark = models.TextField(blank=True)
    receiver_action_at = models.DateTimeField(null=True, blank=True)

    paid_amount = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    # Details of the donor's own transfer, for offline methods
    donor_account_name = models.CharField(max_length=255, blank=True)
    donor_account_number_or_mobile = models.CharField(max_length=64, blank=True)
    transaction_id = models.CharField(max_length=128, blank=True)

    proof_paths = models.JSONField(default=list, blank=True)

    # Gateway references (PayPal only)
    provider_type = models.CharField(max_length=20, blank=True)
    provider_order_id = models.CharField(max_length=128, blank=True, db_index=True)
    provider_capture_id = models.CharField(max_length=128, blank=True)

    admin_remark = models.TextField(blank=True)

    receipt_no = models.CharField(max_length=40, unique=True, default=make_receipt_no)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "donations"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["donor", "-created_at"], name="donation_donor_created_idx"),
        ]

    def __str__(self):
        return f"Donation {self.receipt_no} | {self.amount} via {self.method}"
