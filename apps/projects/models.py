from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.donations.constants import PaymentMethod
from apps.projects.constants import (
    CATEGORY_CHOICES,
    STATUS_CHOICES,
    STATUS_PENDING,
    URGENCY_CHOICES,
)

User = settings.AUTH_USER_MODEL


class Project(models.Model):
    """
    A receiver's funding request.

    `collected_amount`, `spent_amount` and `progress_percent` are rollups
    owned by the approval services and only ever grow.
    """

    receiver = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name="projects",
    )

    # Receiver details as submitted with the request
    full_name = models.CharField(max_length=255)
    father_or_org_name = models.CharField(max_length=255)
    cnic_or_id_number = models.CharField(max_length=64, blank=True)
    phone = models.CharField(max_length=32)
    alternate_phone = models.CharField(max_length=32, blank=True)
    city = models.CharField(max_length=120)
    full_address = models.TextField()

    title = models.CharField(max_length=255)
    purpose = models.TextField()

    required_amount = models.DecimalField(
        max_digits=14, decimal_places=2,
        validators=[MinValueValidator(1)],
    )
    collected_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    spent_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)

    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    urgency_level = models.CharField(max_length=10, choices=URGENCY_CHOICES, default="medium")

    description = models.TextField()
    usage_breakdown = models.TextField(blank=True)
    duration_text = models.CharField(max_length=255, blank=True)
    verification_media_paths = models.JSONField(default=list, blank=True)
    timeline_start = models.DateTimeField(null=True, blank=True)
    timeline_end = models.DateTimeField(null=True, blank=True)

    # ordered [{"key", "title", "order"}]
    steps = models.JSONField(default=list, blank=True)

    # Payment accounts; a block is usable only when every required part is set
    bank_name = models.CharField(max_length=255, blank=True)
    bank_account_holder_name = models.CharField(max_length=255, blank=True)
    bank_account_number = models.CharField(max_length=64, blank=True)
    bank_iban = models.CharField(max_length=64, blank=True)

    jazzcash_account_name = models.CharField(max_length=255, blank=True)
    jazzcash_mobile_number = models.CharField(max_length=32, blank=True)

    easypaisa_account_name = models.CharField(max_length=255, blank=True)
    easypaisa_mobile_number = models.CharField(max_length=32, blank=True)

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
    )
    admin_remark = models.TextField(blank=True)

    approved_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)
    published_at = models.DateTimeField(null=True, blank=True)

    assigned_field_workers = models.ManyToManyField(
        User,
        blank=True,
        related_name="assigned_projects",
    )

    progress_percent = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "projects"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status", "-created_at"], name="project_status_created_idx"),
        ]

    def __str__(self):
        return f"Project #{self.id} | {self.title} ({self.status})"

    def configured_methods(self):
        """Offline payment methods whose account details are complete."""
        methods = []
        if self.bank_name and self.bank_account_holder_name and self.bank_account_number:
            methods.append(PaymentMethod.BANK)
        if self.jazzcash_account_name and self.jazzcash_mobile_number:
            methods.append(PaymentMethod.JAZZCASH)
        if self.easypaisa_account_name and self.easypaisa_mobile_number:
            methods.append(PaymentMethod.EASYPAISA)
        return methods

    def get_step(self, key):
        for step in self.steps or []:
            if step.get("key") == key:
                return step
        return None

    def is_assigned(self, user):
        return self.assigned_field_workers.filter(pk=user.pk).exists()

    def payment_accounts(self):
        accounts = {}
        if PaymentMethod.BANK in self.configured_methods():
            accounts["bank"] = {
                "bank_name": self.bank_name,
                "account_holder_name": self.bank_account_holder_name,
                "account_number": self.bank_account_number,
                "iban": self.bank_iban,
            }
        if self.jazzcash_account_name and self.jazzcash_mobile_number:
            accounts["jazzcash"] = {
                "account_name": self.jazzcash_account_name,
                "mobile_number": self.jazzcash_mobile_number,
            }
        if self.easypaisa_account_name and self.easypaisa_mobile_number:
            accounts["easypaisa"] = {
                "account_name": self.easypaisa_account_name,
                "mobile_number": self.easypaisa_mobile_number,
            }
        return accounts
