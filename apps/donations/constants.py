from django.db import models


class PaymentMethod(models.TextChoices):
    PAYPAL = "paypal", "PayPal"
    CASH = "cash", "Cash"
    BANK = "bank", "Bank Transfer"
    JAZZCASH = "jazzcash", "JazzCash"
    EASYPAISA = "easypaisa", "EasyPaisa"


# methods a donor can pay by and then prove with an uploaded receipt
OFFLINE_PROOF_METHODS = (
    PaymentMethod.BANK,
    PaymentMethod.JAZZCASH,
    PaymentMethod.EASYPAISA,
)

METHOD_NOT_ENABLED_MESSAGES = {
    PaymentMethod.BANK: "Bank transfer is not enabled for this project",
    PaymentMethod.JAZZCASH: "JazzCash is not enabled for this project",
    PaymentMethod.EASYPAISA: "EasyPaisa is not enabled for this project",
}

PAYMENT_INITIATED = "initiated"
PAYMENT_PAID = "paid"
PAYMENT_FAILED = "failed"

PAYMENT_STATUS_CHOICES = (
    (PAYMENT_INITIATED, "Initiated"),
    (PAYMENT_PAID, "Paid"),
    (PAYMENT_FAILED, "Failed"),
)

VERIFICATION_PENDING = "pending"
VERIFICATION_APPROVED = "approved"
VERIFICATION_FLAGGED = "flagged"

VERIFICATION_STATUS_CHOICES = (
    (VERIFICATION_PENDING, "Pending"),
    (VERIFICATION_APPROVED, "Approved"),
    (VERIFICATION_FLAGGED, "Flagged"),
)

RECEIVER_PENDING = "pending"
RECEIVER_APPROVED = "approved"
RECEIVER_REJECTED = "rejected"

RECEIVER_STATUS_CHOICES = (
    (RECEIVER_PENDING, "Pending"),
    (RECEIVER_APPROVED, "Approved"),
    (RECEIVER_REJECTED, "Rejected"),
)

PROVIDER_PAYPAL = "paypal"
