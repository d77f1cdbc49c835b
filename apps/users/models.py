from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils import timezone

ROLE_ADMIN = "admin"
ROLE_DONOR = "donor"
ROLE_FIELD = "field"
ROLE_RECEIVER = "receiver"

ROLE_CHOICES = (
    (ROLE_ADMIN, "Admin"),
    (ROLE_DONOR, "Donor"),
    (ROLE_FIELD, "Field Worker"),
    (ROLE_RECEIVER, "Receiver"),
)

REGISTRATION_PENDING = "pending"
REGISTRATION_VERIFIED = "verified"


class UserManager(BaseUserManager):
    """Custom user manager supporting email authentication."""

    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")

        email = self.normalize_email(email).lower()

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", ROLE_ADMIN)  # Force admin role

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    username = None

    email = models.EmailField(unique=True, db_index=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)

    name = models.CharField(max_length=255, blank=True)
    father_name = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    city = models.CharField(max_length=120, blank=True)
    address = models.TextField(blank=True)
    cnic = models.CharField(max_length=32, blank=True)
    photo_path = models.CharField(max_length=500, blank=True)

    # receivers and field workers start "pending" until an admin verifies them
    registration_status = models.CharField(max_length=20, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role", "is_active"], name="users_role_active_idx"),
        ]

    def __str__(self):
        return f"{self.email} ({self.role})"

    @property
    def is_verified(self):
        return (self.registration_status or "").strip().lower() == REGISTRATION_VERIFIED


class PortalCredential(models.Model):
    """
    Username/password login for a portal (admin, donor, field, receiver),
    separate from email accounts.
    """

    portal_key = models.CharField(max_length=20, choices=ROLE_CHOICES, db_index=True)
    username = models.CharField(max_length=150, db_index=True)
    password = models.CharField(max_length=128)
    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "portal_credentials"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["portal_key", "username"],
                name="unique_portal_username",
            ),
        ]

    def __str__(self):
        return f"{self.portal_key}:{self.username}"

    def set_password(self, raw_password):
        self.password = make_password(raw_password)

    def check_password(self, raw_password):
        return check_password(raw_password, self.password)
