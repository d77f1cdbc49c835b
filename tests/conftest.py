"""
DonateFlow - test fixtures
"""
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from apps.projects.constants import DEFAULT_STEPS, STATUS_APPROVED
from apps.projects.models import Project
from apps.users.models import (
    REGISTRATION_PENDING,
    REGISTRATION_VERIFIED,
    ROLE_ADMIN,
    ROLE_DONOR,
    ROLE_FIELD,
    ROLE_RECEIVER,
    User,
)

from .helpers import PASSWORD


@pytest.fixture(autouse=True)
def uploads_root(settings, tmp_path):
    """Every test writes uploads into its own directory."""
    settings.MEDIA_ROOT = tmp_path / "uploads"
    return settings.MEDIA_ROOT


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def factory(role=ROLE_DONOR, verified=True, **extra):
        counter["n"] += 1
        email = extra.pop("email", f"{role}{counter['n']}@example.com")
        if role in (ROLE_RECEIVER, ROLE_FIELD):
            extra.setdefault("registration_status", REGISTRATION_VERIFIED if verified else REGISTRATION_PENDING)
        extra.setdefault("name", f"{role.title()} {counter['n']}")
        return User.objects.create_user(email, PASSWORD, role=role, **extra)

    return factory


@pytest.fixture
def admin_user(make_user):
    return make_user(ROLE_ADMIN)


@pytest.fixture
def donor(make_user):
    return make_user(ROLE_DONOR)


@pytest.fixture
def receiver(make_user):
    return make_user(ROLE_RECEIVER)


@pytest.fixture
def field_worker(make_user):
    return make_user(ROLE_FIELD)


@pytest.fixture
def make_project(db):
    def factory(receiver, status=STATUS_APPROVED, **extra):
        fields = {
            "full_name": "Jane Receiver",
            "father_or_org_name": "Hope Foundation",
            "phone": "03001234567",
            "city": "Lahore",
            "full_address": "12 Mall Road, Lahore",
            "title": "School roof repair",
            "purpose": "Fix the leaking roof before winter",
            "required_amount": Decimal("100000"),
            "category": "education",
            "description": "The roof of the primary school leaks.",
            "usage_breakdown": "Materials and labour",
            "verification_media_paths": ["/uploads/receiver-verifications/1_doc.png"],
            "steps": [dict(step) for step in DEFAULT_STEPS],
            "bank_name": "ABC Bank",
            "bank_account_holder_name": "Jane",
            "bank_account_number": "12345",
            "status": status,
        }
        fields.update(extra)
        return Project.objects.create(receiver=receiver, **fields)

    return factory


@pytest.fixture
def project(make_project, receiver):
    return make_project(receiver)
