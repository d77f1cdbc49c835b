import pytest

from apps.users.models import PortalCredential, User

from .helpers import PASSWORD, bearer, upload

pytestmark = pytest.mark.django_db

IDENTITY = {
    "name": "Jane",
    "father_name": "John",
    "cnic": "35202-1234567-1",
    "address": "12 Mall Road, Lahore",
    "phone": "03001234567",
}


def make_credential(portal_key="admin", username="ops", password=PASSWORD, **extra):
    credential = PortalCredential(portal_key=portal_key, username=username, **extra)
    credential.set_password(password)
    credential.save()
    return credential


# ---------- Registration ----------
def test_register_donor(api_client):
    response = api_client.post(
        "/api/auth/register/",
        {"role": "donor", "email": " Ali@Example.com", "password": "pass1234", "name": "Ali"},
        format="json",
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["access"] and data["refresh"]
    assert data["user"]["email"] == "ali@example.com"
    assert data["user"]["role"] == "donor"
    assert data["user"]["registration_status"] == ""


def test_register_receiver_with_photo(api_client):
    response = api_client.post(
        "/api/auth/register/",
        {"role": "receiver", "email": "jane@example.com", "password": "pass1234", "photo": upload("me.png"), **IDENTITY},
        format="multipart",
    )

    assert response.status_code == 201
    user = response.json()["data"]["user"]
    assert user["registration_status"] == "pending"
    assert user["photo_path"].startswith("/uploads/receiver-photos/")


def test_receiver_without_photo_is_not_created(api_client):
    response = api_client.post(
        "/api/auth/register/",
        {"role": "receiver", "email": "jane@example.com", "password": "pass1234", **IDENTITY},
        format="multipart",
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Profile picture is required"}
    assert not User.objects.filter(email="jane@example.com").exists()


def test_field_worker_starts_pending(api_client):
    response = api_client.post(
        "/api/auth/register/",
        {"role": "field", "email": "fw@example.com", "password": "pass1234", **IDENTITY},
        format="json",
    )

    assert response.status_code == 201
    assert response.json()["data"]["user"]["registration_status"] == "pending"


def test_photo_folder_follows_role(api_client, uploads_root):
    donor = api_client.post(
        "/api/auth/register/",
        {"role": "donor", "email": "ali@example.com", "password": "pass1234", "photo": upload("ali.png")},
        format="multipart",
    )
    field = api_client.post(
        "/api/auth/register/",
        {"role": "field", "email": "fw@example.com", "password": "pass1234", "photo": upload("fw.png"), **IDENTITY},
        format="multipart",
    )

    assert donor.status_code == 201
    assert donor.json()["data"]["user"]["photo_path"].startswith("/uploads/donor-photos/")
    assert field.status_code == 201
    assert field.json()["data"]["user"]["photo_path"] == ""
    assert not (uploads_root / "receiver-photos").exists()


def test_field_worker_needs_identity(api_client):
    payload = {"role": "field", "email": "fw@example.com", "password": "pass1234", **IDENTITY}
    payload.pop("cnic")

    response = api_client.post("/api/auth/register/", payload, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "cnic: This field is required."


def test_duplicate_email_conflicts(api_client, donor):
    response = api_client.post(
        "/api/auth/register/",
        {"role": "donor", "email": donor.email.upper(), "password": "pass1234"},
        format="json",
    )

    assert response.status_code == 409
    assert response.json()["message"] == "Email already in use"


def test_admin_role_cannot_self_register(api_client):
    response = api_client.post(
        "/api/auth/register/",
        {"role": "admin", "email": "boss@example.com", "password": "pass1234"},
        format="json",
    )

    assert response.status_code == 400
    assert response.json()["message"].startswith("role:")


# ---------- Login ----------
def test_login(api_client, donor):
    response = api_client.post("/api/auth/login/", {"email": donor.email, "password": PASSWORD}, format="json")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["user"]["id"] == donor.id

    bearer_header = f"Bearer {body['data']['access']}"
    me = api_client.get("/api/auth/me/", HTTP_AUTHORIZATION=bearer_header)
    assert me.status_code == 200
    assert me.json()["user"]["email"] == donor.email


@pytest.mark.parametrize("email, password", [("donor1@example.com", "wrong-pass"), ("nobody@example.com", PASSWORD)])
def test_login_with_bad_credentials(api_client, donor, email, password):
    response = api_client.post("/api/auth/login/", {"email": email, "password": password}, format="json")

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}


def test_disabled_account_cannot_login(api_client, make_user):
    user = make_user(is_active=False)

    response = api_client.post("/api/auth/login/", {"email": user.email, "password": PASSWORD}, format="json")

    assert response.status_code == 403
    assert response.json() == {"message": "Account disabled"}


def test_me_requires_token(api_client):
    response = api_client.get("/api/auth/me/")

    assert response.status_code == 401


def test_me_after_account_deleted(api_client, donor):
    client = bearer(api_client, donor)
    donor.delete()

    response = client.get("/api/auth/me/")

    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


def test_me_for_disabled_account(api_client, donor):
    client = bearer(api_client, donor)
    User.objects.filter(pk=donor.pk).update(is_active=False)

    response = client.get("/api/auth/me/")

    assert response.status_code == 401


def test_donor_profile_update(api_client, donor):
    response = bearer(api_client, donor).put(
        "/api/auth/me/profile/",
        {"name": "", "city": "Karachi", "photo": upload("avatar.png")},
        format="multipart",
    )

    assert response.status_code == 200
    body = response.json()["user"]
    assert body["name"] == donor.name
    assert body["city"] == "Karachi"
    assert body["photo_path"].startswith("/uploads/donor-photos/")


def test_profile_update_is_donor_only(api_client, receiver):
    response = bearer(api_client, receiver).put("/api/auth/me/profile/", {"city": "Karachi"}, format="json")

    assert response.status_code == 403


# ---------- Portal ----------
def test_portal_login(api_client):
    credential = make_credential()

    response = api_client.post(
        "/api/portal/login/",
        {"portal_key": "admin", "username": "ops", "password": PASSWORD},
        format="json",
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["portal"] == {"id": credential.id, "portal_key": "admin", "username": "ops"}
    assert data["access"]


def test_portal_login_is_scoped_to_portal(api_client):
    make_credential(portal_key="field")

    response = api_client.post(
        "/api/portal/login/",
        {"portal_key": "admin", "username": "ops", "password": PASSWORD},
        format="json",
    )

    assert response.status_code == 401


def test_inactive_portal_credential(api_client):
    make_credential(is_active=False)

    response = api_client.post(
        "/api/portal/login/",
        {"portal_key": "admin", "username": "ops", "password": PASSWORD},
        format="json",
    )

    assert response.status_code == 403


def test_portal_token_is_not_an_email_account(api_client):
    credential = make_credential(portal_key="donor")

    response = bearer(api_client, credential).get("/api/auth/me/")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_deactivated_credential_token_stops_working(api_client):
    credential = make_credential()
    bearer(api_client, credential)
    PortalCredential.objects.filter(pk=credential.pk).update(is_active=False)

    response = api_client.get("/api/portal/admin/credentials/")

    assert response.status_code == 401


def test_admin_manages_portal_credentials(api_client, admin_user):
    bearer(api_client, admin_user)

    response = api_client.post(
        "/api/portal/admin/credentials/",
        {"portal_key": "field", "username": " crew ", "password": "pass1234"},
        format="json",
    )
    assert response.status_code == 201
    created = response.json()
    assert created["username"] == "crew"
    assert "password" not in created

    credential = PortalCredential.objects.get(pk=created["id"])
    assert credential.check_password("pass1234")

    duplicate = api_client.post(
        "/api/portal/admin/credentials/",
        {"portal_key": "field", "username": "crew", "password": "pass1234"},
        format="json",
    )
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "username: Username already exists for this portal"

    updated = api_client.put(
        f"/api/portal/admin/credentials/{credential.id}/",
        {"password": "newpass99", "is_active": False},
        format="json",
    )
    assert updated.status_code == 200
    credential.refresh_from_db()
    assert credential.check_password("newpass99")
    assert credential.is_active is False

    listed = api_client.get("/api/portal/admin/credentials/")
    assert [c["id"] for c in listed.json()] == [credential.id]

    deleted = api_client.delete(f"/api/portal/admin/credentials/{credential.id}/")
    assert deleted.status_code == 204
    assert not PortalCredential.objects.exists()


def test_short_portal_password(api_client, admin_user):
    response = bearer(api_client, admin_user).post(
        "/api/portal/admin/credentials/",
        {"portal_key": "field", "username": "crew", "password": "123"},
        format="json",
    )

    assert response.status_code == 400
    assert response.json()["message"].startswith("password:")


def test_credentials_are_admin_only(api_client, donor):
    response = bearer(api_client, donor).get("/api/portal/admin/credentials/")

    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden"}
