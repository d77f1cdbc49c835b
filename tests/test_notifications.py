from datetime import timedelta
from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.utils import timezone

from apps.donations.models import Donation
from apps.notifications.models import DONATION_APPROVED, PROJECT_APPROVED, Notification
from apps.notifications.services.create_notifications import BestEffortNotifier, notifier, user_group

from .helpers import bearer

pytestmark = pytest.mark.django_db


def make_notifications(user, count, **extra):
    return [
        Notification.objects.create(
            recipient=user,
            recipient_role=user.role,
            notif_type=PROJECT_APPROVED,
            title=f"Notice {i}",
            **extra,
        )
        for i in range(count)
    ]


def test_send_stores_and_pushes(donor, receiver):
    layer = get_channel_layer()
    channel = async_to_sync(layer.new_channel)()
    async_to_sync(layer.group_add)(user_group(donor.id), channel)

    notif = notifier.send(
        donor, DONATION_APPROVED, "Donation Approved", "Thanks",
        entity_type="donation", entity_id=7, actor=receiver, data={"remark": "ok"},
    )

    assert notif.pk is not None
    assert notif.recipient_role == donor.role
    assert notif.entity_id == "7"
    assert notif.actor == receiver

    message = async_to_sync(layer.receive)(channel)
    assert message["type"] == "send_notification"
    assert message["id"] == notif.id
    assert message["title"] == "Donation Approved"
    assert message["data"] == {"remark": "ok"}
    assert message["read_at"] is None


def test_send_swallows_storage_failure(donor):
    with mock.patch.object(Notification.objects, "create", side_effect=RuntimeError("db down")):
        assert notifier.send(donor, DONATION_APPROVED, "Donation Approved") is None


def test_send_returns_notification_when_push_fails(donor):
    with mock.patch.object(BestEffortNotifier, "push", side_effect=RuntimeError("layer down")):
        notif = notifier.send(donor, DONATION_APPROVED, "Donation Approved")

    assert notif is not None
    assert Notification.objects.filter(pk=notif.pk).exists()


def test_non_user_actor_is_dropped(donor):
    notif = notifier.send(donor, DONATION_APPROVED, "Donation Approved", actor=object())

    assert notif.actor is None


def test_donation_approval_survives_notification_failure(api_client, donor, receiver, project):
    donation = Donation.objects.create(
        project=project, donor=donor, amount=5000, method="bank",
        proof_paths=["/uploads/donation-proofs/1_a.png"],
    )

    with mock.patch.object(Notification.objects, "create", side_effect=RuntimeError("db down")):
        response = bearer(api_client, receiver).post(
            f"/api/receiver/donations/{donation.id}/approve/", {}, format="json"
        )

    assert response.status_code == 200
    assert response.json()["donation"]["receiver_status"] == "approved"
    project.refresh_from_db()
    assert project.collected_amount == 5000


def test_my_notifications_newest_first(api_client, donor, make_user):
    first, second = make_notifications(donor, 2)
    make_notifications(make_user(), 1)

    response = bearer(api_client, donor).get("/api/notifications/mine/")

    assert response.status_code == 200
    assert [n["id"] for n in response.json()["notifications"]] == [second.id, first.id]


@pytest.mark.parametrize("limit, expected", [("2", 2), ("0", 1), ("abc", 3), ("500", 3)])
def test_limit_is_clamped(api_client, donor, limit, expected):
    make_notifications(donor, 3)

    response = bearer(api_client, donor).get(f"/api/notifications/mine/?limit={limit}")

    assert len(response.json()["notifications"]) == expected


def test_before_pages_back(api_client, donor):
    old, new = make_notifications(donor, 2)
    Notification.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=2))
    cutoff = (timezone.now() - timedelta(days=1)).isoformat()

    response = bearer(api_client, donor).get("/api/notifications/mine/", {"before": cutoff})

    assert [n["id"] for n in response.json()["notifications"]] == [old.id]


def test_unread_count_and_mark_read(api_client, donor, make_user):
    mine = make_notifications(donor, 3)
    theirs = make_notifications(make_user(), 1)
    bearer(api_client, donor)

    assert api_client.get("/api/notifications/unread-count/").json() == {"unread_count": 3}

    response = api_client.post(
        "/api/notifications/mark-read/",
        {"ids": [mine[0].id, mine[1].id, theirs[0].id]},
        format="json",
    )

    assert response.status_code == 200
    assert response.json() == {"updated": 2}
    assert api_client.get("/api/notifications/unread-count/").json() == {"unread_count": 1}
    theirs[0].refresh_from_db()
    assert theirs[0].read_at is None


def test_mark_read_twice_updates_nothing(api_client, donor):
    notif = make_notifications(donor, 1)[0]
    bearer(api_client, donor)

    api_client.post("/api/notifications/mark-read/", {"ids": [notif.id]}, format="json")
    response = api_client.post("/api/notifications/mark-read/", {"ids": [notif.id]}, format="json")

    assert response.json() == {"updated": 0}


def test_mark_read_requires_ids(api_client, donor):
    response = bearer(api_client, donor).post("/api/notifications/mark-read/", {"ids": []}, format="json")

    assert response.status_code == 400
    assert response.json()["message"].startswith("ids:")


def test_notifications_require_login(api_client):
    response = api_client.get("/api/notifications/mine/")

    assert response.status_code == 401
