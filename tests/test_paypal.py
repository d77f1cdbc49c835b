from decimal import Decimal
from unittest import mock

import pytest
import requests

from apps.cores.exceptions import PaymentGatewayError
from apps.donations.models import Donation
from apps.donations.paypal import PayPalClient

from .helpers import bearer


def fake_response(status_code=200, payload=None, text=""):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload or {}
    response.text = text
    return response


def make_client(*responses, **kwargs):
    session = mock.Mock()
    session.request.side_effect = list(responses)
    options = {"mode": "sandbox", "client_id": "id", "client_secret": "secret", "timeout": 5}
    options.update(kwargs)
    return PayPalClient(session=session, **options), session


TOKEN = fake_response(payload={"access_token": "tok"})


def test_create_order_fetches_token_then_posts_order():
    order = fake_response(
        payload={
            "id": "ORDER-1",
            "links": [
                {"rel": "self", "href": "https://paypal/self"},
                {"rel": "approve", "href": "https://paypal/approve"},
            ],
        }
    )
    client, session = make_client(TOKEN, order)

    result = client.create_order(Decimal("25"), "School roof", "https://app/return", "https://app/cancel")

    assert result["order_id"] == "ORDER-1"
    assert result["approve_url"] == "https://paypal/approve"

    token_call, order_call = session.request.call_args_list
    assert token_call.args == ("POST", "https://api-m.sandbox.paypal.com/v1/oauth2/token")
    assert token_call.kwargs["auth"] == ("id", "secret")
    assert order_call.args == ("POST", "https://api-m.sandbox.paypal.com/v2/checkout/orders")
    assert order_call.kwargs["headers"]["Authorization"] == "Bearer tok"
    unit = order_call.kwargs["json"]["purchase_units"][0]
    assert unit["amount"] == {"currency_code": "USD", "value": "25.00"}
    assert unit["description"] == "School roof"


def test_create_order_without_approve_link():
    client, _ = make_client(TOKEN, fake_response(payload={"id": "ORDER-2", "links": []}))

    assert client.create_order(10, "x", "https://a/r", "https://a/c")["approve_url"] is None


def test_live_mode_uses_live_host():
    client, _ = make_client(mode="live")
    assert client.base_url == "https://api-m.paypal.com"


def test_capture_prefers_captures():
    captured = fake_response(
        payload={"purchase_units": [{"payments": {"captures": [{"id": "CAP-1"}], "authorizations": [{"id": "AUTH-1"}]}}]}
    )
    client, _ = make_client(TOKEN, captured)

    assert client.capture_order("ORDER-1")["capture_id"] == "CAP-1"


def test_capture_falls_back_to_authorizations():
    authorized = fake_response(payload={"purchase_units": [{"payments": {"authorizations": [{"id": "AUTH-1"}]}}]})
    client, _ = make_client(TOKEN, authorized)

    assert client.capture_order("ORDER-1")["capture_id"] == "AUTH-1"


def test_capture_without_ids():
    client, _ = make_client(TOKEN, fake_response(payload={}))

    assert client.capture_order("ORDER-1")["capture_id"] is None


def test_non_2xx_raises_with_status_and_body():
    client, _ = make_client(TOKEN, fake_response(422, text='{"name":"UNPROCESSABLE_ENTITY"}'))

    with pytest.raises(PaymentGatewayError) as excinfo:
        client.capture_order("ORDER-1")

    assert str(excinfo.value.detail) == 'PayPal capture error: 422 {"name":"UNPROCESSABLE_ENTITY"}'


def test_network_failure_raises_gateway_error():
    client, _ = make_client(requests.ConnectionError("connection refused"))

    with pytest.raises(PaymentGatewayError, match="PayPal token error"):
        client.get_access_token()


def test_missing_credentials():
    client, session = make_client(client_id="", client_secret="")

    with pytest.raises(PaymentGatewayError, match="PayPal is not configured"):
        client.get_access_token()
    session.request.assert_not_called()


def test_non_json_reply_raises_gateway_error():
    broken = fake_response(text="<html>maintenance</html>")
    broken.json.side_effect = ValueError("Expecting value")
    client, _ = make_client(broken)

    with pytest.raises(PaymentGatewayError, match="PayPal token error: invalid JSON in response"):
        client.get_access_token()


def test_default_session_is_closed_after_each_call():
    client = PayPalClient(mode="sandbox", client_id="id", client_secret="secret", timeout=5)

    with mock.patch("apps.donations.paypal.requests.Session") as session_cls:
        session = session_cls.return_value.__enter__.return_value
        session.request.return_value = fake_response(payload={"access_token": "tok"})

        assert client.get_access_token() == "tok"

    session_cls.return_value.__exit__.assert_called_once()


@pytest.mark.django_db
class TestPayPalCheckout:
    @pytest.fixture
    def paypal(self):
        with mock.patch("apps.donations.views.PayPalClient") as client_cls:
            client = client_cls.return_value
            client.create_order.return_value = {
                "order_id": "ORDER-9",
                "approve_url": "https://paypal/approve/9",
                "raw": {},
            }
            client.capture_order.return_value = {"capture_id": "CAP-9", "raw": {}}
            yield client

    def create_order(self, api_client, project):
        return api_client.post(
            f"/api/donations/projects/{project.id}/paypal/create-order/",
            {"amount": "25", "return_url": "https://app.example/return", "cancel_url": "https://app.example/cancel"},
            format="json",
        )

    def test_order_then_capture(self, api_client, donor, project, paypal):
        bearer(api_client, donor)

        response = self.create_order(api_client, project)

        assert response.status_code == 201
        body = response.json()
        assert body["paypal"] == {"order_id": "ORDER-9", "approve_url": "https://paypal/approve/9"}
        donation = body["donation"]
        assert donation["method"] == "paypal"
        assert donation["provider_type"] == "paypal"
        assert donation["provider_order_id"] == "ORDER-9"
        assert donation["payment_status"] == "initiated"
        assert paypal.create_order.call_args.kwargs["currency"] == "USD"

        response = api_client.post(
            "/api/donations/paypal/capture/",
            {"donation_id": donation["id"], "order_id": "ORDER-9"},
            format="json",
        )

        assert response.status_code == 200
        captured = response.json()["donation"]
        assert captured["payment_status"] == "paid"
        assert captured["provider_capture_id"] == "CAP-9"
        # paid is not approved: the receiver still has to confirm
        assert captured["receiver_status"] == "pending"
        project.refresh_from_db()
        assert project.collected_amount == Decimal("0")

    def test_capture_twice_calls_paypal_once(self, api_client, donor, project, paypal):
        bearer(api_client, donor)
        donation_id = self.create_order(api_client, project).json()["donation"]["id"]
        payload = {"donation_id": donation_id, "order_id": "ORDER-9"}

        api_client.post("/api/donations/paypal/capture/", payload, format="json")
        response = api_client.post("/api/donations/paypal/capture/", payload, format="json")

        assert response.status_code == 200
        assert paypal.capture_order.call_count == 1

    def test_capture_with_wrong_order_id(self, api_client, donor, project, paypal):
        bearer(api_client, donor)
        donation_id = self.create_order(api_client, project).json()["donation"]["id"]

        response = api_client.post(
            "/api/donations/paypal/capture/",
            {"donation_id": donation_id, "order_id": "ORDER-OTHER"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid PayPal donation"
        paypal.capture_order.assert_not_called()

    def test_capture_by_another_donor(self, api_client, donor, make_user, project, paypal):
        bearer(api_client, donor)
        donation_id = self.create_order(api_client, project).json()["donation"]["id"]

        bearer(api_client, make_user())
        response = api_client.post(
            "/api/donations/paypal/capture/",
            {"donation_id": donation_id, "order_id": "ORDER-9"},
            format="json",
        )

        assert response.status_code == 403

    def test_gateway_failure_surfaces_as_500(self, api_client, donor, project, paypal):
        paypal.create_order.side_effect = PaymentGatewayError("PayPal create order error: 401 denied")

        response = self.create_order(bearer(api_client, donor), project)

        assert response.status_code == 500
        assert response.json()["message"] == "PayPal create order error: 401 denied"
        assert not Donation.objects.exists()
