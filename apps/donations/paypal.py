import logging
from decimal import Decimal

import requests
from django.conf import settings

from apps.cores.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)

BASE_URLS = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}


class PayPalClient:
    """
    Thin wrapper over the PayPal Orders v2 API.

    Nothing is cached: every call fetches a fresh access token. Any non-2xx
    answer raises PaymentGatewayError carrying the status and body.
    """

    def __init__(self, mode=None, client_id=None, client_secret=None, timeout=None, session=None):
        self.mode = mode or settings.PAYPAL_MODE
        self.client_id = client_id if client_id is not None else settings.PAYPAL_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else settings.PAYPAL_CLIENT_SECRET
        self.timeout = timeout or settings.PAYPAL_TIMEOUT
        self.session = session

    @property
    def base_url(self):
        return BASE_URLS.get(self.mode, BASE_URLS["sandbox"])

    def _request(self, stage, method, path, **kwargs):
        if self.session is not None:
            return self._send(self.session, stage, method, path, **kwargs)
        with requests.Session() as session:
            return self._send(session, stage, method, path, **kwargs)

    def _send(self, session, stage, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise PaymentGatewayError(f"PayPal {stage} error: {exc}") from exc

        if not response.ok:
            raise PaymentGatewayError(f"PayPal {stage} error: {response.status_code} {response.text}")

        try:
            return response.json()
        except ValueError as exc:
            raise PaymentGatewayError(f"PayPal {stage} error: invalid JSON in response") from exc

    def get_access_token(self):
        if not self.client_id or not self.client_secret:
            raise PaymentGatewayError(
                "PayPal is not configured (missing PAYPAL_CLIENT_ID/PAYPAL_CLIENT_SECRET)"
            )

        data = self._request(
            "token",
            "POST",
            "/v1/oauth2/token",
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials"},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        return data["access_token"]

    def _auth_headers(self):
        return {
            "Authorization": f"Bearer {self.get_access_token()}",
            "Content-Type": "application/json",
        }

    def create_order(self, amount, project_title, return_url, cancel_url, currency="USD"):
        """
        Returns {"order_id", "approve_url", "raw"}; approve_url is None when
        PayPal sends no approve link.
        """
        payload = {
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "description": project_title,
                    "amount": {
                        "currency_code": currency,
                        "value": f"{Decimal(amount):.2f}",
                    },
                }
            ],
            "application_context": {
                "return_url": return_url,
                "cancel_url": cancel_url,
            },
        }

        headers = self._auth_headers()
        data = self._request("create order", "POST", "/v2/checkout/orders", json=payload, headers=headers)

        approve_url = next(
            (link.get("href") for link in data.get("links", []) if link.get("rel") == "approve"),
            None,
        )
        logger.info("PayPal order %s created", data.get("id"))
        return {"order_id": data["id"], "approve_url": approve_url, "raw": data}

    def capture_order(self, order_id):
        """
        Returns {"capture_id", "raw"}. The id comes from the first capture,
        or the first authorization when the order was authorized instead.
        """
        headers = self._auth_headers()
        data = self._request("capture", "POST", f"/v2/checkout/orders/{order_id}/capture", headers=headers)

        capture_id = None
        units = data.get("purchase_units") or [{}]
        payments = units[0].get("payments") or {}
        for key in ("captures", "authorizations"):
            entries = payments.get(key) or []
            if entries and entries[0].get("id"):
                capture_id = entries[0]["id"]
                break

        logger.info("PayPal order %s captured (%s)", order_id, capture_id)
        return {"capture_id": capture_id, "raw": data}
