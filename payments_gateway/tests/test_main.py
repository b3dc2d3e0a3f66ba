import stripe
import pytest
from fastapi.testclient import TestClient

from .. import main
from ..config import GatewaySettings
from ..src.stripe.services import sessions


@pytest.fixture
def client():
    return TestClient(main.create_app(), raise_server_exceptions=False)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "service": "payments_gateway"}


@pytest.mark.parametrize("method, path, expected", [
    ("GET", "/stripe-checkout/hello", 200),
    ("GET", "/stripe-checkout/setup", 200),
    # Missing query/body fields are rejected by validation, so no SDK call happens
    ("GET", "/stripe-checkout/checkout-session", 422),
    ("POST", "/stripe-checkout/create-checkout-session", 422),
    ("POST", "/stripe-checkout/customer-portal", 422),
    ("POST", "/stripe/create-customer", 422),
    ("POST", "/stripe/subscription", 422),
    # No Stripe-Signature header
    ("POST", "/stripe/webhook", 400),
])
def test_all_routers_are_mounted(client, method, path, expected):
    resp = client.request(method, path, json={} if method == "POST" else None)
    assert resp.status_code == expected, resp.text


def test_stripe_error_becomes_500_with_message(client, monkeypatch):
    def fail(**kwargs):
        raise stripe.InvalidRequestError("No such price: 'price_missing'", param="line_items[0][price]")

    class FakeCheckout:
        class Session:
            create = staticmethod(fail)

    monkeypatch.setattr(sessions, "stripe", type("FakeStripe", (), {"checkout": FakeCheckout}))
    resp = client.post("/stripe-checkout/create-checkout-session", json={"priceId": "price_missing"})

    assert resp.status_code == 500
    assert resp.json() == {"error": {"message": "No such price: 'price_missing'"}}


def test_unexpected_error_becomes_500_with_message(client, monkeypatch):
    def fail(session_id):
        raise RuntimeError("connection reset")

    class FakeCheckout:
        class Session:
            retrieve = staticmethod(fail)

    monkeypatch.setattr(sessions, "stripe", type("FakeStripe", (), {"checkout": FakeCheckout}))
    resp = client.get("/stripe-checkout/checkout-session", params={"sessionId": "cs_1"})

    assert resp.status_code == 500
    assert resp.json() == {"error": {"message": "connection reset"}}


def test_static_dir_is_served_at_root(tmp_path):
    (tmp_path / "index.html").write_text("<h1>Pick a plan</h1>")
    app = main.create_app(GatewaySettings(STATIC_DIR=str(tmp_path)))
    client = TestClient(app)

    assert "Pick a plan" in client.get("/").text
    # API routes still win over the static mount
    assert client.get("/health").json()["status"] == "healthy"


def test_missing_static_dir_is_skipped(tmp_path):
    app = main.create_app(GatewaySettings(STATIC_DIR=str(tmp_path / "nope")))
    assert TestClient(app).get("/").status_code == 404


def test_cors_allows_configured_origin():
    app = main.create_app(GatewaySettings(ALLOWED_ORIGINS="https://shop.example"))
    resp = TestClient(app).options(
        "/stripe-checkout/setup",
        headers={"Origin": "https://shop.example", "Access-Control-Request-Method": "GET"},
    )
    assert resp.headers["access-control-allow-origin"] == "https://shop.example"
