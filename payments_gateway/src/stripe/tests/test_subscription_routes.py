import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ..config import StripeSettings


class FakeStripe:
    class Price:
        @staticmethod
        def list(**kwargs):
            return {"data": [{
                "id": "price_fox",
                "unit_amount": 300,
                "product": {"id": "prod_fox", "metadata": {"title": "Fox", "emoji": "🦊"}},
            }]}

    class Customer:
        @staticmethod
        def create(**kwargs):
            return {"id": "cus_route_multi"}

    class Subscription:
        created = []

        @staticmethod
        def create(**kwargs):
            FakeStripe.Subscription.created.append(kwargs)
            return {
                "id": "sub_route_multi",
                "customer": kwargs["customer"],
                "latest_invoice": {"payment_intent": {"client_secret": "pi_secret_route"}},
            }

        @staticmethod
        def retrieve(sub_id):
            return {"id": sub_id, "status": "active"}


@pytest.fixture(autouse=True)
def patch_env(monkeypatch):
    from ..services import subscriptions
    FakeStripe.Subscription.created = []
    monkeypatch.setattr(subscriptions, "stripe", FakeStripe)
    monkeypatch.setattr(subscriptions, "settings", StripeSettings(
        STRIPE_SECRET_KEY="sk_test_x",
        STRIPE_PUBLISHABLE_KEY="pk_test_multi",
        PRODUCT_NAMES="fox",
        MIN_PRODUCTS_FOR_DISCOUNT=3,
        DISCOUNT_FACTOR=0.9,
        COUPON_ID="coupon_three",
    ))
    yield


@pytest.fixture
def client():
    from ..subscription_routes import router
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


def test_setup_page(client):
    resp = client.get("/stripe/setup-page")
    assert resp.status_code == 200, resp.text
    assert resp.json() == {
        "publicKey": "pk_test_multi",
        "minProductsForDiscount": 3,
        "discountFactor": 0.9,
        "products": [{"price": {"id": "price_fox", "unit_amount": 300}, "title": "Fox", "emoji": "🦊"}],
    }


def test_create_customer_returns_raw_subscription(client):
    resp = client.post("/stripe/create-customer", json={
        "payment_method": "pm_card_visa",
        "email": "sam@example.com",
        "price_ids": ["price_fox", "price_owl"],
    })
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["id"] == "sub_route_multi"
    assert data["latest_invoice"]["payment_intent"]["client_secret"] == "pi_secret_route"
    # two plans are below the threshold of three
    assert "discounts" not in FakeStripe.Subscription.created[0]


def test_create_customer_requires_at_least_one_price(client):
    resp = client.post("/stripe/create-customer", json={
        "payment_method": "pm_card_visa",
        "email": "sam@example.com",
        "price_ids": [],
    })
    assert resp.status_code == 422
    assert FakeStripe.Subscription.created == []


def test_subscription_lookup(client):
    resp = client.post("/stripe/subscription", json={"subscriptionId": "sub_123"})
    assert resp.status_code == 200
    assert resp.json() == {"id": "sub_123", "status": "active"}


def test_subscription_lookup_requires_id(client):
    resp = client.post("/stripe/subscription", json={})
    assert resp.status_code == 422
