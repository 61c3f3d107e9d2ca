"""Paid subscription tests."""
import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import status

from techelevate.services.coupons import save_coupon
from techelevate.services.errors import CouponInvalid, PaymentRequired
from techelevate.services.subscriptions import subscribe


class FakeProvider:
    """Payment provider that knows which intents were paid."""

    def __init__(self, paid=()):
        self.paid = set(paid)
        self.lookups = []

    async def create_payment_intent(self, amount_cents: int) -> str:
        return "pi_fake_secret_fake"

    async def payment_succeeded(self, payment_intent_id: str) -> bool:
        self.lookups.append(payment_intent_id)
        return payment_intent_id in self.paid


def tomorrow() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=1)


class TestSubscribe:
    """Test subscribe."""

    def test_paid_intent_subscribes(self, db_session, alice):
        """Test a succeeded payment intent grants the subscription."""
        provider = FakeProvider(paid={"pi_paid"})

        user = asyncio.run(subscribe(db_session, alice, payment_intent_id="pi_paid", provider=provider))

        assert user.is_subscribed is True
        assert user.subscription_date is not None
        assert user.subscription_payment_id == "pi_paid"
        assert provider.lookups == ["pi_paid"]

    def test_no_payment(self, db_session, alice):
        """Test subscribing with nothing to show for it is refused."""
        with pytest.raises(PaymentRequired, match="Payment required"):
            asyncio.run(subscribe(db_session, alice, provider=FakeProvider()))

        db_session.refresh(alice)
        assert alice.is_subscribed is False

    def test_unpaid_intent(self, db_session, alice):
        """Test an intent the provider has not seen paid is refused."""
        with pytest.raises(PaymentRequired, match="not been completed"):
            asyncio.run(subscribe(db_session, alice, payment_intent_id="pi_open", provider=FakeProvider()))

        db_session.refresh(alice)
        assert alice.is_subscribed is False

    def test_intent_pays_for_one_subscription(self, db_session, alice, bob):
        """Test a paid intent cannot be reused by a second user."""
        provider = FakeProvider(paid={"pi_paid"})
        asyncio.run(subscribe(db_session, alice, payment_intent_id="pi_paid", provider=provider))

        with pytest.raises(PaymentRequired, match="already been used"):
            asyncio.run(subscribe(db_session, bob, payment_intent_id="pi_paid", provider=provider))

        db_session.refresh(bob)
        assert bob.is_subscribed is False

    def test_full_coupon_replaces_payment(self, db_session, alice):
        """Test a 100% coupon subscribes without a payment intent."""
        save_coupon(db_session, "FREE", 100, tomorrow())
        provider = FakeProvider()

        user = asyncio.run(subscribe(db_session, alice, coupon_code="FREE", provider=provider))

        assert user.is_subscribed is True
        assert provider.lookups == []

    def test_partial_coupon_still_needs_payment(self, db_session, alice):
        save_coupon(db_session, "HALF", 50, tomorrow())

        with pytest.raises(PaymentRequired):
            asyncio.run(subscribe(db_session, alice, coupon_code="HALF", provider=FakeProvider()))

    def test_invalid_coupon(self, db_session, alice):
        with pytest.raises(CouponInvalid):
            asyncio.run(subscribe(db_session, alice, coupon_code="NOPE", provider=FakeProvider()))

    def test_already_subscribed(self, db_session, make_user):
        """Test an existing subscriber is returned unchanged."""
        carol = make_user("carol@x.com", is_subscribed=True)
        provider = FakeProvider()

        user = asyncio.run(subscribe(db_session, carol, provider=provider))

        assert user.is_subscribed is True
        assert provider.lookups == []


class TestSubscriptionRoutes:
    """Test self-service and admin subscription endpoints."""

    def test_self_subscribe_without_payment(self, client, alice, headers_for):
        response = client.patch(
            "/users/me/subscription", json={"is_subscribed": True}, headers=headers_for(alice.email)
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_self_subscribe_with_forged_intent(self, client, alice, headers_for):
        response = client.patch(
            "/users/me/subscription",
            json={"is_subscribed": True, "payment_intent_id": "pi_made_up"},
            headers=headers_for(alice.email),
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Payment has not been completed"

    def test_full_coupon_checkout(self, client, db_session, alice, headers_for):
        """Test a 100% coupon checks out for free and then subscribes."""
        save_coupon(db_session, "FREE", 100, tomorrow())
        headers = headers_for(alice.email)

        response = client.post(
            "/payments/create-intent", json={"amount": 100, "coupon_code": "FREE"}, headers=headers
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"client_secret": None, "amount": 0, "discount": 100}

        response = client.patch(
            "/users/me/subscription",
            json={"is_subscribed": True, "coupon_code": "FREE"},
            headers=headers,
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_subscribed"] is True

    def test_unsubscribe(self, client, make_user, headers_for):
        carol = make_user("carol@x.com", is_subscribed=True)

        response = client.patch(
            "/users/me/subscription", json={"is_subscribed": False}, headers=headers_for(carol.email)
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_subscribed"] is False
        assert response.json()["subscription_date"] is None

    def test_admin_grant(self, client, admin_user, alice, headers_for):
        response = client.patch(
            f"/admin/users/{alice.id}/subscription",
            json={"is_subscribed": True},
            headers=headers_for(admin_user.email),
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_subscribed"] is True

    def test_admin_grant_requires_admin(self, client, alice, headers_for):
        response = client.patch(
            f"/admin/users/{alice.id}/subscription",
            json={"is_subscribed": True},
            headers=headers_for(alice.email),
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_sign_in_cannot_set_privileges(self, client, db_session):
        """Test sign-in sync ignores role and subscription fields."""
        response = client.post("/users", json={
            "name": "Mallory",
            "email": "mallory@x.com",
            "role": "admin",
            "is_subscribed": True,
        })
        assert response.status_code == status.HTTP_201_CREATED

        user = client.get("/users", params={"email": "mallory@x.com"}).json()
        assert user["role"] == "user"
        assert user["is_subscribed"] is False
