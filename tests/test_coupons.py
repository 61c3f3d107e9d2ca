"""Coupon validation tests."""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import status

from techelevate.services.coupons import save_coupon, validate_coupon
from techelevate.services.errors import CouponExpired, CouponInvalid, CouponNotFound, ValidationError


def days_from_now(days: int) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


class TestValidateCoupon:
    """Test validate_coupon."""

    def test_valid_coupon_returns_discount(self, db_session):
        """Test a future expiry returns the stored discount."""
        save_coupon(db_session, "SAVE10", 10, days_from_now(7))

        assert validate_coupon(db_session, "SAVE10") == 10

    def test_expired_coupon(self, db_session):
        """Test a past expiry fails."""
        save_coupon(db_session, "SAVE10", 10, days_from_now(-1))

        with pytest.raises(CouponExpired):
            validate_coupon(db_session, "SAVE10")

    def test_unknown_coupon(self, db_session):
        """Test a lookup miss fails distinctly from expiry."""
        with pytest.raises(CouponNotFound):
            validate_coupon(db_session, "NOPE")

    def test_empty_code(self, db_session):
        with pytest.raises(CouponNotFound):
            validate_coupon(db_session, "   ")

    def test_both_failures_share_message(self):
        """Test the two failures look the same to API callers."""
        assert CouponNotFound().message == CouponExpired().message
        assert issubclass(CouponExpired, CouponInvalid)

    def test_coupon_reusable(self, db_session):
        """Test validation does not consume the coupon."""
        save_coupon(db_session, "SAVE10", 10, days_from_now(7))

        for _ in range(3):
            assert validate_coupon(db_session, "SAVE10") == 10

    def test_validation_at_given_time(self, db_session):
        """Test the boundary is now > expiry."""
        expiry = datetime(2026, 6, 1, tzinfo=timezone.utc)
        save_coupon(db_session, "JUNE", 25, expiry)

        assert validate_coupon(db_session, "JUNE", now=expiry) == 25
        with pytest.raises(CouponExpired):
            validate_coupon(db_session, "JUNE", now=expiry + timedelta(seconds=1))


class TestSaveCoupon:
    """Test save_coupon."""

    def test_update_existing(self, db_session):
        """Test saving an existing code updates it."""
        save_coupon(db_session, "SAVE10", 10, days_from_now(-1))
        coupon = save_coupon(db_session, "SAVE10", 15, days_from_now(7))

        assert coupon.discount == 15
        assert validate_coupon(db_session, "SAVE10") == 15

    @pytest.mark.parametrize("discount", [-5, 101])
    def test_discount_range(self, db_session, discount):
        with pytest.raises(ValidationError):
            save_coupon(db_session, "BAD", discount, days_from_now(7))


class TestCouponRoutes:
    """Test POST /coupons/validate."""

    def test_valid(self, client, db_session):
        save_coupon(db_session, "SAVE10", 10, days_from_now(7))

        response = client.post("/coupons/validate", json={"code": "SAVE10"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"valid": True, "code": "SAVE10", "discount": 10}

    def test_unknown_and_expired_look_alike(self, client, db_session):
        """Test the API does not reveal why a coupon is invalid."""
        save_coupon(db_session, "OLD", 10, days_from_now(-1))

        expired = client.post("/coupons/validate", json={"code": "OLD"})
        unknown = client.post("/coupons/validate", json={"code": "NOPE"})

        assert expired.status_code == unknown.status_code == status.HTTP_400_BAD_REQUEST
        assert expired.json() == unknown.json() == {"detail": "Invalid or expired coupon code"}
