#!/usr/bin/env python3
"""Create or update a discount coupon."""
import argparse
import sys
from datetime import datetime, timedelta, timezone

from techelevate.db import SessionLocal
from techelevate.services.coupons import save_coupon
from techelevate.services.errors import ServiceError


def parse_expiry(value: str) -> datetime:
    """Accept an ISO date/datetime, or a number of days from now such as '30d'."""
    if value.endswith("d") and value[:-1].isdigit():
        return datetime.now(timezone.utc) + timedelta(days=int(value[:-1]))
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("code")
    parser.add_argument("discount", type=float, help="Percentage between 0 and 100")
    parser.add_argument("expiry", help="ISO date, or days from now like 30d")
    parser.add_argument("--description", default=None)
    args = parser.parse_args()

    db = SessionLocal()
    try:
        coupon = save_coupon(
            db,
            code=args.code,
            discount=args.discount,
            expiry_date=parse_expiry(args.expiry),
            description=args.description,
        )
        print(f"✓ Coupon {coupon.code}: {coupon.discount}% off until {coupon.expiry_date}")
        return 0
    except (ServiceError, ValueError) as e:
        print(f"✗ Error: {getattr(e, 'message', e)}")
        db.rollback()
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
