#!/usr/bin/env python3
"""Create an admin user, or promote an existing user to admin."""
import argparse
import sys

from techelevate.db import SessionLocal
from techelevate.models.user import UserRole
from techelevate.services.errors import ServiceError
from techelevate.services.users import get_user_by_email, set_role, upsert_user


def create_admin_user(email: str, name: str) -> int:
    """Create or promote ``email`` to admin."""
    db = SessionLocal()

    try:
        existing_user = get_user_by_email(db, email)

        if existing_user:
            print(f"✓ User already exists: {email}")
            if not existing_user.is_admin:
                set_role(db, existing_user.id, UserRole.ADMIN.value)
                print(f"✓ Promoted {email} to admin")
        else:
            upsert_user(db, name=name, email=email, role=UserRole.ADMIN.value)
            print(f"✓ Created admin user: {email}")

        print("\n" + "=" * 60)
        print("ADMIN USER")
        print("=" * 60)
        print(f"Email: {email}")
        print("Sign in through the identity provider with this email.")
        print("=" * 60)
        return 0

    except ServiceError as e:
        print(f"✗ Error: {e.message}")
        db.rollback()
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("email")
    parser.add_argument("--name", default="Admin")
    args = parser.parse_args()
    sys.exit(create_admin_user(args.email, args.name))
