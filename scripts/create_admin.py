#!/usr/bin/env python3
"""
Provision a billing admin. Self sign-up only ever creates customers.

Usage:
  python scripts/create_admin.py admin@utility.example "S3curePassw0rd" "Billing Office"
"""
import asyncio
import os
import sys

# Load .env from project root
try:
    from dotenv import load_dotenv
    _root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    load_dotenv(os.path.join(_root, ".env"))
except ImportError:
    pass

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.logging import setup_logging
from app.database import AsyncSessionLocal, close_db
from app.services.user_service import UserService


async def run(email: str, password: str, full_name: str) -> str:
    try:
        async with AsyncSessionLocal() as session:
            user = await UserService.register_user(
                session,
                email=email,
                password=password,
                full_name=full_name,
                is_admin=True,
            )
            return str(user.profile.id)
    finally:
        await close_db()


def main():
    setup_logging()
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)
    email, password = sys.argv[1], sys.argv[2]
    full_name = sys.argv[3] if len(sys.argv) > 3 else None

    try:
        profile_id = asyncio.run(run(email, password, full_name))
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    print(f"Admin {email} created (profile {profile_id}).")


if __name__ == "__main__":
    main()
