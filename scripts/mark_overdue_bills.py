#!/usr/bin/env python3
"""
Mark pending bills whose due date has passed as overdue.

The API never does this itself; run it from cron (daily is enough).

Usage:
  python scripts/mark_overdue_bills.py              # as of today (UTC)
  python scripts/mark_overdue_bills.py 2026-01-31   # as of a given date
"""
import asyncio
import os
import sys
from datetime import date

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
from app.services.bill_service import BillService
from app.utils.time import utc_today


async def run(as_of: date) -> int:
    try:
        async with AsyncSessionLocal() as session:
            return await BillService.mark_overdue(session, as_of)
    finally:
        await close_db()


def main():
    setup_logging()
    if len(sys.argv) > 1:
        try:
            as_of = date.fromisoformat(sys.argv[1])
        except ValueError:
            print(f"ERROR: expected YYYY-MM-DD, got {sys.argv[1]!r}")
            sys.exit(2)
    else:
        as_of = utc_today()

    count = asyncio.run(run(as_of))
    print(f"Marked {count} bill(s) overdue as of {as_of.isoformat()}.")


if __name__ == "__main__":
    main()
