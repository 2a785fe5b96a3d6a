#!/usr/bin/env python3
"""
Script to reset the database by removing every donation-coordination record.
This will delete:
- All item and monetary donations
- All donors
- All needy-person registrations
- All SMS logs

⚠️  WARNING: This is a destructive operation that cannot be undone!

Usage: python scripts/reset_database.py
       python scripts/reset_database.py --confirm  # Skip confirmation prompt
"""
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from charityconnect.core.config import settings
from charityconnect.database.database import Database
from charityconnect.models import Donor, ItemDonation, MonetaryDonation, NeedyPerson, SmsLog

# Donations first: they reference donors
DELETE_ORDER = [
    ("Item donations", ItemDonation),
    ("Monetary donations", MonetaryDonation),
    ("Donors", Donor),
    ("Needy persons", NeedyPerson),
    ("SMS logs", SmsLog),
]


def reset_database(skip_confirmation: bool = False):
    """
    Remove all rows from every table.

    Args:
        skip_confirmation: If True, skip the confirmation prompt
    """
    if not settings.DATABASE_URL:
        print("❌ DATABASE_URL is not set; the in-memory store has nothing to reset.")
        return

    database = Database.from_settings(settings)
    db = database.SessionLocal()

    try:
        counts = {label: db.query(model).count() for label, model in DELETE_ORDER}

        print("=" * 60)
        print("DATABASE RESET - Current Data Summary")
        print("=" * 60)
        for label, count in counts.items():
            print(f"{label + ':':<27}{count}")
        print("=" * 60)

        if not any(counts.values()):
            print("✅ Database is already empty. Nothing to reset.")
            return

        if not skip_confirmation:
            print("\n⚠️  WARNING: This will PERMANENTLY DELETE all donations, donors and registrations!")
            print("   This operation CANNOT be undone.")
            response = input("\n   Are you absolutely sure you want to proceed? (type 'RESET' to confirm): ")
            if response != "RESET":
                print("❌ Operation cancelled")
                return

        deleted = {}
        for label, model in DELETE_ORDER:
            deleted[label] = db.query(model).delete(synchronize_session=False)
            print(f"   ✓ Deleted {deleted[label]} {label.lower()}")

        db.commit()

        print("\n" + "=" * 60)
        print("✅ DATABASE RESET COMPLETE")
        print("=" * 60)

    except Exception as e:
        print(f"\n❌ Error resetting database: {e}")
        import traceback
        traceback.print_exc()
        db.rollback()
        sys.exit(1)
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    skip_confirmation = "--confirm" in sys.argv or "-y" in sys.argv

    try:
        reset_database(skip_confirmation=skip_confirmation)
    except KeyboardInterrupt:
        print("\n\n❌ Operation cancelled by user")
        sys.exit(1)
