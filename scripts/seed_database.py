#!/usr/bin/env python3
"""
Database seeding script for the InTouch API.

Creates the tables and loads the demo roster: one customer and a dozen
individual and business specialists across several categories and cities.

Usage:
    python scripts/seed_database.py

The password for every demo account comes from DEMO_PASSWORD.
"""

import sys
import os

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from intouch.core.config import settings
from intouch.db.database import SessionLocal, init_db
from intouch.db.repository import SqlMarketplaceRepository
from intouch.db.seed import DEMO_CUSTOMER, DEMO_SPECIALISTS, seed_demo_data


def seed_database():
    print("🗄️  Creating tables...")
    init_db()

    db = SessionLocal()
    try:
        created = seed_demo_data(SqlMarketplaceRepository(db), settings.DEMO_PASSWORD)
        if not created:
            print("ℹ️  Demo data already present. Nothing to do.")
            return

        print("\n✅ Database seeding completed successfully!")
        print("\n📊 Created accounts:")
        print(f"👤 Customer: {DEMO_CUSTOMER['email']} (password: {settings.DEMO_PASSWORD})")
        for entry in DEMO_SPECIALISTS:
            print(f"🧰 {entry['type'].value}: {entry['user']['email']}")

    except Exception as e:
        print(f"❌ Error during seeding: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
