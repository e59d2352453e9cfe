#!/usr/bin/env python3
"""Quick script to check if the ledger tables exist in the database"""

import sys

from sqlalchemy import inspect

from app.database import engine

REQUIRED_TABLES = ["users", "workout_sessions"]


def check_tables(bind=None):
    """Check if required ledger tables exist; returns the missing table names"""
    bind = bind or engine
    inspector = inspect(bind)
    existing_tables = inspector.get_table_names()

    print("Checking for required ledger tables...")
    print(f"Database: {bind.url}")
    print()

    missing_tables = []
    for table in REQUIRED_TABLES:
        if table in existing_tables:
            print(f"✓ {table} exists")
        else:
            print(f"✗ {table} MISSING")
            missing_tables.append(table)

    print()
    if missing_tables:
        print("ERROR: Missing tables detected!")
        print("Run migrations with: alembic upgrade head")
    else:
        print("All required tables exist!")
    return missing_tables


if __name__ == "__main__":
    try:
        missing = check_tables()
        sys.exit(1 if missing else 0)
    except Exception as e:
        print(f"Error checking tables: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)
