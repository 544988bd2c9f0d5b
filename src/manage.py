"""Catering database management CLI.

Creates and drops the database schema for the catering domain using the
setup_db/drop_db utilities in ``catering.utils.db``.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the catering database schema."""
    from catering.domain import catering
    from catering.utils.db import setup_db

    print("Initializing catering domain...")
    catering.init()
    print("Creating catering database schema...")
    setup_db(catering)
    print("Done.")


def drop_database():
    """Drop the catering database schema."""
    from catering.domain import catering
    from catering.utils.db import drop_db

    print("Initializing catering domain...")
    catering.init()
    print("Dropping catering database schema...")
    drop_db(catering)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Catering database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
