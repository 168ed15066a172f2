"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Insert the sample catalogue if empty
"""

import argparse
import sys


def _load_domain():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _load_domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _load_domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def seed_database():
    from storefront.product.seed import seed_products

    domain = _load_domain()
    with domain.domain_context():
        created = seed_products()
    if created:
        print(f"Seeded {created} products.")
    else:
        print("Products already present, nothing seeded.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Insert sample products into an empty catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
