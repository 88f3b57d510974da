"""Storefront management CLI.

Creates and drops the database schema and provisions the first admin
account (admins can only be provisioned by another admin over HTTP).

Usage:
    python src/manage.py setup-db                      # Create all tables
    python src/manage.py drop-db                       # Drop all tables
    python src/manage.py create-admin --name "Shop Owner" \
        --email owner@example.com --password s3cret!    # Provision an admin
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def create_admin(name, email, password, phone=None):
    """Register an admin user directly, bypassing the HTTP layer."""
    from storefront.domain import storefront
    from storefront.identity.registration import RegisterUser

    storefront.init()
    with storefront.domain_context():
        user_id = storefront.process(
            RegisterUser(name=name, email=email, password=password, phone=phone, is_admin=True),
            asynchronous=False,
        )
    print(f"Admin {email} created with id {user_id}.")
    return user_id


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Provision an admin account")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--phone", default=None)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.name, args.email, args.password, args.phone)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
