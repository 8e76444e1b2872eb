"""GameBazaar management CLI.

Usage:
    python src/manage.py setup-db                            # Create all tables
    python src/manage.py drop-db                             # Drop all tables
    python src/manage.py create-admin --name Ada --email ada@example.com
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def create_admin(name: str, email: str) -> str:
    """Register an administrator account and return its id."""
    from storefront.account.registration import RegisterUser
    from storefront.account.user import Role

    domain = _domain()
    with domain.domain_context():
        user_id = domain.process(RegisterUser(name=name, email=email, role=Role.ADMIN.value), asynchronous=False)
    print(f"Admin {email} created with id {user_id}")
    return user_id


def main():
    parser = argparse.ArgumentParser(description="GameBazaar management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Register an administrator account")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.name, args.email)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
