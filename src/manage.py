"""E-book store database management CLI.

Provides commands to create and drop database schemas for all domains.

Usage:
    python src/manage.py setup-db                       # Create all tables
    python src/manage.py drop-db                        # Drop all tables
    python src/manage.py setup-db --domain catalog shop # Only some domains
    python src/manage.py create-admin --first-name Ada --last-name Admin --email admin@example.com --password secret1
"""

import argparse
import os
import sys

DOMAIN_NAMES = ("authentication", "catalog", "shop")


def _domains(names=None):
    os.environ.setdefault("PROTEAN_ENV", os.environ.get("ENV", "local"))

    from authentication.domain import authentication
    from catalog.domain import catalog
    from shop.domain import shop

    all_domains = {"authentication": authentication, "catalog": catalog, "shop": shop}
    targets = {name: all_domains[name] for name in names} if names else all_domains
    for domain in targets.values():
        domain.init()
    return targets


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name, domain in _domains(domains).items():
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name, domain in _domains(domains).items():
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    print("Done.")


def create_admin(first_name, last_name, email, password):
    """Register an admin account; admins cannot be created through the API."""
    from authentication import authenticator
    from authentication.user.user import Role

    domain = _domains(["authentication"])["authentication"]
    with domain.domain_context():
        authenticator.register(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            password_confirmation=password,
            role=Role.ADMIN,
        )
    print(f"Admin {email} created.")


def main():
    parser = argparse.ArgumentParser(description="E-book store database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    admin_parser = subparsers.add_parser("create-admin", help="Register an admin account")
    admin_parser.add_argument("--first-name", required=True)
    admin_parser.add_argument("--last-name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "create-admin":
        create_admin(args.first_name, args.last_name, args.email, args.password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
