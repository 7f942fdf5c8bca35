"""Order Management maintenance CLI.

Usage:
    python src/manage.py setup-db [--domain products orders]
    python src/manage.py drop-db
    python src/manage.py seed-products
    python src/manage.py purge-logs --days 30
    python src/manage.py issue-token --user-id <uuid> --email a@b.c --name "Ana" --role admin
"""

import argparse
import sys
from datetime import datetime, timedelta

from server import DOMAIN_NAMES, load_domain

REFERENCE_PRODUCTS = (
    {
        "name": "Laptop Dell XPS 13",
        "sku": "DELL-XPS13-001",
        "description": "Ultrabook with Intel Core i7, 16GB RAM and 512GB SSD",
        "price": 1299.99,
        "stock": 25,
        "minimum_stock": 5,
        "category": "Electronics",
        "brand": "Dell",
        "weight": 1200,
        "dimensions": "30.2 x 19.9 x 1.1 cm",
        "tags": "laptop, computer, dell, ultrabook",
    },
    {
        "name": "iPhone 15 Pro",
        "sku": "APPLE-IP15P-256",
        "description": "Apple iPhone 15 Pro 256GB, Natural Titanium",
        "price": 1199.99,
        "stock": 15,
        "minimum_stock": 3,
        "category": "Electronics",
        "brand": "Apple",
        "weight": 187,
        "dimensions": "14.67 x 7.08 x 0.81 cm",
        "tags": "smartphone, iphone, apple, mobile",
    },
    {
        "name": "Mesa de Oficina",
        "sku": "FURNITURE-DESK-001",
        "description": "Modern office desk with a tempered glass top",
        "price": 299.99,
        "stock": 8,
        "minimum_stock": 2,
        "category": "Furniture",
        "brand": "OfficeMax",
        "weight": 25000,
        "dimensions": "140 x 70 x 75 cm",
        "tags": "desk, office, furniture, glass",
    },
)


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name in domains or DOMAIN_NAMES:
        print(f"Creating {name} database schema...")
        setup_db(load_domain(name))
        print(f"  {name} schema ready.")

    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name in domains or DOMAIN_NAMES:
        print(f"Dropping {name} database schema...")
        drop_db(load_domain(name))
        print(f"  {name} schema dropped.")

    print("Done.")


def seed_products():
    """Create the reference catalog, skipping SKUs that already exist."""
    domain = load_domain("products")
    with domain.domain_context():
        from products.product.creation import CreateProduct
        from products.product.queries import find_by_sku

        for product in REFERENCE_PRODUCTS:
            if find_by_sku(product["sku"]) is not None:
                print(f"  {product['sku']} already exists, skipped.")
                continue
            domain.process(CreateProduct(**product), asynchronous=False)
            print(f"  {product['sku']} created.")

    print("Done.")


def purge_logs(days):
    domain = load_domain("logstore")
    with domain.domain_context():
        from logstore.entry.retention import PurgeLogEntries

        purged = domain.process(PurgeLogEntries(older_than=datetime.now() - timedelta(days=days)), asynchronous=False)
    print(f"Purged {purged} log entries older than {days} days.")


def issue_token(user_id, email, name=None, roles=()):
    from shared.security import create_access_token

    issued = create_access_token(user_id=user_id, email=email, full_name=name, roles=list(roles))
    print(issued.token)
    print(f"Expires at {issued.expires_at.isoformat()}", file=sys.stderr)


def main(argv=None):
    from shared.config import get_settings

    parser = argparse.ArgumentParser(description="Order Management maintenance")
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

    subparsers.add_parser("seed-products", help="Create the reference products")

    purge_parser = subparsers.add_parser("purge-logs", help="Delete old log entries")
    purge_parser.add_argument("--days", type=int, default=get_settings().log_retention_days)

    token_parser = subparsers.add_parser("issue-token", help="Print a development bearer token")
    token_parser.add_argument("--user-id", required=True)
    token_parser.add_argument("--email", required=True)
    token_parser.add_argument("--name")
    token_parser.add_argument("--role", action="append", default=[], dest="roles")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed-products":
        seed_products()
    elif args.command == "purge-logs":
        if args.days < 1:
            parser.error("--days must be at least 1")
        purge_logs(args.days)
    elif args.command == "issue-token":
        issue_token(args.user_id, args.email, args.name, args.roles)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
