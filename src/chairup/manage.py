"""ChairUp management CLI.

Usage:
    chairup-manage setup-db   # Create all tables
    chairup-manage drop-db    # Drop all tables
    chairup-manage seed       # Insert a demo catalogue and promotion
    chairup-manage token USER_ID [--admin]   # Mint a bearer token
"""

import argparse
import sys

_DEMO_CHAIRS = [
    {
        "name": "ErgoFlex Mesh Task Chair",
        "price": 189.0,
        "category": "Office",
        "description": "Breathable mesh back with adjustable lumbar support.",
        "stock_quantity": 25,
    },
    {
        "name": "Nordic Oak Dining Chair",
        "price": 129.5,
        "category": "Dining",
        "description": "Solid oak frame with a woven seat.",
        "stock_quantity": 40,
    },
    {
        "name": "Apex Racing Gaming Chair",
        "price": 249.99,
        "category": "Gaming",
        "description": "Reclining backrest, 4D armrests and neck pillow.",
        "stock_quantity": 12,
    },
    {
        "name": "Velvet Lounge Armchair",
        "price": 319.0,
        "category": "Living Room",
        "description": "Deep seat upholstered in soft velvet.",
        "stock_quantity": 8,
    },
]


def _domain():
    from chairup.domain import chairup

    chairup.init()
    return chairup


def setup_database():
    from chairup.utils.db import setup_db

    domain = _domain()
    print(f"Creating {domain.name} database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from chairup.utils.db import drop_db

    domain = _domain()
    print(f"Dropping {domain.name} database schema...")
    drop_db(domain)
    print("Done.")


def seed():
    from chairup.catalogue.management import AddProduct
    from chairup.promotions.management import CreatePromotion
    from chairup.promotions.promotion import Promotion

    domain = _domain()
    with domain.domain_context():
        for chair in _DEMO_CHAIRS:
            product_id = domain.process(AddProduct(**chair), asynchronous=False)
            print(f"  {chair['name']}: {product_id}")

        if domain.repository_for(Promotion).find_by_code("WELCOME10") is None:
            domain.process(
                CreatePromotion(code="WELCOME10", discount_percent=10, title="10% off your first chair"),
                asynchronous=False,
            )
            print("  Promotion WELCOME10 created")
    print("Done.")


def mint_token(user_id, is_admin=False):
    from chairup.api.auth import issue_token

    print(issue_token(user_id, is_admin=is_admin))


def main(argv=None):
    parser = argparse.ArgumentParser(description="ChairUp management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Insert demo products and a promotion")

    token_parser = subparsers.add_parser("token", help="Mint a bearer token for local testing")
    token_parser.add_argument("user_id")
    token_parser.add_argument("--admin", action="store_true", help="Grant the admin claim")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    elif args.command == "token":
        mint_token(args.user_id, is_admin=args.admin)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
