"""Storefront management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Create a demo seller and sample products
"""

import argparse
import sys

SAMPLE_PRODUCTS = [
    {"name": "Linen Shirt", "price": 39.5, "category": "apparel", "stock": 25},
    {"name": "Canvas Sneakers", "price": 59.0, "category": "footwear", "stock": 12},
    {"name": "Leather Belt", "price": 24.99, "category": "accessories", "stock": 40},
    {"name": "Wool Scarf", "price": 19.0, "category": "accessories", "stock": 30},
    {"name": "Denim Jacket", "price": 89.0, "category": "apparel", "stock": 8},
]


def setup_database():
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping database schema...")
    drop_db(storefront)
    print("Done.")


def seed(username, password):
    from storefront.catalogue.management import AddProduct
    from storefront.domain import storefront
    from storefront.identity.registration import RegisterUser
    from storefront.identity.user import User

    storefront.init()
    with storefront.domain_context():
        seller = storefront.repository_for(User).find_by_username(username)
        if seller is None:
            seller_id = storefront.process(
                RegisterUser(username=username, password=password, role="seller"),
                asynchronous=False,
            )
            print(f"Created seller '{username}'.")
        else:
            seller_id = str(seller.id)
            print(f"Using existing seller '{username}'.")

        for product in SAMPLE_PRODUCTS:
            storefront.process(AddProduct(actor_id=seller_id, **product), asynchronous=False)
            print(f"  added {product['name']}")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed", help="Create a demo seller with sample products")
    seed_parser.add_argument("--username", default="demo_seller")
    seed_parser.add_argument("--password", default="demo-pass")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed(args.username, args.password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
