"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Admin + test user, sample categories and products
"""

import argparse
import sys

SEED_USERS = [
    {
        "email": "admin@liquidinsider.com",
        "password": "admin123",
        "first_name": "Admin",
        "last_name": "User",
        "role": "ADMIN",
    },
    {
        "email": "test@example.com",
        "password": "password123",
        "first_name": "Test",
        "last_name": "User",
        "role": "USER",
    },
]

SEED_CATEGORIES = [
    {"name": "Juice", "description": "Fresh and natural juices"},
    {"name": "Soda", "description": "Carbonated soft drinks"},
    {"name": "Water", "description": "Pure and mineral water"},
    {"name": "Energy Drinks", "description": "Boost your energy"},
    {"name": "Tea", "description": "Hot and iced tea varieties"},
]

SEED_PRODUCTS = [
    ("juice", "Orange Juice Fresh", "Freshly squeezed orange juice with no added sugar", 4.99, 100, True),
    ("juice", "Apple Juice Organic", "100% organic apple juice", 5.49, 80, True),
    ("soda", "Cola Classic", "Classic cola flavor", 2.99, 200, False),
    ("soda", "Lemon Soda", "Refreshing lemon-flavored soda", 2.49, 150, False),
    ("water", "Spring Water 500ml", "Pure spring water", 1.99, 500, False),
    ("water", "Mineral Water 1L", "Rich in minerals", 2.49, 300, True),
    ("energy-drinks", "Energy Boost", "Caffeinated energy drink", 3.49, 120, True),
    ("tea", "Iced Green Tea", "Lightly sweetened green tea", 3.29, 90, False),
]


def _storefront():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    domain = _storefront()
    print("Creating database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    domain = _storefront()
    print("Dropping database schema...")
    drop_db(domain)
    print("Done.")


def seed_database():
    from storefront.catalogue.category.category import Category
    from storefront.catalogue.category.management import CreateCategory
    from storefront.catalogue.product.management import CreateProduct
    from storefront.catalogue.product.product import Product
    from storefront.identity.user import User
    from storefront.shared.slug import slugify

    domain = _storefront()
    with domain.domain_context():
        user_repo = domain.repository_for(User)
        for data in SEED_USERS:
            if user_repo.find_by_email(data["email"]) is not None:
                continue
            user = User.register(**data)
            user.verify_email()
            user_repo.add(user)
            print(f"Created user: {user.email}")

        category_repo = domain.repository_for(Category)
        for data in SEED_CATEGORIES:
            if category_repo.find_by_slug(slugify(data["name"])) is None:
                domain.process(CreateCategory(**data), asynchronous=False)
        print("Created categories")

        product_repo = domain.repository_for(Product)
        for category_slug, name, description, price, inventory, featured in SEED_PRODUCTS:
            if product_repo.find_by_slug(slugify(name)) is not None:
                continue
            category = category_repo.find_by_slug(category_slug)
            domain.process(
                CreateProduct(
                    name=name,
                    description=description,
                    price=price,
                    inventory=inventory,
                    category_id=str(category.id),
                    is_featured=featured,
                ),
                asynchronous=False,
            )
        print("Created products")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load sample users, categories and products")

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
