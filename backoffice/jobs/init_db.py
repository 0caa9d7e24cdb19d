"""Create the schema and optionally load sample data."""

import argparse
import logging
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from backoffice.db import init_db
from backoffice.db.session import SessionLocal, engine
from backoffice.models.customer import Customer
from backoffice.models.product import Product

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    ("Wireless Mouse", "Electronics", "799.00", 50, "2.4 GHz optical mouse"),
    ("Mechanical Keyboard", "Electronics", "3499.00", 20, "Blue switches, full size"),
    ("USB-C Charger", "Electronics", "1299.00", 4, "65 W fast charger"),
    ("Cotton T-Shirt", "Clothing", "499.00", 100, "Crew neck, assorted colours"),
    ("Denim Jacket", "Clothing", "2199.00", 15, None),
    ("Python Crash Course", "Books", "899.00", 30, "Hands-on introduction to programming"),
    ("The Pragmatic Programmer", "Books", "1099.00", 3, None),
    ("Steel Water Bottle", "Home", "349.00", 60, "1 litre, insulated"),
    ("Ceramic Coffee Mug", "Home", "249.00", 0, "Back in stock soon"),
]

SAMPLE_CUSTOMERS = [
    ("Asha Verma", "asha.verma@example.com", "9876543210", "12 MG Road, Bengaluru"),
    ("Rahul Nair", "rahul.nair@example.com", "9123456780", "44 Marine Drive, Mumbai"),
    ("Priya Sharma", "priya.sharma@example.com", "9988776655", "7 Park Street, Kolkata"),
]


def seed(db: Session) -> dict:
    """Insert sample products and customers into empty tables."""
    added = {"products": 0, "customers": 0}

    if db.execute(select(func.count(Product.product_id))).scalar_one() == 0:
        db.add_all(
            Product(
                product_name=name,
                category=category,
                price=Decimal(price),
                stock=stock,
                description=description,
            )
            for name, category, price, stock, description in SAMPLE_PRODUCTS
        )
        added["products"] = len(SAMPLE_PRODUCTS)

    if db.execute(select(func.count(Customer.customer_id))).scalar_one() == 0:
        db.add_all(
            Customer(name=name, email=email, phone=phone, address=address)
            for name, email, phone, address in SAMPLE_CUSTOMERS
        )
        added["customers"] = len(SAMPLE_CUSTOMERS)

    db.commit()
    return added


def run(drop: bool = False, with_seed: bool = False, bind=None, session_factory=None) -> dict:
    """Create tables and, when asked, seed them."""
    bind = bind or engine
    session_factory = session_factory or SessionLocal

    init_db(bind=bind, drop=drop)
    logger.info("Schema created%s", " (existing tables dropped)" if drop else "")

    if not with_seed:
        return {"products": 0, "customers": 0}

    db = session_factory()
    try:
        added = seed(db)
        logger.info(f"Seeded {added['products']} products and {added['customers']} customers")
        return added
    except Exception as e:
        logger.error(f"Seeding failed: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description='Create the back office schema')
    parser.add_argument(
        '--drop',
        action='store_true',
        help='Drop existing tables first'
    )
    parser.add_argument(
        '--seed',
        action='store_true',
        help='Load sample products and customers into empty tables'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Verbose output'
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        added = run(drop=args.drop, with_seed=args.seed)
        print(f"Schema ready: {added['products']} products and {added['customers']} customers added")
    except Exception as e:
        print(f"Failed: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
