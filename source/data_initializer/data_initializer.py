"""Script to create the schema and load CSV seed data into the database."""

import os
from datetime import datetime
from decimal import Decimal
from typing import Dict

import pandas as pd
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from utilities.config import get_data_dir, get_db_url
from utilities.entities import OrderStatus
from utilities.logger import Logger
from utilities.models import CourierModel, OrderModel, ProductModel, ShopModel
from utilities.tools import create_db_engine, setup_database, wait_for_database

# Set up logger
logger = Logger.get_logger(__name__)

DATE_FORMAT = "%Y-%m-%d"


class DataInitializer:
    """
    Class to create the tables and insert seed rows from CSV files.

    Products and shops are skipped when their id already exists. Couriers and
    orders get generated ids, so they are only seeded into empty tables. Rows
    pointing at missing products, shops or couriers are skipped.
    """

    def __init__(self, db_url: str, data_dir: str, max_retries: int = 20, delay: int = 2):
        self.db_url = db_url
        self.data_dir = data_dir
        self.max_retries = max_retries
        self.delay = delay
        self.products_csv = os.path.join(self.data_dir, "products.csv")
        self.shops_csv = os.path.join(self.data_dir, "shops.csv")
        self.couriers_csv = os.path.join(self.data_dir, "couriers.csv")
        self.orders_csv = os.path.join(self.data_dir, "orders.csv")

    def load_csv_data(self, file_path: str) -> pd.DataFrame:
        """Load data from a CSV file"""
        if not os.path.exists(file_path):
            logger.info(f"No seed file {file_path}, skipping")
            return pd.DataFrame()
        try:
            return pd.read_csv(file_path)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.info(f"Error loading CSV file {file_path}: {e}")
            return pd.DataFrame()

    def insert_products(self, session: Session, products_df: pd.DataFrame) -> int:
        """Insert product data into the database"""
        inserted_products = 0
        for _, row in products_df.iterrows():
            product_id = int(row["product_id"])
            # Check if product already exists
            if session.get(ProductModel, product_id) is not None:
                continue
            session.add(
                ProductModel(product_id=product_id, price=Decimal(str(row["price"])))
            )
            inserted_products += 1

        session.commit()
        logger.info(f"Inserted {inserted_products} products")
        return inserted_products

    def insert_shops(self, session: Session, shops_df: pd.DataFrame) -> int:
        """Insert shop data into the database"""
        inserted_shops = 0
        for _, row in shops_df.iterrows():
            shop_id = int(row["shop_id"])
            product_id = int(row["product_id"])
            if session.get(ShopModel, shop_id) is not None:
                continue
            if session.get(ProductModel, product_id) is None:
                logger.info(f"Skipping shop {shop_id}: product {product_id} is missing")
                continue
            session.add(
                ShopModel(shop_id=shop_id, rating=float(row["rating"]), product_id=product_id)
            )
            inserted_shops += 1

        session.commit()
        logger.info(f"Inserted {inserted_shops} shops")
        return inserted_shops

    def insert_couriers(self, session: Session, couriers_df: pd.DataFrame) -> int:
        """Insert courier data into an empty courier table"""
        if session.scalar(select(func.count()).select_from(CourierModel)):
            logger.info("Couriers already present, skipping")
            return 0

        for _, row in couriers_df.iterrows():
            session.add(CourierModel(rating=float(row["rating"])))

        session.commit()
        logger.info(f"Inserted {len(couriers_df)} couriers")
        return len(couriers_df)

    def insert_orders(self, session: Session, orders_df: pd.DataFrame) -> int:
        """Insert order data into an empty orders table"""
        if session.scalar(select(func.count()).select_from(OrderModel)):
            logger.info("Orders already present, skipping")
            return 0

        inserted_orders = 0
        for _, row in orders_df.iterrows():
            shop_id = int(row["shop_id"])
            courier_id = int(row["courier_id"])
            if session.get(ShopModel, shop_id) is None:
                logger.info(f"Skipping order: shop {shop_id} is missing")
                continue
            if session.get(CourierModel, courier_id) is None:
                logger.info(f"Skipping order: courier {courier_id} is missing")
                continue
            session.add(
                OrderModel(
                    client_id=int(row["client_id"]),
                    shop_id=shop_id,
                    summ=int(row["summ"]),
                    status=OrderStatus(row["status"]),
                    created_date=datetime.strptime(
                        str(row["created_date"]), DATE_FORMAT
                    ).date(),
                    created_time=int(row["created_time"]),
                    courier_id=courier_id,
                )
            )
            inserted_orders += 1

        session.commit()
        logger.info(f"Inserted {inserted_orders} orders")
        return inserted_orders

    def __call__(self) -> Dict[str, int]:
        """Main function to initialize"""
        engine = create_db_engine(self.db_url)

        # Wait for the database to be available
        if not wait_for_database(engine, max_retries=self.max_retries, delay=self.delay):
            logger.info("Database is not available, giving up")
            return {}

        # Set up database
        setup_database(engine=engine)

        counts = {}
        with Session(engine) as session:
            try:
                counts["products"] = self.insert_products(
                    session, self.load_csv_data(self.products_csv)
                )
                counts["shops"] = self.insert_shops(
                    session, self.load_csv_data(self.shops_csv)
                )
                counts["couriers"] = self.insert_couriers(
                    session, self.load_csv_data(self.couriers_csv)
                )
                counts["orders"] = self.insert_orders(
                    session, self.load_csv_data(self.orders_csv)
                )
                logger.info("Initialization completed successfully")

            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Database error: {e}")
                raise

        return counts


def main() -> None:
    data_initializer = DataInitializer(db_url=get_db_url(), data_dir=get_data_dir())
    data_initializer()


if __name__ == "__main__":
    main()
