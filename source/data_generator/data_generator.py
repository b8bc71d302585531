"""Script to fill the database with random products, shops, couriers and orders."""

import argparse
import random
from decimal import Decimal
from typing import Dict

from faker import Faker

from forms.schemas import SECONDS_PER_DAY
from repositories.courier_repository import CourierRepository
from repositories.order_repository import OrderRepository
from repositories.product_repository import ProductRepository
from repositories.shop_repository import ShopRepository
from utilities.config import get_db_url
from utilities.entities import Courier, Order, OrderStatus, Product, Shop
from utilities.exceptions import StorageError
from utilities.logger import Logger

# Set up logger
logger = Logger.get_logger(__name__)


class DataGenerator:
    """
    Class to generate random valid records and store them through the
    repositories, so the same reference checks apply as for user input.
    """

    def __init__(self, db_url: str, seed: int = None):
        self.db_url = db_url
        self.products = ProductRepository(db_url)
        self.shops = ShopRepository(db_url)
        self.couriers = CourierRepository(db_url)
        self.orders = OrderRepository(db_url)

        self.faker = Faker()
        self.random = random.Random(seed)
        if seed is not None:
            self.faker.seed_instance(seed)

    def _next_id(self, records, key: str) -> int:
        return max((getattr(record, key) for record in records), default=0) + 1

    def generate_product(self) -> Product:
        """Generate a new product"""
        product = Product(
            product_id=self._next_id(self.products.get_all(), "product_id"),
            price=Decimal(self.faker.random_int(min=1, max=999999)) / 100,
        )
        self.products.add(product)
        logger.info(f"Generated new product: {product}")
        return product

    def generate_shop(self) -> Shop:
        """Generate a new shop selling a random existing product"""
        products = self.products.get_all()
        if not products:
            logger.info("No products found")
            return None

        product = self.random.choice(products)
        shop = Shop(
            shop_id=self._next_id(self.shops.get_all(), "shop_id"),
            rating=round(self.random.uniform(0, 5), 1),
            product_id=product.product_id,
        )
        if not self.shops.product_exists(shop.product_id):
            logger.info(f"Product {shop.product_id} disappeared, skipping shop")
            return None

        self.shops.add(shop)
        logger.info(f"Generated new shop: {shop}")
        return shop

    def generate_courier(self) -> Courier:
        """Generate a new courier"""
        courier = self.couriers.add(Courier(rating=round(self.random.uniform(0, 5), 1)))
        logger.info(f"Generated new courier: {courier}")
        return courier

    def generate_order(self) -> Order:
        """Generate a new order for a random shop and courier"""
        shops = self.shops.get_all()
        couriers = self.couriers.get_all()
        if not shops or not couriers:
            logger.info("No shops or couriers found")
            return None

        shop = self.random.choice(shops)
        courier = self.random.choice(couriers)
        if not (
            self.orders.shop_exists(shop.shop_id)
            and self.orders.courier_exists(courier.courier_id)
        ):
            logger.info("Shop or courier disappeared, skipping order")
            return None

        order = Order(
            client_id=self.faker.random_int(min=1, max=10000),
            shop_id=shop.shop_id,
            summ=self.faker.random_int(min=100, max=1000000),
            status=self.random.choice(list(OrderStatus)),
            created_date=self.faker.date_between(start_date="-1y", end_date="today"),
            created_time=self.random.randint(0, SECONDS_PER_DAY),
            courier_id=courier.courier_id,
        )
        self.orders.add(order)
        logger.info(f"Generated new order: {order}")
        return order

    def __call__(self, count: int = 10) -> Dict[str, int]:
        """Main function to generate `count` records of each kind"""
        generated = {"products": 0, "shops": 0, "couriers": 0, "orders": 0}
        try:
            for _ in range(count):
                self.generate_product()
                generated["products"] += 1
                self.generate_courier()
                generated["couriers"] += 1
            for _ in range(count):
                if self.generate_shop() is not None:
                    generated["shops"] += 1
            for _ in range(count):
                if self.generate_order() is not None:
                    generated["orders"] += 1
        except StorageError as e:
            logger.error(f"Database error: {e}")
            raise

        logger.info(f"Generated {generated}")
        return generated


def main() -> None:
    parser = argparse.ArgumentParser(description="Fill the database with random records")
    parser.add_argument("--count", type=int, default=10, help="records of each kind")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args()

    data_generator = DataGenerator(db_url=get_db_url(), seed=args.seed)
    data_generator(count=args.count)


if __name__ == "__main__":
    main()
