from datetime import date
from decimal import Decimal

import pytest

from coordinator.coordinator import Coordinator
from repositories.courier_repository import CourierRepository
from repositories.order_repository import OrderRepository
from repositories.product_repository import ProductRepository
from repositories.shop_repository import ShopRepository
from utilities.entities import Courier, Order, OrderStatus, Product, Shop
from utilities.tools import create_db_engine, setup_database


class RecordingNotifier:
    """Keeps every message so tests can inspect what the user would see."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.messages = []

    def info(self, message):
        self.messages.append(("info", message))

    def warning(self, message):
        self.messages.append(("warning", message))

    def error(self, message):
        self.messages.append(("error", message))

    def confirm(self, message):
        self.messages.append(("confirm", message))
        return self.answer

    def of_level(self, level):
        return [message for kind, message in self.messages if kind == level]


@pytest.fixture
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'delivery.db'}"
    engine = create_db_engine(url)
    setup_database(engine)
    engine.dispose()
    return url


@pytest.fixture
def empty_db_url(tmp_path):
    """A database file without any tables."""
    return f"sqlite:///{tmp_path / 'empty.db'}"


@pytest.fixture
def products(db_url):
    return ProductRepository(db_url)


@pytest.fixture
def shops(db_url):
    return ShopRepository(db_url)


@pytest.fixture
def couriers(db_url):
    return CourierRepository(db_url)


@pytest.fixture
def orders(db_url):
    return OrderRepository(db_url)


@pytest.fixture
def seeded(products, shops, couriers, orders):
    """One product, shop, courier and order referencing each other."""
    product = products.add(Product(product_id=1, price=Decimal("9.99")))
    shop = shops.add(Shop(shop_id=1, rating=4.5, product_id=1))
    courier = couriers.add(Courier(rating=4.0))
    order = orders.add(
        Order(
            client_id=42,
            shop_id=1,
            summ=1500,
            status=OrderStatus.CREATED,
            created_date=date(2024, 5, 1),
            created_time=3600,
            courier_id=courier.courier_id,
        )
    )
    return {"product": product, "shop": shop, "courier": courier, "order": order}


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def coordinator(products, shops, couriers, orders, notifier):
    return Coordinator(
        shop_repository=shops,
        product_repository=products,
        order_repository=orders,
        courier_repository=couriers,
        notifier=notifier,
    )
