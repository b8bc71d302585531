"""Plain records for shops, products, couriers and orders shown by the client."""

import copy
import enum
from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Optional


class OrderStatus(str, enum.Enum):
    """Fixed set of order statuses."""

    CREATED = "Created"
    IN_TRANSIT = "InTransit"
    DELIVERED = "Delivered"

    def __str__(self):
        return self.value


@dataclass
class Product:
    product_id: int
    price: Decimal


@dataclass
class Shop:
    shop_id: int
    rating: float
    product_id: int


@dataclass
class Courier:
    rating: float
    courier_id: Optional[int] = None


@dataclass
class Order:
    client_id: int
    shop_id: int
    summ: int
    status: OrderStatus
    created_date: date
    created_time: int
    courier_id: int
    order_id: Optional[int] = None


def snapshot(record):
    """Return an independent copy of a record."""
    return copy.copy(record)


def restore(record, saved) -> None:
    """Write every field of a saved copy back onto the record in place."""
    for field in fields(record):
        setattr(record, field.name, getattr(saved, field.name))
