"""Pydantic models used to parse and range-check raw form input."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from utilities.entities import OrderStatus

DATE_FORMAT = "%Y-%m-%d"
SECONDS_PER_DAY = 86400
# Largest values of the INTEGER and BIGINT columns
MAX_INT = 2**31 - 1
MAX_BIGINT = 2**63 - 1


class ProductInput(BaseModel):
    product_id: int = Field(gt=0, le=MAX_INT)
    price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)


class ShopInput(BaseModel):
    shop_id: int = Field(gt=0, le=MAX_INT)
    rating: float = Field(ge=0, le=5, allow_inf_nan=False)
    product_id: int = Field(gt=0, le=MAX_INT)


class CourierInput(BaseModel):
    rating: float = Field(ge=0, le=5, allow_inf_nan=False)


class OrderNumbersInput(BaseModel):
    client_id: int = Field(gt=0, le=MAX_INT)
    shop_id: int = Field(gt=0, le=MAX_INT)
    summ: int = Field(gt=0, le=MAX_BIGINT)
    created_time: int = Field(ge=0, le=SECONDS_PER_DAY)
    courier_id: int = Field(gt=0, le=MAX_INT)


class OrderDetailsInput(BaseModel):
    status: OrderStatus
    created_date: date

    @field_validator("created_date", mode="before")
    @classmethod
    def parse_fixed_format(cls, value):
        if isinstance(value, date):
            return value
        return datetime.strptime(value, DATE_FORMAT).date()
