"""Repository for the orders table."""

from repositories.base_repository import BaseRepository
from utilities.entities import Order
from utilities.models import CourierModel, OrderModel, ShopModel


class OrderRepository(BaseRepository):
    """
    Order ids are generated by the database. Orders reference a shop and a
    courier; the client id is not checked against anything.
    """

    model = OrderModel
    table_name = "orders"
    key_attribute = "order_id"
    auto_key = True

    def to_record(self, row: OrderModel) -> Order:
        return Order(
            order_id=row.order_id,
            client_id=row.client_id,
            shop_id=row.shop_id,
            summ=row.summ,
            status=row.status,
            created_date=row.created_date,
            created_time=row.created_time,
            courier_id=row.courier_id,
        )

    def to_model(self, record: Order) -> OrderModel:
        return OrderModel(
            client_id=record.client_id,
            shop_id=record.shop_id,
            summ=record.summ,
            status=record.status,
            created_date=record.created_date,
            created_time=record.created_time,
            courier_id=record.courier_id,
        )

    def shop_exists(self, shop_id: int) -> bool:
        return self._has_value(ShopModel.shop_id, shop_id)

    def courier_exists(self, courier_id: int) -> bool:
        return self._has_value(CourierModel.courier_id, courier_id)
