"""Edit form for orders."""

from datetime import date
from typing import Dict, Mapping

from forms.base_form import BaseForm
from forms.schemas import DATE_FORMAT, OrderDetailsInput, OrderNumbersInput
from utilities.entities import Order, OrderStatus

STATUS_CHOICES = ", ".join(status.value for status in OrderStatus)


class OrderForm(BaseForm):
    """
    Validates an order: numeric fields first, then the shop and courier
    references, then the status and the date.

    Expects an OrderRepository.
    """

    messages = {
        "client_id": "Client id must be a positive integer",
        "shop_id": "Shop id must be a positive integer",
        "summ": "Order sum must be a positive integer",
        "created_time": "Time must be between 0 and 86400 seconds",
        "courier_id": "Courier id must be a positive integer",
        "status": f"Status must be one of: {STATUS_CHOICES}",
        "created_date": "Date must be in YYYY-MM-DD format",
    }

    def submit(self, fields: Mapping[str, str]) -> Order:
        numbers = self.parse(OrderNumbersInput, fields)

        self.require(
            self.repository.shop_exists(numbers.shop_id),
            f"Shop with id {numbers.shop_id} does not exist",
            "shop_id",
        )
        self.require(
            self.repository.courier_exists(numbers.courier_id),
            f"Courier with id {numbers.courier_id} does not exist",
            "courier_id",
        )

        details = self.parse(OrderDetailsInput, fields)

        return Order(
            order_id=self.record.order_id if self.is_edit else None,
            client_id=numbers.client_id,
            shop_id=numbers.shop_id,
            summ=numbers.summ,
            status=details.status,
            created_date=details.created_date,
            created_time=numbers.created_time,
            courier_id=numbers.courier_id,
        )

    def initial_fields(self) -> Dict[str, str]:
        if not self.is_edit:
            return {
                "client_id": "",
                "shop_id": "",
                "summ": "",
                "status": OrderStatus.CREATED.value,
                "created_date": date.today().strftime(DATE_FORMAT),
                "created_time": "",
                "courier_id": "",
            }
        return {
            "client_id": str(self.record.client_id),
            "shop_id": str(self.record.shop_id),
            "summ": str(self.record.summ),
            "status": self.record.status.value,
            "created_date": self.record.created_date.strftime(DATE_FORMAT),
            "created_time": str(self.record.created_time),
            "courier_id": str(self.record.courier_id),
        }
