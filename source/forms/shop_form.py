"""Edit form for shops."""

from typing import Dict, Mapping

from forms.base_form import BaseForm
from forms.schemas import ShopInput
from utilities.entities import Shop


class ShopForm(BaseForm):
    """
    Validates a shop and checks that its product exists.

    Expects a ShopRepository.
    """

    messages = {
        "shop_id": "Shop id must be a positive integer",
        "rating": "Rating must be a number from 0 to 5",
        "product_id": "Product id must be a positive integer",
    }

    def submit(self, fields: Mapping[str, str]) -> Shop:
        if self.is_edit:
            fields = {**fields, "shop_id": str(self.record.shop_id)}
        parsed = self.parse(ShopInput, fields)

        self.require(
            self.repository.product_exists(parsed.product_id),
            f"Product with id {parsed.product_id} does not exist",
            "product_id",
        )

        return Shop(
            shop_id=parsed.shop_id, rating=parsed.rating, product_id=parsed.product_id
        )

    def initial_fields(self) -> Dict[str, str]:
        if not self.is_edit:
            return {"shop_id": "", "rating": "", "product_id": ""}
        return {
            "shop_id": str(self.record.shop_id),
            "rating": str(self.record.rating),
            "product_id": str(self.record.product_id),
        }
