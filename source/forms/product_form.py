"""Edit form for products."""

from typing import Dict, Mapping

from forms.base_form import BaseForm
from forms.schemas import ProductInput
from utilities.entities import Product


class ProductForm(BaseForm):
    messages = {
        "product_id": "Product id must be a positive integer",
        "price": "Price must be a positive number with at most two decimal places",
    }

    def submit(self, fields: Mapping[str, str]) -> Product:
        if self.is_edit:
            fields = {**fields, "product_id": str(self.record.product_id)}
        parsed = self.parse(ProductInput, fields)
        return Product(product_id=parsed.product_id, price=parsed.price)

    def initial_fields(self) -> Dict[str, str]:
        if not self.is_edit:
            return {"product_id": "", "price": ""}
        return {
            "product_id": str(self.record.product_id),
            "price": str(self.record.price),
        }
