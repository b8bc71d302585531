"""Repository for the product table."""

from repositories.base_repository import BaseRepository
from utilities.entities import Product
from utilities.models import ProductModel


class ProductRepository(BaseRepository):
    """
    Products are keyed by a user-assigned id.
    """

    model = ProductModel
    table_name = "product"
    key_attribute = "product_id"

    def to_record(self, row: ProductModel) -> Product:
        return Product(product_id=row.product_id, price=row.price)

    def to_model(self, record: Product) -> ProductModel:
        return ProductModel(product_id=record.product_id, price=record.price)
