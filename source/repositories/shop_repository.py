"""Repository for the shop table."""

from repositories.base_repository import BaseRepository
from utilities.entities import Shop
from utilities.models import ProductModel, ShopModel


class ShopRepository(BaseRepository):
    """
    Shops are keyed by a user-assigned id and reference a product.
    """

    model = ShopModel
    table_name = "shop"
    key_attribute = "shop_id"

    def to_record(self, row: ShopModel) -> Shop:
        return Shop(shop_id=row.shop_id, rating=row.rating, product_id=row.product_id)

    def to_model(self, record: Shop) -> ShopModel:
        return ShopModel(
            shop_id=record.shop_id,
            rating=record.rating,
            product_id=record.product_id,
        )

    def product_exists(self, product_id: int) -> bool:
        """Check that the product a shop refers to is present."""
        return self._has_value(ProductModel.product_id, product_id)
