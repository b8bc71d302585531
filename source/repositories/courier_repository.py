"""Repository for the courier table."""

from repositories.base_repository import BaseRepository
from utilities.entities import Courier
from utilities.models import CourierModel


class CourierRepository(BaseRepository):
    """
    Courier ids are generated by the database; any id on a new record is ignored.
    """

    model = CourierModel
    table_name = "courier"
    key_attribute = "courier_id"
    auto_key = True

    def to_record(self, row: CourierModel) -> Courier:
        return Courier(courier_id=row.courier_id, rating=row.rating)

    def to_model(self, record: Courier) -> CourierModel:
        return CourierModel(rating=record.rating)
