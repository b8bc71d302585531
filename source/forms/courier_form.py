"""Edit form for couriers."""

from typing import Dict, Mapping

from forms.base_form import BaseForm
from forms.schemas import CourierInput
from utilities.entities import Courier


class CourierForm(BaseForm):
    messages = {"rating": "Rating must be a number from 0 to 5"}

    def submit(self, fields: Mapping[str, str]) -> Courier:
        parsed = self.parse(CourierInput, fields)
        courier_id = self.record.courier_id if self.is_edit else None
        return Courier(courier_id=courier_id, rating=parsed.rating)

    def initial_fields(self) -> Dict[str, str]:
        return {"rating": str(self.record.rating) if self.is_edit else ""}
