"""Common parsing for the edit forms."""

from typing import Dict, Mapping

from pydantic import BaseModel, ValidationError

from utilities.exceptions import ValidationFailure
from utilities.logger import Logger

# Set up logger
logger = Logger.get_logger(__name__)


class BaseForm:
    """
    Turns raw text input into a validated record.

    Checks run in a fixed order and stop at the first failure, which is
    reported as a ValidationFailure carrying a message for the user. A form
    never writes to storage; it only asks its repository whether referenced
    rows exist.
    """

    messages: Dict[str, str] = {}

    def __init__(self, repository=None, record=None):
        self.repository = repository
        self.record = record

    @property
    def is_edit(self) -> bool:
        return self.record is not None

    def submit(self, fields: Mapping[str, str]):
        raise NotImplementedError

    def initial_fields(self) -> Dict[str, str]:
        raise NotImplementedError

    def parse(self, schema, fields: Mapping[str, str]) -> BaseModel:
        """Validate the schema's fields, reporting the first one that fails."""
        data = {
            name: str(fields.get(name) or "").strip() for name in schema.model_fields
        }
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            name = e.errors()[0]["loc"][0]
            logger.debug(f"Rejected '{name}' = {data.get(name)!r}")
            raise ValidationFailure(self.messages[name], field=name) from e

    def require(self, exists: bool, message: str, field: str) -> None:
        if not exists:
            logger.debug(f"Reference check failed for '{field}'")
            raise ValidationFailure(message, field=field)
