"""Loads the four collections and runs add, edit and delete against storage."""

import enum
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from coordinator.entity_collection import EntityCollection
from coordinator.notifier import LoggingNotifier, Notifier
from forms.base_form import BaseForm
from forms.courier_form import CourierForm
from forms.order_form import OrderForm
from forms.product_form import ProductForm
from forms.shop_form import ShopForm
from repositories.courier_repository import CourierRepository
from repositories.order_repository import OrderRepository
from repositories.product_repository import ProductRepository
from repositories.shop_repository import ShopRepository
from utilities.entities import restore, snapshot
from utilities.exceptions import (
    ConstraintViolation,
    RecordNotFound,
    ReferentialIntegrityViolation,
    StorageError,
    ValidationFailure,
)
from utilities.logger import Logger

# Set up logger
logger = Logger.get_logger(__name__)


class EntityKind(str, enum.Enum):
    SHOP = "shop"
    PRODUCT = "product"
    ORDER = "order"
    COURIER = "courier"


@dataclass
class EntityBinding:
    """Everything the coordinator needs to manage one entity."""

    label: str
    form_class: type
    collection: EntityCollection
    dependents: Optional[str] = None

    @property
    def repository(self):
        return self.collection.repository


class Coordinator:
    """
    Connects user actions to the repositories.

    After every successful write the affected collection is reloaded from
    storage instead of being patched. When an update fails, the record shown
    to the user gets its pre-edit values back. Storage errors stop here and
    are reported through the notifier.
    """

    def __init__(
        self,
        shop_repository: ShopRepository = None,
        product_repository: ProductRepository = None,
        order_repository: OrderRepository = None,
        courier_repository: CourierRepository = None,
        notifier: Notifier = None,
        db_url: str = None,
    ):
        self.notifier = notifier or LoggingNotifier()
        self.bindings: Dict[EntityKind, EntityBinding] = {
            EntityKind.SHOP: EntityBinding(
                label="shop",
                form_class=ShopForm,
                collection=EntityCollection(
                    "shops", shop_repository or ShopRepository(db_url)
                ),
                dependents="orders",
            ),
            EntityKind.PRODUCT: EntityBinding(
                label="product",
                form_class=ProductForm,
                collection=EntityCollection(
                    "products", product_repository or ProductRepository(db_url)
                ),
                dependents="shops",
            ),
            EntityKind.ORDER: EntityBinding(
                label="order",
                form_class=OrderForm,
                collection=EntityCollection(
                    "orders", order_repository or OrderRepository(db_url)
                ),
            ),
            EntityKind.COURIER: EntityBinding(
                label="courier",
                form_class=CourierForm,
                collection=EntityCollection(
                    "couriers", courier_repository or CourierRepository(db_url)
                ),
                dependents="orders",
            ),
        }

    def collection(self, kind: EntityKind) -> EntityCollection:
        return self.bindings[EntityKind(kind)].collection

    def form_for(self, kind: EntityKind, record=None) -> BaseForm:
        """Build the edit form for a new record, or for editing `record`."""
        binding = self.bindings[EntityKind(kind)]
        return binding.form_class(binding.repository, record)

    def load_all(self) -> Dict[EntityKind, bool]:
        """Load every collection on a background worker and wait for it.

        A failing load does not stop the others.
        """
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="loader") as executor:
            futures = {
                kind: executor.submit(binding.collection.load)
                for kind, binding in self.bindings.items()
            }
            results = {kind: future.result() for kind, future in futures.items()}

        for kind, loaded in results.items():
            if not loaded:
                collection = self.bindings[kind].collection
                self.notifier.error(f"Failed to load {collection.name}: {collection.error}")

        self.notifier.info(
            "Data loaded: "
            + ", ".join(
                f"{len(binding.collection)} {binding.collection.name}"
                for binding in self.bindings.values()
            )
        )
        return results

    def reload(self, kind: EntityKind) -> bool:
        collection = self.collection(kind)
        if collection.load():
            return True
        self.notifier.error(f"Failed to load {collection.name}: {collection.error}")
        return False

    def add(self, kind: EntityKind, fields: Mapping[str, str]) -> bool:
        """Validate the input, insert it and reload the collection."""
        binding = self.bindings[EntityKind(kind)]
        record = self._submit(binding, self.form_for(kind), fields)
        if record is None:
            return False

        try:
            binding.repository.add(record)
        except ConstraintViolation as e:
            self.notifier.error(f"Could not add {binding.label}, check your input.\n{e}")
            return False
        except StorageError as e:
            self.notifier.error(f"Could not add {binding.label}: {e}")
            return False

        self.notifier.info(f"The {binding.label} was added")
        self.reload(kind)
        return True

    def edit(self, kind: EntityKind, record, fields: Mapping[str, str]) -> bool:
        """Validate the input, update the selected record and reload.

        If the update fails the selected record gets its old values back.
        """
        binding = self.bindings[EntityKind(kind)]
        if record is None:
            self.notifier.warning(f"No {binding.label} selected for editing")
            return False

        saved = snapshot(record)
        updated = self._submit(binding, self.form_for(kind, saved), fields)
        if updated is None:
            return False

        restore(record, updated)
        try:
            binding.repository.update(record)
        except RecordNotFound as e:
            restore(record, saved)
            self.notifier.error(f"Could not update {binding.label}: {e}")
            self.reload(kind)
            return False
        except ConstraintViolation as e:
            restore(record, saved)
            self.notifier.error(
                f"Could not update {binding.label}, check your input.\n{e}"
            )
            return False
        except StorageError as e:
            restore(record, saved)
            self.notifier.error(f"Could not update {binding.label}: {e}")
            return False

        self.notifier.info(f"The {binding.label} was updated")
        self.reload(kind)
        return True

    def delete(self, kind: EntityKind, record) -> bool:
        """Delete the selected record after confirmation and reload."""
        binding = self.bindings[EntityKind(kind)]
        if record is None:
            self.notifier.warning(f"No {binding.label} selected for deletion")
            return False

        record_id = binding.repository.record_key(record)
        if not self.notifier.confirm(
            f"Delete the {binding.label} with id {record_id}?"
        ):
            return False

        try:
            binding.repository.delete(record_id)
        except ReferentialIntegrityViolation as e:
            self.notifier.error(
                f"Could not delete {binding.label}: {e}\n"
                f"It is probably still referenced by {binding.dependents}."
            )
            return False
        except StorageError as e:
            self.notifier.error(f"Could not delete {binding.label}: {e}")
            return False

        self.notifier.info(f"The {binding.label} was deleted")
        self.reload(kind)
        return True

    def _submit(self, binding: EntityBinding, form: BaseForm, fields: Mapping[str, str]):
        try:
            return form.submit(fields)
        except ValidationFailure as e:
            self.notifier.warning(str(e))
        except StorageError as e:
            self.notifier.error(f"Could not check the {binding.label}: {e}")
        return None
