from decimal import Decimal

import pytest

from coordinator.coordinator import Coordinator, EntityKind
from coordinator.entity_collection import LoadState
from repositories.shop_repository import ShopRepository
from utilities.entities import Courier, Product, Shop
from utilities.exceptions import StorageUnavailable
from utilities.tools import create_db_engine


def fail(*args, **kwargs):
    raise AssertionError("storage must not be called")


def test_load_all_fills_every_collection(seeded, coordinator, notifier):
    results = coordinator.load_all()

    assert all(results.values())
    for kind in EntityKind:
        collection = coordinator.collection(kind)
        assert collection.state is LoadState.LOADED
        assert len(collection) == 1
    assert "1 shops" in notifier.of_level("info")[-1]


def test_load_all_tolerates_one_failing_collection(seeded, products, couriers, orders, empty_db_url, notifier):
    coordinator = Coordinator(
        shop_repository=ShopRepository(empty_db_url),
        product_repository=products,
        order_repository=orders,
        courier_repository=couriers,
        notifier=notifier,
    )

    results = coordinator.load_all()

    assert results[EntityKind.SHOP] is False
    assert coordinator.collection(EntityKind.SHOP).state is LoadState.LOAD_FAILED
    assert coordinator.collection(EntityKind.PRODUCT).items == [seeded["product"]]
    assert coordinator.collection(EntityKind.ORDER).state is LoadState.LOADED
    assert any("shops" in message for message in notifier.of_level("error"))


def test_load_all_survives_unreadable_order_status(seeded, coordinator, db_url, notifier):
    engine = create_db_engine(db_url)
    with engine.begin() as connection:
        connection.exec_driver_sql("PRAGMA ignore_check_constraints = ON")
        connection.exec_driver_sql("UPDATE orders SET status = 'Cancelled'")
    engine.dispose()

    results = coordinator.load_all()

    assert results[EntityKind.ORDER] is False
    assert coordinator.collection(EntityKind.ORDER).state is LoadState.LOAD_FAILED
    assert isinstance(coordinator.collection(EntityKind.ORDER).error, StorageUnavailable)
    for kind in (EntityKind.SHOP, EntityKind.PRODUCT, EntityKind.COURIER):
        assert coordinator.collection(kind).state is LoadState.LOADED
    assert any("orders" in message for message in notifier.of_level("error"))
    assert notifier.of_level("info")[-1].startswith("Data loaded")


def test_add_with_oversized_ids_is_reported_not_raised(seeded, coordinator, shops, orders, notifier, monkeypatch):
    monkeypatch.setattr(shops, "add", fail)
    monkeypatch.setattr(orders, "add", fail)

    assert coordinator.add(
        EntityKind.SHOP,
        {"shop_id": "2", "rating": "3", "product_id": "99999999999999999999"},
    ) is False
    assert coordinator.add(
        EntityKind.ORDER,
        {
            "client_id": "99999999999999999999",
            "shop_id": "1",
            "summ": "100",
            "status": "Created",
            "created_date": "2024-05-01",
            "created_time": "0",
            "courier_id": str(seeded["courier"].courier_id),
        },
    ) is False
    assert len(notifier.of_level("warning")) == 2


def test_failed_reload_keeps_previous_items(seeded, coordinator, shops, monkeypatch):
    coordinator.load_all()
    before = coordinator.collection(EntityKind.SHOP).items

    def unavailable():
        raise StorageUnavailable("connection refused")

    monkeypatch.setattr(shops, "get_all", unavailable)

    assert coordinator.reload(EntityKind.SHOP) is False
    collection = coordinator.collection(EntityKind.SHOP)
    assert collection.state is LoadState.LOAD_FAILED
    assert collection.items is before
    assert isinstance(collection.error, StorageUnavailable)


def test_add_product_then_shop(coordinator):
    assert coordinator.add(EntityKind.PRODUCT, {"product_id": "1", "price": "9.99"})
    assert coordinator.add(
        EntityKind.SHOP, {"shop_id": "1", "rating": "4.5", "product_id": "1"}
    )

    assert coordinator.collection(EntityKind.PRODUCT).items == [
        Product(product_id=1, price=Decimal("9.99"))
    ]
    assert coordinator.collection(EntityKind.SHOP).items == [
        Shop(shop_id=1, rating=4.5, product_id=1)
    ]


def test_add_shop_with_missing_product_writes_nothing(coordinator, shops, notifier, monkeypatch):
    coordinator.add(EntityKind.PRODUCT, {"product_id": "1", "price": "9.99"})
    monkeypatch.setattr(shops, "add", fail)

    added = coordinator.add(
        EntityKind.SHOP, {"shop_id": "2", "rating": "3.0", "product_id": "999"}
    )

    assert added is False
    assert "999" in notifier.of_level("warning")[-1]


def test_add_courier_with_bad_rating_never_reaches_storage(coordinator, couriers, monkeypatch):
    monkeypatch.setattr(couriers, "add", fail)

    assert coordinator.add(EntityKind.COURIER, {"rating": "5.1"}) is False


def test_add_duplicate_product_reports_constraint_violation(coordinator, notifier):
    coordinator.add(EntityKind.PRODUCT, {"product_id": "1", "price": "1"})

    assert coordinator.add(EntityKind.PRODUCT, {"product_id": "1", "price": "2"}) is False
    assert "check your input" in notifier.of_level("error")[-1]
    assert len(coordinator.collection(EntityKind.PRODUCT)) == 1


def test_add_courier_gets_generated_key(coordinator):
    coordinator.add(EntityKind.COURIER, {"rating": "3"})

    [courier] = coordinator.collection(EntityKind.COURIER).items
    assert courier.courier_id is not None
    assert courier.rating == 3.0


def test_edit_reloads_collection(seeded, coordinator):
    coordinator.load_all()
    shop = coordinator.collection(EntityKind.SHOP).find(1)

    assert coordinator.edit(
        EntityKind.SHOP, shop, {"shop_id": "1", "rating": "2", "product_id": "1"}
    )

    assert coordinator.collection(EntityKind.SHOP).items == [
        Shop(shop_id=1, rating=2.0, product_id=1)
    ]


def test_edit_with_invalid_rating_leaves_record_untouched(seeded, coordinator, couriers, monkeypatch):
    coordinator.load_all()
    courier = coordinator.collection(EntityKind.COURIER).items[0]
    monkeypatch.setattr(couriers, "update", fail)

    assert coordinator.edit(EntityKind.COURIER, courier, {"rating": "-1"}) is False

    assert courier.rating == 4.0
    assert coordinator.collection(EntityKind.COURIER).items == [
        Courier(courier_id=courier.courier_id, rating=4.0)
    ]


def test_failed_update_restores_previous_values(seeded, coordinator, shops, notifier, monkeypatch):
    coordinator.load_all()
    shop = coordinator.collection(EntityKind.SHOP).find(1)
    # the product disappears between the check and the write
    monkeypatch.setattr(shops, "product_exists", lambda product_id: True)

    edited = coordinator.edit(
        EntityKind.SHOP, shop, {"shop_id": "1", "rating": "1", "product_id": "999"}
    )

    assert edited is False
    assert shop == Shop(shop_id=1, rating=4.5, product_id=1)
    assert shops.get_all() == [shop]
    assert "check your input" in notifier.of_level("error")[-1]


def test_unavailable_storage_during_update_restores_values(seeded, coordinator, couriers, monkeypatch):
    coordinator.load_all()
    courier = coordinator.collection(EntityKind.COURIER).items[0]

    def unavailable(record):
        raise StorageUnavailable("server closed the connection")

    monkeypatch.setattr(couriers, "update", unavailable)

    assert coordinator.edit(EntityKind.COURIER, courier, {"rating": "1"}) is False
    assert courier.rating == 4.0


def test_update_of_vanished_row_reports_and_reloads(seeded, coordinator, couriers, orders, notifier):
    coordinator.load_all()
    courier = coordinator.collection(EntityKind.COURIER).items[0]
    orders.delete(seeded["order"].order_id)
    couriers.delete(courier.courier_id)

    assert coordinator.edit(EntityKind.COURIER, courier, {"rating": "1"}) is False

    assert courier.rating == 4.0
    assert coordinator.collection(EntityKind.COURIER).items == []
    assert any("No row" in message for message in notifier.of_level("error"))


def test_edit_without_selection_warns(coordinator, notifier):
    assert coordinator.edit(EntityKind.ORDER, None, {}) is False
    assert notifier.of_level("warning") == ["No order selected for editing"]


def test_delete_removes_and_reloads(seeded, coordinator):
    coordinator.load_all()
    order = coordinator.collection(EntityKind.ORDER).items[0]

    assert coordinator.delete(EntityKind.ORDER, order)

    assert coordinator.collection(EntityKind.ORDER).items == []


def test_delete_referenced_shop_is_reported(seeded, coordinator, notifier):
    coordinator.load_all()
    collection = coordinator.collection(EntityKind.SHOP)
    before = list(collection.items)

    assert coordinator.delete(EntityKind.SHOP, collection.find(1)) is False

    assert collection.items == before
    assert "orders" in notifier.of_level("error")[-1]


def test_delete_needs_confirmation(seeded, coordinator, notifier, orders, monkeypatch):
    coordinator.load_all()
    notifier.answer = False
    monkeypatch.setattr(orders, "delete", fail)

    order = coordinator.collection(EntityKind.ORDER).items[0]

    assert coordinator.delete(EntityKind.ORDER, order) is False
    assert len(coordinator.collection(EntityKind.ORDER)) == 1


def test_collection_accepts_plain_kind_names(seeded, coordinator):
    coordinator.load_all()

    assert coordinator.collection("product").find(1) == seeded["product"]
    with pytest.raises(ValueError):
        coordinator.collection("customer")
