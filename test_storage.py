from decimal import Decimal

import pytest

from restaurant_site.errors import NotFound


def test_soft_delete_hides_row_from_public_lists(storage, floor):
    storage.delete_table(floor["small"].id)

    assert floor["small"].id not in {t.id for t in storage.get_tables()}
    # admin list still sees it, flagged inactive
    row = storage.get_table(floor["small"].id)
    assert row is not None and row.is_active is False
    assert floor["small"].id in {t.id for t in storage.get_all_tables()}


def test_missing_rows_raise_not_found(storage):
    with pytest.raises(NotFound) as excinfo:
        storage.update_table("missing", {"name": "X"})
    assert excinfo.value.message == "Table not found"

    with pytest.raises(NotFound):
        storage.delete_menu_item("missing")
    with pytest.raises(NotFound):
        storage.delete_booking("missing")


def test_menu_ordering_and_category_filter(storage):
    mains = storage.create_menu_category({"name": "Mains", "display_order": 2})
    starters = storage.create_menu_category({"name": "Starters", "display_order": 1})
    hidden = storage.create_menu_category({"name": "Specials", "display_order": 0, "is_active": False})

    assert [c.name for c in storage.get_menu_categories()] == ["Starters", "Mains"]
    assert [c.name for c in storage.get_all_menu_categories()] == ["Specials", "Starters", "Mains"]

    storage.create_menu_item({
        "category_id": mains.id, "name": "Risotto", "description": "Mushroom",
        "price": Decimal("15.00"), "display_order": 2,
    })
    storage.create_menu_item({
        "category_id": mains.id, "name": "Salmon", "description": "Grilled",
        "price": Decimal("18.50"), "display_order": 1,
    })
    storage.create_menu_item({
        "category_id": starters.id, "name": "Soup", "description": "Of the day",
        "price": Decimal("6.50"), "display_order": 1,
    })

    assert [i.name for i in storage.get_menu_items_by_category(mains.id)] == ["Salmon", "Risotto"]
    assert storage.get_menu_items_by_category(hidden.id) == []


def test_menu_item_price_keeps_two_decimals(storage):
    item = storage.create_menu_item({
        "name": "Tiramisu", "description": "House made", "price": Decimal("6.00"), "display_order": 1,
    })
    assert storage.get_menu_item(item.id).price == Decimal("6.00")


def test_bookings_newest_first_and_by_date(storage, floor):
    def create(name, date, status):
        return storage.create_booking({
            "customer_name": name, "customer_email": "x@example.com", "customer_phone": "1",
            "date": date, "time": "19:00", "party_size": 2, "table_id": floor["small"].id,
            "status": status,
        })

    first = create("First", "2025-06-01", "confirmed")
    second = create("Second", "2025-06-01", "unconfirmed")
    third = create("Third", "2025-06-02", "confirmed")

    ids = [b.id for b in storage.get_bookings()]
    assert set(ids) == {first.id, second.id, third.id}
    created = [b.created_at for b in storage.get_bookings()]
    assert created == sorted(created, reverse=True)

    # confirmed only, exact date string
    assert [b.id for b in storage.get_bookings_by_date("2025-06-01")] == [first.id]
    assert storage.get_bookings_by_date("2025-6-1") == []


def test_delete_booking_cancels(storage, floor):
    booking = storage.create_booking({
        "customer_name": "Jane", "customer_email": "jane@example.com", "customer_phone": "1",
        "date": "2025-06-01", "time": "19:00", "party_size": 2, "status": "confirmed",
    })
    storage.delete_booking(booking.id)
    assert storage.get_booking(booking.id).status == "cancelled"


def test_system_setting_upsert(storage):
    assert storage.get_system_setting("registration_enabled") is None

    created = storage.set_system_setting("registration_enabled", "false", "Allow sign-ups")
    updated = storage.set_system_setting("registration_enabled", "true")

    assert created.id == updated.id
    assert storage.get_system_setting("registration_enabled").value == "true"
    assert len(storage.get_system_settings()) == 1


def test_opening_hours_and_contact_ordering(storage):
    storage.create_contact_info({"type": "email", "label": "Email", "value": "a@example.com", "display_order": 2})
    storage.create_contact_info({"type": "phone", "label": "Phone", "value": "555", "display_order": 1})
    assert [c.label for c in storage.get_contact_info()] == ["Phone", "Email"]

    storage.create_opening_hours({"day_of_week": 6, "day_name": "Saturday", "open_time": "17:00", "close_time": "23:00"})
    storage.create_opening_hours({"day_of_week": 0, "day_name": "Sunday", "is_closed": True})
    assert [h.day_name for h in storage.get_opening_hours()] == ["Sunday", "Saturday"]


def test_floor_plan_elements_by_location(storage, floor):
    other = storage.create_restaurant_location({"name": "Patio", "display_order": 2})
    storage.create_floor_plan_element({
        "location_id": floor["location"].id, "element_type": "bar", "name": "Bar",
        "x_position": 0, "y_position": 0, "width": 100, "height": 40,
    })
    storage.create_floor_plan_element({
        "location_id": other.id, "element_type": "door", "name": "Gate",
        "x_position": 0, "y_position": 0, "width": 40, "height": 10,
    })

    assert [e.name for e in storage.get_floor_plan_elements(floor["location"].id)] == ["Bar"]
    assert len(storage.get_floor_plan_elements()) == 2


def test_locations_ordered_by_display_order(storage):
    storage.create_restaurant_location({"name": "Bar", "display_order": 3})
    storage.create_restaurant_location({"name": "Main Dining", "display_order": 1})
    assert [loc.name for loc in storage.get_restaurant_locations()] == ["Main Dining", "Bar"]


SOFT_DELETABLE = [
    # (create, list active, get by id, delete, row data)
    ("create_table", "get_tables", "get_table", "delete_table",
     {"name": "T9", "capacity": 2, "x_position": 0, "y_position": 0}),
    ("create_menu_category", "get_menu_categories", "get_menu_category", "delete_menu_category",
     {"name": "Mains", "display_order": 1}),
    ("create_menu_item", "get_menu_items", "get_menu_item", "delete_menu_item",
     {"name": "Soup", "description": "Of the day", "price": Decimal("6.50"), "display_order": 1}),
    ("create_gallery_image", "get_gallery_images", "get_gallery_image", "delete_gallery_image",
     {"title": "Terrace", "url": "/img/terrace.jpg", "alt": "The terrace", "display_order": 1}),
    ("create_contact_info", "get_contact_info", "get_contact", "delete_contact_info",
     {"type": "phone", "label": "Phone", "value": "555-0100"}),
    ("create_opening_hours", "get_opening_hours", "get_opening_hours_entry", "delete_opening_hours",
     {"day_of_week": 2, "day_name": "Tuesday", "open_time": "17:00", "close_time": "22:00"}),
    ("create_restaurant_location", "get_restaurant_locations", "get_restaurant_location",
     "delete_restaurant_location", {"name": "Patio"}),
    ("create_floor_plan_element", "get_floor_plan_elements", "get_floor_plan_element",
     "delete_floor_plan_element",
     {"element_type": "door", "name": "Gate", "x_position": 0, "y_position": 0, "width": 40, "height": 10}),
]


@pytest.mark.parametrize(
    "create, list_active, get_one, delete, data", SOFT_DELETABLE, ids=[case[0] for case in SOFT_DELETABLE]
)
def test_soft_delete_keeps_row_readable_by_id(storage, create, list_active, get_one, delete, data):
    if create == "create_floor_plan_element":
        data = dict(data, location_id=storage.create_restaurant_location({"name": "Main Dining"}).id)

    row = getattr(storage, create)(data)
    assert row.id in {r.id for r in getattr(storage, list_active)()}

    getattr(storage, delete)(row.id)

    assert row.id not in {r.id for r in getattr(storage, list_active)()}
    kept = getattr(storage, get_one)(row.id)
    assert kept is not None
    assert kept.is_active is False
