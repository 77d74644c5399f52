import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .errors import NotFound
from .models import (
    Booking,
    ContactInfo,
    FloorPlanElement,
    GalleryImage,
    MenuCategory,
    MenuItem,
    OpeningHours,
    RestaurantLocation,
    SystemSetting,
    Table,
    User,
)

logger = logging.getLogger(__name__)


class Storage:
    """Data access for every entity.

    Each method issues one query (or one read followed by one write) and
    returns ORM rows. Deleting is a soft flag flip (``is_active = False``)
    for everything except bookings, which are cancelled, and users, which
    are never removed.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------
    # Generic helpers
    # ---------------------------

    def _require(self, model, id: str, entity: str):
        row = self.db.get(model, id)
        if row is None:
            raise NotFound(entity)
        return row

    def _list_active(self, model, *order_by):
        query = self.db.query(model).filter(model.is_active == True)
        if order_by:
            query = query.order_by(*order_by)
        return query.all()

    def _create(self, model, data: Dict[str, Any]):
        row = model(**data)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def _update(self, model, id: str, data: Dict[str, Any], entity: str):
        row = self._require(model, id, entity)
        for key, value in data.items():
            setattr(row, key, value)
        self.db.commit()
        self.db.refresh(row)
        return row

    def _soft_delete(self, model, id: str, entity: str) -> None:
        row = self._require(model, id, entity)
        row.is_active = False
        self.db.commit()
        logger.info("Deactivated %s %s", entity.lower(), id)

    # ---------------------------
    # Users
    # ---------------------------

    def get_user(self, id: str) -> Optional[User]:
        return self.db.get(User, id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup"""
        return self.db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    def create_user(self, data: Dict[str, Any]) -> User:
        return self._create(User, data)

    # ---------------------------
    # Tables
    # ---------------------------

    def get_tables(self) -> List[Table]:
        return self._list_active(Table)

    def get_all_tables(self) -> List[Table]:
        """Admin view, inactive tables included"""
        return self.db.query(Table).all()

    def get_table(self, id: str) -> Optional[Table]:
        return self.db.get(Table, id)

    def lock_table(self, id: str) -> Optional[Table]:
        """Read a table with a row lock held until the next commit (no-op on SQLite)"""
        return self.db.query(Table).filter(Table.id == id).with_for_update().first()

    def get_tables_for_party(self, location_id: str, party_size: int) -> List[Table]:
        return self.db.query(Table).filter(
            Table.is_active == True,
            Table.location_id == location_id,
            Table.capacity >= party_size,
        ).all()

    def create_table(self, data: Dict[str, Any]) -> Table:
        return self._create(Table, data)

    def update_table(self, id: str, data: Dict[str, Any]) -> Table:
        return self._update(Table, id, data, "Table")

    def delete_table(self, id: str) -> None:
        self._soft_delete(Table, id, "Table")

    # ---------------------------
    # Bookings
    # ---------------------------

    def get_bookings(self) -> List[Booking]:
        return self.db.query(Booking).order_by(Booking.created_at.desc()).all()

    def get_booking(self, id: str) -> Optional[Booking]:
        return self.db.get(Booking, id)

    def get_bookings_by_date(self, date: str) -> List[Booking]:
        """Confirmed bookings on ``date``, matched as an exact string"""
        return self.db.query(Booking).filter(
            Booking.date == date,
            Booking.status == "confirmed",
        ).all()

    def get_confirmed_booking_for_slot(
        self, table_id: str, date: str, time: str, exclude_id: Optional[str] = None
    ) -> Optional[Booking]:
        query = self.db.query(Booking).filter(
            Booking.table_id == table_id,
            Booking.date == date,
            Booking.time == time,
            Booking.status == "confirmed",
        )
        if exclude_id:
            query = query.filter(Booking.id != exclude_id)
        return query.first()

    def create_booking(self, data: Dict[str, Any]) -> Booking:
        return self._create(Booking, data)

    def update_booking(self, id: str, data: Dict[str, Any]) -> Booking:
        return self._update(Booking, id, data, "Booking")

    def update_booking_status(self, id: str, status: str) -> Booking:
        return self._update(Booking, id, {"status": status}, "Booking")

    def delete_booking(self, id: str) -> None:
        self._update(Booking, id, {"status": "cancelled"}, "Booking")

    # ---------------------------
    # Menu
    # ---------------------------

    def get_menu_categories(self) -> List[MenuCategory]:
        return self._list_active(MenuCategory, MenuCategory.display_order)

    def get_all_menu_categories(self) -> List[MenuCategory]:
        return self.db.query(MenuCategory).order_by(MenuCategory.display_order).all()

    def get_menu_category(self, id: str) -> Optional[MenuCategory]:
        return self.db.get(MenuCategory, id)

    def create_menu_category(self, data: Dict[str, Any]) -> MenuCategory:
        return self._create(MenuCategory, data)

    def update_menu_category(self, id: str, data: Dict[str, Any]) -> MenuCategory:
        return self._update(MenuCategory, id, data, "Menu category")

    def delete_menu_category(self, id: str) -> None:
        self._soft_delete(MenuCategory, id, "Menu category")

    def get_menu_items(self) -> List[MenuItem]:
        return self._list_active(MenuItem, MenuItem.display_order)

    def get_all_menu_items(self) -> List[MenuItem]:
        return self.db.query(MenuItem).order_by(MenuItem.display_order).all()

    def get_menu_item(self, id: str) -> Optional[MenuItem]:
        return self.db.get(MenuItem, id)

    def get_menu_items_by_category(self, category_id: str) -> List[MenuItem]:
        return self.db.query(MenuItem).filter(
            MenuItem.category_id == category_id,
            MenuItem.is_active == True,
        ).order_by(MenuItem.display_order).all()

    def create_menu_item(self, data: Dict[str, Any]) -> MenuItem:
        return self._create(MenuItem, data)

    def update_menu_item(self, id: str, data: Dict[str, Any]) -> MenuItem:
        return self._update(MenuItem, id, data, "Menu item")

    def delete_menu_item(self, id: str) -> None:
        self._soft_delete(MenuItem, id, "Menu item")

    # ---------------------------
    # Gallery
    # ---------------------------

    def get_gallery_images(self) -> List[GalleryImage]:
        return self._list_active(GalleryImage)

    def get_all_gallery_images(self) -> List[GalleryImage]:
        return self.db.query(GalleryImage).all()

    def get_gallery_image(self, id: str) -> Optional[GalleryImage]:
        return self.db.get(GalleryImage, id)

    def create_gallery_image(self, data: Dict[str, Any]) -> GalleryImage:
        return self._create(GalleryImage, data)

    def update_gallery_image(self, id: str, data: Dict[str, Any]) -> GalleryImage:
        return self._update(GalleryImage, id, data, "Gallery image")

    def delete_gallery_image(self, id: str) -> None:
        self._soft_delete(GalleryImage, id, "Gallery image")

    # ---------------------------
    # System settings
    # ---------------------------

    def get_system_setting(self, key: str) -> Optional[SystemSetting]:
        return self.db.query(SystemSetting).filter(SystemSetting.key == key).first()

    def get_system_settings(self) -> List[SystemSetting]:
        return self.db.query(SystemSetting).order_by(SystemSetting.key).all()

    def set_system_setting(self, key: str, value: Optional[str], description: Optional[str] = None) -> SystemSetting:
        """Create the setting if absent, otherwise overwrite it"""
        setting = self.get_system_setting(key)
        if setting is None:
            return self._create(SystemSetting, {"key": key, "value": value, "description": description})
        setting.value = value
        setting.description = description
        self.db.commit()
        self.db.refresh(setting)
        return setting

    # ---------------------------
    # Contact info
    # ---------------------------

    def get_contact_info(self) -> List[ContactInfo]:
        return self._list_active(ContactInfo, ContactInfo.display_order)

    def get_all_contact_info(self) -> List[ContactInfo]:
        return self.db.query(ContactInfo).order_by(ContactInfo.display_order).all()

    def get_contact(self, id: str) -> Optional[ContactInfo]:
        return self.db.get(ContactInfo, id)

    def create_contact_info(self, data: Dict[str, Any]) -> ContactInfo:
        return self._create(ContactInfo, data)

    def update_contact_info(self, id: str, data: Dict[str, Any]) -> ContactInfo:
        return self._update(ContactInfo, id, data, "Contact info")

    def delete_contact_info(self, id: str) -> None:
        self._soft_delete(ContactInfo, id, "Contact info")

    # ---------------------------
    # Opening hours
    # ---------------------------

    def get_opening_hours(self) -> List[OpeningHours]:
        return self._list_active(OpeningHours, OpeningHours.day_of_week)

    def get_all_opening_hours(self) -> List[OpeningHours]:
        return self.db.query(OpeningHours).order_by(OpeningHours.day_of_week).all()

    def get_opening_hours_entry(self, id: str) -> Optional[OpeningHours]:
        return self.db.get(OpeningHours, id)

    def create_opening_hours(self, data: Dict[str, Any]) -> OpeningHours:
        return self._create(OpeningHours, data)

    def update_opening_hours(self, id: str, data: Dict[str, Any]) -> OpeningHours:
        return self._update(OpeningHours, id, data, "Opening hours")

    def delete_opening_hours(self, id: str) -> None:
        self._soft_delete(OpeningHours, id, "Opening hours")

    # ---------------------------
    # Restaurant locations
    # ---------------------------

    def get_restaurant_locations(self) -> List[RestaurantLocation]:
        return self._list_active(RestaurantLocation, RestaurantLocation.display_order)

    def get_all_restaurant_locations(self) -> List[RestaurantLocation]:
        return self.db.query(RestaurantLocation).order_by(RestaurantLocation.display_order).all()

    def get_restaurant_location(self, id: str) -> Optional[RestaurantLocation]:
        return self.db.get(RestaurantLocation, id)

    def create_restaurant_location(self, data: Dict[str, Any]) -> RestaurantLocation:
        return self._create(RestaurantLocation, data)

    def update_restaurant_location(self, id: str, data: Dict[str, Any]) -> RestaurantLocation:
        return self._update(RestaurantLocation, id, data, "Location")

    def delete_restaurant_location(self, id: str) -> None:
        self._soft_delete(RestaurantLocation, id, "Location")

    # ---------------------------
    # Floor plan elements
    # ---------------------------

    def get_floor_plan_elements(self, location_id: Optional[str] = None) -> List[FloorPlanElement]:
        query = self.db.query(FloorPlanElement).filter(FloorPlanElement.is_active == True)
        if location_id:
            query = query.filter(FloorPlanElement.location_id == location_id)
        return query.order_by(FloorPlanElement.created_at).all()

    def get_all_floor_plan_elements(self) -> List[FloorPlanElement]:
        return self.db.query(FloorPlanElement).order_by(FloorPlanElement.created_at).all()

    def get_floor_plan_element(self, id: str) -> Optional[FloorPlanElement]:
        return self.db.get(FloorPlanElement, id)

    def create_floor_plan_element(self, data: Dict[str, Any]) -> FloorPlanElement:
        return self._create(FloorPlanElement, data)

    def update_floor_plan_element(self, id: str, data: Dict[str, Any]) -> FloorPlanElement:
        return self._update(FloorPlanElement, id, data, "Floor plan element")

    def delete_floor_plan_element(self, id: str) -> None:
        self._soft_delete(FloorPlanElement, id, "Floor plan element")
