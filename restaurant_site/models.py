import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from .database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Back-office accounts. Every self-registered account is an admin."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255))  # "<digest>.<salt>"
    first_name = Column(String(100))
    last_name = Column(String(100))
    profile_image_url = Column(String(500))
    role = Column(String(20), default="admin")  # customer, admin
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class RestaurantLocation(Base):
    """Named dining areas: Main Dining, Patio, Bar ..."""
    __tablename__ = "restaurant_locations"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    display_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tables = relationship("Table", back_populates="restaurant_location")
    floor_plan_elements = relationship("FloorPlanElement", back_populates="restaurant_location")


class Table(Base):
    """Bookable tables with their floor-plan geometry"""
    __tablename__ = "tables"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)
    capacity = Column(Integer, nullable=False)
    min_capacity = Column(Integer, default=1)
    max_capacity = Column(Integer, default=8)
    table_type = Column(String(20), default="standard")  # standard, booth, high-top, outdoor, private
    location_id = Column(String(36), ForeignKey("restaurant_locations.id"), index=True)
    shape = Column(String(20), default="round")  # round, square, rectangular
    description = Column(Text)
    x_position = Column(Integer, nullable=False)
    y_position = Column(Integer, nullable=False)
    width = Column(Integer, default=60)  # pixels on the floor plan
    height = Column(Integer, default=60)
    is_active = Column(Boolean, default=True)
    is_premium = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    restaurant_location = relationship("RestaurantLocation", back_populates="tables")
    bookings = relationship("Booking", back_populates="table")


class FloorPlanElement(Base):
    """Decorative or structural floor-plan items. Never consulted when booking."""
    __tablename__ = "floor_plan_elements"

    id = Column(String(36), primary_key=True, default=_new_id)
    location_id = Column(String(36), ForeignKey("restaurant_locations.id"), nullable=False, index=True)
    element_type = Column(String(20), nullable=False)  # bar, stairs, restroom, window, door, wall, kitchen
    name = Column(String(100), nullable=False)
    x_position = Column(Integer, nullable=False)
    y_position = Column(Integer, nullable=False)
    width = Column(Integer, nullable=False)
    height = Column(Integer, nullable=False)
    rotation = Column(Integer, default=0)  # 0, 90, 180, 270
    color = Column(String(20), default="#746899")
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    restaurant_location = relationship("RestaurantLocation", back_populates="floor_plan_elements")


class Booking(Base):
    """Customer reservations"""
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id"))
    table_id = Column(String(36), ForeignKey("tables.id"), index=True)
    location_id = Column(String(36), ForeignKey("restaurant_locations.id"))
    customer_name = Column(String(100), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(30), nullable=False)
    date = Column(String(20), nullable=False, index=True)  # kept as sent, no calendar normalisation
    time = Column(String(10), nullable=False)
    party_size = Column(Integer, nullable=False)
    special_requests = Column(Text)
    status = Column(String(20), default="unconfirmed")  # unconfirmed, confirmed, cancelled
    created_at = Column(DateTime, default=datetime.utcnow)

    table = relationship("Table", back_populates="bookings")

    # No uniqueness on (table_id, date, time): the strict booking policy
    # checks clashes in the service layer instead.


class MenuCategory(Base):
    __tablename__ = "menu_categories"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)
    display_order = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    items = relationship("MenuItem", back_populates="category")


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True, default=_new_id)
    category_id = Column(String(36), ForeignKey("menu_categories.id"), index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, default=True)
    display_order = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    category = relationship("MenuCategory", back_populates="items")


class GalleryImage(Base):
    __tablename__ = "gallery_images"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String(150), nullable=False)
    url = Column(String(500), nullable=False)
    alt = Column(String(255), nullable=False)
    display_order = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class SystemSetting(Base):
    """Generic key/value feature flags (registration_enabled)"""
    __tablename__ = "system_settings"

    id = Column(String(36), primary_key=True, default=_new_id)
    key = Column(String(100), unique=True, nullable=False)
    value = Column(Text)
    description = Column(Text)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class ContactInfo(Base):
    __tablename__ = "contact_info"

    id = Column(String(36), primary_key=True, default=_new_id)
    type = Column(String(30), nullable=False)  # phone, email, address ...
    label = Column(String(100), nullable=False)
    value = Column(Text, nullable=False)
    display_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class OpeningHours(Base):
    __tablename__ = "opening_hours"

    id = Column(String(36), primary_key=True, default=_new_id)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday .. 6 = Saturday
    day_name = Column(String(20), nullable=False)
    open_time = Column(String(10))  # "17:00"
    close_time = Column(String(10))
    is_closed = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
