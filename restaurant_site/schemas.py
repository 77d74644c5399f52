from datetime import datetime
from decimal import Decimal
from typing import Annotated, ClassVar, Literal, Optional, Tuple

from pydantic import BaseModel, EmailStr, Field, StringConstraints, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

BOOKING_STATUSES = ("unconfirmed", "confirmed", "cancelled")

TableType = Literal["standard", "booth", "high-top", "outdoor", "private"]
TableShape = Literal["round", "square", "rectangular"]
ElementType = Literal["bar", "stairs", "restroom", "toilet", "window", "door", "wall", "kitchen"]
Rotation = Literal[0, 90, 180, 270]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PartialUpdate(CamelModel):
    """Base for PATCH/PUT payloads.

    Keys left out of the payload are left untouched. Explicit nulls are
    rejected for the columns listed in ``not_null_fields``.
    """

    not_null_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in self.not_null_fields:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# ---------------------------
# Users
# ---------------------------

class UserRegister(CamelModel):
    email: EmailStr
    password: NonEmptyStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserLogin(CamelModel):
    email: NonEmptyStr
    password: str


class User(CamelModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------------------
# Locations
# ---------------------------

class RestaurantLocationCreate(CamelModel):
    name: NonEmptyStr
    description: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class RestaurantLocationUpdate(PartialUpdate):
    not_null_fields: ClassVar[Tuple[str, ...]] = ("name", "display_order", "is_active")

    name: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class RestaurantLocation(RestaurantLocationCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------------------
# Tables
# ---------------------------

class TableCreate(CamelModel):
    name: NonEmptyStr
    capacity: int = Field(..., ge=1)
    min_capacity: int = Field(1, ge=1)
    max_capacity: int = Field(8, ge=1)
    table_type: TableType = "standard"
    shape: TableShape = "round"
    location_id: Optional[str] = None
    description: Optional[str] = None
    x_position: int
    y_position: int
    width: int = Field(60, ge=1)
    height: int = Field(60, ge=1)
    is_premium: bool = False
    is_active: bool = True


class TableUpdate(PartialUpdate):
    not_null_fields: ClassVar[Tuple[str, ...]] = (
        "name", "capacity", "x_position", "y_position", "is_active", "is_premium",
    )

    name: Optional[NonEmptyStr] = None
    capacity: Optional[int] = Field(None, ge=1)
    min_capacity: Optional[int] = Field(None, ge=1)
    max_capacity: Optional[int] = Field(None, ge=1)
    table_type: Optional[TableType] = None
    shape: Optional[TableShape] = None
    location_id: Optional[str] = None
    description: Optional[str] = None
    x_position: Optional[int] = None
    y_position: Optional[int] = None
    width: Optional[int] = Field(None, ge=1)
    height: Optional[int] = Field(None, ge=1)
    is_premium: Optional[bool] = None
    is_active: Optional[bool] = None


class Table(CamelModel):
    id: str
    name: str
    capacity: int
    min_capacity: Optional[int] = None
    max_capacity: Optional[int] = None
    table_type: Optional[str] = None
    shape: Optional[str] = None
    location_id: Optional[str] = None
    description: Optional[str] = None
    x_position: int
    y_position: int
    width: Optional[int] = None
    height: Optional[int] = None
    is_premium: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TableAvailability(Table):
    available: bool


# ---------------------------
# Floor plan elements
# ---------------------------

class FloorPlanElementCreate(CamelModel):
    location_id: NonEmptyStr
    element_type: ElementType
    name: NonEmptyStr
    x_position: int
    y_position: int
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    rotation: Rotation = 0
    color: str = "#746899"
    is_active: bool = True


class FloorPlanElementUpdate(PartialUpdate):
    not_null_fields: ClassVar[Tuple[str, ...]] = (
        "location_id", "element_type", "name", "x_position", "y_position", "width", "height",
    )

    location_id: Optional[NonEmptyStr] = None
    element_type: Optional[ElementType] = None
    name: Optional[NonEmptyStr] = None
    x_position: Optional[int] = None
    y_position: Optional[int] = None
    width: Optional[int] = Field(None, ge=1)
    height: Optional[int] = Field(None, ge=1)
    rotation: Optional[Rotation] = None
    color: Optional[str] = None
    is_active: Optional[bool] = None


class FloorPlanElement(CamelModel):
    id: str
    location_id: str
    element_type: str
    name: str
    x_position: int
    y_position: int
    width: int
    height: int
    rotation: int = 0
    color: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------------------
# Bookings
# ---------------------------

class BookingBase(CamelModel):
    customer_name: NonEmptyStr
    customer_email: EmailStr
    customer_phone: NonEmptyStr
    date: NonEmptyStr
    time: NonEmptyStr
    party_size: int = Field(..., ge=1)
    location_id: Optional[str] = None
    table_id: Optional[str] = None
    special_requests: Optional[str] = None


class BookingCreate(BookingBase):
    # status is never taken from the client on create
    user_id: Optional[str] = None


class BookingUpdate(PartialUpdate):
    not_null_fields: ClassVar[Tuple[str, ...]] = (
        "customer_name", "customer_email", "customer_phone", "date", "time", "party_size",
    )

    customer_name: Optional[NonEmptyStr] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[NonEmptyStr] = None
    date: Optional[NonEmptyStr] = None
    time: Optional[NonEmptyStr] = None
    party_size: Optional[int] = Field(None, ge=1)
    location_id: Optional[str] = None
    table_id: Optional[str] = None
    special_requests: Optional[str] = None


class Booking(CamelModel):
    id: str
    user_id: Optional[str] = None
    table_id: Optional[str] = None
    location_id: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: str
    date: str
    time: str
    party_size: int
    special_requests: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


# ---------------------------
# Menu
# ---------------------------

class MenuCategoryCreate(CamelModel):
    name: NonEmptyStr
    display_order: int
    is_active: bool = True


class MenuCategoryUpdate(PartialUpdate):
    not_null_fields: ClassVar[Tuple[str, ...]] = ("name", "display_order", "is_active")

    name: Optional[NonEmptyStr] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class MenuCategory(MenuCategoryCreate):
    id: str
    created_at: Optional[datetime] = None


class MenuItemCreate(CamelModel):
    category_id: Optional[str] = None
    name: NonEmptyStr
    description: str
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    display_order: int
    is_active: bool = True


class MenuItemUpdate(PartialUpdate):
    not_null_fields: ClassVar[Tuple[str, ...]] = (
        "name", "description", "price", "display_order", "is_active",
    )

    category_id: Optional[str] = None
    name: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class MenuItem(MenuItemCreate):
    id: str
    created_at: Optional[datetime] = None


# ---------------------------
# Gallery
# ---------------------------

class GalleryImageCreate(CamelModel):
    title: NonEmptyStr
    url: NonEmptyStr
    alt: NonEmptyStr
    display_order: int
    is_active: bool = True


class GalleryImageUpdate(PartialUpdate):
    not_null_fields: ClassVar[Tuple[str, ...]] = ("title", "url", "alt", "display_order", "is_active")

    title: Optional[NonEmptyStr] = None
    url: Optional[NonEmptyStr] = None
    alt: Optional[NonEmptyStr] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class GalleryImage(GalleryImageCreate):
    id: str
    created_at: Optional[datetime] = None


# ---------------------------
# Contact info and opening hours
# ---------------------------

class ContactInfoCreate(CamelModel):
    type: NonEmptyStr
    label: NonEmptyStr
    value: NonEmptyStr
    display_order: int = 0
    is_active: bool = True


class ContactInfoUpdate(PartialUpdate):
    not_null_fields: ClassVar[Tuple[str, ...]] = ("type", "label", "value", "is_active")

    type: Optional[NonEmptyStr] = None
    label: Optional[NonEmptyStr] = None
    value: Optional[NonEmptyStr] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class ContactInfo(ContactInfoCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OpeningHoursCreate(CamelModel):
    day_of_week: int = Field(..., ge=0, le=6)
    day_name: NonEmptyStr
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    is_closed: bool = False
    is_active: bool = True


class OpeningHoursUpdate(PartialUpdate):
    not_null_fields: ClassVar[Tuple[str, ...]] = ("day_of_week", "day_name", "is_closed", "is_active")

    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    day_name: Optional[NonEmptyStr] = None
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    is_closed: Optional[bool] = None
    is_active: Optional[bool] = None


class OpeningHours(OpeningHoursCreate):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------------------
# System settings
# ---------------------------

class SystemSettingUpsert(CamelModel):
    key: NonEmptyStr
    value: Optional[str] = None
    description: Optional[str] = None


class SystemSetting(CamelModel):
    id: Optional[str] = None
    key: str
    value: Optional[str] = None
    description: Optional[str] = None
    updated_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    message: str



def parse_payload(schema, payload, error_cls):
    """Validate a raw JSON body against ``schema`` or raise ``error_cls`` with per-field errors."""
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise error_cls.from_pydantic(exc)
