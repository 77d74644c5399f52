"""Back-office routes. Everything under ``/api/admin`` requires an admin session."""
from typing import Any, Dict, List, Type

from fastapi import APIRouter, Body, Depends, Response
from pydantic import BaseModel

from .. import errors, schemas
from ..booking_service import BookingService
from ..dependencies import get_booking_service, get_storage, require_admin
from ..storage import Storage

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _register_crud(
    path: str,
    *,
    entity: str,
    out: Type[BaseModel],
    create: Type[BaseModel],
    update: Type[BaseModel],
    invalid: Type[errors.ValidationFailed],
    list_all: str,
    get_one: str,
    create_one: str,
    update_one: str,
    delete_one: str,
    update_methods: tuple = ("PUT", "PATCH"),
    empty_delete: bool = False,
):
    """Wire list/get/create/update/delete for one entity onto the admin router.

    The string arguments name ``Storage`` methods.
    """

    def list_rows(storage: Storage = Depends(get_storage)):
        return getattr(storage, list_all)()

    def get_row(id: str, storage: Storage = Depends(get_storage)):
        row = getattr(storage, get_one)(id)
        if row is None:
            raise errors.NotFound(entity)
        return row

    def create_row(payload: Dict[str, Any] = Body(...), storage: Storage = Depends(get_storage)):
        data = schemas.parse_payload(create, payload, invalid)
        return getattr(storage, create_one)(data.model_dump())

    def update_row(id: str, payload: Dict[str, Any] = Body(...), storage: Storage = Depends(get_storage)):
        data = schemas.parse_payload(update, payload, invalid)
        return getattr(storage, update_one)(id, data.changes())

    def delete_row(id: str, storage: Storage = Depends(get_storage)):
        getattr(storage, delete_one)(id)
        if empty_delete:
            return Response(status_code=204)
        return {"message": f"{entity} deleted successfully"}

    name = entity.lower().replace(" ", "_")
    router.add_api_route(path, list_rows, methods=["GET"], response_model=List[out], name=f"list_{name}")
    router.add_api_route(f"{path}/{{id}}", get_row, methods=["GET"], response_model=out, name=f"get_{name}")
    router.add_api_route(path, create_row, methods=["POST"], response_model=out, status_code=201, name=f"create_{name}")
    router.add_api_route(
        f"{path}/{{id}}", update_row, methods=list(update_methods), response_model=out, name=f"update_{name}"
    )
    if empty_delete:
        router.add_api_route(f"{path}/{{id}}", delete_row, methods=["DELETE"], status_code=204, name=f"delete_{name}")
    else:
        router.add_api_route(
            f"{path}/{{id}}", delete_row, methods=["DELETE"],
            response_model=schemas.MessageResponse, name=f"delete_{name}",
        )


# ---------------------------
# Bookings
# ---------------------------

@router.get("/bookings", response_model=List[schemas.Booking])
def get_bookings(storage: Storage = Depends(get_storage)):
    """All bookings, newest first"""
    return storage.get_bookings()


@router.get("/bookings/{id}", response_model=schemas.Booking)
def get_booking(id: str, storage: Storage = Depends(get_storage)):
    booking = storage.get_booking(id)
    if booking is None:
        raise errors.NotFound("Booking")
    return booking


@router.patch("/bookings/{id}", response_model=schemas.Booking)
def update_booking_status(
    id: str,
    payload: Dict[str, Any] = Body(...),
    service: BookingService = Depends(get_booking_service),
):
    return service.update_booking_status(id, payload.get("status"))


@router.put("/bookings/{id}", response_model=schemas.Booking)
def update_booking(
    id: str,
    payload: Dict[str, Any] = Body(...),
    service: BookingService = Depends(get_booking_service),
):
    return service.update_booking(id, payload)


@router.delete("/bookings/{id}", response_model=schemas.MessageResponse)
def cancel_booking(id: str, service: BookingService = Depends(get_booking_service)):
    service.cancel_booking(id)
    return {"message": "Booking cancelled successfully"}


# ---------------------------
# System settings
# ---------------------------

@router.get("/settings", response_model=List[schemas.SystemSetting])
def get_settings(storage: Storage = Depends(get_storage)):
    return storage.get_system_settings()


@router.get("/settings/{key}", response_model=schemas.SystemSetting)
def get_setting(key: str, storage: Storage = Depends(get_storage)):
    setting = storage.get_system_setting(key)
    if setting is None:
        return {"key": key, "value": None}
    return setting


@router.post("/settings", response_model=schemas.SystemSetting)
def set_setting(payload: Dict[str, Any] = Body(...), storage: Storage = Depends(get_storage)):
    data = schemas.parse_payload(schemas.SystemSettingUpsert, payload, errors.InvalidSettingData)
    return storage.set_system_setting(data.key, data.value, data.description)


# ---------------------------
# Entity CRUD
# ---------------------------

_register_crud(
    "/tables",
    entity="Table",
    out=schemas.Table,
    create=schemas.TableCreate,
    update=schemas.TableUpdate,
    invalid=errors.InvalidTableData,
    list_all="get_all_tables",
    get_one="get_table",
    create_one="create_table",
    update_one="update_table",
    delete_one="delete_table",
)

_register_crud(
    "/menu/categories",
    entity="Menu category",
    out=schemas.MenuCategory,
    create=schemas.MenuCategoryCreate,
    update=schemas.MenuCategoryUpdate,
    invalid=errors.InvalidCategoryData,
    list_all="get_all_menu_categories",
    get_one="get_menu_category",
    create_one="create_menu_category",
    update_one="update_menu_category",
    delete_one="delete_menu_category",
)

_register_crud(
    "/menu/items",
    entity="Menu item",
    out=schemas.MenuItem,
    create=schemas.MenuItemCreate,
    update=schemas.MenuItemUpdate,
    invalid=errors.InvalidMenuItemData,
    list_all="get_all_menu_items",
    get_one="get_menu_item",
    create_one="create_menu_item",
    update_one="update_menu_item",
    delete_one="delete_menu_item",
)

_register_crud(
    "/gallery",
    entity="Gallery image",
    out=schemas.GalleryImage,
    create=schemas.GalleryImageCreate,
    update=schemas.GalleryImageUpdate,
    invalid=errors.InvalidImageData,
    list_all="get_all_gallery_images",
    get_one="get_gallery_image",
    create_one="create_gallery_image",
    update_one="update_gallery_image",
    delete_one="delete_gallery_image",
)

_register_crud(
    "/contact",
    entity="Contact info",
    out=schemas.ContactInfo,
    create=schemas.ContactInfoCreate,
    update=schemas.ContactInfoUpdate,
    invalid=errors.InvalidContactData,
    list_all="get_all_contact_info",
    get_one="get_contact",
    create_one="create_contact_info",
    update_one="update_contact_info",
    delete_one="delete_contact_info",
)

_register_crud(
    "/hours",
    entity="Opening hours",
    out=schemas.OpeningHours,
    create=schemas.OpeningHoursCreate,
    update=schemas.OpeningHoursUpdate,
    invalid=errors.InvalidHoursData,
    list_all="get_all_opening_hours",
    get_one="get_opening_hours_entry",
    create_one="create_opening_hours",
    update_one="update_opening_hours",
    delete_one="delete_opening_hours",
)

_register_crud(
    "/locations",
    entity="Location",
    out=schemas.RestaurantLocation,
    create=schemas.RestaurantLocationCreate,
    update=schemas.RestaurantLocationUpdate,
    invalid=errors.InvalidLocationData,
    list_all="get_all_restaurant_locations",
    get_one="get_restaurant_location",
    create_one="create_restaurant_location",
    update_one="update_restaurant_location",
    delete_one="delete_restaurant_location",
)

_register_crud(
    "/floor-plan-elements",
    entity="Floor plan element",
    out=schemas.FloorPlanElement,
    create=schemas.FloorPlanElementCreate,
    update=schemas.FloorPlanElementUpdate,
    invalid=errors.InvalidFloorPlanElementData,
    list_all="get_all_floor_plan_elements",
    get_one="get_floor_plan_element",
    create_one="create_floor_plan_element",
    update_one="update_floor_plan_element",
    delete_one="delete_floor_plan_element",
    empty_delete=True,
)
