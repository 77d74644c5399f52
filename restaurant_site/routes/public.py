from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from .. import schemas
from ..booking_service import BookingService
from ..dependencies import get_booking_service, get_storage
from ..storage import Storage

router = APIRouter(prefix="/api", tags=["public"])


@router.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


# ---------------------------
# Tables and availability
# ---------------------------

@router.get("/tables", response_model=List[schemas.Table])
def get_tables(storage: Storage = Depends(get_storage)):
    """Active tables, in no particular order"""
    return storage.get_tables()


@router.get("/tables/bookable", response_model=List[schemas.Table])
def get_bookable_tables(
    location_id: str = Query(..., alias="locationId"),
    party_size: int = Query(..., alias="partySize"),
    date: Optional[str] = None,
    service: BookingService = Depends(get_booking_service),
):
    """Tables at a location big enough for the party"""
    return service.list_bookable_tables(location_id, party_size, date)


@router.get("/tables/availability", response_model=List[schemas.TableAvailability])
def get_table_availability(
    date: str,
    time: str,
    location_id: str = Query(..., alias="locationId"),
    party_size: int = Query(..., alias="partySize"),
    service: BookingService = Depends(get_booking_service),
):
    """Bookable tables flagged with whether a confirmed booking already holds the slot"""
    return [
        schemas.TableAvailability(
            **schemas.Table.model_validate(entry["table"]).model_dump(),
            available=entry["available"],
        )
        for entry in service.table_availability(location_id, party_size, date, time)
    ]


@router.get("/locations", response_model=List[schemas.RestaurantLocation])
def get_locations(storage: Storage = Depends(get_storage)):
    return storage.get_restaurant_locations()


@router.get("/floor-plan-elements", response_model=List[schemas.FloorPlanElement])
def get_floor_plan_elements(
    location_id: Optional[str] = Query(None, alias="locationId"),
    storage: Storage = Depends(get_storage),
):
    return storage.get_floor_plan_elements(location_id)


# ---------------------------
# Menu, gallery, contact, hours
# ---------------------------

@router.get("/menu/categories", response_model=List[schemas.MenuCategory])
def get_menu_categories(storage: Storage = Depends(get_storage)):
    return storage.get_menu_categories()


@router.get("/menu/items", response_model=List[schemas.MenuItem])
def get_menu_items(storage: Storage = Depends(get_storage)):
    return storage.get_menu_items()


@router.get("/menu/categories/{category_id}/items", response_model=List[schemas.MenuItem])
def get_menu_items_by_category(category_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_menu_items_by_category(category_id)


@router.get("/gallery", response_model=List[schemas.GalleryImage])
def get_gallery(storage: Storage = Depends(get_storage)):
    return storage.get_gallery_images()


@router.get("/contact", response_model=List[schemas.ContactInfo])
def get_contact(storage: Storage = Depends(get_storage)):
    return storage.get_contact_info()


@router.get("/hours", response_model=List[schemas.OpeningHours])
def get_hours(storage: Storage = Depends(get_storage)):
    return storage.get_opening_hours()


# ---------------------------
# Bookings
# ---------------------------

@router.get("/bookings/date/{date}", response_model=List[schemas.Booking])
def get_bookings_by_date(date: str, service: BookingService = Depends(get_booking_service)):
    """Confirmed bookings for a date string, used by the booking form to grey out taken tables"""
    return service.list_confirmed_bookings_for_date(date)


@router.post("/bookings", response_model=schemas.Booking, status_code=201)
def create_booking(
    payload: Dict[str, Any] = Body(...),
    service: BookingService = Depends(get_booking_service),
):
    """Create a new booking. It always starts out unconfirmed."""
    return service.create_booking(payload)
