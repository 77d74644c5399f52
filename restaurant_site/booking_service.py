import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from .errors import BookingConflict, InvalidBookingData, InvalidStatus, NotFound, ValidationFailed
from .models import Booking, Table
from .schemas import BOOKING_STATUSES, BookingCreate, BookingUpdate, parse_payload
from .storage import Storage

logger = logging.getLogger(__name__)


def is_slot_taken(table_id: str, time: str, confirmed_bookings: Iterable[Booking]) -> bool:
    """True iff a confirmed booking holds ``table_id`` at exactly ``time``."""
    return any(
        b.table_id == table_id and b.time == time and b.status == "confirmed"
        for b in confirmed_bookings
    )


class BookingService:
    """Table availability and the booking lifecycle.

    Two conflict policies are supported:

    * ``advisory`` (default): clashes are information for the client only.
      Creating a booking never checks capacity or existing bookings, and
      confirming never re-checks the slot, so two bookings for the same
      table, date and time can both end up confirmed.
    * ``strict``: party size must fit the table, and a table/date/time slot
      can hold at most one confirmed booking. The check and the write run
      in one transaction with the table row locked.
    """

    def __init__(self, db: Session, strict: bool = False):
        self.db = db
        self.storage = Storage(db)
        self.strict = strict

    # ---------------------------
    # Availability
    # ---------------------------

    def list_bookable_tables(self, location_id: str, party_size: int, date: Optional[str] = None) -> List[Table]:
        """Active tables at ``location_id`` seating at least ``party_size``.

        ``date`` is accepted for symmetry with the booking form but does not
        filter anything; time clashes are resolved against
        ``list_confirmed_bookings_for_date``.
        """
        if party_size < 1:
            raise ValidationFailed(
                [{"path": "partySize", "message": "Party size must be at least 1"}]
            )
        return self.storage.get_tables_for_party(location_id, party_size)

    def list_confirmed_bookings_for_date(self, date: str) -> List[Booking]:
        return self.storage.get_bookings_by_date(date)

    def table_availability(self, location_id: str, party_size: int, date: str, time: str) -> List[Dict[str, Any]]:
        tables = self.list_bookable_tables(location_id, party_size, date)
        confirmed = self.list_confirmed_bookings_for_date(date)
        return [
            {"table": table, "available": not is_slot_taken(table.id, time, confirmed)}
            for table in tables
        ]

    # ---------------------------
    # Lifecycle
    # ---------------------------

    def create_booking(self, payload: Any) -> Booking:
        data = parse_payload(BookingCreate, payload, InvalidBookingData)

        table = None
        if data.table_id:
            table = self.storage.lock_table(data.table_id) if self.strict else self.storage.get_table(data.table_id)
            if table is None:
                raise NotFound("Table")
        if data.location_id and self.storage.get_restaurant_location(data.location_id) is None:
            raise NotFound("Location")

        if self.strict and table is not None:
            if data.party_size > table.capacity:
                raise InvalidBookingData([{
                    "path": "partySize",
                    "message": f"Party size exceeds table capacity of {table.capacity}",
                }])
            self._ensure_slot_free(table.id, data.date, data.time)

        values = data.model_dump()
        values["status"] = "unconfirmed"
        booking = self.storage.create_booking(values)
        logger.info(
            "Booking %s created: table=%s date=%s time=%s party=%s",
            booking.id, booking.table_id, booking.date, booking.time, booking.party_size,
        )
        return booking

    def update_booking_status(self, id: str, status: Any) -> Booking:
        if status not in BOOKING_STATUSES:
            raise InvalidStatus()

        booking = self.storage.get_booking(id)
        if booking is None:
            raise NotFound("Booking")

        if self.strict and status == "confirmed" and booking.table_id:
            self.storage.lock_table(booking.table_id)
            self._ensure_slot_free(booking.table_id, booking.date, booking.time, exclude_id=booking.id)

        previous = booking.status
        booking = self.storage.update_booking_status(id, status)
        logger.info("Booking %s status %s -> %s", id, previous, status)
        return booking

    def update_booking(self, id: str, payload: Any) -> Booking:
        changes = parse_payload(BookingUpdate, payload, InvalidBookingData).changes()

        booking = self.storage.get_booking(id)
        if booking is None:
            raise NotFound("Booking")
        if changes.get("table_id") and self.storage.get_table(changes["table_id"]) is None:
            raise NotFound("Table")

        if self.strict and booking.status == "confirmed":
            table_id = changes.get("table_id", booking.table_id)
            if table_id:
                self.storage.lock_table(table_id)
                self._ensure_slot_free(
                    table_id,
                    changes.get("date", booking.date),
                    changes.get("time", booking.time),
                    exclude_id=booking.id,
                )

        return self.storage.update_booking(id, changes)

    def cancel_booking(self, id: str) -> None:
        self.storage.delete_booking(id)
        logger.info("Booking %s cancelled", id)

    def _ensure_slot_free(self, table_id: str, date: str, time: str, exclude_id: Optional[str] = None):
        clash = self.storage.get_confirmed_booking_for_slot(table_id, date, time, exclude_id=exclude_id)
        if clash is not None:
            # release the row lock before reporting
            self.db.rollback()
            logger.info("Rejected booking on table %s at %s %s: slot held by %s", table_id, date, time, clash.id)
            raise BookingConflict(bookingId=clash.id)
