import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .booking_service import BookingService
from .database import get_db
from .errors import Forbidden, Unauthorized
from .models import User
from .storage import Storage

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def get_storage(db: Session = Depends(get_db)) -> Storage:
    return Storage(db)


def get_booking_service(request: Request, db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db, strict=request.app.state.settings.strict_bookings)


def current_user(request: Request, storage: Storage = Depends(get_storage)) -> User:
    """The logged-in user, or 401"""
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        raise Unauthorized()
    user = storage.get_user(user_id)
    if user is None:
        # account behind a stale cookie is gone
        request.session.clear()
        raise Unauthorized()
    return user


def require_admin(user: User = Depends(current_user)) -> User:
    if user.role != "admin":
        logger.debug("User %s denied admin access", user.id)
        raise Forbidden()
    return user
