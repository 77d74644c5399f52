import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidUserData,
    MissingCredentials,
    RegistrationDisabled,
)
from .models import User
from .schemas import UserLogin, UserRegister, parse_payload
from .security import compare_passwords, hash_password
from .storage import Storage

logger = logging.getLogger(__name__)

REGISTRATION_SETTING = "registration_enabled"

_DUMMY_HASH = None


def _dummy_hash() -> str:
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password("not-a-real-password")
    return _DUMMY_HASH


def _require_credentials(payload: Any):
    missing = [
        name for name in ("email", "password")
        if not isinstance(payload, dict) or not payload.get(name)
    ]
    if missing:
        raise MissingCredentials([{"path": name, "message": "Field required"} for name in missing])


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.storage = Storage(db)

    def registration_enabled(self) -> bool:
        setting = self.storage.get_system_setting(REGISTRATION_SETTING)
        # only an explicit "false" closes registration
        return not (setting is not None and setting.value == "false")

    def register(self, payload: Any) -> User:
        """Create a back-office account. Every new account gets the admin role."""
        if not self.registration_enabled():
            logger.info("Registration attempt while registration is disabled")
            raise RegistrationDisabled()

        _require_credentials(payload)
        data = parse_payload(UserRegister, payload, InvalidUserData)

        if self.storage.get_user_by_email(data.email) is not None:
            raise DuplicateEmail()

        try:
            user = self.storage.create_user({
                "email": data.email,
                "password": hash_password(data.password),
                "first_name": data.first_name,
                "last_name": data.last_name,
                "role": "admin",
            })
        except IntegrityError:
            # concurrent registration for the same email
            self.db.rollback()
            raise DuplicateEmail()

        logger.info("Registered user %s", user.id)
        return user

    def login(self, payload: Any) -> User:
        _require_credentials(payload)
        data = parse_payload(UserLogin, payload, MissingCredentials)

        user = self.storage.get_user_by_email(data.email)
        # unknown email and wrong password are reported identically and cost one scrypt each
        stored = user.password if user is not None else _dummy_hash()
        if not compare_passwords(data.password, stored) or user is None:
            logger.info("Failed login attempt")
            raise InvalidCredentials()

        logger.info("User %s logged in", user.id)
        return user
