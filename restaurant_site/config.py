import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv("config.env")

CONFLICT_POLICIES = ("advisory", "strict")


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


def _as_list(val: str | None, default: list[str]) -> list[str]:
    if not val:
        return default
    return [part.strip() for part in val.split(",") if part.strip()]


@dataclass
class Settings:
    database_url: str
    session_secret: str
    query_timeout_seconds: int = 10
    # advisory: clashes are only reported to the client | strict: enforced server-side
    booking_conflict_policy: str = "advisory"
    seed_demo_data: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment, failing on anything missing."""
        missing = [name for name in ("DATABASE_URL", "SESSION_SECRET") if not os.getenv(name)]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

        policy = os.getenv("BOOKING_CONFLICT_POLICY", "advisory").strip().lower()
        if policy not in CONFLICT_POLICIES:
            raise ConfigurationError(
                f"BOOKING_CONFLICT_POLICY must be one of {', '.join(CONFLICT_POLICIES)}, got {policy!r}"
            )

        try:
            timeout = int(os.getenv("QUERY_TIMEOUT_SECONDS", "10"))
        except ValueError:
            raise ConfigurationError("QUERY_TIMEOUT_SECONDS must be an integer")

        return cls(
            database_url=os.environ["DATABASE_URL"],
            session_secret=os.environ["SESSION_SECRET"],
            query_timeout_seconds=timeout,
            booking_conflict_policy=policy,
            seed_demo_data=_as_bool(os.getenv("SEED_DEMO_DATA"), False),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=_as_list(os.getenv("CORS_ORIGINS"), ["*"]),
        )

    @property
    def strict_bookings(self) -> bool:
        return self.booking_conflict_policy == "strict"
