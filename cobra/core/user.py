"""Request user context used for audit attribution.

There is no authentication in this service. The caller identifies itself
through ``X-User-*`` headers and every create/update records who made the
change and in which position. Missing headers fall back to the configured
default user.
"""
import logging

from fastapi import Request
from pydantic import BaseModel, Field

from cobra.core.config import settings

logger = logging.getLogger(__name__)


class UserContext(BaseModel):
    """The acting user for a request.

    Attributes:
        email: User identifier recorded in audit fields.
        full_name: Display name, derived from the email when not supplied.
        position: Primary ICS position (the first of ``positions``).
        positions: All positions the user holds.
    """
    email: str
    full_name: str = ""
    position: str = ""
    positions: list[str] = Field(default_factory=list)


def _name_from_email(email: str) -> str:
    local = email.split("@", 1)[0]
    return " ".join(part.capitalize() for part in local.replace("_", ".").split(".") if part)


def get_user_context(request: Request) -> UserContext:
    """Dependency building the user context from request headers."""
    if not settings.mock_auth_enabled:
        return UserContext(
            email=settings.default_user_email,
            full_name=_name_from_email(settings.default_user_email),
            position=settings.default_user_position,
            positions=[settings.default_user_position],
        )

    email = request.headers.get("x-user-email") or settings.default_user_email
    full_name = request.headers.get("x-user-fullname") or _name_from_email(email)
    position_header = request.headers.get("x-user-position") or settings.default_user_position

    # Positions may be comma-separated, the first one is primary
    positions = [p.strip() for p in position_header.split(",") if p.strip()]
    position = positions[0] if positions else settings.default_user_position

    logger.debug(f"User context: {email} ({', '.join(positions)})")
    return UserContext(
        email=email,
        full_name=full_name,
        position=position,
        positions=positions or [position],
    )
