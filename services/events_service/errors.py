"""Events Service errors."""

from libs.common.errors import NotFoundError


class EventNotFoundError(NotFoundError):
    """No event matched the lookup, or a listing page came back empty."""
