"""Exceptions raised by the checklist engine and services.

Two families exist. ``ChecklistIntegrityError`` means stored data breaks an
invariant the progress numbers depend on; it is never downgraded to
"incomplete". The other subclasses of ``ChecklistError`` describe a request
that cannot be applied and are mapped to 4xx responses by the routes.
"""


class ChecklistError(Exception):
    """Base class for checklist errors."""


class ChecklistIntegrityError(ChecklistError):
    """Stored checklist data violates an invariant."""


class UnsupportedItemTypeError(ChecklistIntegrityError):
    """Item type is not one of the supported item types."""

    def __init__(self, item_type):
        self.item_type = item_type
        super().__init__(f"Unsupported item type: {item_type!r}")


class StatusConfigurationError(ChecklistIntegrityError):
    """Status options could not be deserialized."""


class StatusIntegrityError(ChecklistIntegrityError):
    """A status item's current status is not one of its own options."""

    def __init__(self, item_id, current_status: str, allowed: list[str]):
        self.item_id = item_id
        self.current_status = current_status
        self.allowed = allowed
        super().__init__(
            f"Item {item_id} has status {current_status!r} which is not one of "
            f"its options: {', '.join(allowed) or '(none)'}"
        )


class NotFoundError(ChecklistError):
    """A referenced row does not exist."""


class ChecklistArchivedError(ChecklistError):
    """Archived checklists are read-only."""


class TemplateUnavailableError(ChecklistError):
    """Template is inactive or archived."""


class ItemTypeMismatchError(ChecklistError):
    """The operation does not apply to this item's type."""


class InvalidStatusError(ChecklistError):
    """Requested status is not one of the item's options."""

    def __init__(self, status: str, allowed: list[str]):
        self.status = status
        self.allowed = allowed
        super().__init__(
            f"Status '{status}' is not valid. Allowed values: {', '.join(allowed)}"
        )
