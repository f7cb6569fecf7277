"""Checklist item types and the completion rule for a single item."""
from enum import StrEnum

from cobra.checklist.exceptions import StatusIntegrityError, UnsupportedItemTypeError
from cobra.checklist.status_options import find_option, parse_status_options


class ItemType(StrEnum):
    """Kinds of checklist item.

    A ``checkbox`` item is complete when ``is_completed`` is True. A
    ``status`` item is complete when its current status is an option
    flagged as a completion status.
    """
    CHECKBOX = "checkbox"
    STATUS = "status"


def parse_item_type(value) -> ItemType:
    """Convert a raw item type to ``ItemType``.

    Raises:
        UnsupportedItemTypeError: The value is not a known item type.
    """
    if isinstance(value, ItemType):
        return value
    try:
        return ItemType(str(value).strip().lower())
    except ValueError:
        raise UnsupportedItemTypeError(value) from None


def is_item_complete(item) -> bool:
    """
    Whether a checklist item counts as completed.

    Works on anything shaped like a ``ChecklistItem``. Checkbox items need
    ``is_completed is True``; ``None`` (untouched) and ``False`` both count
    as incomplete. Status items with no current status are incomplete.

    Raises:
        UnsupportedItemTypeError: The item type is unknown.
        StatusIntegrityError: A status item's current status is not one of
            its own options.
    """
    item_type = parse_item_type(item.item_type)

    if item_type is ItemType.CHECKBOX:
        return item.is_completed is True

    if not item.current_status:
        return False

    options = parse_status_options(item.status_options)
    option = find_option(options, item.current_status)
    if option is None:
        raise StatusIntegrityError(
            getattr(item, "id", None),
            item.current_status,
            [o.label for o in options],
        )
    return option.is_completion
