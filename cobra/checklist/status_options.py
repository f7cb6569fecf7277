"""Status options for status-type checklist items.

Status options are stored as a JSON array on the item row. The
``StatusOptionsType`` column type turns that text into a list of
``StatusOption`` when the row is loaded, so the rest of the code only ever
sees typed, ordered options.
"""
import json

from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy.types import Text, TypeDecorator

from cobra.checklist.exceptions import StatusConfigurationError


class StatusOption(BaseModel):
    """A single choice in a status item's dropdown.

    Attributes:
        label: Display text, e.g. "Not Started" or "Complete".
        is_completion: Whether selecting this option completes the item.
        order: Position in the dropdown, lower first.
    """
    label: str
    is_completion: bool = False
    order: int = 0


_options_adapter = TypeAdapter(list[StatusOption])


def _normalize(option: dict) -> dict:
    # Stored configurations use camelCase keys
    if isinstance(option, dict) and "isCompletion" in option and "is_completion" not in option:
        option = {**option, "is_completion": option["isCompletion"]}
    return option


def parse_status_options(raw) -> list[StatusOption]:
    """
    Parse status options into an ordered list.

    Accepts a JSON string, a list of dicts, or a list of ``StatusOption``.
    ``None`` and empty input give an empty list. Options are returned sorted
    by ``order``; equal orders keep their given sequence.

    Raises:
        StatusConfigurationError: The configuration is not a list of options.
    """
    if raw is None or raw == "":
        return []

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StatusConfigurationError(f"Invalid status options JSON: {e}") from e

    if not isinstance(raw, list):
        raise StatusConfigurationError("Status options must be a list")

    entries = [
        entry if isinstance(entry, StatusOption) else _normalize(entry)
        for entry in raw
        if entry is not None
    ]
    try:
        options = _options_adapter.validate_python(entries)
    except (ValidationError, TypeError) as e:
        raise StatusConfigurationError(f"Invalid status options: {e}") from e

    return sorted(options, key=lambda o: o.order)


def find_option(options: list[StatusOption], label: str | None) -> StatusOption | None:
    """Find the option matching ``label``, compared case-insensitively."""
    if not label:
        return None
    wanted = label.casefold()
    return next((o for o in options if o.label.casefold() == wanted), None)


def dump_status_options(options: list[StatusOption]) -> str:
    """Serialize options to the JSON text stored on the row."""
    return _options_adapter.dump_json(options).decode("utf-8")


class StatusOptionsType(TypeDecorator):
    """Column type storing ``list[StatusOption]`` as JSON text."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return dump_status_options(parse_status_options(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return parse_status_options(value)
