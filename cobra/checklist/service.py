"""Checklist lifecycle and item update service.

Every mutating function runs in the caller's session and commits once, so
an item change and the progress counters it produces land in the same
transaction. Functions raise ``ChecklistError`` subclasses; the app-level
exception handlers turn them into HTTP responses.
"""
import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlmodel import Session, select

from cobra.checklist.exceptions import (
    ChecklistArchivedError,
    InvalidStatusError,
    ItemTypeMismatchError,
    NotFoundError,
    TemplateUnavailableError,
)
from cobra.checklist.grouping import ChecklistGrouping, group_by_operational_period
from cobra.checklist.items import ItemType, is_item_complete, parse_item_type
from cobra.checklist.periods import get_current_period, get_event, get_operational_period
from cobra.checklist.progress import recalculate
from cobra.checklist.status_options import find_option, parse_status_options
from cobra.checklist.templates import get_template
from cobra.core.user import UserContext
from cobra.models import ChecklistInstance, ChecklistItem
from cobra.models.checklist import ChecklistCreate, ChecklistUpdate

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


def _touch(target, user: UserContext) -> None:
    target.last_modified_by = user.email
    target.last_modified_by_position = user.position
    target.last_modified_at = _now()


def _copy_options(options):
    if options is None:
        return None
    return [option.model_copy() for option in parse_status_options(options)]


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_checklist(session: Session, checklist_id: UUID) -> ChecklistInstance:
    checklist = session.get(ChecklistInstance, checklist_id)
    if not checklist:
        logger.warning(f"Checklist {checklist_id} not found")
        raise NotFoundError(f"Checklist {checklist_id} not found")
    return checklist


def get_checklists_by_event(
    session: Session, event_id: UUID, include_archived: bool = False
) -> list[ChecklistInstance]:
    """Checklists of an event, newest first."""
    statement = select(ChecklistInstance).where(ChecklistInstance.event_id == event_id)
    if not include_archived:
        statement = statement.where(ChecklistInstance.is_archived == False)  # noqa: E712
    checklists = list(
        session.exec(statement.order_by(ChecklistInstance.created_at.desc())).all()
    )
    logger.info(f"Retrieved {len(checklists)} checklists for event {event_id}")
    return checklists


def is_visible_to(checklist: ChecklistInstance, user: UserContext) -> bool:
    """
    Whether a checklist is shown to a user.

    Checklists without assigned positions are visible to everyone. Otherwise
    one of the user's positions must appear in the comma-separated list,
    compared case-insensitively.
    """
    if not checklist.assigned_positions or not checklist.assigned_positions.strip():
        return True
    assigned = {p.strip().casefold() for p in checklist.assigned_positions.split(",") if p.strip()}
    held = {p.strip().casefold() for p in (user.positions or [user.position]) if p}
    return not assigned.isdisjoint(held)


def get_my_checklists(
    session: Session, event_id: UUID, user: UserContext, include_archived: bool = False
) -> list[ChecklistInstance]:
    """Checklists of an event visible to the user's positions, newest first."""
    get_event(session, event_id)
    checklists = [
        checklist
        for checklist in get_checklists_by_event(session, event_id, include_archived)
        if is_visible_to(checklist, user)
    ]
    logger.info(
        f"Retrieved {len(checklists)} checklists for {user.email} "
        f"({', '.join(user.positions or [user.position])}) in event {event_id}"
    )
    return checklists


def get_checklists_by_operational_period(
    session: Session,
    event_id: UUID,
    operational_period_id: UUID,
    include_archived: bool = False,
) -> list[ChecklistInstance]:
    statement = (
        select(ChecklistInstance)
        .where(ChecklistInstance.event_id == event_id)
        .where(ChecklistInstance.operational_period_id == operational_period_id)
    )
    if not include_archived:
        statement = statement.where(ChecklistInstance.is_archived == False)  # noqa: E712
    return list(session.exec(statement.order_by(ChecklistInstance.created_at.desc())).all())


def get_archived_checklists(session: Session) -> list[ChecklistInstance]:
    statement = (
        select(ChecklistInstance)
        .where(ChecklistInstance.is_archived == True)  # noqa: E712
        .order_by(ChecklistInstance.archived_at)
    )
    return list(session.exec(statement).all())


def get_grouped_checklists(
    session: Session, event_id: UUID
) -> tuple[ChecklistGrouping, UUID | None]:
    """
    Active checklists of an event grouped by operational period.

    The event's current period decides which section is "current".

    Returns:
        The grouping and the current period id used to build it.
    """
    get_event(session, event_id)
    current = get_current_period(session, event_id)
    current_id = current.id if current else None

    checklists = get_checklists_by_event(session, event_id)
    grouping = group_by_operational_period(checklists, current_id)

    logger.info(
        f"Grouped {grouping.total_checklists} checklists for event {event_id} "
        f"into {len(grouping.sections)} sections"
    )
    return grouping, current_id


# ---------------------------------------------------------------------------
# Checklist lifecycle
# ---------------------------------------------------------------------------


def _resolve_period(session: Session, event_id: UUID, period_id: UUID | None):
    if period_id is None:
        return None
    period = get_operational_period(session, period_id)
    if period.event_id != event_id:
        raise NotFoundError(f"Operational period {period_id} not found for event {event_id}")
    return period


def create_from_template(
    session: Session, data: ChecklistCreate, user: UserContext
) -> ChecklistInstance:
    """
    Create a checklist instance from a template.

    Template items are copied by value; later template edits do not reach
    the new checklist.

    Raises:
        NotFoundError: Template, event or operational period is missing.
        TemplateUnavailableError: Template is inactive or archived.
    """
    logger.info(f"Creating checklist from template {data.template_id} by {user.email}")

    template = get_template(session, data.template_id)
    if not template.is_active or template.is_archived:
        raise TemplateUnavailableError(f"Template {data.template_id} is not available")

    event = get_event(session, data.event_id)
    period = _resolve_period(session, event.id, data.operational_period_id)

    checklist = ChecklistInstance(
        name=data.name or f"{template.name} - {_now():%Y-%m-%d}",
        template_id=template.id,
        event_id=event.id,
        event_name=event.name,
        operational_period_id=period.id if period else None,
        operational_period_name=period.name if period else None,
        assigned_positions=data.assigned_positions,
        created_by=user.email,
        created_by_position=user.position,
    )

    for template_item in template.items:
        checklist.items.append(
            ChecklistItem(
                template_item_id=template_item.id,
                item_text=template_item.item_text,
                item_type=parse_item_type(template_item.item_type).value,
                display_order=template_item.display_order,
                is_required=template_item.is_required,
                status_options=_copy_options(template_item.status_options),
                allowed_positions=template_item.allowed_positions,
                notes=template_item.default_notes,
            )
        )

    recalculate(checklist)

    session.add(checklist)
    session.commit()
    session.refresh(checklist)

    logger.info(
        f"Created checklist {checklist.id} with {checklist.total_items} items "
        f"from template {template.id}"
    )
    return checklist


def clone_checklist(
    session: Session,
    checklist_id: UUID,
    new_name: str,
    preserve_status: bool,
    user: UserContext,
) -> ChecklistInstance:
    """
    Copy a checklist under a new name.

    A clean copy (``preserve_status=False``) resets every item. A direct
    copy keeps completion state, statuses and notes.
    """
    original = get_checklist(session, checklist_id)
    logger.info(
        f"Cloning checklist {checklist_id} as '{new_name}' "
        f"({'direct copy' if preserve_status else 'clean copy'})"
    )

    clone = ChecklistInstance(
        name=new_name.strip(),
        template_id=original.template_id,
        event_id=original.event_id,
        event_name=original.event_name,
        operational_period_id=original.operational_period_id,
        operational_period_name=original.operational_period_name,
        assigned_positions=original.assigned_positions,
        created_by=user.email,
        created_by_position=user.position,
    )

    for item in original.items:
        copy = ChecklistItem(
            template_item_id=item.template_item_id,
            item_text=item.item_text,
            item_type=item.item_type,
            display_order=item.display_order,
            is_required=item.is_required,
            status_options=_copy_options(item.status_options),
            allowed_positions=item.allowed_positions,
        )
        if preserve_status:
            copy.is_completed = item.is_completed
            copy.completed_by = item.completed_by
            copy.completed_by_position = item.completed_by_position
            copy.completed_at = item.completed_at
            copy.current_status = item.current_status
            copy.notes = item.notes
        clone.items.append(copy)

    recalculate(clone)

    session.add(clone)
    session.commit()
    session.refresh(clone)

    logger.info(f"Cloned checklist {checklist_id} to {clone.id} with {clone.total_items} items")
    return clone


def update_checklist(
    session: Session, checklist_id: UUID, data: ChecklistUpdate, user: UserContext
) -> ChecklistInstance:
    """Rename a checklist or move it to another operational period."""
    checklist = get_checklist(session, checklist_id)
    period = _resolve_period(session, checklist.event_id, data.operational_period_id)

    checklist.name = data.name.strip()
    checklist.operational_period_id = period.id if period else None
    checklist.operational_period_name = period.name if period else None
    checklist.assigned_positions = data.assigned_positions
    _touch(checklist, user)

    session.add(checklist)
    session.commit()
    session.refresh(checklist)
    logger.info(f"Updated checklist {checklist_id} by {user.email}")
    return checklist


def archive_checklist(session: Session, checklist_id: UUID, user: UserContext) -> ChecklistInstance:
    checklist = get_checklist(session, checklist_id)

    checklist.is_archived = True
    checklist.archived_by = user.email
    checklist.archived_at = _now()

    session.add(checklist)
    session.commit()
    session.refresh(checklist)
    logger.info(f"Archived checklist {checklist_id} by {user.email}")
    return checklist


def restore_checklist(session: Session, checklist_id: UUID, user: UserContext) -> ChecklistInstance:
    checklist = get_checklist(session, checklist_id)

    checklist.is_archived = False
    checklist.archived_by = None
    checklist.archived_at = None
    _touch(checklist, user)

    session.add(checklist)
    session.commit()
    session.refresh(checklist)
    logger.info(f"Restored checklist {checklist_id} by {user.email}")
    return checklist


def recalculate_progress(session: Session, checklist_id: UUID) -> ChecklistInstance:
    """Recompute and persist the counters of one checklist."""
    checklist = get_checklist(session, checklist_id)
    progress = recalculate(checklist)

    session.add(checklist)
    session.commit()
    session.refresh(checklist)

    logger.info(
        f"Updated progress for checklist {checklist_id}: "
        f"{progress.progress_percentage}% "
        f"({progress.completed_items}/{progress.total_items})"
    )
    return checklist


# ---------------------------------------------------------------------------
# Item updates
# ---------------------------------------------------------------------------


def get_item(session: Session, checklist_id: UUID, item_id: UUID) -> ChecklistItem:
    item = session.get(ChecklistItem, item_id)
    if not item or item.checklist_instance_id != checklist_id:
        logger.warning(f"Item {item_id} not found in checklist {checklist_id}")
        raise NotFoundError(f"Item {item_id} not found in checklist {checklist_id}")
    return item


def _get_mutable_item(session: Session, checklist_id: UUID, item_id: UUID) -> ChecklistItem:
    checklist = get_checklist(session, checklist_id)
    if checklist.is_archived:
        raise ChecklistArchivedError(f"Checklist {checklist_id} is archived")
    return get_item(session, checklist_id, item_id)


def _commit_item_change(session: Session, item: ChecklistItem) -> ChecklistItem:
    # Flush first so the recalculation sees the changed item state
    session.add(item)
    session.flush()

    checklist = item.checklist
    progress = recalculate(checklist)
    session.add(checklist)
    session.commit()
    session.refresh(item)

    logger.info(
        f"Updated progress for checklist {checklist.id}: "
        f"{progress.progress_percentage}% "
        f"({progress.completed_items}/{progress.total_items})"
    )
    return item


def update_item_completion(
    session: Session,
    checklist_id: UUID,
    item_id: UUID,
    is_completed: bool,
    notes: str | None,
    user: UserContext,
) -> ChecklistItem:
    """
    Mark a checkbox item complete or incomplete.

    Raises:
        ItemTypeMismatchError: The item is not a checkbox item.
    """
    item = _get_mutable_item(session, checklist_id, item_id)
    if parse_item_type(item.item_type) is not ItemType.CHECKBOX:
        logger.error(f"Cannot update completion for non-checkbox item {item_id} ({item.item_type})")
        raise ItemTypeMismatchError(
            f"Item {item_id} is not a checkbox item. Update its status instead."
        )

    item.is_completed = is_completed
    item.completed_by = user.email if is_completed else None
    item.completed_by_position = user.position if is_completed else None
    item.completed_at = _now() if is_completed else None
    if notes is not None:
        item.notes = notes
    _touch(item, user)

    logger.info(
        f"Item {item_id} marked as {'COMPLETE' if is_completed else 'INCOMPLETE'} by {user.email}"
    )
    return _commit_item_change(session, item)


def update_item_status(
    session: Session,
    checklist_id: UUID,
    item_id: UUID,
    status: str,
    notes: str | None,
    user: UserContext,
) -> ChecklistItem:
    """
    Set the status of a status item.

    The status is matched case-insensitively against the item's options and
    stored with the option's own label.

    Raises:
        ItemTypeMismatchError: The item is not a status item.
        InvalidStatusError: The status is not one of the item's options.
    """
    item = _get_mutable_item(session, checklist_id, item_id)
    if parse_item_type(item.item_type) is not ItemType.STATUS:
        logger.error(f"Cannot update status for non-status item {item_id} ({item.item_type})")
        raise ItemTypeMismatchError(
            f"Item {item_id} is not a status item. Update its completion instead."
        )

    options = parse_status_options(item.status_options)
    option = find_option(options, status)
    if option is None:
        allowed = [o.label for o in options]
        logger.error(f"Invalid status '{status}' for item {item_id}. Allowed: {', '.join(allowed)}")
        raise InvalidStatusError(status, allowed)

    item.current_status = option.label
    done = is_item_complete(item)
    item.is_completed = done
    item.completed_by = user.email if done else None
    item.completed_by_position = user.position if done else None
    item.completed_at = _now() if done else None
    if notes is not None:
        item.notes = notes
    _touch(item, user)

    logger.info(f"Item {item_id} status updated to '{option.label}' by {user.email}")
    return _commit_item_change(session, item)


def update_item_notes(
    session: Session,
    checklist_id: UUID,
    item_id: UUID,
    notes: str | None,
    user: UserContext,
) -> ChecklistItem:
    """Replace an item's notes. Progress is not affected."""
    item = _get_mutable_item(session, checklist_id, item_id)

    item.notes = notes
    _touch(item, user)

    session.add(item)
    session.commit()
    session.refresh(item)

    logger.info(f"Notes updated for item {item_id} by {user.email}")
    return item
