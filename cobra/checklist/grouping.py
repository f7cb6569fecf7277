"""Group an event's checklists into operational-period sections.

Sections are emitted in order of operational urgency:

1. Current operational period (sort order 0), when a current period id is
   given and at least one checklist belongs to it.
2. Incident-level checklists (sort order 1), checklists with no period.
   They stay visible regardless of shift changes.
3. Previous operational periods (sort order 2, 3, ...), one section per
   remaining period, most recently active first. "Most recently active"
   means the newest ``created_at`` among the section's checklists, not the
   period's own start time.

Empty sections are never emitted. The input is assumed to be the active
(non-archived) checklists of a single event.
"""
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import Any
from uuid import UUID


class SectionType(StrEnum):
    CURRENT = "current"
    INCIDENT = "incident"
    PREVIOUS = "previous"


@dataclass
class ChecklistSection:
    """One display section of checklists."""
    type: SectionType
    checklists: list[Any]
    sort_order: int
    average_progress: int
    operational_period_id: UUID | None = None
    operational_period_name: str | None = None


@dataclass
class ChecklistGrouping:
    """Result of grouping, with the individual sections for convenience."""
    sections: list[ChecklistSection] = field(default_factory=list)
    current_section: ChecklistSection | None = None
    incident_section: ChecklistSection | None = None
    previous_sections: list[ChecklistSection] = field(default_factory=list)
    total_checklists: int = 0

    @property
    def has_current_period(self) -> bool:
        return self.current_section is not None


def average_progress(checklists) -> int:
    """Mean ``progress_percentage`` rounded half-up to an integer, 0 if empty."""
    if not checklists:
        return 0
    total = Decimal(0)
    for checklist in checklists:
        pct = checklist.progress_percentage
        assert 0 <= pct <= 100, f"progress_percentage out of range: {pct}"
        total += Decimal(str(pct))
    mean = total / len(checklists)
    return int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _latest_created(section: ChecklistSection) -> datetime:
    return max(_as_utc(c.created_at) for c in section.checklists)


def _section(section_type, checklists, sort_order, period_id=None) -> ChecklistSection:
    return ChecklistSection(
        type=section_type,
        checklists=checklists,
        sort_order=sort_order,
        average_progress=average_progress(checklists),
        operational_period_id=period_id,
        operational_period_name=checklists[0].operational_period_name if period_id else None,
    )


def group_by_operational_period(
    checklists,
    current_operational_period_id: UUID | None = None,
    sort_previous_by_date: bool = True,
) -> ChecklistGrouping:
    """
    Bucket checklists into current, incident and previous sections.

    Args:
        checklists: Checklist instances of one event, already filtered to
            non-archived rows.
        current_operational_period_id: The event's current period, if any.
        sort_previous_by_date: Order previous sections by their newest
            checklist (newest first). When False they keep the order in
            which their periods first appear in ``checklists``.

    Returns:
        A ``ChecklistGrouping`` whose ``sections`` are in display order with
        consecutive ``sort_order`` values for previous periods starting at 2.
    """
    checklists = list(checklists)
    grouping = ChecklistGrouping(total_checklists=len(checklists))

    if current_operational_period_id is not None:
        current = [
            c for c in checklists
            if c.operational_period_id == current_operational_period_id
        ]
        if current:
            grouping.current_section = _section(
                SectionType.CURRENT, current, 0, current_operational_period_id
            )
            grouping.sections.append(grouping.current_section)

    incident = [c for c in checklists if c.operational_period_id is None]
    if incident:
        grouping.incident_section = _section(SectionType.INCIDENT, incident, 1)
        grouping.sections.append(grouping.incident_section)

    # dict keeps first-seen period order, which makes tie-breaks stable
    by_period: dict[UUID, list] = {}
    for checklist in checklists:
        period_id = checklist.operational_period_id
        if period_id is None or period_id == current_operational_period_id:
            continue
        by_period.setdefault(period_id, []).append(checklist)

    previous = [
        _section(SectionType.PREVIOUS, period_checklists, 2, period_id)
        for period_id, period_checklists in by_period.items()
    ]
    if sort_previous_by_date:
        previous.sort(key=_latest_created, reverse=True)
    for index, section in enumerate(previous):
        section.sort_order = 2 + index

    grouping.previous_sections = previous
    grouping.sections.extend(previous)
    return grouping
