"""Tests for grouping checklists by operational period."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from cobra.checklist.grouping import SectionType, average_progress, group_by_operational_period
from cobra.models import ChecklistInstance

P1, P2, P3 = uuid4(), uuid4(), uuid4()


def checklist(name, period_id=None, created_at=None, progress=0.0, period_name=None):
    return ChecklistInstance(
        name=name,
        event_id=uuid4(),
        operational_period_id=period_id,
        operational_period_name=period_name or (f"Period {name}" if period_id else None),
        created_at=created_at or datetime(2024, 1, 1, tzinfo=UTC),
        progress_percentage=progress,
    )


def names(section):
    return [c.name for c in section.checklists]


class TestGroupByOperationalPeriod:
    def test_empty_input(self):
        grouping = group_by_operational_period([], P1)
        assert grouping.sections == []
        assert grouping.total_checklists == 0
        assert grouping.has_current_period is False

    def test_current_incident_previous(self):
        a = checklist("A", P1)
        b = checklist("B")
        c = checklist("C", P2)
        d = checklist("D", P2)

        grouping = group_by_operational_period([a, b, c, d], P1)

        assert [s.type for s in grouping.sections] == [
            SectionType.CURRENT,
            SectionType.INCIDENT,
            SectionType.PREVIOUS,
        ]
        assert [s.sort_order for s in grouping.sections] == [0, 1, 2]
        assert names(grouping.sections[0]) == ["A"]
        assert names(grouping.sections[1]) == ["B"]
        assert names(grouping.sections[2]) == ["C", "D"]
        assert grouping.sections[2].operational_period_id == P2
        assert grouping.total_checklists == 4
        assert grouping.has_current_period is True

    def test_previous_sections_most_recent_first(self):
        older = checklist("P3 checklist", P3, datetime(2024, 1, 5, tzinfo=UTC))
        newer = checklist("P2 checklist", P2, datetime(2024, 1, 10, tzinfo=UTC))
        early = checklist("P2 early", P2, datetime(2024, 1, 1, tzinfo=UTC))

        grouping = group_by_operational_period([older, early, newer])

        assert [s.operational_period_id for s in grouping.sections] == [P2, P3]
        assert [s.sort_order for s in grouping.sections] == [2, 3]
        assert all(s.type is SectionType.PREVIOUS for s in grouping.sections)

    def test_only_previous_sections(self):
        grouping = group_by_operational_period(
            [
                checklist("X", P2, datetime(2024, 1, 2, tzinfo=UTC)),
                checklist("Y", P3, datetime(2024, 1, 3, tzinfo=UTC)),
            ]
        )
        assert grouping.current_section is None
        assert grouping.incident_section is None
        assert [s.operational_period_id for s in grouping.previous_sections] == [P3, P2]

    def test_current_id_without_checklists_emits_no_current_section(self):
        grouping = group_by_operational_period([checklist("B"), checklist("C", P2)], P1)

        assert grouping.current_section is None
        assert [s.type for s in grouping.sections] == [SectionType.INCIDENT, SectionType.PREVIOUS]
        assert [s.sort_order for s in grouping.sections] == [1, 2]

    def test_no_current_id_puts_every_period_in_previous(self):
        grouping = group_by_operational_period([checklist("A", P1), checklist("B", P2)], None)
        assert len(grouping.previous_sections) == 2
        assert grouping.current_section is None

    def test_equal_timestamps_keep_input_order(self):
        same = datetime(2024, 2, 1, tzinfo=UTC)
        items = [checklist("first", P3, same), checklist("second", P2, same)]

        first_run = group_by_operational_period(items)
        second_run = group_by_operational_period(items)

        order = [s.operational_period_id for s in first_run.sections]
        assert order == [s.operational_period_id for s in second_run.sections]
        assert order == [P3, P2]

    def test_naive_and_aware_timestamps_compare(self):
        naive = checklist("naive", P2, datetime(2024, 3, 2))
        aware = checklist("aware", P3, datetime(2024, 3, 1, tzinfo=UTC))

        grouping = group_by_operational_period([aware, naive])
        assert [s.operational_period_id for s in grouping.sections] == [P2, P3]

    def test_unsorted_previous_keeps_first_seen_order(self):
        items = [
            checklist("old", P3, datetime(2024, 1, 1, tzinfo=UTC)),
            checklist("new", P2, datetime(2024, 6, 1, tzinfo=UTC)),
        ]
        grouping = group_by_operational_period(items, sort_previous_by_date=False)
        assert [s.operational_period_id for s in grouping.sections] == [P3, P2]
        assert [s.sort_order for s in grouping.sections] == [2, 3]

    def test_section_period_name_from_first_checklist(self):
        grouping = group_by_operational_period(
            [checklist("A", P1, period_name="OP 3 - Night"), checklist("B")], P1
        )
        assert grouping.current_section.operational_period_name == "OP 3 - Night"
        assert grouping.incident_section.operational_period_name is None
        assert grouping.incident_section.operational_period_id is None

    def test_average_progress_per_section(self):
        grouping = group_by_operational_period(
            [
                checklist("A", P1, progress=50.0),
                checklist("B", P1, progress=75.0),
                checklist("C", progress=33.33),
            ],
            P1,
        )
        assert grouping.current_section.average_progress == 63  # 62.5 rounds up
        assert grouping.incident_section.average_progress == 33


class TestAverageProgress:
    def test_empty(self):
        assert average_progress([]) == 0

    def test_rounds_to_integer(self):
        assert average_progress([checklist("a", progress=10.0), checklist("b", progress=15.0)]) == 13

    def test_out_of_range_is_rejected(self):
        with pytest.raises(AssertionError):
            average_progress([checklist("bad", progress=-5.0)])
