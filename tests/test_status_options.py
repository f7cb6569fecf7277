"""Tests for status option parsing."""

import pytest

from cobra.checklist.exceptions import StatusConfigurationError
from cobra.checklist.status_options import (
    StatusOption,
    StatusOptionsType,
    dump_status_options,
    find_option,
    parse_status_options,
)


class TestParseStatusOptions:
    def test_empty(self):
        assert parse_status_options(None) == []
        assert parse_status_options("") == []
        assert parse_status_options([]) == []

    def test_json_string_with_camel_case_keys(self):
        raw = '[{"label": "Open", "isCompletion": false, "order": 1}, {"label": "Closed", "isCompletion": true, "order": 2}]'
        options = parse_status_options(raw)
        assert [o.label for o in options] == ["Open", "Closed"]
        assert options[1].is_completion is True

    def test_sorted_by_order(self):
        options = parse_status_options(
            [
                {"label": "Done", "is_completion": True, "order": 3},
                {"label": "Todo", "order": 1},
                {"label": "Doing", "order": 2},
            ]
        )
        assert [o.label for o in options] == ["Todo", "Doing", "Done"]

    def test_equal_orders_keep_sequence(self):
        options = parse_status_options([{"label": "B"}, {"label": "A"}])
        assert [o.label for o in options] == ["B", "A"]

    def test_accepts_models(self):
        option = StatusOption(label="Complete", is_completion=True, order=1)
        assert parse_status_options([option]) == [option]

    def test_invalid_json(self):
        with pytest.raises(StatusConfigurationError):
            parse_status_options("[{not json")

    def test_not_a_list(self):
        with pytest.raises(StatusConfigurationError):
            parse_status_options('{"label": "Open"}')

    def test_missing_label(self):
        with pytest.raises(StatusConfigurationError):
            parse_status_options([{"order": 1}])


class TestFindOption:
    def test_case_insensitive(self):
        options = [StatusOption(label="In Progress")]
        assert find_option(options, "in progress") is options[0]

    def test_missing(self):
        assert find_option([StatusOption(label="Open")], "Closed") is None
        assert find_option([StatusOption(label="Open")], None) is None


class TestStatusOptionsType:
    def test_bind_and_load(self):
        column_type = StatusOptionsType()
        options = [StatusOption(label="Done", is_completion=True, order=1)]

        stored = column_type.process_bind_param(options, None)
        assert stored == dump_status_options(options)

        loaded = column_type.process_result_value(stored, None)
        assert loaded == options

    def test_none_passthrough(self):
        column_type = StatusOptionsType()
        assert column_type.process_bind_param(None, None) is None
        assert column_type.process_result_value(None, None) is None
