"""Tests for sort state, type-aware sorting and full/virtualized rendering."""

import pytest

from ledgerview.table.columns import ColumnSpec, ColumnType, VirtualizationConfig
from ledgerview.table.render import visible_window
from ledgerview.table.sortable import SortableTable
from ledgerview.table.sorting import date_sort_key, number_sort_key, sort_rows, string_sort_key
from ledgerview.table.state import SortDirection, TableState, apply_sort, clear_sort, initial_state

COLUMNS = [
    ColumnSpec("name", "Name", ColumnType.STRING),
    ColumnSpec("amount", "Amount", ColumnType.NUMBER, render=lambda r: f"€{r['amount']:.2f}"),
    ColumnSpec("date", "Date", ColumnType.DATE),
]

ROWS = [
    {"id": 1, "name": "beta", "amount": 10.0, "date": "2024-01-03"},
    {"id": 2, "name": "Alpha", "amount": -5.0, "date": "2024-01-01"},
    {"id": 3, "name": "gamma", "amount": 10.0, "date": "2024-01-02"},
    {"id": 4, "name": "alpha", "amount": 0.5, "date": "2024-01-02"},
]


def _ids(rows):
    return [r["id"] for r in rows]


# ---------------------------------------------------------------------------
# State transitions
# ---------------------------------------------------------------------------

def test_first_activation_uses_type_default():
    assert apply_sort(TableState(), COLUMNS, "amount") == TableState("amount", SortDirection.DESC)
    assert apply_sort(TableState(), COLUMNS, "date") == TableState("date", SortDirection.DESC)
    assert apply_sort(TableState(), COLUMNS, "name") == TableState("name", SortDirection.ASC)


def test_repeat_activation_toggles():
    state = apply_sort(TableState(), COLUMNS, "amount")
    state = apply_sort(state, COLUMNS, "amount")
    assert state == TableState("amount", SortDirection.ASC)
    state = apply_sort(state, COLUMNS, "amount")
    assert state.direction == SortDirection.DESC


def test_switching_key_resets_to_new_type_default():
    state = TableState("amount", SortDirection.ASC)
    assert apply_sort(state, COLUMNS, "name") == TableState("name", SortDirection.ASC)
    state = TableState("name", SortDirection.DESC)
    assert apply_sort(state, COLUMNS, "date") == TableState("date", SortDirection.DESC)


def test_unknown_key_raises():
    with pytest.raises(KeyError):
        apply_sort(TableState(), COLUMNS, "nope")


def test_initial_and_cleared_state():
    assert not initial_state().is_sorted
    assert initial_state("date", columns=COLUMNS) == TableState("date", SortDirection.DESC)
    assert initial_state("amount", "asc", COLUMNS) == TableState("amount", SortDirection.ASC)
    assert clear_sort(TableState("name")) == TableState()


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def test_unsorted_state_keeps_input_order():
    assert _ids(sort_rows(ROWS, COLUMNS, TableState())) == [1, 2, 3, 4]


def test_number_sort_both_directions_is_stable():
    desc = sort_rows(ROWS, COLUMNS, TableState("amount", SortDirection.DESC))
    asc = sort_rows(ROWS, COLUMNS, TableState("amount", SortDirection.ASC))
    assert _ids(desc) == [1, 3, 4, 2]
    assert _ids(asc) == [2, 4, 1, 3]


def test_date_sort_ties_keep_input_order():
    asc = sort_rows(ROWS, COLUMNS, TableState("date", SortDirection.ASC))
    desc = sort_rows(ROWS, COLUMNS, TableState("date", SortDirection.DESC))
    assert _ids(asc) == [2, 3, 4, 1]
    assert _ids(desc) == [1, 3, 4, 2]


def test_string_sort_is_case_insensitive():
    asc = sort_rows(ROWS, COLUMNS, TableState("name", SortDirection.ASC))
    assert _ids(asc) == [2, 4, 1, 3]


def test_sorting_is_idempotent_and_does_not_mutate():
    rows = list(ROWS)
    state = TableState("amount", SortDirection.DESC)
    once = sort_rows(rows, COLUMNS, state)
    twice = sort_rows(once, COLUMNS, state)
    assert once == twice
    assert rows == ROWS


def test_missing_values_coerce():
    assert number_sort_key(None) == 0.0
    assert number_sort_key("") == 0.0
    assert number_sort_key(float("nan")) == 0.0
    assert number_sort_key("3.5") == 3.5
    assert date_sort_key(None) == 0
    assert date_sort_key("not a date") == 0
    assert date_sort_key("2024-01-02") > date_sort_key("2024-01-01")
    assert string_sort_key(None) == string_sort_key("")
    assert string_sort_key("ABC") == string_sort_key("abc")


def test_missing_numbers_sort_as_zero():
    rows = [{"amount": 1.0}, {"amount": None}, {"amount": -1.0}]
    ordered = sort_rows(rows, COLUMNS, TableState("amount", SortDirection.DESC))
    assert [r["amount"] for r in ordered] == [1.0, None, -1.0]


def test_rows_can_be_objects():
    class Row:
        def __init__(self, name, amount):
            self.name, self.amount = name, amount

    rows = [Row("a", 1), Row("b", 3), Row("c", 2)]
    ordered = sort_rows(rows, COLUMNS, TableState("amount", SortDirection.DESC))
    assert [r.name for r in ordered] == ["b", "c", "a"]


# ---------------------------------------------------------------------------
# SortableTable
# ---------------------------------------------------------------------------

def test_table_request_sort_and_headers():
    table = SortableTable(ROWS, COLUMNS, name="Demo")
    assert table.header_labels() == ["Name ⬍", "Amount ⬍", "Date ⬍"]

    table.request_sort("amount")
    assert table.header_labels()[1] == "Amount ↓"
    table.request_sort("amount")
    assert table.header_labels()[1] == "Amount ↑"
    assert _ids(table.sorted_rows()) == [2, 4, 1, 3]

    table.clear_sort()
    assert _ids(table.sorted_rows()) == [1, 2, 3, 4]


def test_tables_keep_independent_state():
    first = SortableTable(ROWS, COLUMNS)
    second = SortableTable(ROWS, COLUMNS)
    first.request_sort("name")
    assert first.state.is_sorted
    assert not second.state.is_sorted


def test_default_sort():
    table = SortableTable(ROWS, COLUMNS, default_sort="date")
    assert table.state == TableState("date", SortDirection.DESC)
    table = SortableTable(ROWS, COLUMNS, default_sort=("name", SortDirection.DESC))
    assert _ids(table.sorted_rows()) == [3, 1, 2, 4]


def test_render_uses_column_renderers_and_row_style():
    table = SortableTable(
        ROWS, COLUMNS, default_sort="amount",
        row_style=lambda r: "warning" if r["amount"] < 0 else "green",
    )
    views = table.render()
    assert [v.index for v in views] == [0, 1, 2, 3]
    assert views[0].cells == ("beta", "€10.00", "2024-01-03")
    assert views[-1].style == "warning"
    assert views[0].style == "green"


def test_virtualized_matches_full_when_everything_fits():
    virtual = SortableTable(ROWS, COLUMNS, default_sort="amount",
                            virtualization=VirtualizationConfig(enabled=True))
    full = SortableTable(ROWS, COLUMNS, default_sort="amount")
    assert virtual.render() == full.render()


def test_virtualized_window_is_a_slice_of_the_full_view():
    rows = [{"id": i, "name": f"r{i}", "amount": float(i), "date": "2024-01-01"} for i in range(100)]
    config = VirtualizationConfig(enabled=True, viewport_height=400, row_height=35)
    virtual = SortableTable(rows, COLUMNS, default_sort="amount", virtualization=config)
    full = SortableTable(rows, COLUMNS, default_sort="amount")

    window = virtual.render(scroll_offset=350)
    assert [v.index for v in window] == list(range(10, 22))
    assert window == full.render()[10:22]


@pytest.mark.parametrize("total, offset, expected", [
    (100, 0, range(0, 12)),
    (100, 350, range(10, 22)),
    (100, 10_000, range(88, 100)),
    (5, 0, range(0, 5)),
    (0, 0, range(0)),
])
def test_visible_window(total, offset, expected):
    assert visible_window(total, 400, 35, offset) == expected


def test_visible_window_overscan_and_bad_heights():
    assert visible_window(100, 400, 35, 350, overscan=2) == range(8, 24)
    with pytest.raises(ValueError):
        visible_window(10, 0, 35)
    with pytest.raises(ValueError):
        visible_window(10, 400, 0)
