from __future__ import annotations

from datetime import time, timedelta

import pytest

from digital_id.database.mysql_base import all_rows, first_row, json_param, json_value, to_time


class FakeCursor:
    def __init__(self, rows):
        self._rows = list(rows)

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        (time(8, 30), time(8, 30)),
        (timedelta(hours=22, minutes=15), time(22, 15)),
        (timedelta(hours=25), time(1, 0)),
        ("08:30", time(8, 30)),
        ("17:05:09", time(17, 5, 9)),
    ],
)
def test_to_time_accepts_connector_shapes(value, expected):
    assert to_time(value) == expected


def test_to_time_rejects_garbage():
    with pytest.raises(ValueError):
        to_time("8")
    with pytest.raises(TypeError):
        to_time(830)


def test_rows_go_through_the_mapper():
    assert all_rows(FakeCursor([{"id": 1}, {"id": 2}]), lambda r: r["id"]) == [1, 2]
    assert first_row(FakeCursor([{"id": 7}]), lambda r: r["id"] * 2) == 14
    assert first_row(FakeCursor([])) is None
    assert all_rows(FakeCursor([])) == []


def test_json_columns():
    assert json_param(None) is None
    assert json_value(json_param({"attempt": 2})) == {"attempt": 2}
    assert json_value(b'{"ok": true}') == {"ok": True}
    assert json_value("") is None
