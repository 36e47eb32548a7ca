import pytest

from algendado.models import AgendaItem, View, parse_view


@pytest.mark.parametrize(
    "name, expected",
    [("today", View.TODAY), ("week", View.WEEK), ("month", View.MONTH)],
)
def test_parse_view_known_names(name, expected):
    assert parse_view(name) is expected


@pytest.mark.parametrize("name", ["Today", "year", "", " week"])
def test_parse_view_rejects_unknown(name):
    with pytest.raises(ValueError):
        parse_view(name)


def test_parse_view_round_trips_value():
    for view in View:
        assert parse_view(view.value) is view


def test_agenda_item_defaults_to_not_notified():
    item = AgendaItem(1, "2025-07-15", "09:00:00", "doctor appointment", 0)
    assert item.notified is False
    assert item == AgendaItem(1, "2025-07-15", "09:00:00", "doctor appointment", 0, False)


def test_agenda_item_is_immutable():
    item = AgendaItem(1, "2025-07-15", "09:00:00", "doctor appointment", 0)
    with pytest.raises(AttributeError):
        item.description = "changed"
    assert item.description == "doctor appointment"
    assert item == AgendaItem(1, "2025-07-15", "09:00:00", "doctor appointment", 0)