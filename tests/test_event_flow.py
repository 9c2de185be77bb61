import pytest

from asistencia.fastapi.models.attendance import AttendanceEventType as E
from asistencia.fastapi.services.event_flow import (
    button_states,
    last_event_for_worker,
    last_record_for_worker,
    next_valid_events,
    next_valid_events_for,
)
from tests.conftest import make_record

TODAY = "2024-01-15"


@pytest.mark.parametrize("last_event, expected", [
    (None, {E.ENTRADA}),
    (E.ENTRADA, {E.REFRIGERIO, E.SALIDA}),
    (E.REFRIGERIO, {E.TERMINO_REFRIGERIO}),
    (E.TERMINO_REFRIGERIO, {E.SALIDA}),
    (E.SALIDA, {E.ENTRADA}),
])
def test_next_valid_events(last_event, expected):
    assert set(next_valid_events(last_event)) == expected


def test_plain_strings_behave_like_enum_values():
    assert set(next_valid_events("ENTRADA")) == {E.REFRIGERIO, E.SALIDA}


def test_unknown_event_starts_the_day():
    assert set(next_valid_events("SIESTA")) == {E.ENTRADA}


@pytest.mark.parametrize("event", list(E))
def test_record_from_another_day_resets(event):
    yesterday = make_record("w1", event, "2024-01-14T10:00:00-05:00")
    assert set(next_valid_events_for(yesterday, TODAY)) == {E.ENTRADA}


def test_record_from_today_drives_the_machine():
    record = make_record("w1", E.REFRIGERIO, "2024-01-15T12:00:00-05:00")
    assert set(next_valid_events_for(record, TODAY)) == {E.TERMINO_REFRIGERIO}


def test_button_states_after_entry():
    record = make_record("w1", E.ENTRADA, "2024-01-15T08:00:00-05:00")
    assert button_states(record, TODAY) == {
        "ENTRADA": False,
        "REFRIGERIO": True,
        "TERMINO_REFRIGERIO": False,
        "SALIDA": True,
    }


def test_last_record_uses_instant_not_input_order():
    records = [
        make_record("w1", E.REFRIGERIO, "2024-01-15T12:00:00-05:00"),
        make_record("w1", E.ENTRADA, "2024-01-15T08:00:00-05:00"),
        make_record("w2", E.SALIDA, "2024-01-15T18:00:00-05:00"),
    ]
    assert last_record_for_worker(records, "w1", TODAY).event_type == E.REFRIGERIO
    assert last_event_for_worker(records, "w1", TODAY) == E.REFRIGERIO
    assert last_event_for_worker(records, "w3", TODAY) is None


def test_equal_timestamps_take_the_later_record():
    records = [
        make_record("w1", E.ENTRADA, "2024-01-15T08:00:00-05:00", record_id="a"),
        make_record("w1", E.REFRIGERIO, "2024-01-15T08:00:00-05:00", record_id="b"),
    ]
    assert last_record_for_worker(records, "w1", TODAY).id == "b"
