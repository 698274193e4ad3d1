from datetime import date, datetime, time
from types import SimpleNamespace

import pytest
import pytz

from backend.core import config
from backend.scheduling import availability
from backend.scheduling.availability import coerce_duration, get_availability, parse_slot_date
from backend.scheduling.errors import InvalidArgument, NotFound
from backend.scheduling.models import BookedInterval

KOLKATA = pytz.timezone('Asia/Kolkata')
DAY = date(2026, 1, 5)
BEFORE_DAY = KOLKATA.localize(datetime(2026, 1, 1, 12, 0))


def _doctor(status: str = 'Available Today', hours: str = '{"start": "09:00", "end": "17:00"}') -> SimpleNamespace:
    return SimpleNamespace(id=3, working_hours=hours, availability_status=status)


def test_get_availability_lists_hourly_slots_for_free_future_day() -> None:
    result = get_availability(_doctor(), DAY, 60, BEFORE_DAY, [], KOLKATA)

    assert result.slot_labels() == ['09:00', '10:00', '11:00', '12:00', '13:00', '14:00', '15:00', '16:00']
    assert result.working_hours.to_dict() == {'start': '09:00', 'end': '17:00'}
    assert result.message is None


def test_get_availability_excludes_booked_interval() -> None:
    booked = [BookedInterval(start=datetime(2026, 1, 5, 11, 0), duration_minutes=60)]

    result = get_availability(_doctor(), DAY, 60, BEFORE_DAY, booked, KOLKATA)

    assert '11:00' not in result.slot_labels()
    assert '10:30' not in result.slot_labels()
    assert len(result.slots) == 7


@pytest.mark.parametrize(
    ('status', 'message'),
    [
        ('On Leave', 'Doctor is on leave today'),
        ('Fully Booked', 'Doctor is fully booked today'),
    ],
)
def test_get_availability_short_circuits_on_status(status: str, message: str, monkeypatch: pytest.MonkeyPatch) -> None:
    def _unexpected(*args, **kwargs):
        raise AssertionError('slot generation must not run for this status')

    monkeypatch.setattr(availability, 'generate_slots', _unexpected)
    monkeypatch.setattr(availability, 'filter_available', _unexpected)

    result = get_availability(_doctor(status=status), DAY, 30, BEFORE_DAY, [], KOLKATA)

    assert result.slots == []
    assert result.message == message
    assert result.working_hours.to_dict() == {'start': '09:00', 'end': '17:00'}


def test_get_availability_status_match_is_case_sensitive() -> None:
    result = get_availability(_doctor(status='on leave'), DAY, 60, BEFORE_DAY, [], KOLKATA)

    assert len(result.slots) == 8
    assert result.message is None


def test_get_availability_is_repeatable() -> None:
    booked = [BookedInterval(start=datetime(2026, 1, 5, 13, 0), duration_minutes=45)]

    first = get_availability(_doctor(), DAY, 30, BEFORE_DAY, booked, KOLKATA)
    second = get_availability(_doctor(), DAY, 30, BEFORE_DAY, booked, KOLKATA)

    assert first == second


def test_get_availability_requires_doctor() -> None:
    with pytest.raises(NotFound) as exception_info:
        get_availability(None, DAY, 30, BEFORE_DAY, [], KOLKATA)

    assert exception_info.value.detail == 'Doctor not found'
    assert exception_info.value.status_code == 404


def test_get_availability_requires_date() -> None:
    with pytest.raises(InvalidArgument) as exception_info:
        get_availability(_doctor(), None, 30, BEFORE_DAY, [], KOLKATA)

    assert exception_info.value.detail == 'Date is required'
    assert exception_info.value.status_code == 400


def test_get_availability_accepts_parsed_working_hours_dict() -> None:
    doctor = SimpleNamespace(working_hours={'start': '10:00', 'end': '12:00'}, availability_status='Available Today')

    result = get_availability(doctor, DAY, 60, BEFORE_DAY, [], KOLKATA)

    assert result.slots == [time(10, 0), time(11, 0)]


@pytest.mark.parametrize(('raw', 'expected'), [('2026-01-05', DAY), (' 2026-01-05 ', DAY), (DAY, DAY)])
def test_parse_slot_date_accepts_iso_dates(raw, expected: date) -> None:
    assert parse_slot_date(raw) == expected


@pytest.mark.parametrize(
    ('raw', 'detail'),
    [
        (None, 'Date is required'),
        ('', 'Date is required'),
        ('05/01/2026', 'Date must be in YYYY-MM-DD format'),
        ('2026-02-30', 'Date must be in YYYY-MM-DD format'),
    ],
)
def test_parse_slot_date_rejects_missing_or_malformed(raw, detail: str) -> None:
    with pytest.raises(InvalidArgument) as exception_info:
        parse_slot_date(raw)

    assert exception_info.value.detail == detail


@pytest.mark.parametrize(('raw', 'expected'), [(None, 30), ('', 30), ('45', 45), (' 60 ', 60), (15, 15)])
def test_coerce_duration_defaults_and_parses(raw, expected: int) -> None:
    assert coerce_duration(raw) == expected


def test_coerce_duration_uses_supplied_default() -> None:
    assert coerce_duration(None, default=20) == 20


@pytest.mark.parametrize('raw', ['0', '-30', 'abc', '30.5', 0, -15, True])
def test_coerce_duration_rejects_non_positive_or_non_numeric(raw) -> None:
    with pytest.raises(InvalidArgument) as exception_info:
        coerce_duration(raw)

    assert exception_info.value.detail == 'Duration must be a positive integer'


@pytest.mark.parametrize('raw', ['1441', '10000000000', 10**10])
def test_coerce_duration_rejects_durations_longer_than_a_day(raw) -> None:
    with pytest.raises(InvalidArgument) as exception_info:
        coerce_duration(raw)

    assert exception_info.value.detail == 'Duration must be at most 1440 minutes'


def test_coerce_duration_accepts_full_day() -> None:
    assert coerce_duration('1440') == 1440


def test_coerce_duration_default_follows_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'DEFAULT_SLOT_DURATION_MINUTES', 45)

    assert coerce_duration(None) == 45
    assert coerce_duration('') == 45


def test_get_availability_rejects_oversized_duration() -> None:
    with pytest.raises(InvalidArgument) as exception_info:
        get_availability(_doctor(), DAY, 10**10, BEFORE_DAY, [], KOLKATA)

    assert exception_info.value.status_code == 400
