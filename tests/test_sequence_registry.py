from datetime import date

from invoice_labeler.numbering.sequence_registry import (
    SequenceRegistry,
    format_sequence_number,
    sequence_key,
)

from conftest import FixedClock


KEY = sequence_key("MPK610", "3/8")


def test_sequence_key_joins_parts():
    assert KEY == "MPK610|3/8"


def test_consecutive_assignments_in_same_year(clock):
    registry = SequenceRegistry(clock=clock)
    values = [registry.assign_next(KEY).value for _ in range(3)]
    assert values == [1, 2, 3]
    assert registry.get(KEY).last_year == 2025


def test_year_change_restarts_numbering():
    clock = FixedClock(date(2024, 12, 31))
    registry = SequenceRegistry(clock=clock)
    registry.observe_historical(KEY, 42, 2024)

    assert registry.assign_next(KEY).value == 43

    clock.today = date(2025, 1, 2)
    number = registry.assign_next(KEY)
    assert (number.value, number.year) == (1, 2025)
    assert registry.assign_next(KEY).value == 2


def test_stale_historical_year_restarts_at_one(clock):
    registry = SequenceRegistry(clock=clock)
    registry.observe_historical(KEY, 42, 2024)
    assert registry.assign_next(KEY).formatted == "001/2025"


def test_historical_watermark_never_regresses(clock):
    registry = SequenceRegistry(clock=clock)
    assert registry.observe_historical(KEY, 5, 2025)
    assert not registry.observe_historical(KEY, 3, 2025)
    assert not registry.observe_historical(KEY, 5, 2025)

    state = registry.get(KEY)
    assert (state.last_value, state.last_year) == (5, 2025)
    assert registry.assign_next(KEY).value == 6


def test_higher_historical_value_replaces_year_too(clock):
    registry = SequenceRegistry(clock=clock)
    registry.observe_historical(KEY, 10, 2025)
    registry.observe_historical(KEY, 12, 2024)
    assert registry.get(KEY).last_year == 2024


def test_keys_are_independent(clock):
    registry = SequenceRegistry(clock=clock)
    other = sequence_key("MPK000", "0/0")
    registry.assign_next(KEY)
    registry.assign_next(KEY)
    assert registry.assign_next(other).value == 1
    assert len(registry) == 2
    assert other in registry


def test_format_sequence_number_pads_to_three_digits():
    assert format_sequence_number(7, 2025) == "007/2025"
    assert format_sequence_number(181, 2025) == "181/2025"
    assert format_sequence_number(1234, 2025) == "1234/2025"
