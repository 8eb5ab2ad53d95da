"""
Sequence Registry

Keeps one counter per (cost center, group) pair. Counters are seeded
from historical labels found in the guidelines and advanced on every
processed invoice; they restart at 1 when the calendar year changes.
"""

import logging
from datetime import date
from typing import Callable, Dict, Optional

from ..utils.models import AssignedNumber, SequenceState

logger = logging.getLogger(__name__)


def sequence_key(cost_center: str, group: str) -> str:
    """Counter key for a cost center and group, e.g. ``MPK610|3/8``."""
    return f"{cost_center}|{group}"


def format_sequence_number(value: int, year: int) -> str:
    """Zero-pad the value to three digits and append the year: 007/2025."""
    return AssignedNumber(value=value, year=year).formatted


class SequenceRegistry:
    """
    In-memory counter store for one labeling session.

    Args:
        clock: Returns today's date; the current year is read from it on
            every assignment
    """

    def __init__(self, clock: Callable[[], date] = date.today):
        self._clock = clock
        self._states: Dict[str, SequenceState] = {}

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, key: str) -> bool:
        return key in self._states

    def get(self, key: str) -> Optional[SequenceState]:
        return self._states.get(key)

    def observe_historical(self, key: str, value: int, year: int) -> bool:
        """
        Record a number already issued before this session.

        The stored value only ever moves up: a lower or equal value
        leaves the entry untouched, whatever its year.

        Returns:
            True if the entry was created or raised
        """
        current = self._states.get(key)
        if current is not None and value <= current.last_value:
            return False
        self._states[key] = SequenceState(last_value=value, last_year=year)
        logger.debug(f"Watermark for {key} set to {value}/{year}")
        return True

    def assign_next(self, key: str) -> AssignedNumber:
        """
        Issue the next number for a key in the current year.

        The registry is advanced before returning; a discarded result
        leaves a gap in the numbering.
        """
        year = self._clock().year
        state = self._states.get(key)

        if state is None:
            state = SequenceState(last_value=1, last_year=year)
            self._states[key] = state
        elif state.last_year == year:
            state.last_value += 1
        else:
            logger.info(f"Year changed for {key} ({state.last_year} -> {year}), restarting at 1")
            state.last_value = 1
            state.last_year = year

        return AssignedNumber(value=state.last_value, year=state.last_year)
