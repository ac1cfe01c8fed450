"""Utility functions for time handling.

Calendar days used for daily rotation are local ISO dates (``YYYY-MM-DD``)
with no time component, so string equality means "same day".
"""

from __future__ import annotations

from datetime import date
from typing import Callable


def day_string(today: Callable[[], date] = date.today) -> str:
    """Calendar-day key used to compare rotation dates."""
    return today().isoformat()
