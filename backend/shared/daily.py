"""Civil day boundary shared by seeding, tickets and leaderboards.

"Daily" means a calendar day in one fixed time zone, not UTC, so every
player shares the same cutover.
"""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Europe/Brussels"
DATE_FORMAT = "%Y-%m-%d"


def civil_date(now: datetime | None = None, timezone: str = DEFAULT_TIMEZONE) -> str:
    """Return the ISO date (YYYY-MM-DD) of `now` in the given time zone."""
    if now is None:
        now = datetime.now(tz=UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(ZoneInfo(timezone)).strftime(DATE_FORMAT)


class CivilClock:
    """Callable returning today's civil date in a fixed zone."""

    def __init__(self, timezone: str = DEFAULT_TIMEZONE) -> None:
        # fail at startup on an unknown zone rather than on the first request
        ZoneInfo(timezone)
        self._timezone = timezone

    @property
    def timezone(self) -> str:
        return self._timezone

    def __call__(self) -> str:
        return civil_date(timezone=self._timezone)
