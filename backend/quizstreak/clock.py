from __future__ import annotations
from datetime import datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from .settings import settings


def utcnow() -> datetime:
	# Naive UTC, matching what the DateTime columns store
	return datetime.now(timezone.utc).replace(tzinfo=None)


def day_bounds(now: datetime | None = None, tz_name: str | None = None) -> tuple[datetime, datetime]:
	"""Return the naive-UTC [start, end) of the calendar day containing ``now``.

	The day is evaluated in ``tz_name`` (``QUIZ_TIMEZONE`` by default), so a
	classroom in UTC-5 rolls over at local midnight rather than at 19:00.
	"""
	tz = ZoneInfo(tz_name or settings.quiz_timezone)
	now = now or utcnow()
	local = now.replace(tzinfo=timezone.utc).astimezone(tz)
	start_local = datetime.combine(local.date(), time.min, tzinfo=tz)
	start = start_local.astimezone(timezone.utc).replace(tzinfo=None)
	end = (start_local + timedelta(days=1)).astimezone(timezone.utc).replace(tzinfo=None)
	return start, end


def is_same_day(moment: datetime | None, now: datetime | None = None, tz_name: str | None = None) -> bool:
	if moment is None:
		return False
	start, end = day_bounds(now, tz_name)
	return start <= moment < end
