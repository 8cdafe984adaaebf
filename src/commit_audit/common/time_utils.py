"""Timestamp helpers shared by the adapters and the fetch window."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from dateutil import parser as dtparse
from dateutil.relativedelta import relativedelta, weekday, MO, TU, WE, TH, FR, SA, SU

_WEEKDAYS: dict[str, weekday] = {
    "monday": MO, "tuesday": TU, "wednesday": WE, "thursday": TH,
    "friday": FR, "saturday": SA, "sunday": SU,
}

_UNITS = ("second", "minute", "hour", "day", "week", "month", "year")

_OFFSET_RE = re.compile(
    rf"^(?P<amount>[+-]?\d+)\s*(?P<unit>{'|'.join(_UNITS)})s?(?P<ago>\s+ago)?$"
)
_WEEKDAY_RE = re.compile(rf"^(?P<which>last|next|this)\s+(?P<day>{'|'.join(_WEEKDAYS)})$")


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: str) -> datetime:
    # GitLab uses e.g. 2015-08-21T10:16:59-04:00 or 2024-01-01T00:00:00.000Z
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return ensure_aware(datetime.fromisoformat(value))


def parse_human_time(text: str, now: datetime | None = None) -> datetime:
    """Turn a human-readable date into an absolute, timezone-aware timestamp.

    Besides anything ``dateutil`` understands (``"2024-09-01"``,
    ``"Sep 1 2024 10:00"``), relative phrases are accepted:
    ``now``, ``today``, ``yesterday``, ``tomorrow``, ``"-1 week"``,
    ``"3 days ago"``, ``"+2 hours"``, ``"last monday"``, ``"next friday"``.
    Relative phrases are resolved against *now* (UTC when omitted); day
    words land on midnight.  Raises ``ValueError`` when nothing matches.
    """
    now = ensure_aware(now or datetime.now(timezone.utc))
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    phrase = " ".join(text.lower().split())

    fixed = {
        "now": now,
        "today": midnight,
        "yesterday": midnight - timedelta(days=1),
        "tomorrow": midnight + timedelta(days=1),
    }
    if phrase in fixed:
        return fixed[phrase]

    match = _OFFSET_RE.match(phrase)
    if match:
        amount = int(match["amount"])
        if match["ago"]:
            amount = -amount
        return now + relativedelta(**{f"{match['unit']}s": amount})

    match = _WEEKDAY_RE.match(phrase)
    if match:
        day = _WEEKDAYS[match["day"]]
        if match["which"] == "last":
            return midnight - timedelta(days=1) + relativedelta(weekday=day(-1))
        if match["which"] == "next":
            return midnight + timedelta(days=1) + relativedelta(weekday=day(+1))
        return midnight + relativedelta(weekday=day(+1))

    try:
        return ensure_aware(dtparse.parse(text))
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Unrecognised date: '{text}'") from exc
