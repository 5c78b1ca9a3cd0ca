"""Duration formatting for report output.

Durations are carried as integer nanoseconds. ``format_duration`` prints
them the way Go's ``time.Duration`` does (``2h0m0s``), which is what the
text and HTML reports have always shown. ``format_duration_csv`` produces
``H:M:S`` that spreadsheets accept as a duration.
"""

from datetime import timedelta

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR


def to_nanoseconds(delta: timedelta) -> int:
    return (delta // timedelta(microseconds=1)) * MICROSECOND


def _fraction(value: int, precision: int) -> str:
    unit = 10 ** precision
    whole, frac = divmod(value, unit)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(ns: int) -> str:
    """Format nanoseconds as ``72h3m0.5s``, ``1.5ms`` or ``0s``."""
    if ns == 0:
        return "0s"

    sign = "-" if ns < 0 else ""
    u = abs(ns)

    if u < MICROSECOND:
        return f"{sign}{u}ns"
    if u < MILLISECOND:
        return f"{sign}{_fraction(u, 3)}µs"
    if u < SECOND:
        return f"{sign}{_fraction(u, 6)}ms"

    minutes, rem = divmod(u, MINUTE)
    out = f"{_fraction(rem, 9)}s"
    if minutes:
        hours, minutes = divmod(minutes, 60)
        out = f"{minutes}m{out}"
        if hours:
            out = f"{hours}h{out}"
    return sign + out


def format_duration_csv(ns: int) -> str:
    """Format nanoseconds as ``H:M:S``.

    Weeks and days are folded into the hour count. Anything past 52 weeks
    is dropped.
    """
    sign = -1 if ns < 0 else 1
    u = abs(ns)

    seconds = u // SECOND % 60
    minutes = u // MINUTE % 60
    hours = u // HOUR % 24

    total_days = u // DAY
    days = total_days % 365 % 7
    weeks = total_days // 7 % 52

    hours = hours + days * 24 + weeks * 7 * 24
    return f"{sign * hours}:{sign * minutes}:{sign * seconds}"
