"""Pure text formatting helpers.

:func:`time_format` implements the small ``yyyy-MM-dd HH:mm:ss`` token
language used across the front end.  Substitution is deliberately
first-match-only: each token family is replaced at most once per call,
so ``"yyyy/yyyy"`` yields ``"2023/yyyy"``.
"""

from __future__ import annotations

import re
from datetime import date as date_type, datetime, time as time_type

from webutil.utils.constants import DEFAULT_TIME_FORMAT

_YEAR_TOKEN = re.compile(r"y+")

# Order matters: families are substituted one after another.
_FIELD_TOKENS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"M+"), "month"),
    (re.compile(r"d+"), "day"),
    (re.compile(r"H+"), "hour"),
    (re.compile(r"m+"), "minute"),
    (re.compile(r"s+"), "second"),
    (re.compile(r"q+"), "quarter"),
    (re.compile(r"S"), "millisecond"),
)


def _field_values(moment: datetime) -> dict[str, int]:
    return {
        "month": moment.month,
        "day": moment.day,
        "hour": moment.hour,
        "minute": moment.minute,
        "second": moment.second,
        "quarter": (moment.month + 2) // 3,
        "millisecond": moment.microsecond // 1000,
    }


def time_format(fmt: str | None = None, date: date_type | None = None) -> str:
    """Render *date* according to the token pattern *fmt*.

    Parameters
    ----------
    fmt:
        Pattern containing ``y+``, ``M+``, ``d+``, ``H+``, ``m+``,
        ``s+``, ``q+`` (quarter) and ``S`` (milliseconds) tokens.  An
        empty or missing pattern means ``"yyyy-MM-dd HH:mm:ss"``.
    date:
        Moment to render; defaults to the current local time.  A plain
        :class:`~datetime.date` is rendered as midnight.

    Returns
    -------
    str
        The pattern with the first occurrence of each token family
        substituted.  Multi-letter field tokens are zero-padded to the
        token length; single letters and ``S`` are not padded.  ``y+``
        keeps the last *n* digits of the year.
    """
    if not fmt:
        fmt = DEFAULT_TIME_FORMAT
    if date is None:
        moment = datetime.now()
    elif isinstance(date, datetime):
        moment = date
    else:
        moment = datetime.combine(date, time_type())

    match = _YEAR_TOKEN.search(fmt)
    if match:
        token = match.group(0)
        year = str(moment.year)
        fmt = fmt.replace(token, year[max(0, 4 - len(token)):], 1)

    values = _field_values(moment)
    for pattern, name in _FIELD_TOKENS:
        match = pattern.search(fmt)
        if not match:
            continue
        token = match.group(0)
        value = values[name]
        rendered = str(value) if len(token) == 1 else str(value).zfill(len(token))
        fmt = fmt.replace(token, rendered, 1)

    return fmt


def uppercase_first(text: str | None) -> str:
    """Return *text* with its first character upper-cased.

    ``None`` and the empty string yield ``""``.
    """
    if not text:
        return ""
    return text[0].upper() + text[1:]
