"""
Timestamp formats.

RLOG_TIME_FORMAT takes either one of the well-known format names below
or a literal strftime pattern such as ``%Y/%m/%d %H:%M:%S``. The names
follow the Go time package layouts, which is what most rlog configs in
the wild already use.
"""

from datetime import datetime
from typing import Callable, Optional

DEFAULT_TIME_FORMAT = 'RFC3339'

TimeFormatter = Callable[[datetime], str]


def _zone(dt: datetime) -> str:
    return dt.strftime('%Z') or _offset(dt)


def _offset(dt: datetime) -> str:
    return dt.strftime('%z') or '+0000'


def _day(dt: datetime) -> str:
    # Space-padded day of month ("Jan  2")
    return f'{dt.day:2d}'


def _rfc3339(dt: datetime, fraction: str = '') -> str:
    zone = dt.strftime('%z')
    if zone in ('', '+0000'):
        zone = 'Z'
    else:
        zone = f'{zone[:3]}:{zone[3:5]}'
    return dt.strftime('%Y-%m-%dT%H:%M:%S') + fraction + zone


def _nano(dt: datetime) -> str:
    digits = f'{dt.microsecond:06d}000'.rstrip('0')
    return f'.{digits}' if digits else ''


NAMED_FORMATS = {
    'ANSIC': lambda dt: f'{dt:%a %b} {_day(dt)} {dt:%H:%M:%S %Y}',
    'UnixDate': lambda dt: f'{dt:%a %b} {_day(dt)} {dt:%H:%M:%S} {_zone(dt)} {dt:%Y}',
    'RubyDate': lambda dt: f'{dt:%a %b %d %H:%M:%S} {_offset(dt)} {dt:%Y}',
    'RFC822': lambda dt: f'{dt:%d %b %y %H:%M} {_zone(dt)}',
    'RFC822Z': lambda dt: f'{dt:%d %b %y %H:%M} {_offset(dt)}',
    'RFC850': lambda dt: f'{dt:%A, %d-%b-%y %H:%M:%S} {_zone(dt)}',
    'RFC1123': lambda dt: f'{dt:%a, %d %b %Y %H:%M:%S} {_zone(dt)}',
    'RFC1123Z': lambda dt: f'{dt:%a, %d %b %Y %H:%M:%S} {_offset(dt)}',
    'RFC3339': _rfc3339,
    'RFC3339Nano': lambda dt: _rfc3339(dt, _nano(dt)),
    'Kitchen': lambda dt: f'{dt.hour % 12 or 12}:{dt:%M%p}',
    'Stamp': lambda dt: f'{dt:%b} {_day(dt)} {dt:%H:%M:%S}',
    'StampMilli': lambda dt: f'{dt:%b} {_day(dt)} {dt:%H:%M:%S}.{dt.microsecond // 1000:03d}',
    'StampMicro': lambda dt: f'{dt:%b} {_day(dt)} {dt:%H:%M:%S}.{dt.microsecond:06d}',
    'StampNano': lambda dt: f'{dt:%b} {_day(dt)} {dt:%H:%M:%S}.{dt.microsecond:06d}000',
}


def resolve_time_format(name: str, no_time: bool = False) -> Optional[TimeFormatter]:
    """Turn a format name or strftime pattern into a formatter.

    Returns None when timestamps are switched off.
    """
    if no_time:
        return None
    name = name.strip() or DEFAULT_TIME_FORMAT
    named = NAMED_FORMATS.get(name)
    if named is not None:
        return named
    return lambda dt: dt.strftime(name)


def now() -> datetime:
    """Current local time with its UTC offset attached."""
    return datetime.now().astimezone()
