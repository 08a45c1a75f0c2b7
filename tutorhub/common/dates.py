# common/dates.py
import calendar
from datetime import date, datetime, time, timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime, parse_time


def to_date(value):
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    parsed = parse_datetime(text)
    if parsed is not None:
        return to_date(parsed)
    return parse_date(text[:10])


def to_time(value):
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    return parse_time(str(value).strip())


def to_datetime(value):
    """Coerce a date, datetime or ISO string into an aware datetime"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime.combine(value, time.min)
    else:
        text = str(value).strip()
        result = parse_datetime(text)
        if result is None:
            parsed = parse_date(text[:10])
            if parsed is None:
                return None
            result = datetime.combine(parsed, time.min)
    if timezone.is_naive(result):
        result = timezone.make_aware(result)
    return result


def combine(day, at):
    """Aware datetime for a calendar day and a wall clock time"""
    day, at = to_date(day), to_time(at) or time.min
    if day is None:
        return None
    return timezone.make_aware(datetime.combine(day, at))


def week_bounds(today):
    # Monday to Sunday
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def month_bounds(today):
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def parse_date_range(value):
    """Parse "YYYY-MM-DD to YYYY-MM-DD"; a single date means that one day"""
    if not value:
        return None
    parts = [part.strip() for part in str(value).split(' to ')]
    try:
        start = parse_date(parts[0]) if parts[0] else None
        end = parse_date(parts[1]) if len(parts) > 1 and parts[1] else start
    except ValueError:
        return None
    if start is None or end is None:
        return None
    if end < start:
        start, end = end, start
    return start, end
