# common/presenters.py
from datetime import timedelta

from django.utils import timezone
from django.utils.dateformat import format as dateformat, time_format
from django.utils.timesince import timesince, timeuntil

from .dates import to_date, to_datetime, to_time

DATE_FORMAT = 'M d, Y'
TIME_FORMAT = 'h:i A'

BADGE_CLASSES = {
    'course': {
        'active': 'badge-success',
        'draft': 'badge-warning',
        'inactive': 'badge-error',
    },
    'enrollment': {
        'in_progress': 'badge-info',
        'completed': 'badge-success',
        'paused': 'badge-warning',
    },
    'session': {
        'confirmed': 'badge-success',
        'scheduled': 'badge-info',
        'completed': 'badge-success',
    },
    'session_request': {
        'approved': 'badge-success',
        'pending': 'badge-info',
        'under_review': 'badge-warning',
        'rejected': 'badge-error',
    },
    'profile': {
        'approved': 'badge-success',
        'pending': 'badge-warning',
        'rejected': 'badge-error',
    },
}

DEFAULT_BADGES = {
    'course': 'badge-info',
    'enrollment': 'badge-neutral',
    'session': 'badge-warning',
    'session_request': 'badge-neutral',
    'profile': 'badge-ghost',
}


def format_date(value):
    day = to_date(value)
    if day is None:
        return ''
    return dateformat(day, DATE_FORMAT)


def format_time(value):
    at = to_time(value)
    if at is None:
        return ''
    return time_format(at, TIME_FORMAT)


def relative_time(value, now=None):
    moment = to_datetime(value)
    if moment is None:
        return ''
    now = now or timezone.now()
    if abs(now - moment) < timedelta(minutes=1):
        return 'just now'
    if moment <= now:
        return f"{timesince(moment, now, depth=1)} ago".replace('\xa0', ' ')
    return f"in {timeuntil(moment, now, depth=1)}".replace('\xa0', ' ')


def percentage(part, total=100):
    if not total:
        return 0
    value = round(float(part or 0) / float(total) * 100)
    return max(0, min(100, value))


def badge_class(kind, status):
    return BADGE_CLASSES.get(kind, {}).get(status, DEFAULT_BADGES.get(kind, 'badge-neutral'))


def status_label(status):
    return str(status or '').replace('_', ' ').title()


def format_price(value):
    if value is None or value == '':
        return ''
    return f"${float(value):,.2f}"
