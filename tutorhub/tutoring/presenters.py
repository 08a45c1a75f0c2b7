# tutoring/presenters.py
from common.dates import combine
from common.presenters import badge_class, format_date, format_time, relative_time, status_label

from .models import LearningSession, SessionRequest, is_joinable


def duration_label(hours):
    hours = float(hours or 0)
    value = f"{hours:g}"
    return f"{value} hour" if hours == 1 else f"{value} hours"


def time_range(start, end):
    if not end:
        return format_time(start)
    return f"{format_time(start)} - {format_time(end)}"


def present_session(record, now=None):
    status = record.get('status')
    starts_at = combine(record.get('date'), record.get('time'))
    return {
        **record,
        'badge': badge_class('session', status),
        'status_label': status_label(status),
        'date_display': format_date(record.get('date')),
        'time_display': time_range(record.get('time'), record.get('end_time')),
        'relative': relative_time(starts_at, now=now),
        'duration_label': duration_label(record.get('duration_hours')),
        'is_joinable': bool(record.get('meeting_link')) and is_joinable(starts_at, status, now),
        'can_cancel': status in LearningSession.UPCOMING_STATUSES,
        'can_give_feedback': status == 'completed' and not record.get('feedback_rating'),
        'materials_count': len(record.get('materials') or []),
        'has_recording': bool(record.get('recording')),
    }


def present_session_request(record, now=None):
    status = record.get('status')
    return {
        **record,
        'badge': badge_class('session_request', status),
        'status_label': status_label(status),
        'date_display': format_date(record.get('date')),
        'time_display': format_time(record.get('time')),
        'created_relative': relative_time(record.get('created_at'), now=now),
        'duration_label': duration_label(record.get('duration_hours')),
        'can_edit': status in SessionRequest.EDITABLE_STATUSES,
        'can_cancel': status in SessionRequest.CANCELLABLE_STATUSES,
    }
