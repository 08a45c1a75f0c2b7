# tutoring/services.py
import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from common.dates import combine
from common.exceptions import InvalidTransitionError, NotOwnerError
from common.listing import lookup

from .models import LearningSession, SessionRequest

logger = logging.getLogger(__name__)


def ensure_client(obj, user):
    if obj.client_id != user.pk:
        logger.warning("User %s is not the client of %s %s", user.pk, obj._meta.model_name, obj.pk)
        raise NotOwnerError()


def ensure_teacher(obj, user):
    if obj.teacher_id != user.pk:
        logger.warning("User %s is not the teacher of %s %s", user.pk, obj._meta.model_name, obj.pk)
        raise NotOwnerError()


# Session requests
def submit_request(user, cleaned_data):
    session_request = SessionRequest.objects.create(client=user, status='pending', **cleaned_data)
    logger.info("Session request %s submitted by user %s", session_request.pk, user.pk)
    return session_request


def ensure_editable(user, session_request):
    ensure_client(session_request, user)
    if not session_request.can_edit:
        raise InvalidTransitionError("Only pending requests can be edited.")


def update_request(user, session_request, cleaned_data):
    ensure_editable(user, session_request)
    for field, value in cleaned_data.items():
        setattr(session_request, field, value)
    session_request.save()
    return session_request


def cancel_request(user, session_request):
    ensure_client(session_request, user)
    if not session_request.can_cancel:
        raise InvalidTransitionError("Only pending or under review requests can be cancelled.")
    session_request.status = 'cancelled'
    session_request.save(update_fields=['status', 'updated_at'])
    logger.info("Session request %s cancelled by user %s", session_request.pk, user.pk)
    return session_request


def approve_request(user, session_request):
    """Approve a pending request and schedule the matching session"""
    ensure_teacher(session_request, user)
    if session_request.status not in SessionRequest.CANCELLABLE_STATUSES:
        raise InvalidTransitionError("Only pending requests can be approved.")

    starts_at = combine(session_request.date, session_request.time)
    ends_at = starts_at + timedelta(hours=float(session_request.duration_hours))
    with transaction.atomic():
        session_request.status = 'approved'
        session_request.save(update_fields=['status', 'updated_at'])
        session = LearningSession.objects.create(
            client=session_request.client,
            teacher=session_request.teacher,
            course=session_request.course,
            request=session_request,
            title=session_request.title,
            date=session_request.date,
            time=session_request.time,
            end_time=timezone.localtime(ends_at).time(),
            duration_hours=session_request.duration_hours,
            notes=session_request.notes,
            status='scheduled',
        )
    logger.info("Session request %s approved, session %s scheduled", session_request.pk, session.pk)
    return session


def reject_request(user, session_request, reason):
    ensure_teacher(session_request, user)
    if session_request.status not in SessionRequest.CANCELLABLE_STATUSES:
        raise InvalidTransitionError("Only pending requests can be rejected.")
    session_request.status = 'rejected'
    session_request.rejection_reason = reason
    session_request.save(update_fields=['status', 'rejection_reason', 'updated_at'])
    logger.info("Session request %s rejected by user %s", session_request.pk, user.pk)
    return session_request


# Sessions
def cancel_session(user, session):
    ensure_client(session, user)
    if not session.is_upcoming:
        raise InvalidTransitionError("Only upcoming sessions can be cancelled.")
    session.status = 'cancelled'
    session.save(update_fields=['status', 'updated_at'])
    logger.info("Session %s cancelled by user %s", session.pk, user.pk)
    return session


def record_feedback(user, session, rating):
    ensure_client(session, user)
    if session.status != 'completed':
        raise InvalidTransitionError("Feedback can only be given for completed sessions.")
    session.feedback_rating = rating
    session.save(update_fields=['feedback_rating', 'updated_at'])
    return session


def join_link(user, session, now=None):
    ensure_client(session, user)
    if not session.meeting_link or not session.is_joinable(now):
        raise InvalidTransitionError("This session can't be joined right now.")
    return session.meeting_link


# Stats
def session_stats(records):
    return {
        'total': len(records),
        'upcoming': sum(1 for r in records if lookup(r, 'status') in LearningSession.UPCOMING_STATUSES),
        'completed': sum(1 for r in records if lookup(r, 'status') == 'completed'),
        'cancelled': sum(1 for r in records if lookup(r, 'status') == 'cancelled'),
        'total_hours': sum(
            float(lookup(r, 'duration_hours') or 0) for r in records if lookup(r, 'status') == 'completed'
        ),
    }


def request_stats(records):
    return {
        'total': len(records),
        'pending': sum(1 for r in records if lookup(r, 'status') in SessionRequest.CANCELLABLE_STATUSES),
        'approved': sum(1 for r in records if lookup(r, 'status') == 'approved'),
        'rejected': sum(1 for r in records if lookup(r, 'status') == 'rejected'),
        'cancelled': sum(1 for r in records if lookup(r, 'status') == 'cancelled'),
    }


def upcoming_sessions(records, limit=3, now=None):
    """The next ``limit`` upcoming sessions, soonest first"""
    now = now or timezone.now()
    upcoming = []
    for record in records:
        starts_at = combine(lookup(record, 'date'), lookup(record, 'time'))
        if lookup(record, 'status') in LearningSession.UPCOMING_STATUSES and starts_at and starts_at >= now:
            upcoming.append((starts_at, record))
    upcoming.sort(key=lambda pair: pair[0])
    return [record for _, record in upcoming[:limit]]
