# tutoring/repositories.py
from django.db.models import CharField, Value
from django.db.models.functions import Concat

from common.repositories import FixtureRepository, QuerySetRepository, use_demo_data

from . import demo
from .listings import SESSION_LISTING, SESSION_REQUEST_LISTING, TEACHER_REQUEST_LISTING
from .models import LearningSession, SessionRequest

SESSION_LOOKUPS = {'course_title': 'course__name'}
SESSION_REQUEST_LOOKUPS = {'course_title': 'course__name'}
TEACHER_REQUEST_LOOKUPS = {'client_email': 'client__email'}

DEMO_CLIENT = {'client_id': 1, 'client_name': 'Demo Client', 'client_email': 'client@example.com'}


def full_name(prefix):
    return Concat(f'{prefix}__first_name', Value(' '), f'{prefix}__last_name', output_field=CharField())


def headline_of(user):
    profile = getattr(user, 'teacher_profile', None)
    return profile.headline if profile is not None else ''


# Records
def session_record(session):
    return {
        'id': session.pk,
        'title': session.title,
        'course_id': session.course_id,
        'course_title': session.course.name if session.course else '',
        'teacher_id': session.teacher_id,
        'teacher_name': session.teacher.display_name,
        'teacher_title': headline_of(session.teacher),
        'date': session.date,
        'time': session.time,
        'end_time': session.end_time,
        'duration_hours': float(session.duration_hours),
        'status': session.status,
        'location': session.location,
        'meeting_link': session.meeting_link,
        'notes': session.notes,
        'materials': list(session.materials or []),
        'recording': session.recording,
        'feedback_rating': session.feedback_rating,
    }


def session_request_record(session_request):
    return {
        'id': session_request.pk,
        'title': session_request.title,
        'course_id': session_request.course_id,
        'course_title': session_request.course.name if session_request.course else '',
        'teacher_id': session_request.teacher_id,
        'teacher_name': session_request.teacher.display_name,
        'client_id': session_request.client_id,
        'client_name': session_request.client.display_name,
        'client_email': session_request.client.email,
        'date': session_request.date,
        'time': session_request.time,
        'duration_hours': float(session_request.duration_hours),
        'notes': session_request.notes,
        'preferred_contact': session_request.preferred_contact,
        'status': session_request.status,
        'created_at': session_request.created_at,
        'admin_notes': session_request.admin_notes,
        'rejection_reason': session_request.rejection_reason,
    }


# Querysets
def session_queryset(user):
    return (
        LearningSession.objects.filter(client=user)
        .select_related('course', 'teacher__teacher_profile')
        .annotate(teacher_name=full_name('teacher'))
    )


def session_request_queryset(user):
    return (
        SessionRequest.objects.filter(client=user)
        .select_related('course', 'teacher', 'client')
        .annotate(teacher_name=full_name('teacher'))
    )


def teacher_request_queryset(user):
    return (
        SessionRequest.objects.filter(teacher=user)
        .select_related('course', 'teacher', 'client')
        .annotate(client_name=full_name('client'))
    )


# Factories
def session_repository(user):
    if use_demo_data():
        return FixtureRepository(demo.sessions(), SESSION_LISTING, name='Session')
    return QuerySetRepository(session_queryset(user), SESSION_LISTING, SESSION_LOOKUPS, to_record=session_record)


def session_request_repository(user):
    if use_demo_data():
        return FixtureRepository(demo.session_requests(), SESSION_REQUEST_LISTING, name='Session request')
    return QuerySetRepository(
        session_request_queryset(user), SESSION_REQUEST_LISTING, SESSION_REQUEST_LOOKUPS,
        to_record=session_request_record,
    )


def teacher_request_repository(user):
    if use_demo_data():
        records = [{**record, **DEMO_CLIENT} for record in demo.session_requests()]
        return FixtureRepository(records, TEACHER_REQUEST_LISTING, name='Session request')
    return QuerySetRepository(
        teacher_request_queryset(user), TEACHER_REQUEST_LISTING, TEACHER_REQUEST_LOOKUPS,
        to_record=session_request_record,
    )
