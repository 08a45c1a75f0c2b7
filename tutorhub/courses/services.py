# courses/services.py
import logging

from django.db import transaction
from django.utils import timezone

from common.exceptions import InvalidTransitionError, NotOwnerError
from common.listing import lookup

from .models import Enrollment, WishlistItem

logger = logging.getLogger(__name__)


def ensure_course_owner(course, user):
    if course.teacher.user_id != user.pk:
        logger.warning("User %s is not the owner of course %s", user.pk, course.pk)
        raise NotOwnerError()


def ensure_enrollment_owner(enrollment, user):
    if enrollment.user_id != user.pk:
        logger.warning("User %s is not the owner of enrollment %s", user.pk, enrollment.pk)
        raise NotOwnerError()


# Client actions
def enroll(user, course):
    """Enroll ``user`` in ``course``; returns (enrollment, created)"""
    with transaction.atomic():
        enrollment, created = Enrollment.objects.get_or_create(
            user=user,
            course=course,
            defaults={'status': 'in_progress', 'progress': 0, 'last_accessed_at': timezone.now()},
        )
        if created:
            WishlistItem.objects.filter(user=user, course=course).delete()
    if created:
        logger.info("User %s enrolled in course %s", user.pk, course.pk)
    return enrollment, created


def toggle_wishlist(user, course):
    """Add or remove ``course``; returns True when it is now wishlisted"""
    deleted, _ = WishlistItem.objects.filter(user=user, course=course).delete()
    if deleted:
        return False
    WishlistItem.objects.create(user=user, course=course)
    return True


def remove_from_wishlist(user, course):
    deleted, _ = WishlistItem.objects.filter(user=user, course=course).delete()
    return bool(deleted)


def continue_learning(user, enrollment):
    ensure_enrollment_owner(enrollment, user)
    if enrollment.status == 'archived':
        raise InvalidTransitionError("Archived courses can't be continued.")
    if enrollment.status == 'paused':
        enrollment.status = 'in_progress'
    enrollment.last_accessed_at = timezone.now()
    enrollment.save(update_fields=['status', 'last_accessed_at'])
    return enrollment


def certificate_for(user, enrollment):
    ensure_enrollment_owner(enrollment, user)
    if enrollment.status != 'completed' or not enrollment.has_certificate:
        raise InvalidTransitionError("No certificate is available for this enrollment.")
    return enrollment


# Teacher actions
def delete_course(user, course):
    ensure_course_owner(course, user)
    name = course.name
    course.delete()
    logger.info("Course %r deleted by user %s", name, user.pk)


def toggle_course_status(user, course):
    ensure_course_owner(course, user)
    course.status = 'inactive' if course.status == 'active' else 'active'
    course.save(update_fields=['status', 'updated_at'])
    logger.info("Course %s is now %s", course.pk, course.status)
    return course


# Stats
def enrollment_stats(records):
    total = len(records)
    progress = [lookup(r, 'progress') or 0 for r in records]
    return {
        'total': total,
        'active': sum(1 for r in records if lookup(r, 'status') == 'in_progress'),
        'completed': sum(1 for r in records if lookup(r, 'status') == 'completed'),
        'average_progress': round(sum(progress) / total) if total else 0,
        'certificates': sum(1 for r in records if lookup(r, 'has_certificate')),
    }


def top_enrollments(records, limit=3):
    in_progress = [r for r in records if lookup(r, 'status') == 'in_progress']
    return sorted(in_progress, key=lambda r: lookup(r, 'progress') or 0, reverse=True)[:limit]


def teacher_course_stats(records):
    return {
        'total': len(records),
        'active': sum(1 for r in records if lookup(r, 'status') == 'active'),
        'draft': sum(1 for r in records if lookup(r, 'status') == 'draft'),
        'inactive': sum(1 for r in records if lookup(r, 'status') == 'inactive'),
        'total_students': sum(lookup(r, 'students_count') or 0 for r in records),
    }
