# accounts/services.py
import logging

from common.exceptions import NotOwnerError
from common.listing import lookup

logger = logging.getLogger(__name__)


def delete_document(user, document):
    """Remove an uploaded profile document and its file"""
    if document.profile.user_id != user.pk:
        logger.warning("User %s is not the owner of document %s", user.pk, document.pk)
        raise NotOwnerError()
    name = document.original_name
    document.file.delete(save=False)
    document.delete()
    logger.info("Document %r deleted by user %s", name, user.pk)


def client_dashboard_stats(enrollments, requests, sessions):
    return {
        'active_enrollments': sum(1 for r in enrollments if lookup(r, 'status') in ('in_progress', 'paused')),
        'completed_courses': sum(1 for r in enrollments if lookup(r, 'status') == 'completed'),
        'pending_requests': sum(1 for r in requests if lookup(r, 'status') in ('pending', 'under_review')),
        'upcoming_sessions': sum(1 for r in sessions if lookup(r, 'status') in ('scheduled', 'confirmed')),
    }
