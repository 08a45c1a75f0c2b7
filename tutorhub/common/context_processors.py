# common/context_processors.py
from django.contrib.messages import get_messages

from .notifications import decode_toast


def toasts(request):
    return {'toasts': [decode_toast(message) for message in get_messages(request)]}
