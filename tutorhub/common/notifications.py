# common/notifications.py
import json
from dataclasses import dataclass

from django.conf import settings
from django.contrib import messages
from django.utils.module_loading import import_string

TOAST_STYLES = {
    'success': ('o-check-circle', 'alert-success', messages.SUCCESS),
    'info': ('o-information-circle', 'alert-info', messages.INFO),
    'warning': ('o-exclamation-triangle', 'alert-warning', messages.WARNING),
    'error': ('o-x-circle', 'alert-error', messages.ERROR),
}

DEFAULT_POSITION = 'toast-bottom toast-end'
DEFAULT_TIMEOUT_MS = 3000

LEVEL_TYPES = {level: toast_type for toast_type, (_, _, level) in TOAST_STYLES.items()}


@dataclass(frozen=True)
class Toast:
    type: str
    title: str
    description: str = ''
    position: str = DEFAULT_POSITION
    icon: str = ''
    css: str = ''
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    action: dict = None
    redirect_to: str = ''

    def __post_init__(self):
        if self.type not in TOAST_STYLES:
            raise ValueError(f"Unknown toast type: {self.type}")
        icon, css, _ = TOAST_STYLES[self.type]
        if not self.icon:
            object.__setattr__(self, 'icon', icon)
        if not self.css:
            object.__setattr__(self, 'css', css)

    @classmethod
    def success(cls, title, description='', **kwargs):
        return cls('success', title, description, **kwargs)

    @classmethod
    def info(cls, title, description='', **kwargs):
        return cls('info', title, description, **kwargs)

    @classmethod
    def warning(cls, title, description='', **kwargs):
        return cls('warning', title, description, **kwargs)

    @classmethod
    def error(cls, title, description='', **kwargs):
        return cls('error', title, description, **kwargs)

    @property
    def level(self):
        return TOAST_STYLES[self.type][2]

    @property
    def text(self):
        return f"{self.title} {self.description}".strip()

    def options(self):
        """Display options carried alongside the text"""
        return {
            'css': self.css,
            'icon': self.icon,
            'position': self.position,
            'timeout_ms': self.timeout_ms,
            'action': self.action,
            'redirect_to': self.redirect_to,
        }


class Notifier:
    def __init__(self, request):
        self.request = request

    def show(self, toast):
        raise NotImplementedError


class MessagesNotifier(Notifier):
    """Deliver toasts through django.contrib.messages"""

    def show(self, toast):
        messages.add_message(self.request, toast.level, toast.text, extra_tags=json.dumps(toast.options()))
        return toast


def get_notifier(request):
    notifier_class = import_string(
        getattr(settings, 'TUTORHUB_NOTIFIER', 'common.notifications.MessagesNotifier')
    )
    return notifier_class(request)


def notify(request, toast):
    return get_notifier(request).show(toast)


def decode_toast(message):
    """Rebuild the display payload of a delivered message"""
    toast_type = LEVEL_TYPES.get(message.level, 'info')
    icon, css, _ = TOAST_STYLES[toast_type]
    try:
        options = json.loads(message.extra_tags) if message.extra_tags else {}
    except ValueError:
        # plain messages.* calls put css classes in extra_tags
        options = {'css': message.extra_tags}
    if not isinstance(options, dict):
        options = {'css': message.extra_tags}
    return {
        'type': toast_type,
        'text': message.message,
        'css': options.get('css') or css,
        'icon': options.get('icon') or icon,
        'position': options.get('position') or DEFAULT_POSITION,
        'timeout_ms': options.get('timeout_ms') or DEFAULT_TIMEOUT_MS,
        'action': options.get('action'),
        'redirect_to': options.get('redirect_to') or '',
    }
