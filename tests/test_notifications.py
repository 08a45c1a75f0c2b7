"""Toast construction and delivery."""
import pytest
from django.contrib import messages
from django.contrib.messages import constants
from django.contrib.messages.storage.cookie import CookieStorage

from common.context_processors import toasts
from common.exceptions import InvalidTransitionError, NotOwnerError
from common.notifications import Notifier, Toast, decode_toast, notify
from common.views import show_domain_error

delivered = []


class RecordingNotifier(Notifier):
    def show(self, toast):
        delivered.append(toast)
        return toast


@pytest.fixture
def request_with_messages(rf):
    request = rf.get('/')
    request._messages = CookieStorage(request)
    return request


def test_toast_styles():
    toast = Toast.success('Course created', 'Your course has been created successfully.')

    assert toast.css == 'alert-success'
    assert toast.icon == 'o-check-circle'
    assert toast.level == constants.SUCCESS
    assert toast.timeout_ms == 3000
    assert toast.text == 'Course created Your course has been created successfully.'
    assert Toast.error('Nope', icon='o-custom').icon == 'o-custom'


def test_unknown_toast_type():
    with pytest.raises(ValueError):
        Toast('celebration', 'Hooray')


def test_messages_notifier(request_with_messages):
    notify(request_with_messages, Toast.warning('Session cancelled'))

    [message] = list(request_with_messages._messages)
    assert message.level == constants.WARNING
    assert message.message == 'Session cancelled'
    assert decode_toast(message) == {
        'type': 'warning',
        'text': 'Session cancelled',
        'css': 'alert-warning',
        'icon': 'o-exclamation-triangle',
        'position': 'toast-bottom toast-end',
        'timeout_ms': 3000,
        'action': None,
        'redirect_to': '',
    }


def test_delivery_keeps_timeout_action_and_redirect(request_with_messages):
    notify(request_with_messages, Toast.success(
        'Course created', 'Your course has been created successfully.',
        position='toast-top toast-center', timeout_ms=5000,
        action={'label': 'View course', 'url': '/courses/7/'}, redirect_to='/courses/teacher/',
    ))

    [toast] = toasts(request_with_messages)['toasts']
    assert toast['text'] == 'Course created Your course has been created successfully.'
    assert toast['position'] == 'toast-top toast-center'
    assert toast['timeout_ms'] == 5000
    assert toast['action'] == {'label': 'View course', 'url': '/courses/7/'}
    assert toast['redirect_to'] == '/courses/teacher/'


def test_plain_messages_get_their_level_style(request_with_messages):
    messages.error(request_with_messages, 'Only teachers can access this page.')
    messages.info(request_with_messages, 'Heads up', extra_tags='alert-custom')

    denied, custom = toasts(request_with_messages)['toasts']
    assert (denied['type'], denied['css'], denied['timeout_ms']) == ('error', 'alert-error', 3000)
    assert custom['css'] == 'alert-custom'
    assert custom['icon'] == 'o-information-circle'


def test_configured_notifier(settings, request_with_messages):
    settings.TUTORHUB_NOTIFIER = 'tests.test_notifications.RecordingNotifier'
    delivered.clear()

    notify(request_with_messages, Toast.info('Already enrolled'))

    assert [toast.title for toast in delivered] == ['Already enrolled']
    assert list(request_with_messages._messages) == []


def test_domain_errors_map_to_toasts(request_with_messages):
    show_domain_error(request_with_messages, NotOwnerError())
    show_domain_error(request_with_messages, InvalidTransitionError('Only upcoming sessions can be cancelled.'))

    denied, invalid = list(request_with_messages._messages)
    assert denied.level == constants.ERROR
    assert denied.message == "You don't have permission to do that."
    assert invalid.level == constants.WARNING
