"""Shared fixtures for the TutorHub test suite."""
import io
from datetime import time, timedelta
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from PIL import Image

from accounts.models import ClientProfile, TeacherProfile
from courses.models import Course, Subject
from tutoring.models import LearningSession, SessionRequest


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / 'media'
    settings.TUTORHUB_USE_DEMO_DATA = False
    return settings.MEDIA_ROOT


@pytest.fixture
def demo_data(settings):
    settings.TUTORHUB_USE_DEMO_DATA = True


@pytest.fixture
def password():
    return 'S3cure-pass-123'


@pytest.fixture
def client_user(django_user_model, password):
    user = django_user_model.objects.create_user(
        username='jane', email='jane@example.com', password=password,
        first_name='Jane', last_name='Doe', user_type='client',
    )
    ClientProfile.objects.create(user=user)
    return user


@pytest.fixture
def other_client(django_user_model, password):
    user = django_user_model.objects.create_user(
        username='omar', email='omar@example.com', password=password,
        first_name='Omar', last_name='Ali', user_type='client',
    )
    ClientProfile.objects.create(user=user)
    return user


@pytest.fixture
def teacher_user(django_user_model, password):
    user = django_user_model.objects.create_user(
        username='sarah', email='sarah@example.com', password=password,
        first_name='Sarah', last_name='Johnson', user_type='teacher',
    )
    TeacherProfile.objects.create(user=user, headline='Senior Laravel Developer', hourly_rate=Decimal('40'))
    return user


@pytest.fixture
def other_teacher(django_user_model, password):
    user = django_user_model.objects.create_user(
        username='michael', email='michael@example.com', password=password,
        first_name='Michael', last_name='Chen', user_type='teacher',
    )
    TeacherProfile.objects.create(user=user, headline='Frontend Developer')
    return user


@pytest.fixture
def subject():
    return Subject.objects.create(name='Web Development', slug='development')


@pytest.fixture
def make_course(teacher_user, subject):
    def make(name='Advanced Laravel Development', **fields):
        today = timezone.localdate()
        values = {
            'teacher': teacher_user.teacher_profile,
            'subject': subject,
            'name': name,
            'description': 'Master Laravel framework with advanced techniques.',
            'level': 'advanced',
            'price': Decimal('129.99'),
            'status': 'active',
            'start_date': today + timedelta(days=7),
            'end_date': today + timedelta(days=70),
        }
        values.update(fields)
        return Course.objects.create(**values)
    return make


@pytest.fixture
def course(make_course):
    return make_course()


@pytest.fixture
def tomorrow():
    return timezone.localdate() + timedelta(days=1)


@pytest.fixture
def make_session_request(client_user, teacher_user, course, tomorrow):
    def make(**fields):
        values = {
            'client': client_user,
            'teacher': teacher_user,
            'course': course,
            'title': 'Laravel Middleware Tutorial',
            'date': tomorrow,
            'time': time(10, 0),
            'duration_hours': Decimal('1.5'),
            'notes': 'Custom middleware please.',
        }
        values.update(fields)
        return SessionRequest.objects.create(**values)
    return make


@pytest.fixture
def make_session(client_user, teacher_user, course, tomorrow):
    def make(**fields):
        values = {
            'client': client_user,
            'teacher': teacher_user,
            'course': course,
            'title': 'Laravel Advanced Techniques',
            'date': tomorrow,
            'time': time(10, 0),
            'end_time': time(12, 0),
            'duration_hours': Decimal('2'),
            'status': 'scheduled',
            'meeting_link': 'https://meet.example.com/session/123456',
        }
        values.update(fields)
        return LearningSession.objects.create(**values)
    return make


def image_upload(name='cover.png', size=(40, 40)):
    buffer = io.BytesIO()
    Image.new('RGB', size, color=(200, 30, 30)).save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')


@pytest.fixture
def png():
    return image_upload
