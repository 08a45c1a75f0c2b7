"""Course creation and client profile setup wizards."""
from datetime import timedelta

import pytest
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db.models.fields.files import FieldFile
from django.utils import timezone

from accounts.models import ClientProfile
from accounts.wizards import ClientProfileWizard
from common.exceptions import DomainError
from common.wizard import WizardState
from courses.models import Course
from courses.wizards import CourseWizard

pytestmark = pytest.mark.django_db


@pytest.fixture
def basics(subject):
    return {
        'name': 'Advanced Laravel Development',
        'description': 'Master advanced Laravel concepts including middleware.',
        'level': 'advanced',
        'subject': str(subject.pk),
        'price': '299.99',
    }


CURRICULUM = {
    'modules-TOTAL_FORMS': '2',
    'modules-INITIAL_FORMS': '0',
    'modules-MIN_NUM_FORMS': '1',
    'modules-MAX_NUM_FORMS': '1000',
    'modules-0-title': 'Advanced Routing',
    'modules-0-description': 'Route groups, model binding and caching.',
    'modules-1-title': 'Service Containers',
    'modules-1-description': 'Binding, resolving and contextual binding.',
}

OUTCOMES = {
    'outcomes-TOTAL_FORMS': '1',
    'outcomes-INITIAL_FORMS': '0',
    'outcomes-0-text': 'Build complex Laravel applications',
    'prerequisites-TOTAL_FORMS': '2',
    'prerequisites-INITIAL_FORMS': '0',
    'prerequisites-0-text': 'PHP basics',
    'prerequisites-1-text': '',
}


def schedule(start_offset=7, end_offset=70):
    today = timezone.localdate()
    return {
        'duration': '8',
        'max_students': '20',
        'start_date': (today + timedelta(days=start_offset)).isoformat(),
        'end_date': (today + timedelta(days=end_offset)).isoformat(),
    }


@pytest.fixture
def course_wizard(teacher_user):
    return CourseWizard(teacher_profile=teacher_user.teacher_profile)


def walk_to_schedule(wizard, basics):
    assert wizard.next(basics)
    assert wizard.next(CURRICULUM)
    assert wizard.next(OUTCOMES)
    assert wizard.current_step == 4


# Course wizard
def test_invalid_basics_keep_step_one(course_wizard, basics):
    assert course_wizard.next({**basics, 'name': 'abc'}) is False

    assert course_wizard.current_step == 1
    assert 'name' in course_wizard.errors


def test_valid_basics_advance_without_checking_curriculum(course_wizard, basics):
    assert course_wizard.next(basics) is True

    assert course_wizard.current_step == 2
    assert course_wizard.errors == {}
    assert course_wizard.progress_percentage == 25


def test_curriculum_errors_are_keyed_by_row(course_wizard, basics):
    course_wizard.next(basics)

    assert course_wizard.next({**CURRICULUM, 'modules-1-title': 'ab'}) is False
    assert 'modules-1-title' in course_wizard.errors
    assert course_wizard.current_step == 2


def test_back_never_validates_or_goes_below_one(course_wizard, basics):
    course_wizard.next(basics)
    course_wizard.back({'modules-TOTAL_FORMS': 'garbage'})
    course_wizard.back()

    assert course_wizard.current_step == 1
    assert course_wizard.errors == {}


def test_end_date_before_start_date_persists_nothing(course_wizard, basics):
    walk_to_schedule(course_wizard, basics)

    assert course_wizard.submit(schedule(start_offset=10, end_offset=5)) is None

    assert course_wizard.current_step == 4
    assert 'end_date' in course_wizard.errors
    assert Course.objects.count() == 0


def test_start_date_in_the_past(course_wizard, basics):
    walk_to_schedule(course_wizard, basics)

    assert course_wizard.submit(schedule(start_offset=-1)) is None
    assert 'start_date' in course_wizard.errors


def test_submit_creates_a_draft_course(course_wizard, basics, teacher_user):
    walk_to_schedule(course_wizard, basics)

    course = course_wizard.submit(schedule())

    assert course.status == 'draft'
    assert course.slug == 'advanced-laravel-development'
    assert course.teacher == teacher_user.teacher_profile
    assert course.curriculum == [
        {'title': 'Advanced Routing', 'description': 'Route groups, model binding and caching.'},
        {'title': 'Service Containers', 'description': 'Binding, resolving and contextual binding.'},
    ]
    assert course.lessons_count == 2
    assert course.learning_outcomes == ['Build complex Laravel applications']
    assert course.prerequisites == ['PHP basics']
    assert not course.cover_image


def test_submit_revalidates_earlier_steps(course_wizard, basics):
    walk_to_schedule(course_wizard, basics)
    del course_wizard.state.data['name']

    assert course_wizard.submit(schedule()) is None
    assert course_wizard.current_step == 1
    assert 'name' in course_wizard.errors


def test_duplicate_slug(course_wizard, basics, make_course):
    make_course()

    assert course_wizard.next(basics) is False
    assert 'name' in course_wizard.errors


def test_cover_image_is_stored(course_wizard, basics, png):
    walk_to_schedule(course_wizard, basics)

    course = course_wizard.submit(schedule(), {'cover_image': png()})

    assert course.cover_image.name.startswith('course-covers/')
    assert default_storage.exists(course.cover_image.name)


def test_cover_image_failure_keeps_the_course(course_wizard, basics, png, monkeypatch):
    def broken_save(self, name, content, save=True):
        raise OSError("disk full")

    walk_to_schedule(course_wizard, basics)
    monkeypatch.setattr(FieldFile, 'save', broken_save)

    course = course_wizard.submit(schedule(), {'cover_image': png()})

    assert Course.objects.filter(pk=course.pk).exists()
    assert not Course.objects.get(pk=course.pk).cover_image


def test_missing_teacher_profile(basics):
    wizard = CourseWizard(teacher_profile=None)
    walk_to_schedule(wizard, basics)

    with pytest.raises(DomainError):
        wizard.submit(schedule())
    assert Course.objects.count() == 0


def test_state_survives_the_session(course_wizard, basics, teacher_user):
    session = {}
    course_wizard.next(basics)
    course_wizard.save(session)

    restored = CourseWizard.load(session, teacher_profile=teacher_user.teacher_profile)

    assert restored.current_step == 2
    assert restored.summary['name'] == 'Advanced Laravel Development'
    assert WizardState.from_dict(course_wizard.state.to_dict()) == course_wizard.state


# Client profile wizard
BASIC_INFO = {
    'company_name': 'Acme Learning Ltd',
    'whatsapp': '+2348000000000',
    'phone': '+2348000000001',
    'website': '',
    'position': 'CTO',
}

COMPANY = {
    'address': '1 Marina Road',
    'city': 'Lagos',
    'country': 'Nigeria',
    'industry': 'Education',
    'company_size': '11-50',
}

PREFERENCES = {
    'preferred_services': ['design', 'marketing'],
    'preferred_contact_method': 'whatsapp',
    'notes': '',
}


def pdf(name='brief.pdf'):
    return SimpleUploadedFile(name, b'%PDF-1.4 test document', content_type='application/pdf')


def test_profile_wizard_requires_a_service(client_user):
    wizard = ClientProfileWizard(user=client_user)
    wizard.next(BASIC_INFO)
    wizard.next(COMPANY)

    assert wizard.next({**PREFERENCES, 'preferred_services': []}) is False
    assert wizard.errors['preferred_services'] == ['Please select at least one service.']
    assert 'logo' in wizard.errors


def test_profile_wizard_stages_uploads_until_done(client_user, png, django_user_model):
    wizard = ClientProfileWizard(user=client_user)
    assert wizard.current_step == 1
    wizard.next(BASIC_INFO)
    wizard.next(COMPANY)

    assert wizard.next(PREFERENCES, {'logo': png('logo.png'), 'documents': [pdf()]}) is True
    staged = [path for entries in wizard.state.staged_files.values() for path, _ in entries]
    assert len(staged) == 2
    assert all(default_storage.exists(path) for path in staged)
    assert wizard.staged_names('documents') == ['brief.pdf']

    profile = wizard.submit({})

    assert profile.has_completed_profile is True
    assert profile.status == 'pending'
    assert profile.company_name == 'Acme Learning Ltd'
    assert profile.preferred_services == ['design', 'marketing']
    assert profile.logo.name.startswith('client_logos/')
    [document] = profile.documents.all()
    assert document.original_name == 'brief.pdf'
    assert document.content_type == 'application/pdf'
    assert wizard.state.staged_files == {}
    assert not any(default_storage.exists(path) for path in staged)

    reopened = ClientProfileWizard(user=django_user_model.objects.get(pk=client_user.pk))
    assert reopened.current_step == 4
    assert reopened.submit({}) is not None
    assert ClientProfile.objects.get(user=client_user).documents.count() == 1


def test_profile_wizard_keeps_an_existing_status(client_user, png, django_user_model):
    ClientProfile.objects.filter(user=client_user).update(status='approved')
    wizard = ClientProfileWizard(user=django_user_model.objects.get(pk=client_user.pk))
    wizard.next(BASIC_INFO)
    wizard.next(COMPANY)
    wizard.next(PREFERENCES, {'logo': png()})

    profile = wizard.submit({})

    assert profile.status == 'approved'
    assert profile.documents.count() == 0


def test_profile_wizard_rejects_large_documents(client_user, png):
    wizard = ClientProfileWizard(user=client_user)
    wizard.next(BASIC_INFO)
    wizard.next(COMPANY)
    big = SimpleUploadedFile('huge.pdf', b'x' * (10 * 1024 * 1024 + 1), content_type='application/pdf')

    assert wizard.next(PREFERENCES, {'logo': png(), 'documents': [big]}) is False
    assert wizard.errors['documents'] == ['huge.pdf is larger than 10 MB.']
