"""Catalog, wishlist, enrollment and teacher course screens."""
from datetime import timedelta

import pytest
from django.contrib.messages import get_messages
from django.urls import reverse
from django.utils import timezone

from common.exceptions import InvalidTransitionError, NotOwnerError
from courses import demo, services
from courses.models import Course, Enrollment, Subject, WishlistItem, clamp_progress

pytestmark = pytest.mark.django_db


def messages_of(response):
    return [message.message for message in get_messages(response.wsgi_request)]


# Models and services
def test_progress_is_clamped(client_user, course):
    enrollment = Enrollment.objects.create(user=client_user, course=course, progress=140)

    assert enrollment.progress == 100
    assert clamp_progress(-3) == 0


def test_enroll_once_and_drop_from_wishlist(client_user, course):
    WishlistItem.objects.create(user=client_user, course=course)

    enrollment, created = services.enroll(client_user, course)
    again, created_again = services.enroll(client_user, course)

    assert created is True and created_again is False
    assert again == enrollment
    assert (enrollment.status, enrollment.progress) == ('in_progress', 0)
    assert not WishlistItem.objects.filter(user=client_user).exists()


def test_toggle_wishlist(client_user, course):
    assert services.toggle_wishlist(client_user, course) is True
    assert services.toggle_wishlist(client_user, course) is False
    assert services.remove_from_wishlist(client_user, course) is False


def test_continue_learning(client_user, other_client, course):
    enrollment = Enrollment.objects.create(user=client_user, course=course, status='paused')

    services.continue_learning(client_user, enrollment)

    assert enrollment.status == 'in_progress'
    assert enrollment.last_accessed_at is not None
    with pytest.raises(NotOwnerError):
        services.continue_learning(other_client, enrollment)
    enrollment.status = 'archived'
    with pytest.raises(InvalidTransitionError):
        services.continue_learning(client_user, enrollment)


def test_certificate_requires_completion(client_user, course):
    enrollment = Enrollment.objects.create(user=client_user, course=course, status='completed', progress=100)

    with pytest.raises(InvalidTransitionError):
        services.certificate_for(client_user, enrollment)
    enrollment.certificate_issued_at = timezone.now()
    assert services.certificate_for(client_user, enrollment) == enrollment


def test_course_owner_actions(teacher_user, other_teacher, course):
    with pytest.raises(NotOwnerError):
        services.toggle_course_status(other_teacher, course)
    with pytest.raises(NotOwnerError):
        services.delete_course(other_teacher, course)

    assert services.toggle_course_status(teacher_user, course).status == 'inactive'
    assert services.toggle_course_status(teacher_user, course).status == 'active'
    services.delete_course(teacher_user, course)
    assert not Course.objects.exists()


def test_enrollment_stats_and_top_enrollments():
    records = demo.enrollments()

    assert services.enrollment_stats(records) == {
        'total': 8, 'active': 4, 'completed': 2, 'average_progress': 67, 'certificates': 3,
    }
    assert [r['id'] for r in services.top_enrollments(records)] == [8, 2, 1]
    assert services.enrollment_stats([])['average_progress'] == 0


def test_teacher_course_stats():
    assert services.teacher_course_stats(demo.teacher_courses()) == {
        'total': 4, 'active': 2, 'draft': 1, 'inactive': 1, 'total_students': 25,
    }


# Client views
def test_screens_require_login(client):
    response = client.get(reverse('courses:course_list'))

    assert response.status_code == 302
    assert reverse('login') in response.url


def test_catalog_filters(client, client_user, make_course):
    make_course()
    make_course('React Basics Course', level='beginner')
    make_course('Hidden Draft Course', level='beginner', status='draft')
    client.force_login(client_user)

    response = client.get(reverse('courses:course_list'), {'level': 'beginner'})

    assert response.status_code == 200
    assert [c['title'] for c in response.context['records']] == ['React Basics Course']
    assert response.context['current_filters']['level'] == 'beginner'



def test_catalog_categories_come_from_subjects(client, client_user, make_course):
    design = Subject.objects.create(name='Graphic Design')
    Subject.objects.create(name='Archived Topics', is_active=False)
    make_course()
    make_course('Logo Design Basics', subject=design)
    client.force_login(client_user)

    response = client.get(reverse('courses:course_list'), {'category': design.slug})

    assert design.slug == 'graphic-design'
    assert list(response.context['categories']) == [('graphic-design', 'Graphic Design'), ('development', 'Web Development')]
    assert [c['title'] for c in response.context['records']] == ['Logo Design Basics']


def test_catalog_categories_in_demo_mode(client, client_user, demo_data):
    client.force_login(client_user)

    response = client.get(reverse('courses:course_list'))

    assert dict(response.context['categories']) == demo.CATEGORIES

def test_catalog_with_demo_data(client, client_user, demo_data):
    client.force_login(client_user)

    response = client.get(reverse('courses:course_list'))

    assert len(response.context['records']) == 8
    assert {c['id'] for c in response.context['records'] if c['in_wishlist']} == {3, 5}


def test_course_detail(client, client_user, course):
    client.force_login(client_user)

    assert client.get(reverse('courses:course_detail', args=[course.pk])).status_code == 200
    assert client.get(reverse('courses:course_detail', args=[999999])).status_code == 404


def test_enroll_view(client, client_user, course):
    client.force_login(client_user)
    url = reverse('courses:enroll', args=[course.pk])

    assert client.get(url).status_code == 405
    first = client.post(url)
    second = client.post(url)

    assert first.url == reverse('courses:enrollment_list')
    assert Enrollment.objects.filter(user=client_user, course=course).count() == 1
    assert f"Successfully enrolled! You are now enrolled in {course.name}." in messages_of(first)
    assert f"Already enrolled You are already enrolled in {course.name}." in messages_of(second)



def test_enroll_toast_offers_the_course(client, client_user, course):
    client.force_login(client_user)

    response = client.post(reverse('courses:enroll', args=[course.pk]), follow=True)

    [toast] = response.context['toasts']
    assert toast['type'] == 'success'
    assert toast['action'] == {'label': 'Start learning', 'url': course.get_absolute_url()}
    assert b'data-timeout="3000"' in response.content
    assert b'Start learning' in response.content

def test_wishlist_toggle_returns_to_the_page(client, client_user, course):
    client.force_login(client_user)
    back = reverse('courses:course_list') + '?level=advanced'

    response = client.post(reverse('courses:toggle_wishlist', args=[course.pk]), {'next': back})

    assert response.url == back
    assert WishlistItem.objects.filter(user=client_user, course=course).exists()
    wishlist = client.get(reverse('courses:wishlist'))
    assert [c['title'] for c in wishlist.context['courses']] == [course.name]

    client.post(reverse('courses:wishlist_remove', args=[course.pk]))
    assert not WishlistItem.objects.exists()


def test_wishlist_ignores_foreign_redirects(client, client_user, course):
    client.force_login(client_user)

    response = client.post(reverse('courses:toggle_wishlist', args=[course.pk]), {'next': 'https://evil.example.com/'})

    assert response.url == reverse('courses:course_list')


def test_enrollment_list(client, client_user, make_course):
    first = make_course()
    second = make_course('React Basics Course')
    Enrollment.objects.create(user=client_user, course=first, progress=40)
    Enrollment.objects.create(
        user=client_user, course=second, progress=100, status='completed', certificate_issued_at=timezone.now()
    )
    client.force_login(client_user)

    active = client.get(reverse('courses:enrollment_list'))
    completed = client.get(reverse('courses:enrollment_list'), {'activeTab': 'completed'})

    assert [r['course_title'] for r in active.context['records']] == ['Advanced Laravel Development']
    assert [r['course_title'] for r in completed.context['records']] == ['React Basics Course']
    assert active.context['stats'] == {
        'total': 2, 'active': 1, 'completed': 1, 'average_progress': 70, 'certificates': 1,
    }


def test_continue_touches_last_accessed(client, client_user, course):
    enrollment = Enrollment.objects.create(user=client_user, course=course)
    client.force_login(client_user)

    response = client.post(reverse('courses:enrollment_continue', args=[enrollment.pk]))

    assert response.url == reverse('courses:course_detail', args=[course.pk])
    enrollment.refresh_from_db()
    assert enrollment.last_accessed_at is not None


def test_certificate_views(client, client_user, other_client, course):
    enrollment = Enrollment.objects.create(
        user=client_user, course=course, status='completed', progress=100, certificate_issued_at=timezone.now()
    )
    client.force_login(client_user)

    page = client.get(reverse('courses:certificate', args=[enrollment.pk]))
    download = client.get(reverse('courses:certificate_download', args=[enrollment.pk]))

    assert page.status_code == 200
    assert download['Content-Disposition'] == f'attachment; filename="certificate-{course.slug}.txt"'
    assert 'Jane Doe' in download.content.decode()

    client.force_login(other_client)
    denied = client.get(reverse('courses:certificate', args=[enrollment.pk]))
    assert denied.url == reverse('courses:enrollment_list')
    assert "You don't have permission to do that." in messages_of(denied)


# Teacher views
def test_teacher_screens_reject_clients(client, client_user):
    client.force_login(client_user)

    response = client.get(reverse('courses:teacher_course_list'))

    assert response.url == reverse('accounts:dashboard')
    assert "Only teachers can access this page." in messages_of(response)


def test_teacher_course_list(client, teacher_user, make_course, client_user):
    make_course()
    draft = make_course('Zend Framework Basics', status='draft')
    Enrollment.objects.create(user=client_user, course=draft)
    client.force_login(teacher_user)

    response = client.get(reverse('courses:teacher_course_list'), {'sortBy': 'name', 'sortDirection': 'desc'})

    assert [r['name'] for r in response.context['records']] == ['Zend Framework Basics', 'Advanced Laravel Development']
    assert response.context['stats']['total_students'] == 1
    assert response.context['records'][0]['enrollment_label'] == '1/20'



def test_teacher_course_list_with_an_unknown_subject(client, teacher_user, course):
    client.force_login(teacher_user)

    response = client.get(reverse('courses:teacher_course_list'), {'subject': 'abc'})

    assert response.status_code == 200
    assert response.context['records'] == []
    assert response.context['stats']['total'] == 1

def test_course_status_and_delete(client, teacher_user, other_teacher, course):
    client.force_login(other_teacher)
    client.post(reverse('courses:course_delete', args=[course.pk]))
    assert Course.objects.filter(pk=course.pk).exists()

    client.force_login(teacher_user)
    client.post(reverse('courses:course_toggle_status', args=[course.pk]))
    course.refresh_from_db()
    assert course.status == 'inactive'

    response = client.post(reverse('courses:course_delete', args=[course.pk]))
    assert "Course deleted Advanced Laravel Development has been deleted." in messages_of(response)
    assert not Course.objects.exists()


def test_course_creation_flow(client, teacher_user, subject):
    client.force_login(teacher_user)
    url = reverse('courses:course_create')
    today = timezone.localdate()

    assert client.get(url).status_code == 200
    client.post(url, {
        'action': 'next', 'name': 'Advanced Laravel Development',
        'description': 'Master advanced Laravel concepts including middleware.',
        'level': 'advanced', 'subject': subject.pk, 'price': '299.99',
    })
    client.post(url, {
        'action': 'next', 'modules-TOTAL_FORMS': '1', 'modules-INITIAL_FORMS': '0',
        'modules-0-title': 'Advanced Routing', 'modules-0-description': 'Route groups and model binding.',
    })
    client.post(url, {
        'action': 'next', 'outcomes-TOTAL_FORMS': '1', 'outcomes-INITIAL_FORMS': '0',
        'outcomes-0-text': 'Build complex Laravel applications',
        'prerequisites-TOTAL_FORMS': '1', 'prerequisites-INITIAL_FORMS': '0', 'prerequisites-0-text': '',
    })
    invalid = client.post(url, {
        'action': 'submit', 'duration': '8', 'max_students': '20',
        'start_date': (today + timedelta(days=7)).isoformat(), 'end_date': today.isoformat(),
    })
    assert invalid.status_code == 200
    assert 'end_date' in invalid.context['wizard'].errors

    response = client.post(url, {
        'action': 'submit', 'duration': '8', 'max_students': '20',
        'start_date': (today + timedelta(days=7)).isoformat(),
        'end_date': (today + timedelta(days=63)).isoformat(),
    })

    assert response.url == reverse('courses:teacher_course_list')
    course = Course.objects.get()
    assert (course.name, course.status, course.teacher) == (
        'Advanced Laravel Development', 'draft', teacher_user.teacher_profile,
    )
    assert 'course_create_wizard' not in client.session


def test_course_creation_cancel(client, teacher_user):
    client.force_login(teacher_user)
    url = reverse('courses:course_create')
    client.post(url, {'action': 'next', 'name': 'abc'})

    response = client.post(url, {'action': 'cancel'})

    assert response.url == reverse('courses:teacher_course_list')
    assert 'course_create_wizard' not in client.session
