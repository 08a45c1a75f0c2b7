# courses/repositories.py
from django.db.models import CharField, Count, Value
from django.db.models.functions import Concat

from common.repositories import FixtureRepository, QuerySetRepository, use_demo_data

from . import demo
from .listings import CATALOG_LISTING, ENROLLMENT_LISTING, TEACHER_COURSE_LISTING
from .models import Course, Enrollment, Subject

CATALOG_LOOKUPS = {
    'title': 'name',
    'category': 'subject__slug',
    'students': 'student_count',
    'instructor': 'instructor_name',
}

ENROLLMENT_LOOKUPS = {
    'course_title': 'course__name',
    'instructor': 'instructor_name',
    'last_accessed': 'last_accessed_at',
    'enrollment_date': 'enrolled_at',
}

TEACHER_COURSE_LOOKUPS = {
    'subject_name': 'subject__name',
    'students_count': 'student_count',
}


def instructor_name(prefix):
    return Concat(
        f'{prefix}teacher__user__first_name', Value(' '), f'{prefix}teacher__user__last_name',
        output_field=CharField(),
    )


def students_of(course):
    count = getattr(course, 'student_count', None)
    return course.students_count if count is None else count


def module_titles(course):
    return [module.get('title', '') if isinstance(module, dict) else str(module) for module in course.curriculum]


# Records
def course_record(course):
    teacher_user = course.teacher.user
    return {
        'id': course.pk,
        'title': course.name,
        'slug': course.slug,
        'description': course.description,
        'short_description': course.short_description,
        'price': course.price,
        'sale_price': course.sale_price,
        'category': course.subject.slug,
        'category_name': course.subject.name,
        'level': course.level,
        'duration': f"{course.duration} weeks",
        'lessons': course.lessons_count or len(course.curriculum),
        'students': students_of(course),
        'rating': course.rating,
        'reviews_count': course.reviews_count,
        'instructor': teacher_user.display_name,
        'instructor_title': course.teacher.headline,
        'created_at': course.created_at,
        'is_featured': course.is_featured,
        'is_bestseller': False,
        'skills': [],
        'what_youll_learn': list(course.learning_outcomes),
        'curriculum': list(course.curriculum),
    }


def current_lesson(enrollment):
    if enrollment.status == 'completed':
        return 'Course Completed'
    if enrollment.status == 'archived':
        return 'Course Archived'
    titles = module_titles(enrollment.course)
    if not titles:
        return ''
    index = min(len(titles) - 1, enrollment.progress * len(titles) // 100)
    return titles[index]


def enrollment_record(enrollment):
    course = enrollment.course
    return {
        'id': enrollment.pk,
        'course_id': course.pk,
        'course_title': course.name,
        'course_slug': course.slug,
        'instructor': course.teacher.user.display_name,
        'progress': enrollment.progress,
        'status': enrollment.status,
        'enrollment_date': enrollment.enrolled_at,
        'last_accessed': enrollment.last_accessed_at,
        'expiry_date': enrollment.expires_at,
        'certificate_date': enrollment.certificate_issued_at,
        'has_certificate': enrollment.has_certificate,
        'current_lesson': current_lesson(enrollment),
        'total_lessons': course.lessons_count or len(course.curriculum),
        'completed_lessons': enrollment.completed_lessons,
        'category': course.subject.slug,
        'level': course.level,
    }


def teacher_course_record(course):
    return {
        'id': course.pk,
        'name': course.name,
        'description': course.description,
        'level': course.level,
        'subject_id': course.subject_id,
        'subject_name': course.subject.name,
        'price': course.price,
        'status': course.status,
        'students_count': students_of(course),
        'max_students': course.max_students,
        'start_date': course.start_date,
        'end_date': course.end_date,
        'created_at': course.created_at,
        'curriculum': module_titles(course),
        'learning_outcomes': list(course.learning_outcomes),
    }


# Querysets
def catalog_queryset():
    return (
        Course.objects.filter(status='active')
        .select_related('subject', 'teacher__user')
        .annotate(student_count=Count('enrollments', distinct=True), instructor_name=instructor_name(''))
    )


def enrollment_queryset(user):
    return (
        Enrollment.objects.filter(user=user)
        .select_related('course__subject', 'course__teacher__user')
        .annotate(instructor_name=instructor_name('course__'))
    )


def teacher_course_queryset(teacher_profile):
    return (
        Course.objects.filter(teacher=teacher_profile)
        .select_related('subject', 'teacher__user')
        .annotate(student_count=Count('enrollments', distinct=True))
    )


# Factories
def catalog_repository():
    if use_demo_data():
        return FixtureRepository(demo.catalog_courses(), CATALOG_LISTING, name='Course')
    return QuerySetRepository(catalog_queryset(), CATALOG_LISTING, CATALOG_LOOKUPS, to_record=course_record)


def enrollment_repository(user):
    if use_demo_data():
        return FixtureRepository(demo.enrollments(), ENROLLMENT_LISTING, name='Enrollment')
    return QuerySetRepository(
        enrollment_queryset(user), ENROLLMENT_LISTING, ENROLLMENT_LOOKUPS, to_record=enrollment_record
    )


def teacher_course_repository(teacher_profile):
    if use_demo_data():
        return FixtureRepository(demo.teacher_courses(), TEACHER_COURSE_LISTING, name='Course')
    return QuerySetRepository(
        teacher_course_queryset(teacher_profile), TEACHER_COURSE_LISTING, TEACHER_COURSE_LOOKUPS,
        to_record=teacher_course_record,
    )


def category_choices():
    if use_demo_data():
        return list(demo.CATEGORIES.items())
    return list(Subject.objects.filter(is_active=True).values_list('slug', 'name'))


def wishlist_records(user):
    if use_demo_data():
        return demo.wishlist_courses()
    items = user.wishlist_items.select_related('course__subject', 'course__teacher__user')
    return [course_record(item.course) for item in items]


def wishlist_ids(user):
    if use_demo_data():
        return set(demo.WISHLIST_COURSE_IDS)
    return set(user.wishlist_items.values_list('course_id', flat=True))
