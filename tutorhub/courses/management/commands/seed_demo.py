# courses/management/commands/seed_demo.py
"""
Load the demo catalog, enrollments, sessions and session requests into the
database so the ORM screens show the same data as demo mode.

Usage:
  python manage.py seed_demo
  python manage.py seed_demo --client-email client@example.com --password secret
"""
import re
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from accounts.models import ClientProfile, TeacherProfile
from common.dates import to_date, to_datetime, to_time
from courses import demo
from courses.models import Course, Enrollment, Subject, WishlistItem
from tutoring import demo as tutoring_demo
from tutoring.models import LearningSession, SessionRequest


def weeks(duration):
    match = re.search(r'\d+', str(duration))
    return int(match.group()) if match else 8


class Command(BaseCommand):
    help = "Load the demo data into the database."

    def add_arguments(self, parser):
        parser.add_argument(
            "--client-email",
            default="client@example.com",
            help="Email of the demo client that owns the enrollments and sessions",
        )
        parser.add_argument(
            "--password",
            default="demo12345",
            help="Password set on every demo account",
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            teachers = self.seed_teachers(options["password"])
            subjects = self.seed_subjects()
            courses = self.seed_courses(teachers, subjects)
            client = self.seed_client(options["client_email"], options["password"])
            self.seed_enrollments(client, courses)
            self.seed_sessions(client, teachers, courses)

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {len(courses)} courses, {len(teachers)} teachers and demo client {client.email}"
        ))

    def seed_teachers(self, password):
        User = get_user_model()
        teachers = {}
        for pk, (name, title) in tutoring_demo.TEACHERS.items():
            first_name, last_name = name.split(' ', 1)
            username = name.lower().replace(' ', '.')
            user, created = User.objects.get_or_create(
                email=f"{username}@example.com",
                defaults={
                    'username': username,
                    'first_name': first_name,
                    'last_name': last_name,
                    'user_type': 'teacher',
                },
            )
            if created:
                user.set_password(password)
                user.save()
            TeacherProfile.objects.update_or_create(
                user=user, defaults={'headline': title, 'status': 'approved'}
            )
            teachers[pk] = user
        return teachers

    def seed_subjects(self):
        subjects = {}
        for slug, name in demo.CATEGORIES.items():
            subjects[slug], _ = Subject.objects.get_or_create(slug=slug, defaults={'name': name})
        return subjects

    def seed_courses(self, teachers, subjects):
        courses = {}
        today = timezone.localdate()
        for record in demo.catalog_courses():
            teacher = teachers[100 + record['id']]
            subject = subjects[record['category']]
            teacher.teacher_profile.subjects.add(subject)
            course, _ = Course.objects.update_or_create(
                slug=record['slug'],
                defaults={
                    'teacher': teacher.teacher_profile,
                    'subject': subject,
                    'name': record['title'],
                    'description': record['description'],
                    'short_description': record['short_description'],
                    'level': record['level'],
                    'duration': weeks(record['duration']),
                    'lessons_count': record['lessons'],
                    'price': Decimal(str(record['price'])),
                    'sale_price': Decimal(str(record['sale_price'])) if record['sale_price'] is not None else None,
                    'rating': Decimal(str(record['rating'])),
                    'reviews_count': record['reviews_count'],
                    'status': 'active',
                    'learning_outcomes': record['what_youll_learn'],
                    'start_date': today,
                    'end_date': today + timedelta(weeks=weeks(record['duration'])),
                    'is_featured': record['is_featured'],
                    'created_at': to_datetime(record['created_at']),
                },
            )
            courses[record['id']] = course
        return courses

    def seed_client(self, email, password):
        User = get_user_model()
        client, created = User.objects.get_or_create(
            email=email,
            defaults={'username': email.split('@')[0], 'first_name': 'Demo', 'last_name': 'Client'},
        )
        if created:
            client.set_password(password)
            client.save()
        ClientProfile.objects.get_or_create(user=client)
        return client

    def seed_enrollments(self, client, courses):
        for record in demo.enrollments():
            Enrollment.objects.update_or_create(
                user=client,
                course=courses[record['course_id']],
                defaults={
                    'progress': record['progress'],
                    'status': record['status'],
                    'completed_lessons': record['completed_lessons'],
                    'enrolled_at': to_datetime(record['enrollment_date']),
                    'last_accessed_at': to_datetime(record['last_accessed']),
                    'expires_at': to_date(record['expiry_date']),
                    'certificate_issued_at': to_datetime(record['certificate_date']),
                },
            )
        for course_id in demo.WISHLIST_COURSE_IDS:
            WishlistItem.objects.get_or_create(user=client, course=courses[course_id])

    def seed_sessions(self, client, teachers, courses):
        for record in tutoring_demo.sessions():
            LearningSession.objects.update_or_create(
                client=client,
                title=record['title'],
                defaults={
                    'teacher': teachers[record['teacher_id']],
                    'course': courses[record['course_id']],
                    'date': to_date(record['date']),
                    'time': to_time(record['time']),
                    'end_time': to_time(record['end_time']),
                    'duration_hours': Decimal(str(record['duration_hours'])),
                    'status': record['status'],
                    'location': record['location'],
                    'meeting_link': record['meeting_link'],
                    'notes': record['notes'],
                    'materials': record['materials'],
                    'recording': record['recording'],
                    'feedback_rating': record['feedback_rating'],
                },
            )
        for record in tutoring_demo.session_requests():
            SessionRequest.objects.update_or_create(
                client=client,
                title=record['title'],
                defaults={
                    'teacher': teachers[record['teacher_id']],
                    'course': courses[record['course_id']],
                    'date': to_date(record['date']),
                    'time': to_time(record['time']),
                    'duration_hours': Decimal(str(record['duration_hours'])),
                    'notes': record['notes'],
                    'preferred_contact': record['preferred_contact'],
                    'status': record['status'],
                    'created_at': to_datetime(record['created_at']),
                    'admin_notes': record['admin_notes'],
                    'rejection_reason': record['rejection_reason'],
                },
            )
