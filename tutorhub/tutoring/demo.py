# tutoring/demo.py
from datetime import timedelta

from django.utils import timezone

from courses.demo import CATALOG_COURSES

TEACHERS = {
    101: ('Sarah Johnson', 'Senior Laravel Developer'),
    102: ('Michael Chen', 'Frontend Developer & Consultant'),
    103: ('Emily Rodriguez', 'Senior UX Designer'),
    104: ('David Wilson', 'Digital Marketing Specialist'),
    105: ('Alex Johnson', 'Mobile Developer'),
    106: ('Lisa Chen', 'Data Scientist'),
    107: ('Robert Taylor', 'Business Analyst'),
    108: ('Jessica Park', 'Senior Graphic Designer'),
}


def _today(now):
    return timezone.localdate(now) if timezone.is_aware(now) else now.date()


def _base(course_id):
    teacher_id = 100 + course_id
    name, title = TEACHERS[teacher_id]
    return {
        'course_id': course_id,
        'course_title': CATALOG_COURSES[course_id - 1]['title'],
        'teacher_id': teacher_id,
        'teacher_name': name,
        'teacher_title': title,
    }


def _recording(duration, size):
    return {'url': '#', 'duration': duration, 'size': size}


def sessions(now=None):
    """Client session records with dates relative to ``now``"""
    now = now or timezone.now()
    today = _today(now)

    def day(offset):
        return (today + timedelta(days=offset)).isoformat()

    rows = [
        dict(
            id=1, title='Laravel Advanced Techniques', date=day(2), time='10:00:00', end_time='12:00:00',
            duration_hours=2, status='confirmed', meeting_link='https://meet.example.com/session/123456',
            notes='Please prepare questions about Laravel service containers and middleware.',
            materials=[
                {'name': 'Laravel Advanced PDF', 'type': 'pdf', 'url': '#'},
                {'name': 'Code Samples', 'type': 'zip', 'url': '#'},
            ],
            feedback_rating=None, recording=None, **_base(1),
        ),
        dict(
            id=2, title='React Components & Hooks', date=day(5), time='14:00:00', end_time='16:00:00',
            duration_hours=2, status='scheduled', meeting_link='https://meet.example.com/session/789012',
            notes='We will cover React hooks and custom component creation.',
            materials=[{'name': 'React Hooks Cheatsheet', 'type': 'pdf', 'url': '#'}],
            feedback_rating=None, recording=None, **_base(2),
        ),
        dict(
            id=3, title='UI Design Principles Review', date=day(-10), time='11:00:00', end_time='13:00:00',
            duration_hours=2, status='completed', meeting_link='https://meet.example.com/session/345678',
            notes='Session focused on reviewing UI design principles and student projects.',
            materials=[
                {'name': 'Design Principles PDF', 'type': 'pdf', 'url': '#'},
                {'name': 'Project Templates', 'type': 'zip', 'url': '#'},
            ],
            feedback_rating=5, recording=_recording('1:58:23', '350MB'), **_base(3),
        ),
        dict(
            id=4, title='Social Media Marketing Strategy', date=day(0), time='15:30:00', end_time='17:00:00',
            duration_hours=1.5, status='confirmed', meeting_link='https://meet.example.com/session/901234',
            notes='We will discuss effective social media strategies for different platforms.',
            materials=[
                {'name': 'Social Media Strategy Template', 'type': 'docx', 'url': '#'},
                {'name': 'Marketing Calendar', 'type': 'xlsx', 'url': '#'},
            ],
            feedback_rating=None, recording=None, **_base(4),
        ),
        dict(
            id=5, title='Mobile App UI Development with Flutter', date=day(7), time='13:00:00', end_time='15:00:00',
            duration_hours=2, status='scheduled', meeting_link='https://meet.example.com/session/567890',
            notes='Please prepare Flutter development environment before the session.',
            materials=[{'name': 'Flutter Setup Guide', 'type': 'pdf', 'url': '#'}],
            feedback_rating=None, recording=None, **_base(5),
        ),
        dict(
            id=6, title='Data Visualization with Python', date=day(-20), time='10:00:00', end_time='12:30:00',
            duration_hours=2.5, status='completed', meeting_link='https://meet.example.com/session/123789',
            notes='Session on using matplotlib, seaborn, and plotly for data visualization.',
            materials=[
                {'name': 'Python Visualization Notebook', 'type': 'ipynb', 'url': '#'},
                {'name': 'Sample Datasets', 'type': 'zip', 'url': '#'},
            ],
            feedback_rating=4, recording=_recording('2:25:10', '420MB'), **_base(6),
        ),
        dict(
            id=7, title='Business Analytics Workshop', date=day(-15), time='09:00:00', end_time='12:00:00',
            duration_hours=3, status='cancelled', meeting_link='',
            notes='Session cancelled due to instructor illness. Will be rescheduled soon.',
            materials=[], feedback_rating=None, recording=None, **_base(7),
        ),
        dict(
            id=8, title='Advanced Design Techniques', date=day(-5), time='14:00:00', end_time='16:30:00',
            duration_hours=2.5, status='completed', meeting_link='https://meet.example.com/session/456123',
            notes='Session covered advanced graphic design techniques and tools.',
            materials=[
                {'name': 'Design Assets', 'type': 'zip', 'url': '#'},
                {'name': 'Tutorial PDF', 'type': 'pdf', 'url': '#'},
            ],
            feedback_rating=None, recording=_recording('2:28:45', '410MB'), **_base(8),
        ),
    ]
    for row in rows:
        row['location'] = 'Online'
    return rows


def session_requests(now=None):
    """Client session request records with dates relative to ``now``"""
    now = now or timezone.now()
    today = _today(now)

    def day(offset):
        return (today + timedelta(days=offset)).isoformat()

    def ago(**delta):
        return (now - timedelta(**delta)).strftime('%Y-%m-%d %H:%M:%S')

    return [
        dict(
            id=1, title='Laravel Middleware Advanced Tutorial', date=day(5), time='10:00:00', duration_hours=2,
            notes='I would like to focus on custom middleware development and request lifecycle.',
            preferred_contact='email', status='approved', created_at=ago(days=2),
            admin_notes='Approved, teacher confirmed availability.', rejection_reason='', **_base(1),
        ),
        dict(
            id=2, title='React Hooks Deep Dive', date=day(7), time='14:00:00', duration_hours=1.5,
            notes='I need help understanding useCallback, useMemo, and custom hooks.',
            preferred_contact='phone', status='pending', created_at=ago(days=1),
            admin_notes='', rejection_reason='', **_base(2),
        ),
        dict(
            id=3, title='UI Design Portfolio Review', date=day(10), time='11:00:00', duration_hours=1,
            notes='I would like feedback on my portfolio before applying for jobs.',
            preferred_contact='email', status='under_review', created_at=ago(hours=12),
            admin_notes='Checking teacher availability.', rejection_reason='', **_base(3),
        ),
        dict(
            id=4, title='Social Media Marketing Plan Review', date=day(3), time='15:30:00', duration_hours=1,
            notes='Need help optimizing my social media marketing plan for my small business.',
            preferred_contact='any', status='rejected', created_at=ago(days=5),
            admin_notes='Teacher unavailable on requested date.',
            rejection_reason=(
                'The instructor is unavailable on the requested date. '
                'Please try selecting an alternative date or a different instructor.'
            ),
            **_base(4),
        ),
        dict(
            id=5, title='Flutter State Management Help', date=day(8), time='13:00:00', duration_hours=2,
            notes='Need guidance on implementing Provider pattern in my app.',
            preferred_contact='email', status='cancelled', created_at=ago(days=6),
            admin_notes='Cancelled by client.', rejection_reason='', **_base(5),
        ),
        dict(
            id=6, title='Data Visualization with Python', date=day(15), time='10:00:00', duration_hours=2,
            notes='Need help creating interactive visualizations with Plotly and Dash.',
            preferred_contact='phone', status='approved', created_at=ago(days=10),
            admin_notes='Approved, scheduled in calendar.', rejection_reason='', **_base(6),
        ),
        dict(
            id=7, title='Business Analytics Project Review', date=day(12), time='09:00:00', duration_hours=1.5,
            notes='Would like feedback on my final project analyzing market trends.',
            preferred_contact='email', status='pending', created_at=ago(days=3),
            admin_notes='', rejection_reason='', **_base(7),
        ),
        dict(
            id=8, title='Logo Design Critique', date=day(6), time='14:00:00', duration_hours=1,
            notes='Need feedback on my logo designs for a client project.',
            preferred_contact='email', status='under_review', created_at=ago(days=1),
            admin_notes='Checking teacher schedule.', rejection_reason='', **_base(8),
        ),
    ]
