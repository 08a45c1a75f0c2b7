# tutoring/listings.py
from common.listing import ASC, DESC, Listing, SortKey, between_range, calendar_range

SESSION_LISTING = Listing(
    name='sessions',
    sorts={
        'date': SortKey('date', ASC),
        'title': SortKey('title', ASC, text=True),
        'teacher': SortKey('teacher_name', ASC, text=True),
        'course': SortKey('course_title', ASC, text=True),
    },
    default_sort='date',
    search_fields=('title', 'teacher_name', 'course_title'),
    filters={'status': 'status'},
    ranges={'date': calendar_range('date')},
    tabs={
        'upcoming': ('scheduled', 'confirmed'),
        'completed': ('completed',),
        'cancelled': ('cancelled',),
        'all': None,
    },
    default_tab='upcoming',
)

SESSION_REQUEST_LISTING = Listing(
    name='session_requests',
    sorts={
        'created_at': SortKey('created_at', DESC),
        'title': SortKey('title', ASC, text=True),
        'date': SortKey('date', ASC),
        'status': SortKey('status', ASC, text=True),
    },
    default_sort='created_at',
    search_fields=('title', 'teacher_name', 'course_title'),
    filters={'status': 'status'},
    tabs={
        'pending': ('pending', 'under_review'),
        'approved': ('approved',),
        'rejected': ('rejected',),
        'cancelled': ('cancelled',),
        'all': None,
    },
    default_tab='pending',
)

TEACHER_REQUEST_LISTING = Listing(
    name='teacher_session_requests',
    sorts={
        'created_at': SortKey('created_at', DESC),
        'date': SortKey('date', ASC),
    },
    default_sort='created_at',
    search_fields=('client_name', 'client_email', 'title'),
    ranges={'dateRange': between_range('date')},
    tabs={
        'pending': ('pending', 'under_review'),
        'approved': ('approved',),
        'rejected': ('rejected',),
    },
    default_tab='pending',
)
