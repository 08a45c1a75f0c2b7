# courses/listings.py
from common.listing import ASC, DESC, Listing, RangeFilter, SortKey

CATALOG_LISTING = Listing(
    name='catalog',
    sorts={
        'popularity': SortKey('students', DESC),
        'price_low': SortKey('price', ASC),
        'price_high': SortKey('price', DESC),
        'newest': SortKey('created_at', DESC),
        'highest_rated': SortKey('rating', DESC),
    },
    default_sort='popularity',
    search_fields=('title', 'description'),
    filters={'category': 'category', 'level': 'level'},
)

ENROLLMENT_LISTING = Listing(
    name='enrollments',
    sorts={
        'last_accessed': SortKey('last_accessed', DESC),
        'enrollment_date': SortKey('enrollment_date', DESC),
        'progress': SortKey('progress', DESC),
        'title': SortKey('course_title', ASC, text=True),
    },
    default_sort='last_accessed',
    search_fields=('course_title', 'instructor'),
    filters={'status': 'status'},
    ranges={
        'progress': RangeFilter('progress', options={
            'not_started': {'exact': 0},
            'in_progress': {'gt': 0, 'lt': 100},
            'completed': {'exact': 100},
        }),
    },
    tabs={
        'active': ('in_progress', 'paused'),
        'completed': ('completed',),
        'archived': ('archived',),
        'all': None,
    },
    default_tab='active',
)

TEACHER_COURSE_LISTING = Listing(
    name='teacher_courses',
    sorts={
        'created_at': SortKey('created_at', DESC),
        'name': SortKey('name', ASC, text=True),
        'price': SortKey('price', ASC),
        'status': SortKey('status', ASC, text=True),
        'start_date': SortKey('start_date', ASC),
        'students_count': SortKey('students_count', ASC),
    },
    default_sort='created_at',
    search_fields=('name', 'description', 'subject_name'),
    filters={'status': 'status', 'subject': 'subject_id'},
    directional=True,
)
