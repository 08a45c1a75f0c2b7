# courses/demo.py
from datetime import timedelta

from django.utils import timezone

CATEGORIES = {
    'development': 'Web Development',
    'design': 'Design',
    'marketing': 'Digital Marketing',
    'business': 'Business',
    'mobile': 'Mobile Development',
    'data': 'Data Science',
}

WISHLIST_COURSE_IDS = [3, 5]

CATALOG_COURSES = [
    {
        'id': 1,
        'title': 'Advanced Laravel Development',
        'slug': 'advanced-laravel-development',
        'description': 'Master Laravel framework with advanced techniques and best practices.',
        'short_description': 'Take your Laravel skills to the next level.',
        'price': 129.99,
        'sale_price': 89.99,
        'category': 'development',
        'level': 'advanced',
        'duration': '10 weeks',
        'lessons': 42,
        'students': 1458,
        'rating': 4.8,
        'reviews_count': 326,
        'instructor': 'Sarah Johnson',
        'instructor_title': 'Senior Laravel Developer',
        'created_at': '2024-02-15',
        'is_featured': True,
        'is_bestseller': True,
        'skills': ['Laravel', 'PHP', 'MySQL', 'API Development', 'TDD'],
        'what_youll_learn': [
            'Build complex Laravel applications using best practices',
            'Implement authentication and authorization',
            'Develop RESTful APIs with Laravel',
            'Master Eloquent ORM and database relationships',
            'Implement testing strategies for Laravel apps',
        ],
    },
    {
        'id': 2,
        'title': 'React and Redux Masterclass',
        'slug': 'react-redux-masterclass',
        'description': 'Comprehensive guide to building scalable applications with React and Redux.',
        'short_description': 'Become a React expert.',
        'price': 149.99,
        'sale_price': None,
        'category': 'development',
        'level': 'intermediate',
        'duration': '8 weeks',
        'lessons': 38,
        'students': 2145,
        'rating': 4.7,
        'reviews_count': 512,
        'instructor': 'Michael Chen',
        'instructor_title': 'Frontend Developer & Consultant',
        'created_at': '2024-01-10',
        'is_featured': False,
        'is_bestseller': True,
        'skills': ['React', 'Redux', 'JavaScript', 'Frontend Development'],
        'what_youll_learn': [
            'Build complex UIs with React components',
            'Manage application state with Redux',
            'Implement routing and navigation',
            'Optimize React applications for performance',
            'Test React components effectively',
        ],
    },
    {
        'id': 3,
        'title': 'UI/UX Design Fundamentals',
        'slug': 'ui-ux-design-fundamentals',
        'description': 'Learn the principles of effective UI/UX design and create stunning user interfaces.',
        'short_description': 'Create beautiful, user-friendly designs.',
        'price': 99.99,
        'sale_price': 79.99,
        'category': 'design',
        'level': 'beginner',
        'duration': '6 weeks',
        'lessons': 28,
        'students': 3250,
        'rating': 4.9,
        'reviews_count': 748,
        'instructor': 'Emily Rodriguez',
        'instructor_title': 'Senior UX Designer',
        'created_at': '2023-11-25',
        'is_featured': True,
        'is_bestseller': True,
        'skills': ['UI Design', 'UX Research', 'Figma', 'Design Principles'],
        'what_youll_learn': [
            'Create user-centered designs',
            'Conduct effective user research',
            'Design intuitive user interfaces',
            'Create wireframes and prototypes',
            'Test and iterate on designs',
        ],
    },
    {
        'id': 4,
        'title': 'Digital Marketing Strategy',
        'slug': 'digital-marketing-strategy',
        'description': 'Develop comprehensive digital marketing strategies to grow your business online.',
        'short_description': 'Master digital marketing strategies.',
        'price': 119.99,
        'sale_price': None,
        'category': 'marketing',
        'level': 'intermediate',
        'duration': '7 weeks',
        'lessons': 35,
        'students': 1876,
        'rating': 4.6,
        'reviews_count': 395,
        'instructor': 'David Wilson',
        'instructor_title': 'Digital Marketing Specialist',
        'created_at': '2024-01-05',
        'is_featured': False,
        'is_bestseller': False,
        'skills': ['SEO', 'Content Marketing', 'Social Media', 'Email Marketing'],
        'what_youll_learn': [
            'Create effective digital marketing campaigns',
            'Optimize content for search engines',
            'Develop social media marketing strategies',
            'Analyze marketing data and make improvements',
            'Build email marketing campaigns',
        ],
    },
    {
        'id': 5,
        'title': 'Flutter App Development',
        'slug': 'flutter-app-development',
        'description': 'Build beautiful cross-platform mobile applications with Flutter and Dart.',
        'short_description': 'Create cross-platform mobile apps.',
        'price': 139.99,
        'sale_price': 99.99,
        'category': 'mobile',
        'level': 'intermediate',
        'duration': '9 weeks',
        'lessons': 46,
        'students': 2205,
        'rating': 4.8,
        'reviews_count': 537,
        'instructor': 'Alex Johnson',
        'instructor_title': 'Mobile Developer',
        'created_at': '2023-12-08',
        'is_featured': True,
        'is_bestseller': False,
        'skills': ['Flutter', 'Dart', 'Mobile Development', 'UI Design'],
        'what_youll_learn': [
            'Build beautiful user interfaces with Flutter',
            'Implement state management in Flutter apps',
            'Connect to APIs and handle data',
            'Deploy apps to iOS and Android',
            'Implement authentication and user management',
        ],
    },
    {
        'id': 6,
        'title': 'Data Science with Python',
        'slug': 'data-science-python',
        'description': 'Learn data analysis, visualization, and machine learning with Python.',
        'short_description': 'Analyze and visualize data with Python.',
        'price': 159.99,
        'sale_price': 129.99,
        'category': 'data',
        'level': 'all',
        'duration': '12 weeks',
        'lessons': 58,
        'students': 1975,
        'rating': 4.7,
        'reviews_count': 412,
        'instructor': 'Lisa Chen',
        'instructor_title': 'Data Scientist',
        'created_at': '2023-10-15',
        'is_featured': False,
        'is_bestseller': True,
        'skills': ['Python', 'Pandas', 'NumPy', 'Matplotlib', 'Machine Learning'],
        'what_youll_learn': [
            'Analyze data with Python libraries',
            'Create compelling data visualizations',
            'Build machine learning models',
            'Clean and preprocess data effectively',
            'Extract insights from large datasets',
        ],
    },
    {
        'id': 7,
        'title': 'Business Analytics Fundamentals',
        'slug': 'business-analytics-fundamentals',
        'description': 'Learn how to analyze business data and make data-driven decisions.',
        'short_description': 'Make better business decisions with data.',
        'price': 109.99,
        'sale_price': None,
        'category': 'business',
        'level': 'beginner',
        'duration': '5 weeks',
        'lessons': 24,
        'students': 1250,
        'rating': 4.5,
        'reviews_count': 285,
        'instructor': 'Robert Taylor',
        'instructor_title': 'Business Analyst',
        'created_at': '2024-02-01',
        'is_featured': False,
        'is_bestseller': False,
        'skills': ['Data Analysis', 'Excel', 'Business Intelligence', 'Reporting'],
        'what_youll_learn': [
            'Analyze business data effectively',
            'Create insightful reports and dashboards',
            'Make data-driven business decisions',
            'Identify key performance indicators',
            'Present data findings to stakeholders',
        ],
    },
    {
        'id': 8,
        'title': 'Graphic Design Masterclass',
        'slug': 'graphic-design-masterclass',
        'description': 'Learn graphic design principles and tools to create stunning visuals.',
        'short_description': 'Create professional graphic designs.',
        'price': 129.99,
        'sale_price': 99.99,
        'category': 'design',
        'level': 'all',
        'duration': '8 weeks',
        'lessons': 40,
        'students': 2780,
        'rating': 4.8,
        'reviews_count': 623,
        'instructor': 'Jessica Park',
        'instructor_title': 'Senior Graphic Designer',
        'created_at': '2023-09-20',
        'is_featured': True,
        'is_bestseller': True,
        'skills': ['Adobe Photoshop', 'Adobe Illustrator', 'Typography', 'Color Theory'],
        'what_youll_learn': [
            'Master essential graphic design principles',
            'Create logos, branding, and marketing materials',
            'Design for print and digital media',
            'Work with typography effectively',
            'Build a professional design portfolio',
        ],
    },
]


def _enrollment(pk, course_id, **fields):
    course = CATALOG_COURSES[course_id - 1]
    record = {
        'id': pk,
        'course_id': course_id,
        'course_title': course['title'],
        'course_slug': course['slug'],
        'instructor': course['instructor'],
        'category': course['category'],
        'level': course['level'],
        'total_lessons': course['lessons'],
        'certificate_date': None,
    }
    record.update(fields)
    record['has_certificate'] = record['certificate_date'] is not None
    return record


ENROLLMENTS = [
    _enrollment(
        1, 1, progress=35, status='in_progress', enrollment_date='2024-01-15',
        last_accessed='2024-03-01 14:20:00', expiry_date='2025-01-15',
        current_lesson='API Development with Laravel', completed_lessons=15,
    ),
    _enrollment(
        2, 2, progress=68, status='in_progress', enrollment_date='2023-11-10',
        last_accessed='2024-02-28 09:15:00', expiry_date='2024-11-10',
        current_lesson='Advanced Redux Middleware', completed_lessons=26,
    ),
    _enrollment(
        3, 3, progress=100, status='completed', enrollment_date='2023-09-05',
        last_accessed='2023-10-25 16:45:00', expiry_date='2024-09-05',
        certificate_date='2023-10-25', current_lesson='Course Completed', completed_lessons=28,
    ),
    _enrollment(
        4, 4, progress=45, status='paused', enrollment_date='2023-12-12',
        last_accessed='2024-01-15 11:30:00', expiry_date='2024-12-12',
        current_lesson='Social Media Marketing Plan', completed_lessons=16,
    ),
    _enrollment(
        5, 5, progress=10, status='in_progress', enrollment_date='2024-02-20',
        last_accessed='2024-02-25 13:10:00', expiry_date='2025-02-20',
        current_lesson='Flutter Widgets and Layouts', completed_lessons=5,
    ),
    _enrollment(
        6, 6, progress=100, status='completed', enrollment_date='2023-08-10',
        last_accessed='2023-11-30 10:20:00', expiry_date='2024-08-10',
        certificate_date='2023-11-30', current_lesson='Course Completed', completed_lessons=58,
    ),
    _enrollment(
        7, 7, progress=100, status='archived', enrollment_date='2023-05-05',
        last_accessed='2023-07-15 09:45:00', expiry_date='2024-05-05',
        certificate_date='2023-07-15', current_lesson='Course Archived', completed_lessons=24,
    ),
    _enrollment(
        8, 8, progress=75, status='in_progress', enrollment_date='2023-10-10',
        last_accessed='2024-02-20 15:30:00', expiry_date='2024-10-10',
        current_lesson='Advanced Typography Techniques', completed_lessons=30,
    ),
]


def catalog_courses():
    return [dict(course) for course in CATALOG_COURSES]


def enrollments():
    return [dict(enrollment) for enrollment in ENROLLMENTS]


def wishlist_courses():
    return [dict(course) for course in CATALOG_COURSES if course['id'] in WISHLIST_COURSE_IDS]


def teacher_courses(now=None):
    """Teacher course list records with dates relative to ``now``"""
    now = now or timezone.now()
    today = timezone.localdate(now) if timezone.is_aware(now) else now.date()

    def day(offset):
        return (today + timedelta(days=offset)).isoformat()

    def moment(days_ago):
        return (now - timedelta(days=days_ago)).strftime('%Y-%m-%d %H:%M:%S')

    return [
        {
            'id': 1,
            'name': 'Advanced Laravel Development',
            'description': 'Master advanced Laravel concepts including Middleware, Service Containers, and more.',
            'level': 'advanced',
            'subject_id': 1,
            'subject_name': 'Laravel Development',
            'price': 299.99,
            'status': 'active',
            'students_count': 12,
            'max_students': 20,
            'start_date': day(5),
            'end_date': day(92),
            'created_at': moment(30),
            'curriculum': [
                'Module 1: Advanced Routing',
                'Module 2: Service Containers and IoC',
                'Module 3: Custom Middleware',
                'Module 4: Advanced Eloquent',
                'Module 5: Final Project',
            ],
            'learning_outcomes': [
                'Build complex Laravel applications',
                'Implement custom service providers',
                'Optimize database queries',
                'Create reusable packages',
            ],
        },
        {
            'id': 2,
            'name': 'React and Redux Masterclass',
            'description': 'Comprehensive guide to building scalable applications with React and Redux.',
            'level': 'intermediate',
            'subject_id': 2,
            'subject_name': 'React Development',
            'price': 249.99,
            'status': 'active',
            'students_count': 8,
            'max_students': 15,
            'start_date': day(10),
            'end_date': day(61),
            'created_at': moment(45),
            'curriculum': [
                'Module 1: React Fundamentals',
                'Module 2: React Hooks',
                'Module 3: Redux Basics',
                'Module 4: Advanced Redux',
                'Module 5: Testing React Applications',
            ],
            'learning_outcomes': [
                'Build complex React applications',
                'Manage state with Redux',
                'Implement testing strategies',
                'Deploy React applications',
            ],
        },
        {
            'id': 3,
            'name': 'UI/UX Design Fundamentals',
            'description': 'Learn the principles of effective UI/UX design and implement them in real projects.',
            'level': 'beginner',
            'subject_id': 3,
            'subject_name': 'UI/UX Design',
            'price': 199.99,
            'status': 'draft',
            'students_count': 0,
            'max_students': 25,
            'start_date': day(20),
            'end_date': day(61),
            'created_at': moment(10),
            'curriculum': [
                'Module 1: Design Principles',
                'Module 2: Color Theory',
                'Module 3: Typography',
                'Module 4: User Research',
                'Module 5: Prototyping',
            ],
            'learning_outcomes': [
                'Create effective user interfaces',
                'Conduct user research',
                'Build interactive prototypes',
                'Implement design systems',
            ],
        },
        {
            'id': 4,
            'name': 'Mobile Development with Flutter',
            'description': 'Build cross-platform mobile applications with Flutter and Dart.',
            'level': 'intermediate',
            'subject_id': 4,
            'subject_name': 'Mobile Development',
            'price': 279.99,
            'status': 'inactive',
            'students_count': 5,
            'max_students': 20,
            'start_date': day(-60),
            'end_date': day(-5),
            'created_at': moment(90),
            'curriculum': [
                'Module 1: Dart Programming',
                'Module 2: Flutter Basics',
                'Module 3: State Management',
                'Module 4: Advanced Widgets',
                'Module 5: Publishing Apps',
            ],
            'learning_outcomes': [
                'Build cross-platform mobile apps',
                'Implement complex UI designs',
                'Manage app state effectively',
                'Publish apps to app stores',
            ],
        },
    ]
