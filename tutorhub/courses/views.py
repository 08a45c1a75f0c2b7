# courses/views.py
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import Http404, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views.decorators.http import require_http_methods
from django.views.generic import TemplateView

from common.exceptions import DomainError, NotFoundError
from common.notifications import Toast, notify
from common.presenters import format_date
from common.views import ListingMixin, RoleRequiredMixin, redirect_back, role_required, show_domain_error

from . import services
from .models import Course, Enrollment, Subject
from .presenters import present_course, present_enrollment, present_teacher_course
from .repositories import (
    catalog_repository, category_choices, enrollment_repository, teacher_course_repository, wishlist_ids,
    wishlist_records,
)
from .wizards import CourseWizard

CATALOG_SORTS = [
    ('popularity', 'Most Popular'),
    ('newest', 'Newest'),
    ('highest_rated', 'Highest Rated'),
    ('price_low', 'Price: Low to High'),
    ('price_high', 'Price: High to Low'),
]

ENROLLMENT_SORTS = [
    ('last_accessed', 'Last Accessed'),
    ('enrollment_date', 'Enrollment Date'),
    ('progress', 'Progress'),
    ('title', 'Course Title'),
]

PROGRESS_FILTERS = [
    ('not_started', 'Not Started'),
    ('in_progress', 'In Progress'),
    ('completed', 'Completed'),
]


def teacher_profile_for(user):
    return getattr(user, 'teacher_profile', None)


# Catalog Views
class CourseListView(LoginRequiredMixin, ListingMixin, TemplateView):
    template_name = 'courses/catalog.html'

    def get_repository(self):
        return catalog_repository()

    def present(self, record):
        return present_course(record, self.wishlist_ids)

    def get_context_data(self, **kwargs):
        self.wishlist_ids = wishlist_ids(self.request.user)
        context = super().get_context_data(**kwargs)

        all_courses = [self.present(record) for record in self.repository.all()]
        context.update({
            'categories': category_choices(),
            'levels': Course.LEVEL_CHOICES,
            'sort_options': CATALOG_SORTS,
            'featured_courses': [c for c in all_courses if c['is_featured']][:4],
            'bestsellers': [c for c in all_courses if c['is_bestseller']][:4],
        })
        return context


@login_required
def course_detail(request, pk):
    """Course details"""
    try:
        record = catalog_repository().get_record(pk)
    except NotFoundError:
        raise Http404("Course not found")

    course = present_course(record, wishlist_ids(request.user))
    context = {
        'course': course,
        'is_enrolled': Enrollment.objects.filter(user=request.user, course_id=pk).exists(),
    }
    return render(request, 'courses/detail.html', context)


@login_required
@require_http_methods(["POST"])
def toggle_wishlist(request, pk):
    """Add a course to the wishlist or remove it"""
    course = get_object_or_404(Course, pk=pk, status='active')
    if services.toggle_wishlist(request.user, course):
        notify(request, Toast.success(
            "Added to wishlist", f"{course.name} was added to your wishlist.",
            action={'label': 'View wishlist', 'url': reverse('courses:wishlist')},
        ))
    else:
        notify(request, Toast.info("Removed from wishlist", f"{course.name} was removed from your wishlist."))
    return redirect_back(request, 'courses:course_list')


@login_required
@require_http_methods(["POST"])
def enroll(request, pk):
    """Enroll the current user in a course"""
    course = get_object_or_404(Course, pk=pk, status='active')
    enrollment, created = services.enroll(request.user, course)

    if created:
        notify(request, Toast.success(
            "Successfully enrolled!", f"You are now enrolled in {course.name}.",
            action={'label': 'Start learning', 'url': course.get_absolute_url()},
        ))
    else:
        notify(request, Toast.info("Already enrolled", f"You are already enrolled in {course.name}."))
    return redirect('courses:enrollment_list')


# Wishlist Views
@login_required
def wishlist(request):
    """Wishlisted courses"""
    ids = wishlist_ids(request.user)
    courses = [present_course(record, ids) for record in wishlist_records(request.user)]
    return render(request, 'courses/wishlist.html', {'courses': courses})


@login_required
@require_http_methods(["POST"])
def wishlist_remove(request, pk):
    course = get_object_or_404(Course, pk=pk)
    if services.remove_from_wishlist(request.user, course):
        notify(request, Toast.info("Removed from wishlist", f"{course.name} was removed from your wishlist."))
    return redirect('courses:wishlist')


# Enrollment Views
class EnrollmentListView(LoginRequiredMixin, ListingMixin, TemplateView):
    template_name = 'courses/enrollments/list.html'

    def get_repository(self):
        return enrollment_repository(self.request.user)

    def present(self, record):
        return present_enrollment(record)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        all_enrollments = self.repository.all()

        context.update({
            'stats': services.enrollment_stats(all_enrollments),
            'top_enrollments': [self.present(r) for r in services.top_enrollments(all_enrollments)],
            'statuses': Enrollment.STATUS_CHOICES,
            'progress_filters': PROGRESS_FILTERS,
            'sort_options': ENROLLMENT_SORTS,
        })
        return context


@login_required
@require_http_methods(["POST"])
def enrollment_continue(request, pk):
    """Resume learning and jump to the course"""
    enrollment = get_object_or_404(Enrollment.objects.select_related('course'), pk=pk)
    try:
        services.continue_learning(request.user, enrollment)
    except DomainError as error:
        show_domain_error(request, error)
        return redirect('courses:enrollment_list')

    notify(request, Toast.info("Continuing course...", f"Redirecting to {enrollment.course.name}"))
    return redirect('courses:course_detail', pk=enrollment.course_id)


@login_required
def certificate(request, pk):
    """View the certificate of a completed enrollment"""
    enrollment = get_object_or_404(Enrollment.objects.select_related('course__teacher__user'), pk=pk)
    try:
        services.certificate_for(request.user, enrollment)
    except DomainError as error:
        show_domain_error(request, error)
        return redirect('courses:enrollment_list')

    return render(request, 'courses/enrollments/certificate.html', {
        'enrollment': enrollment,
        'issued_on': format_date(enrollment.certificate_issued_at),
    })


@login_required
def certificate_download(request, pk):
    enrollment = get_object_or_404(Enrollment.objects.select_related('course__teacher__user'), pk=pk)
    try:
        services.certificate_for(request.user, enrollment)
    except DomainError as error:
        show_domain_error(request, error)
        return redirect('courses:enrollment_list')

    lines = [
        "Certificate of Completion",
        "",
        f"This certifies that {request.user.display_name}",
        f"has completed {enrollment.course.name}",
        f"taught by {enrollment.course.teacher.user.display_name}",
        f"on {format_date(enrollment.certificate_issued_at)}.",
    ]
    response = HttpResponse("\n".join(lines) + "\n", content_type='text/plain; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="certificate-{enrollment.course.slug}.txt"'
    notify(request, Toast.success("Certificate downloaded"))
    return response


# Teacher Views
class TeacherCourseListView(LoginRequiredMixin, RoleRequiredMixin, ListingMixin, TemplateView):
    template_name = 'courses/teacher/list.html'
    required_role = 'teacher'

    def get_repository(self):
        return teacher_course_repository(teacher_profile_for(self.request.user))

    def present(self, record):
        return present_teacher_course(record)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update({
            'stats': services.teacher_course_stats(self.repository.all()),
            'statuses': Course.STATUS_CHOICES,
            'subjects': Subject.objects.filter(is_active=True),
        })
        return context


@login_required
@role_required('teacher')
@require_http_methods(["POST"])
def course_delete(request, pk):
    course = get_object_or_404(Course, pk=pk)
    name = course.name
    try:
        services.delete_course(request.user, course)
    except DomainError as error:
        show_domain_error(request, error)
    else:
        notify(request, Toast.success("Course deleted", f"{name} has been deleted."))
    return redirect('courses:teacher_course_list')


@login_required
@role_required('teacher')
@require_http_methods(["POST"])
def course_toggle_status(request, pk):
    course = get_object_or_404(Course, pk=pk)
    try:
        services.toggle_course_status(request.user, course)
    except DomainError as error:
        show_domain_error(request, error)
    else:
        notify(request, Toast.success("Course updated", f"{course.name} is now {course.get_status_display().lower()}."))
    return redirect('courses:teacher_course_list')


@login_required
@role_required('teacher')
def course_create(request):
    """Multi-step course creation"""
    wizard = CourseWizard.load(request.session, teacher_profile=teacher_profile_for(request.user))

    if request.method == 'POST':
        action = request.POST.get('action', 'next')

        if action == 'back':
            wizard.back(request.POST)
            wizard.save(request.session)
            return redirect('courses:course_create')

        if action == 'cancel':
            wizard.reset(request.session)
            messages.info(request, "Course creation cancelled.")
            return redirect('courses:teacher_course_list')

        if action == 'submit' or (action == 'next' and wizard.is_last):
            try:
                course = wizard.submit(request.POST, request.FILES)
            except DomainError as error:
                wizard.save(request.session)
                notify(request, Toast.error("There was an error creating your course:", error.message))
                return redirect('courses:course_create')

            if course is not None:
                wizard.reset(request.session)
                notify(request, Toast.success("Course created", "Your course has been created successfully."))
                return redirect('courses:teacher_course_list')
        elif wizard.next(request.POST, request.FILES):
            wizard.save(request.session)
            return redirect('courses:course_create')

        wizard.save(request.session)

    context = {
        'wizard': wizard,
        'forms': wizard.get_forms(),
        'today': timezone.localdate(),
    }
    return render(request, 'courses/teacher/create.html', context)
