# tutoring/views.py
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import Http404
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_http_methods
from django.views.generic import TemplateView

from common.exceptions import DomainError, NotFoundError
from common.notifications import Toast, notify
from common.views import ListingMixin, RoleRequiredMixin, role_required, show_domain_error

from . import services
from .forms import FeedbackForm, RejectRequestForm, SessionRequestForm
from .models import LearningSession, SessionRequest
from .presenters import present_session, present_session_request
from .repositories import session_repository, session_request_repository, teacher_request_repository

SESSION_SORTS = [
    ('date', 'Date'),
    ('title', 'Title'),
    ('teacher', 'Teacher'),
    ('course', 'Course'),
]

REQUEST_SORTS = [
    ('created_at', 'Newest'),
    ('title', 'Title'),
    ('date', 'Session Date'),
    ('status', 'Status'),
]

DATE_FILTERS = [
    ('today', 'Today'),
    ('this_week', 'This Week'),
    ('this_month', 'This Month'),
]

SESSION_TABS = [
    ('upcoming', 'Upcoming'),
    ('completed', 'Completed'),
    ('cancelled', 'Cancelled'),
    ('all', 'All'),
]

REQUEST_TABS = [
    ('pending', 'Pending'),
    ('approved', 'Approved'),
    ('rejected', 'Rejected'),
    ('cancelled', 'Cancelled'),
    ('all', 'All'),
]


# Session Views
class SessionListView(LoginRequiredMixin, ListingMixin, TemplateView):
    template_name = 'tutoring/sessions/list.html'

    def get_repository(self):
        return session_repository(self.request.user)

    def present(self, record):
        return present_session(record)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        all_sessions = self.repository.all()
        context.update({
            'stats': services.session_stats(all_sessions),
            'next_sessions': [self.present(r) for r in services.upcoming_sessions(all_sessions)],
            'tabs': SESSION_TABS,
            'statuses': LearningSession.STATUS_CHOICES,
            'date_filters': DATE_FILTERS,
            'sort_options': SESSION_SORTS,
        })
        return context


@login_required
def session_detail(request, pk):
    """Session details"""
    try:
        record = session_repository(request.user).get_record(pk)
    except NotFoundError:
        raise Http404("Session not found")

    context = {
        'session': present_session(record),
        'feedback_form': FeedbackForm(),
    }
    return render(request, 'tutoring/sessions/detail.html', context)


@login_required
@require_http_methods(["POST"])
def session_cancel(request, pk):
    session = get_object_or_404(LearningSession, pk=pk)
    try:
        services.cancel_session(request.user, session)
    except DomainError as error:
        show_domain_error(request, error)
    else:
        notify(request, Toast.warning("Session cancelled", f"{session.title} has been cancelled."))
    return redirect('tutoring:session_list')


@login_required
@require_http_methods(["POST"])
def session_feedback(request, pk):
    """Rate a completed session"""
    session = get_object_or_404(LearningSession, pk=pk)
    form = FeedbackForm(request.POST)
    if not form.is_valid():
        notify(request, Toast.error("Please choose a rating between 1 and 5."))
        return redirect('tutoring:session_detail', pk=pk)

    try:
        services.record_feedback(request.user, session, form.cleaned_data['rating'])
    except DomainError as error:
        show_domain_error(request, error)
    else:
        notify(request, Toast.success("Thanks for your feedback!"))
    return redirect('tutoring:session_detail', pk=pk)


@login_required
def session_join(request, pk):
    session = get_object_or_404(LearningSession, pk=pk)
    try:
        link = services.join_link(request.user, session)
    except DomainError as error:
        show_domain_error(request, error)
        return redirect('tutoring:session_list')
    return redirect(link)


# Session Request Views
class SessionRequestListView(LoginRequiredMixin, ListingMixin, TemplateView):
    template_name = 'tutoring/requests/list.html'

    def get_repository(self):
        return session_request_repository(self.request.user)

    def present(self, record):
        return present_session_request(record)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update({
            'stats': services.request_stats(self.repository.all()),
            'tabs': REQUEST_TABS,
            'statuses': SessionRequest.STATUS_CHOICES,
            'sort_options': REQUEST_SORTS,
        })
        return context


@login_required
@role_required('client')
def request_create(request):
    """Ask a teacher for a 1:1 session"""
    if request.method == 'POST':
        form = SessionRequestForm(request.POST)
        if form.is_valid():
            services.submit_request(request.user, form.cleaned_data)
            notify(request, Toast.success(
                "Session request submitted!", "You will be notified once the teacher responds."
            ))
            return redirect('tutoring:request_list')
    else:
        form = SessionRequestForm()

    return render(request, 'tutoring/requests/form.html', {'form': form, 'title': 'Request a Session'})


@login_required
def request_edit(request, pk):
    session_request = get_object_or_404(SessionRequest, pk=pk)
    try:
        services.ensure_editable(request.user, session_request)
    except DomainError as error:
        show_domain_error(request, error)
        return redirect('tutoring:request_list')

    if request.method == 'POST':
        form = SessionRequestForm(request.POST, instance=session_request)
        if form.is_valid():
            services.update_request(request.user, session_request, form.cleaned_data)
            notify(request, Toast.success("Request updated", f"{session_request.title} has been updated."))
            return redirect('tutoring:request_list')
    else:
        form = SessionRequestForm(instance=session_request)

    return render(request, 'tutoring/requests/form.html', {
        'form': form,
        'title': 'Edit Session Request',
        'session_request': session_request,
    })


@login_required
@require_http_methods(["POST"])
def request_cancel(request, pk):
    session_request = get_object_or_404(SessionRequest, pk=pk)
    try:
        services.cancel_request(request.user, session_request)
    except DomainError as error:
        show_domain_error(request, error)
    else:
        notify(request, Toast.warning("Request cancelled", f"{session_request.title} has been cancelled."))
    return redirect('tutoring:request_list')


# Teacher Views
class TeacherRequestListView(LoginRequiredMixin, RoleRequiredMixin, ListingMixin, TemplateView):
    template_name = 'tutoring/teacher/requests.html'
    required_role = 'teacher'
    per_page = 10

    def get_repository(self):
        return teacher_request_repository(self.request.user)

    def present(self, record):
        return present_session_request(record)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update({
            'stats': services.request_stats(self.repository.all()),
            'tabs': REQUEST_TABS[:3],
            'reject_form': RejectRequestForm(),
        })
        return context


@login_required
@role_required('teacher')
@require_http_methods(["POST"])
def request_approve(request, pk):
    session_request = get_object_or_404(SessionRequest, pk=pk)
    try:
        services.approve_request(request.user, session_request)
    except DomainError as error:
        show_domain_error(request, error)
    else:
        notify(request, Toast.success("Session request approved successfully."))
    return redirect('tutoring:teacher_request_list')


@login_required
@role_required('teacher')
@require_http_methods(["POST"])
def request_reject(request, pk):
    session_request = get_object_or_404(SessionRequest, pk=pk)
    form = RejectRequestForm(request.POST)
    if not form.is_valid():
        notify(request, Toast.error("Rejection failed", form.errors['reason'][0]))
        return redirect('tutoring:teacher_request_list')

    try:
        services.reject_request(request.user, session_request, form.cleaned_data['reason'])
    except DomainError as error:
        show_domain_error(request, error)
    else:
        notify(request, Toast.success("Session request rejected."))
    return redirect('tutoring:teacher_request_list')
