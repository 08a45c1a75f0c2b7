# accounts/views.py
from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse_lazy
from django.views.decorators.http import require_http_methods
from django.views.generic import CreateView, TemplateView

from common.exceptions import DomainError
from common.notifications import Toast, notify
from common.presenters import badge_class, status_label
from common.views import role_required, show_domain_error
from courses.repositories import enrollment_repository, teacher_course_repository
from courses.services import teacher_course_stats
from tutoring.presenters import present_session, present_session_request
from tutoring.repositories import (
    session_record, session_repository, session_request_repository, teacher_request_repository,
)
from tutoring.services import upcoming_sessions

from . import services
from .forms import ClientRegistrationForm, TeacherRegistrationForm
from .models import CustomUser, ProfileDocument
from .wizards import ClientProfileWizard


class DashboardView(LoginRequiredMixin, TemplateView):
    template_name = 'accounts/dashboard.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        user = self.request.user

        if user.is_teacher:
            profile = getattr(user, 'teacher_profile', None)
            requests = teacher_request_repository(user).all()
            context.update({
                'course_stats': teacher_course_stats(teacher_course_repository(profile).all()),
                'pending_requests': [
                    present_session_request(r) for r in requests
                    if r['status'] in ('pending', 'under_review')
                ][:5],
                'upcoming_sessions': [
                    present_session(r) for r in upcoming_sessions(self.teaching_sessions(user), limit=5)
                ],
                'profile': profile,
            })
        else:
            profile = getattr(user, 'client_profile', None)
            sessions = session_repository(user).all()
            context.update({
                'stats': services.client_dashboard_stats(
                    enrollment_repository(user).all(),
                    session_request_repository(user).all(),
                    sessions,
                ),
                'next_sessions': [present_session(r) for r in upcoming_sessions(sessions)],
                'profile': profile,
            })

        context['profile_completion'] = self.calculate_profile_completion(profile)
        if profile is not None:
            context['profile_badge'] = badge_class('profile', profile.status)
            context['profile_status'] = status_label(profile.status)
        return context

    def teaching_sessions(self, user):
        return [session_record(session) for session in user.teaching_sessions.select_related('course', 'teacher__teacher_profile')]

    def calculate_profile_completion(self, profile):
        """Calculate profile completion percentage"""
        if profile is None:
            return 0
        return profile.completion_percentage


# Profile Setup
@login_required
@role_required('client')
def profile_setup(request):
    """Four step client profile setup"""
    wizard = ClientProfileWizard.load(request.session, user=request.user)

    if request.method == 'POST':
        action = request.POST.get('action', 'next')

        if action == 'back':
            wizard.back(request.POST)
            wizard.save(request.session)
            return redirect('accounts:profile_setup')

        if action == 'submit' or (action == 'next' and wizard.is_last):
            try:
                profile = wizard.submit(request.POST, request.FILES)
            except DomainError as error:
                wizard.save(request.session)
                notify(request, Toast.error("Update failed!", error.message))
                return redirect('accounts:profile_setup')

            if profile is not None:
                wizard.reset(request.session)
                notify(request, Toast.success(
                    "Profile completed successfully!",
                    "Your client profile has been set up and is now pending review.",
                ))
                return redirect('accounts:dashboard')
        elif wizard.next(request.POST, request.FILES):
            wizard.save(request.session)
            return redirect('accounts:profile_setup')

        wizard.save(request.session)

    profile = wizard.profile
    context = {
        'wizard': wizard,
        'forms': wizard.get_forms(),
        'profile': profile,
        'staged_documents': wizard.staged_names('documents'),
        'documents': profile.documents.all() if profile is not None and profile.pk else [],
    }
    return render(request, 'accounts/profile_setup.html', context)


@login_required
@require_http_methods(["POST"])
def document_delete(request, pk):
    document = get_object_or_404(ProfileDocument.objects.select_related('profile'), pk=pk)
    try:
        services.delete_document(request.user, document)
    except DomainError as error:
        show_domain_error(request, error)
    else:
        notify(request, Toast.success("File deleted successfully!"))
    return redirect('accounts:profile_setup')


# Registration
class ClientRegistrationView(CreateView):
    model = CustomUser
    form_class = ClientRegistrationForm
    template_name = 'registration/register.html'
    success_url = reverse_lazy('accounts:profile_setup')
    extra_context = {'title': 'Create a client account'}

    def form_valid(self, form):
        response = super().form_valid(form)
        login(self.request, self.object, backend='django.contrib.auth.backends.ModelBackend')
        messages.success(self.request, 'Welcome to TutorHub! Please complete your profile to get started.')
        return response


class TeacherRegistrationView(CreateView):
    model = CustomUser
    form_class = TeacherRegistrationForm
    template_name = 'registration/register.html'
    success_url = reverse_lazy('accounts:dashboard')
    extra_context = {'title': 'Create a teacher account'}

    def form_valid(self, form):
        response = super().form_valid(form)
        login(self.request, self.object, backend='django.contrib.auth.backends.ModelBackend')
        messages.success(
            self.request,
            'Welcome to TutorHub! Your teacher account has been created and is pending approval.'
        )
        return response
