from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    path("dashboard/", views.DashboardView.as_view(), name="dashboard"),

    # Profile setup
    path("profile/setup/", views.profile_setup, name="profile_setup"),
    path("profile/documents/<int:pk>/delete/", views.document_delete, name="document_delete"),

    # Registration
    path("register/client/", views.ClientRegistrationView.as_view(), name="client_register"),
    path("register/teacher/", views.TeacherRegistrationView.as_view(), name="teacher_register"),
]
