from django.urls import path
from . import views

app_name = 'tutoring'

urlpatterns = [
    # Sessions
    path('sessions/', views.SessionListView.as_view(), name='session_list'),
    path('sessions/<int:pk>/', views.session_detail, name='session_detail'),
    path('sessions/<int:pk>/cancel/', views.session_cancel, name='session_cancel'),
    path('sessions/<int:pk>/feedback/', views.session_feedback, name='session_feedback'),
    path('sessions/<int:pk>/join/', views.session_join, name='session_join'),

    # Session Requests
    path('requests/', views.SessionRequestListView.as_view(), name='request_list'),
    path('requests/create/', views.request_create, name='request_create'),
    path('requests/<int:pk>/edit/', views.request_edit, name='request_edit'),
    path('requests/<int:pk>/cancel/', views.request_cancel, name='request_cancel'),

    # Teacher
    path('inbox/', views.TeacherRequestListView.as_view(), name='teacher_request_list'),
    path('inbox/<int:pk>/approve/', views.request_approve, name='request_approve'),
    path('inbox/<int:pk>/reject/', views.request_reject, name='request_reject'),
]
