from django.urls import path
from . import views

app_name = 'courses'

urlpatterns = [
    # Catalog
    path('', views.CourseListView.as_view(), name='course_list'),
    path('<int:pk>/', views.course_detail, name='course_detail'),
    path('<int:pk>/enroll/', views.enroll, name='enroll'),
    path('<int:pk>/wishlist/', views.toggle_wishlist, name='toggle_wishlist'),

    # Wishlist
    path('wishlist/', views.wishlist, name='wishlist'),
    path('wishlist/<int:pk>/remove/', views.wishlist_remove, name='wishlist_remove'),

    # Enrollments
    path('enrollments/', views.EnrollmentListView.as_view(), name='enrollment_list'),
    path('enrollments/<int:pk>/continue/', views.enrollment_continue, name='enrollment_continue'),
    path('enrollments/<int:pk>/certificate/', views.certificate, name='certificate'),
    path('enrollments/<int:pk>/certificate/download/', views.certificate_download, name='certificate_download'),

    # Teacher
    path('teach/', views.TeacherCourseListView.as_view(), name='teacher_course_list'),
    path('teach/create/', views.course_create, name='course_create'),
    path('teach/<int:pk>/delete/', views.course_delete, name='course_delete'),
    path('teach/<int:pk>/toggle-status/', views.course_toggle_status, name='course_toggle_status'),
]
