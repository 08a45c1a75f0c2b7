# tutoring/models.py
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.urls import reverse
from django.utils import timezone

from common.dates import combine

JOIN_OPENS_BEFORE = timedelta(minutes=15)
JOIN_CLOSES_AFTER = timedelta(hours=2)


def is_joinable(starts_at, status, now=None):
    """Sessions open 15 minutes before the start and stay open for two hours"""
    now = now or timezone.now()
    if starts_at is None or status not in LearningSession.UPCOMING_STATUSES:
        return False
    return starts_at - JOIN_OPENS_BEFORE <= now <= starts_at + JOIN_CLOSES_AFTER


class SessionRequest(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('under_review', 'Under Review'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
        ('cancelled', 'Cancelled'),
    ]

    CONTACT_CHOICES = [
        ('email', 'Email'),
        ('phone', 'Phone'),
        ('any', 'Any'),
    ]

    EDITABLE_STATUSES = ('pending',)
    CANCELLABLE_STATUSES = ('pending', 'under_review')

    client = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='session_requests')
    teacher = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_session_requests')
    course = models.ForeignKey('courses.Course', on_delete=models.SET_NULL, blank=True, null=True, related_name='session_requests')
    title = models.CharField(max_length=100)
    date = models.DateField()
    time = models.TimeField()
    duration_hours = models.DecimalField(
        max_digits=3, decimal_places=1, default=Decimal('1.0'),
        validators=[MinValueValidator(Decimal('0.5')), MaxValueValidator(Decimal('4'))],
    )
    notes = models.TextField(max_length=500, blank=True)
    preferred_contact = models.CharField(max_length=10, choices=CONTACT_CHOICES, default='email')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    admin_notes = models.TextField(blank=True)
    rejection_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.title} - {self.client}"

    def get_absolute_url(self):
        return reverse('tutoring:request_edit', kwargs={'pk': self.pk})

    @property
    def starts_at(self):
        return combine(self.date, self.time)

    @property
    def can_edit(self):
        return self.status in self.EDITABLE_STATUSES

    @property
    def can_cancel(self):
        return self.status in self.CANCELLABLE_STATUSES

    class Meta:
        ordering = ['-created_at', '-pk']


class LearningSession(models.Model):
    STATUS_CHOICES = [
        ('scheduled', 'Scheduled'),
        ('confirmed', 'Confirmed'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]

    UPCOMING_STATUSES = ('scheduled', 'confirmed')

    client = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='learning_sessions')
    teacher = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='teaching_sessions')
    course = models.ForeignKey('courses.Course', on_delete=models.SET_NULL, blank=True, null=True, related_name='sessions')
    request = models.OneToOneField(SessionRequest, on_delete=models.SET_NULL, blank=True, null=True, related_name='session')

    title = models.CharField(max_length=200)
    date = models.DateField()
    time = models.TimeField()
    end_time = models.TimeField(blank=True, null=True)
    duration_hours = models.DecimalField(max_digits=3, decimal_places=1, default=Decimal('1.0'))
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='scheduled')

    # Meeting details
    location = models.CharField(max_length=200, default='Online')
    meeting_link = models.URLField(blank=True)
    notes = models.TextField(blank=True)
    materials = models.JSONField(default=list, blank=True, help_text="List of {name, type, url}")
    recording = models.JSONField(blank=True, null=True, help_text="{url, duration, size}")
    feedback_rating = models.PositiveSmallIntegerField(
        blank=True, null=True, validators=[MinValueValidator(1), MaxValueValidator(5)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.title} - {self.client} with {self.teacher}"

    def get_absolute_url(self):
        return reverse('tutoring:session_detail', kwargs={'pk': self.pk})

    @property
    def starts_at(self):
        return combine(self.date, self.time)

    @property
    def ends_at(self):
        if not self.end_time:
            return self.starts_at + timedelta(hours=float(self.duration_hours))
        ends_at = combine(self.date, self.end_time)
        if self.end_time <= self.time:
            # runs past midnight
            ends_at += timedelta(days=1)
        return ends_at

    @property
    def is_upcoming(self):
        return self.status in self.UPCOMING_STATUSES

    def is_joinable(self, now=None):
        return is_joinable(self.starts_at, self.status, now)

    class Meta:
        ordering = ['date', 'time', 'pk']
