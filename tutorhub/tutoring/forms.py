# tutoring/forms.py
from datetime import datetime, time, timedelta
from decimal import Decimal

from django import forms
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.utils import timezone

from courses.models import Course

from .models import SessionRequest

User = get_user_model()


def time_slots(start=8, end=20, step=30):
    """Half-hourly choices from 08:00 to 20:00"""
    slots = []
    current = datetime.combine(datetime.min, time(start))
    last = datetime.combine(datetime.min, time(end))
    while current <= last:
        slots.append((current.strftime('%H:%M'), current.strftime('%I:%M %p')))
        current += timedelta(minutes=step)
    return slots


def parse_slot(value):
    return datetime.strptime(value, '%H:%M').time()


class SessionRequestForm(forms.ModelForm):
    time = forms.TypedChoiceField(
        choices=time_slots(), coerce=parse_slot,
        widget=forms.Select(attrs={'class': 'form-control'}),
    )

    class Meta:
        model = SessionRequest
        fields = ['course', 'teacher', 'title', 'date', 'time', 'duration_hours', 'notes', 'preferred_contact']
        widgets = {
            'course': forms.Select(attrs={'class': 'form-control'}),
            'teacher': forms.Select(attrs={'class': 'form-control'}),
            'title': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'What would you like to cover?'
            }),
            'date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'duration_hours': forms.NumberInput(attrs={
                'class': 'form-control',
                'min': '0.5',
                'max': '4',
                'step': '0.5'
            }),
            'notes': forms.Textarea(attrs={
                'class': 'form-control',
                'rows': 4,
                'placeholder': 'Anything the teacher should know beforehand...'
            }),
            'preferred_contact': forms.Select(attrs={'class': 'form-control'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['course'].required = True
        self.fields['course'].queryset = Course.objects.filter(status='active').order_by('name')
        self.fields['teacher'].queryset = User.objects.filter(
            is_active=True, user_type='teacher'
        ).order_by('first_name', 'last_name')

        if self.instance.pk:
            self.initial['time'] = self.instance.time.strftime('%H:%M')
        else:
            self.initial.setdefault('date', timezone.localdate() + timedelta(days=1))
            self.initial.setdefault('time', '10:00')
            self.initial.setdefault('duration_hours', Decimal('1.0'))

    def clean_title(self):
        title = (self.cleaned_data.get('title') or '').strip()
        if len(title) < 5:
            raise ValidationError("Title must be at least 5 characters long.")
        return title

    def clean_date(self):
        date = self.cleaned_data.get('date')
        if date and date < timezone.localdate():
            raise ValidationError("The session date must be today or later.")
        return date

    def clean_duration_hours(self):
        duration = self.cleaned_data.get('duration_hours')
        if duration is not None and not Decimal('0.5') <= duration <= Decimal('4'):
            raise ValidationError("Sessions last between half an hour and four hours.")
        return duration


class FeedbackForm(forms.Form):
    RATING_CHOICES = [(i, f"{i} star{'s' if i > 1 else ''}") for i in range(1, 6)]

    rating = forms.TypedChoiceField(
        choices=RATING_CHOICES, coerce=int,
        widget=forms.Select(attrs={'class': 'form-control'}),
    )


class RejectRequestForm(forms.Form):
    reason = forms.CharField(
        widget=forms.Textarea(attrs={
            'class': 'form-control',
            'rows': 3,
            'placeholder': 'Let the student know why the request was rejected...'
        })
    )

    def clean_reason(self):
        reason = (self.cleaned_data.get('reason') or '').strip()
        if len(reason) < 10:
            raise ValidationError("Please give a reason of at least 10 characters.")
        return reason

