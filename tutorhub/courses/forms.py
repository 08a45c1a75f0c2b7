# courses/forms.py
from django import forms
from django.core.exceptions import ValidationError
from django.forms import formset_factory
from django.utils import timezone
from django.utils.text import slugify

from .models import Course, Subject

MAX_COVER_SIZE = 2 * 1024 * 1024


class CourseBasicsForm(forms.Form):
    name = forms.CharField(
        min_length=5, max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., Advanced Laravel Development'}),
    )
    slug = forms.SlugField(
        required=False, max_length=120,
        help_text="Leave blank to generate it from the course name.",
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'advanced-laravel-development'}),
    )
    description = forms.CharField(
        min_length=20,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4, 'placeholder': 'What is this course about?'}),
    )
    level = forms.ChoiceField(choices=Course.LEVEL_CHOICES, widget=forms.Select(attrs={'class': 'form-control'}))
    subject = forms.ModelChoiceField(
        queryset=Subject.objects.filter(is_active=True),
        empty_label="Select a subject",
        widget=forms.Select(attrs={'class': 'form-control'}),
    )
    price = forms.DecimalField(
        min_value=0, max_digits=10, decimal_places=2,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'min': '0', 'step': '0.01'}),
    )

    def __init__(self, *args, teacher_profile=None, **kwargs):
        super().__init__(*args, **kwargs)
        # Teachers pick from their own subjects when they have any
        if teacher_profile is not None and teacher_profile.subjects.filter(is_active=True).exists():
            self.fields['subject'].queryset = teacher_profile.subjects.filter(is_active=True)

    def clean(self):
        cleaned_data = super().clean()
        name = cleaned_data.get('name')
        slug = cleaned_data.get('slug') or (slugify(name) if name else '')

        if slug and Course.objects.filter(slug=slug).exists():
            field = 'slug' if self.cleaned_data.get('slug') else 'name'
            self.add_error(field, "A course with this slug already exists.")
        cleaned_data['slug'] = slug
        return cleaned_data


class ModuleForm(forms.Form):
    title = forms.CharField(
        min_length=3, max_length=150,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Module title'}),
    )
    description = forms.CharField(
        min_length=10,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2, 'placeholder': 'What does this module cover?'}),
    )


class OutcomeForm(forms.Form):
    text = forms.CharField(
        min_length=5, max_length=255,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Students will be able to...'}),
    )


class PrerequisiteForm(forms.Form):
    text = forms.CharField(
        required=False, max_length=255,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Optional prerequisite'}),
    )


ModuleFormSet = formset_factory(ModuleForm, extra=0, min_num=1, validate_min=True, can_delete=True)
OutcomeFormSet = formset_factory(OutcomeForm, extra=0, min_num=1, validate_min=True, can_delete=True)
PrerequisiteFormSet = formset_factory(PrerequisiteForm, extra=1, can_delete=True)


class CourseScheduleForm(forms.Form):
    duration = forms.IntegerField(
        min_value=1, max_value=52, help_text="Length in weeks",
        widget=forms.NumberInput(attrs={'class': 'form-control', 'min': '1', 'max': '52'}),
    )
    max_students = forms.IntegerField(
        min_value=1, max_value=100,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'min': '1', 'max': '100'}),
    )
    start_date = forms.DateField(widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}))
    end_date = forms.DateField(widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}))
    cover_image = forms.ImageField(
        required=False,
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': 'image/*'}),
    )

    def clean_start_date(self):
        start_date = self.cleaned_data.get('start_date')
        if start_date and start_date < timezone.localdate():
            raise ValidationError("The start date must be today or later.")
        return start_date

    def clean_cover_image(self):
        cover_image = self.cleaned_data.get('cover_image')
        if cover_image and cover_image.size > MAX_COVER_SIZE:
            raise ValidationError("The cover image may not be larger than 2 MB.")
        return cover_image

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')

        if start_date and end_date and end_date <= start_date:
            self.add_error('end_date', "The end date must be after the start date.")
        return cleaned_data
