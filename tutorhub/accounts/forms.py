# accounts/forms.py
from django import forms
from django.contrib.auth.forms import UserCreationForm
from django.core.exceptions import ValidationError

from .models import ClientProfile, CustomUser, TeacherProfile

MAX_LOGO_SIZE = 2 * 1024 * 1024
MAX_DOCUMENT_SIZE = 10 * 1024 * 1024


class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleFileField(forms.FileField):
    def __init__(self, *args, **kwargs):
        kwargs.setdefault('widget', MultipleFileInput(attrs={'class': 'form-control'}))
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single_file_clean = super().clean
        if isinstance(data, (list, tuple)):
            return [single_file_clean(item, initial) for item in data]
        if data:
            return [single_file_clean(data, initial)]
        return []


# Registration
class ClientRegistrationForm(UserCreationForm):
    first_name = forms.CharField(
        max_length=30,
        required=True,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'First Name'})
    )
    last_name = forms.CharField(
        max_length=30,
        required=True,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Last Name'})
    )
    email = forms.EmailField(
        required=True,
        widget=forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'Email Address'})
    )
    phone = forms.CharField(
        max_length=20,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Phone Number'})
    )

    user_type = 'client'

    class Meta:
        model = CustomUser
        fields = ('username', 'first_name', 'last_name', 'email', 'phone')
        widgets = {
            'username': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Username'}),
        }

    def clean_email(self):
        email = self.cleaned_data.get('email')
        if CustomUser.objects.filter(email__iexact=email).exists():
            raise ValidationError("A user with this email already exists.")
        return email

    def save(self, commit=True):
        user = super().save(commit=False)
        user.user_type = self.user_type
        if commit:
            user.save()
            self.create_profile(user)
        return user

    def create_profile(self, user):
        ClientProfile.objects.create(user=user, phone=user.phone)


class TeacherRegistrationForm(ClientRegistrationForm):
    headline = forms.CharField(
        max_length=150,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., Senior Laravel Developer'})
    )
    bio = forms.CharField(
        max_length=1000,
        widget=forms.Textarea(attrs={
            'class': 'form-control',
            'rows': 4,
            'placeholder': 'Tell clients about yourself and your teaching approach'
        })
    )
    hourly_rate = forms.DecimalField(
        max_digits=10,
        decimal_places=2,
        widget=forms.NumberInput(attrs={
            'class': 'form-control',
            'placeholder': 'Your hourly rate',
            'step': '0.01'
        })
    )

    user_type = 'teacher'

    def clean_hourly_rate(self):
        rate = self.cleaned_data.get('hourly_rate')
        if rate is not None and rate <= 0:
            raise ValidationError("Hourly rate must be greater than 0.")
        return rate

    def create_profile(self, user):
        TeacherProfile.objects.create(
            user=user,
            headline=self.cleaned_data['headline'],
            bio=self.cleaned_data['bio'],
            hourly_rate=self.cleaned_data['hourly_rate'],
        )


# Client profile setup
class ProfileBasicsForm(forms.Form):
    company_name = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Company Name'})
    )
    whatsapp = forms.CharField(
        max_length=20,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'WhatsApp Number'})
    )
    phone = forms.CharField(
        max_length=20,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Phone Number'})
    )
    website = forms.URLField(
        required=False,
        max_length=200,
        widget=forms.URLInput(attrs={'class': 'form-control', 'placeholder': 'https://example.com'})
    )
    position = forms.CharField(
        max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Your position'})
    )


class CompanyDetailsForm(forms.Form):
    address = forms.CharField(max_length=255, widget=forms.TextInput(attrs={'class': 'form-control'}))
    city = forms.CharField(max_length=100, widget=forms.TextInput(attrs={'class': 'form-control'}))
    country = forms.CharField(max_length=100, widget=forms.TextInput(attrs={'class': 'form-control'}))
    industry = forms.CharField(max_length=100, widget=forms.TextInput(attrs={'class': 'form-control'}))
    company_size = forms.ChoiceField(
        choices=[('', 'Select company size')] + ClientProfile.COMPANY_SIZE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-control'})
    )


class PreferencesForm(forms.Form):
    preferred_services = forms.MultipleChoiceField(
        choices=ClientProfile.SERVICE_CHOICES,
        widget=forms.CheckboxSelectMultiple,
        error_messages={'required': "Please select at least one service."},
    )
    preferred_contact_method = forms.ChoiceField(
        choices=ClientProfile.CONTACT_METHOD_CHOICES,
        widget=forms.Select(attrs={'class': 'form-control'})
    )
    notes = forms.CharField(
        required=False,
        max_length=1000,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3, 'placeholder': 'Anything else we should know?'})
    )
    logo = forms.ImageField(required=False, widget=forms.FileInput(attrs={'class': 'form-control'}))
    documents = MultipleFileField(required=False, help_text="Optional. Up to 10 MB per file.")

    def __init__(self, *args, has_logo=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.has_logo = has_logo
        self.fields['logo'].required = not has_logo

    def clean_logo(self):
        logo = self.cleaned_data.get('logo')
        if logo and logo.size > MAX_LOGO_SIZE:
            raise ValidationError("The logo may not be larger than 2 MB.")
        return logo

    def clean_documents(self):
        documents = self.cleaned_data.get('documents') or []
        for document in documents:
            if document.size > MAX_DOCUMENT_SIZE:
                raise ValidationError(f"{document.name} is larger than 10 MB.")
        return documents
