from django.contrib.auth.models import AbstractUser
from django.db import models
from django.urls import reverse
from PIL import Image

from common.presenters import percentage


class CustomUser(AbstractUser):
    USER_TYPE_CHOICES = [
        ('client', 'Client'),
        ('teacher', 'Teacher'),
        ('admin', 'Admin'),
    ]

    user_type = models.CharField(max_length=10, choices=USER_TYPE_CHOICES, default='client')
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True)
    avatar = models.ImageField(upload_to='avatars/', blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def __str__(self):
        return f"{self.full_name or self.username} ({self.user_type})"

    def save(self, *args, **kwargs):
        super().save(*args, **kwargs)
        if self.avatar:
            img = Image.open(self.avatar.path)
            if img.height > 300 or img.width > 300:
                output_size = (300, 300)
                img.thumbnail(output_size)
                img.save(self.avatar.path)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self):
        return self.full_name or self.username

    @property
    def is_client(self):
        return self.user_type == 'client'

    @property
    def is_teacher(self):
        return self.user_type == 'teacher'


class ClientProfile(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]

    CONTACT_METHOD_CHOICES = [
        ('email', 'Email'),
        ('phone', 'Phone'),
        ('whatsapp', 'WhatsApp'),
    ]

    COMPANY_SIZE_CHOICES = [
        ('1-10', '1-10 employees'),
        ('11-50', '11-50 employees'),
        ('51-200', '51-200 employees'),
        ('201-500', '201-500 employees'),
        ('500+', '500+ employees'),
    ]

    SERVICE_CHOICES = [
        ('web_development', 'Web Development'),
        ('mobile_development', 'Mobile Development'),
        ('design', 'Design'),
        ('marketing', 'Digital Marketing'),
        ('data_science', 'Data Science'),
        ('business', 'Business Consulting'),
    ]

    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name='client_profile')

    # Basic information
    company_name = models.CharField(max_length=200, blank=True)
    whatsapp = models.CharField(max_length=20, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    website = models.URLField(blank=True)
    position = models.CharField(max_length=100, blank=True)

    # Company details
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)
    industry = models.CharField(max_length=100, blank=True)
    company_size = models.CharField(max_length=10, choices=COMPANY_SIZE_CHOICES, blank=True)

    # Preferences
    preferred_services = models.JSONField(default=list, blank=True)
    preferred_contact_method = models.CharField(max_length=10, choices=CONTACT_METHOD_CHOICES, default='email')
    notes = models.TextField(max_length=1000, blank=True)
    logo = models.ImageField(upload_to='client_logos/', blank=True, null=True)

    has_completed_profile = models.BooleanField(default=False)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user.display_name} - Client Profile"

    @property
    def completion_percentage(self):
        fields_to_check = [
            'company_name', 'phone', 'position', 'address', 'city',
            'country', 'industry', 'company_size', 'preferred_services', 'logo',
        ]
        completed = sum(1 for name in fields_to_check if getattr(self, name))
        return percentage(completed, len(fields_to_check))


class ProfileDocument(models.Model):
    profile = models.ForeignKey(ClientProfile, on_delete=models.CASCADE, related_name='documents')
    file = models.FileField(upload_to='client_documents/')
    original_name = models.CharField(max_length=255)
    size = models.PositiveIntegerField(default=0)
    content_type = models.CharField(max_length=100, blank=True)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-uploaded_at', '-pk']

    def __str__(self):
        return self.original_name


class TeacherProfile(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]

    user = models.OneToOneField(CustomUser, on_delete=models.CASCADE, related_name='teacher_profile')
    headline = models.CharField(max_length=150, blank=True, help_text="e.g., Senior Laravel Developer")
    bio = models.TextField(max_length=1000, blank=True, help_text="Tell clients about yourself")
    subjects = models.ManyToManyField('courses.Subject', blank=True, related_name='teachers')
    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user.display_name} - Teacher Profile"

    def get_absolute_url(self):
        return reverse('accounts:dashboard')

    @property
    def completion_percentage(self):
        fields_to_check = ['headline', 'bio', 'hourly_rate']
        completed = sum(1 for name in fields_to_check if getattr(self, name))
        if self.pk and self.subjects.exists():
            completed += 1
        return percentage(completed, len(fields_to_check) + 1)
