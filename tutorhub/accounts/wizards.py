# accounts/wizards.py
import logging
import mimetypes
import os

from django.core.files.storage import default_storage
from django.db import transaction

from common.wizard import Wizard, WizardStep

from .forms import CompanyDetailsForm, PreferencesForm, ProfileBasicsForm
from .models import ClientProfile, ProfileDocument

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    'company_name', 'whatsapp', 'phone', 'website', 'position',
    'address', 'city', 'country', 'industry', 'company_size',
    'preferred_services', 'preferred_contact_method', 'notes',
)


class ClientProfileWizard(Wizard):
    name = 'client-profile'
    session_key = 'client_profile_wizard'
    steps = (
        WizardStep('basics', 'Basic Information', ProfileBasicsForm,
                   description="How we can reach you"),
        WizardStep('company', 'Company Details', CompanyDetailsForm,
                   description="Where you work and what you do"),
        WizardStep('preferences', 'Preferences', PreferencesForm,
                   description="Services, contact method, logo and documents"),
        WizardStep('verification', 'Verification',
                   description="Review your details before submitting"),
    )

    def __init__(self, state=None, user=None):
        self.user = user
        self.profile = getattr(user, 'client_profile', None) if user is not None else None
        super().__init__(state)
        if state is None and self.profile is not None and self.profile.has_completed_profile:
            self.state.data = self.profile_data()

    def profile_data(self):
        data = {}
        for name in PROFILE_FIELDS:
            value = getattr(self.profile, name)
            if isinstance(value, list):
                data[name] = [str(item) for item in value]
            elif value:
                data[name] = [str(value)]
        return data

    def get_initial(self, step):
        if self.profile is None:
            return {}
        return {
            name: getattr(self.profile, name) for name in step.field_names
            if name in PROFILE_FIELDS and getattr(self.profile, name)
        }

    def get_initial_step(self):
        if self.profile is not None and self.profile.has_completed_profile:
            return len(self.steps)
        return 1

    def get_form_kwargs(self, step):
        if step.form_class is PreferencesForm:
            return {'has_logo': self.has_logo}
        return {}

    @property
    def has_logo(self):
        return bool(self.profile is not None and self.profile.logo)

    def done(self, cleaned_data):
        logo = cleaned_data.get('logo')
        old_logo = self.profile.logo.name if self.has_logo and logo else None

        with transaction.atomic():
            profile, created = ClientProfile.objects.get_or_create(user=self.user)
            for name in PROFILE_FIELDS:
                setattr(profile, name, cleaned_data.get(name) or ClientProfile._meta.get_field(name).get_default())
            profile.has_completed_profile = True
            profile.status = profile.status or 'pending'
            if logo:
                profile.logo.save(os.path.basename(logo.name), logo, save=False)
            profile.save()

            for document in cleaned_data.get('documents') or []:
                self.store_document(profile, document)

        if old_logo:
            default_storage.delete(old_logo)
        logger.info("Client profile %s %s for user %s", profile.pk, 'created' if created else 'updated', self.user.pk)
        return profile

    def store_document(self, profile, document):
        original_name = os.path.basename(document.name)
        content_type = getattr(document, 'content_type', None) or mimetypes.guess_type(original_name)[0] or ''
        record = ProfileDocument(
            profile=profile,
            original_name=original_name,
            size=document.size,
            content_type=content_type,
        )
        record.file.save(original_name, document, save=True)
        return record

