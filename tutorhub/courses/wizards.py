# courses/wizards.py
import logging
import os
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from common.exceptions import DomainError
from common.wizard import Wizard, WizardStep

from .forms import CourseBasicsForm, CourseScheduleForm, ModuleFormSet, OutcomeFormSet, PrerequisiteFormSet
from .models import Course

logger = logging.getLogger(__name__)


class CourseWizard(Wizard):
    name = 'course-create'
    session_key = 'course_create_wizard'
    steps = (
        WizardStep('basics', 'Basic Information', CourseBasicsForm,
                   description="Name, level, subject and price"),
        WizardStep('curriculum', 'Curriculum', formsets={'modules': ModuleFormSet},
                   description="The modules of the course in order"),
        WizardStep('outcomes', 'Learning Outcomes',
                   formsets={'outcomes': OutcomeFormSet, 'prerequisites': PrerequisiteFormSet},
                   description="What students will learn and need to know"),
        WizardStep('schedule', 'Schedule & Media', CourseScheduleForm,
                   description="Dates, capacity and cover image"),
    )

    def __init__(self, state=None, teacher_profile=None):
        self.teacher_profile = teacher_profile
        super().__init__(state)

    def get_form_kwargs(self, step):
        if step.form_class is CourseBasicsForm:
            return {'teacher_profile': self.teacher_profile}
        return {}

    def get_initial(self, step):
        if step.name == 'basics':
            return {'level': 'beginner'}
        if step.name == 'schedule':
            today = timezone.localdate()
            return {
                'duration': 8,
                'max_students': 20,
                'start_date': today + timedelta(weeks=1),
                'end_date': today + timedelta(weeks=9),
            }
        return {}

    def done(self, cleaned_data):
        if self.teacher_profile is None:
            raise DomainError("Teacher profile not found. Please complete your profile first.")

        modules = [
            {'title': module['title'], 'description': module['description']}
            for module in cleaned_data.get('modules', [])
        ]
        outcomes = [outcome['text'] for outcome in cleaned_data.get('outcomes', [])]
        prerequisites = [row['text'] for row in cleaned_data.get('prerequisites', []) if row.get('text')]

        with transaction.atomic():
            course = Course.objects.create(
                teacher=self.teacher_profile,
                subject=cleaned_data['subject'],
                name=cleaned_data['name'],
                slug=cleaned_data['slug'],
                description=cleaned_data['description'],
                level=cleaned_data['level'],
                price=cleaned_data['price'],
                duration=cleaned_data['duration'],
                max_students=cleaned_data['max_students'],
                start_date=cleaned_data['start_date'],
                end_date=cleaned_data['end_date'],
                curriculum=modules,
                lessons_count=len(modules),
                learning_outcomes=outcomes,
                prerequisites=prerequisites,
                status='draft',
            )
        logger.info("Course %s (%s) created as draft by teacher profile %s",
                    course.pk, course.slug, self.teacher_profile.pk)

        cover_image = cleaned_data.get('cover_image')
        if cover_image:
            self.store_cover_image(course, cover_image)
        return course

    def store_cover_image(self, course, cover_image):
        try:
            course.cover_image.save(os.path.basename(cover_image.name), cover_image, save=True)
        except Exception:
            logger.exception("Storing the cover image for course %s failed", course.pk)
        else:
            logger.info("Cover image stored for course %s at %s", course.pk, course.cover_image.name)
