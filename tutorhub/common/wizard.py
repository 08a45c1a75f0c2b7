# common/wizard.py
"""
Multi-step form wizard kept in the session.

Each step is a form class and/or a set of formsets. ``next`` validates only the
current step, ``back`` never validates and ``submit`` re-validates every step
against the accumulated data before handing the cleaned values to ``done``.
Files uploaded on intermediate steps are staged in ``default_storage`` until
the wizard completes.
"""
import logging
import os
import uuid
from dataclasses import asdict, dataclass, field

from django import forms
from django.core.files import File
from django.core.files.storage import default_storage
from django.forms.formsets import BaseFormSet
from django.utils.datastructures import MultiValueDict

logger = logging.getLogger(__name__)

STAGING_DIR = 'wizard-staging'
IGNORED_KEYS = ('csrfmiddlewaretoken', 'action')


def as_multivalue(data):
    if data is None:
        return MultiValueDict()
    if isinstance(data, MultiValueDict):
        return data
    return MultiValueDict({
        key: list(value) if isinstance(value, (list, tuple)) else [value]
        for key, value in data.items()
    })


def collect_errors(form):
    """Field keyed error messages; formset rows are keyed ``prefix-index-field``"""
    errors = {}
    if isinstance(form, BaseFormSet):
        for row in form.forms:
            for name, messages in row.errors.items():
                errors[row.add_prefix(name)] = list(messages)
        if form.non_form_errors():
            errors[form.prefix] = list(form.non_form_errors())
    else:
        for name, messages in form.errors.items():
            errors[name] = list(messages)
    return errors


class WizardStep:
    def __init__(self, name, title, form_class=None, formsets=None, description=''):
        self.name = name
        self.title = title
        self.form_class = form_class
        self.formsets = formsets or {}
        self.description = description

    @property
    def field_names(self):
        if self.form_class is None:
            return ()
        return tuple(self.form_class.base_fields)

    @property
    def file_fields(self):
        if self.form_class is None:
            return ()
        return tuple(
            name for name, form_field in self.form_class.base_fields.items()
            if isinstance(form_field, forms.FileField)
        )

    def owns_key(self, key):
        if key in self.field_names:
            return True
        return any(key.startswith(f'{prefix}-') for prefix in self.formsets)


@dataclass
class WizardState:
    current_step: int = 1
    data: dict = field(default_factory=dict)
    staged_files: dict = field(default_factory=dict)

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, payload):
        return cls(
            current_step=int(payload.get('current_step', 1)),
            data={key: list(values) for key, values in payload.get('data', {}).items()},
            staged_files={
                key: [list(entry) for entry in entries]
                for key, entries in payload.get('staged_files', {}).items()
            },
        )


class Wizard:
    name = 'wizard'
    session_key = None
    steps = ()

    def __init__(self, state=None):
        self.state = state or WizardState(current_step=self.get_initial_step())
        self.errors = {}
        self.forms = None
        self._opened = []

    # Session persistence
    @classmethod
    def load(cls, session, **kwargs):
        payload = session.get(cls.session_key)
        state = WizardState.from_dict(payload) if payload else None
        return cls(state=state, **kwargs)

    def save(self, session):
        session[self.session_key] = self.state.to_dict()

    def reset(self, session):
        self.discard_staged_files()
        session.pop(self.session_key, None)

    # Hooks
    def get_initial_step(self):
        return 1

    def get_form_kwargs(self, step):
        return {}

    def get_initial(self, step):
        return {}

    def done(self, cleaned_data):
        raise NotImplementedError

    # Navigation
    @property
    def total_steps(self):
        return len(self.steps)

    @property
    def current_step(self):
        return self.state.current_step

    @property
    def step(self):
        return self.steps[self.current_step - 1]

    @property
    def is_first(self):
        return self.current_step == 1

    @property
    def is_last(self):
        return self.current_step == self.total_steps

    @property
    def progress_percentage(self):
        return int((self.current_step - 1) / self.total_steps * 100)

    def next(self, data=None, files=None):
        step = self.step
        self.merge_data(step, data)
        files = as_multivalue(files)

        bound, _, errors = self.validate_step(step, files)
        self.errors = errors
        if errors:
            self.forms = bound
            self._close_staged()
            logger.info("%s: step %s failed validation (%s)", self.name, self.current_step, ', '.join(sorted(errors)))
            return False

        self.stage_files(step, files)
        self._close_staged()
        if not self.is_last:
            self.state.current_step += 1
        self.forms = None
        logger.info("%s: moved to step %s", self.name, self.current_step)
        return True

    def back(self, data=None):
        if data is not None:
            self.merge_data(self.step, data)
        self.errors = {}
        self.forms = None
        if self.current_step > 1:
            self.state.current_step -= 1

    def submit(self, data=None, files=None):
        self.merge_data(self.step, data)
        files = as_multivalue(files)
        cleaned = {}
        try:
            for index, step in enumerate(self.steps, start=1):
                step_files = files if index == self.current_step else None
                bound, step_cleaned, errors = self.validate_step(step, step_files)
                if errors:
                    self.state.current_step = index
                    self.errors = errors
                    self.forms = bound
                    logger.info("%s: submit stopped at step %s (%s)", self.name, index, ', '.join(sorted(errors)))
                    return None
                cleaned.update(step_cleaned)

            result = self.done(cleaned)
        finally:
            self._close_staged()

        self.discard_staged_files()
        self.errors = {}
        return result

    # Data handling
    def merge_data(self, step, data):
        if data is None:
            return
        data = as_multivalue(data)
        for key in [key for key in self.state.data if step.owns_key(key)]:
            del self.state.data[key]
        for key, values in data.lists():
            if key in IGNORED_KEYS or key in step.file_fields:
                continue
            self.state.data[key] = [str(value) for value in values]

    def bound_data(self):
        return MultiValueDict(self.state.data)

    def bind(self, step, files=None):
        data = self.bound_data()
        bound = []
        if step.form_class is not None:
            bound.append(step.form_class(data=data, files=files, **self.get_form_kwargs(step)))
        for prefix, formset_class in step.formsets.items():
            bound.append(formset_class(data=data, prefix=prefix))
        return bound

    def unbound(self, step):
        initial = self.get_initial(step)
        unbound = []
        if step.form_class is not None:
            unbound.append(step.form_class(initial=initial, **self.get_form_kwargs(step)))
        for prefix, formset_class in step.formsets.items():
            unbound.append(formset_class(prefix=prefix, initial=initial.get(prefix)))
        return unbound

    def validate_step(self, step, files=None):
        bound = self.bind(step, self._files_for(step, files))
        cleaned, errors = {}, {}
        for form in bound:
            if not form.is_valid():
                errors.update(collect_errors(form))
            elif isinstance(form, BaseFormSet):
                cleaned[form.prefix] = [
                    row.cleaned_data for row in form.forms
                    if row.cleaned_data and not row.cleaned_data.get('DELETE')
                ]
            else:
                cleaned.update(form.cleaned_data)
        return bound, cleaned, errors

    def get_forms(self):
        if self.forms is not None:
            return self.forms
        step = self.step
        if any(step.owns_key(key) for key in self.state.data):
            return self.bind(step)
        return self.unbound(step)

    @property
    def summary(self):
        return {
            key: values[0] if len(values) == 1 else values
            for key, values in self.state.data.items()
        }

    # Staged uploads
    def _files_for(self, step, files):
        merged = MultiValueDict()
        files = files if files is not None else MultiValueDict()
        for name in step.file_fields:
            uploads = files.getlist(name)
            if uploads:
                merged.setlist(name, uploads)
            elif name in self.state.staged_files:
                merged.setlist(name, [self._open_staged(entry) for entry in self.state.staged_files[name]])
        return merged

    def _open_staged(self, entry):
        path, original_name = entry
        staged = File(default_storage.open(path, 'rb'), name=original_name)
        self._opened.append(staged)
        return staged

    def _close_staged(self):
        while self._opened:
            self._opened.pop().close()

    def stage_files(self, step, files):
        for name in step.file_fields:
            uploads = files.getlist(name)
            if not uploads:
                continue
            self.discard_staged_files([name])
            entries = []
            for upload in uploads:
                original_name = os.path.basename(upload.name)
                upload.seek(0)
                path = default_storage.save(f'{STAGING_DIR}/{uuid.uuid4().hex}/{original_name}', upload)
                entries.append([path, original_name])
            self.state.staged_files[name] = entries

    def staged_names(self, name):
        return [original_name for _, original_name in self.state.staged_files.get(name, [])]

    def discard_staged_files(self, names=None):
        for name in list(names or self.state.staged_files):
            for path, _ in self.state.staged_files.pop(name, []):
                default_storage.delete(path)
