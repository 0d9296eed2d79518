"""
Entity reference form field and widget settings.
"""
from typing import Optional

from django import forms
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from entity_browser.displays import create_display, get_display_definitions, get_target_model
from entity_browser.models import EntityBrowser
from entity_browser.services.reconciler import ReferenceValue, flatten, to_item_records
from entity_browser.widgets import EntityBrowserWidget


UNLIMITED = -1


class EntityReferenceField(forms.Field):
    """
    Form field holding an ordered list of entity references.

    Cleans to a list of ReferenceValue in display order. Use
    ``massage_form_values`` or ``to_item_records`` to turn that into
    records for storage.
    """
    default_error_messages = {
        'cardinality': _('This field accepts at most %(limit)s item(s).'),
        'invalid_target': _('Referenced item %(id)s does not exist.'),
    }

    def __init__(self, *, entity_browser=None, field_widget_display=None,
                 field_widget_display_settings=None, target_type=None,
                 cardinality=UNLIMITED, validate_targets=False, **kwargs):
        self.target_type = target_type
        self.cardinality = cardinality
        self.validate_targets = validate_targets
        kwargs.setdefault('widget', EntityBrowserWidget(
            entity_browser=entity_browser,
            field_widget_display=field_widget_display,
            field_widget_display_settings=field_widget_display_settings,
            target_type=target_type,
            cardinality=cardinality,
        ))
        super().__init__(**kwargs)

    def to_python(self, value) -> list[ReferenceValue]:
        return self.widget.build_reference_set(value)

    def validate(self, value):
        super().validate(value)
        if self.cardinality != UNLIMITED and len(value) > self.cardinality:
            raise ValidationError(
                self.error_messages['cardinality'],
                code='cardinality',
                params={'limit': self.cardinality},
            )
        if self.validate_targets and value:
            self._validate_targets(value)

    def _validate_targets(self, value):
        model = get_target_model(self.target_type)
        if model is None:
            return
        ids = [v.target_id for v in value]
        try:
            existing = {str(pk) for pk in model._default_manager.filter(pk__in=ids).values_list('pk', flat=True)}
        except (ValueError, ValidationError):
            existing = set()
        for target_id in ids:
            if target_id not in existing:
                raise ValidationError(
                    self.error_messages['invalid_target'],
                    code='invalid_target',
                    params={'id': target_id},
                )

    def has_changed(self, initial, data):
        if self.disabled:
            return False
        def rows(value):
            return [(v.target_id, v.description) for v in self.to_python(value)]
        return rows(initial) != rows(data)

    def massage_form_values(self, value) -> list[dict]:
        """Flatten a cleaned value (or raw selection string) into ``{target_id}`` records."""
        records = flatten(value)
        if self.cardinality != UNLIMITED:
            records = records[:self.cardinality]
        return records

    def to_item_records(self, value) -> list[dict]:
        """Records with weight and description, for multi-value storage."""
        records = to_item_records(value)
        if self.cardinality != UNLIMITED:
            records = records[:self.cardinality]
        return records


class WidgetSettingsForm(forms.Form):
    """Settings form for an entity reference widget."""
    entity_browser = forms.ChoiceField(required=False, label=_('Entity browser'))
    field_widget_display = forms.ChoiceField(required=False, label=_('Entity display plugin'))

    def __init__(self, *args, target_type=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.target_type = target_type
        self.fields['entity_browser'].choices = [('', '---------')] + [
            (browser.key, browser.label) for browser in EntityBrowser.objects.all()
        ]
        self.fields['field_widget_display'].choices = [('', '---------')] + sorted(
            get_display_definitions().items()
        )

        # The display settings fieldset follows the submitted display choice
        if self.is_bound:
            display_id = self.data.get(self.add_prefix('field_widget_display'))
        else:
            display_id = self.initial.get('field_widget_display')
        display_settings = self.initial.get('field_widget_display_settings') or {}
        self.display = create_display(display_id, {**display_settings, 'entity_type': target_type})
        self.display_settings_form = None
        if self.display is not None:
            self.display_settings_form = self.display.settings_form(
                data=self.data if self.is_bound else None,
                prefix=self.add_prefix('field_widget_display_settings'),
            )

    def is_valid(self):
        valid = super().is_valid()
        if self.display_settings_form is not None:
            valid = self.display_settings_form.is_valid() and valid
        return valid

    def get_settings(self) -> dict:
        """Widget settings from a valid form."""
        display_settings = {}
        if self.display_settings_form is not None:
            display_settings = dict(self.display_settings_form.cleaned_data)
        return {
            'entity_browser': self.cleaned_data.get('entity_browser') or None,
            'field_widget_display': self.cleaned_data.get('field_widget_display') or None,
            'field_widget_display_settings': display_settings,
            'target_type': self.target_type,
        }


def settings_summary(settings: dict) -> list[str]:
    """
    Human readable summary of widget settings.

    A missing or deleted browser is reported rather than raised.
    """
    browser_key: Optional[str] = settings.get('entity_browser')
    display_id: Optional[str] = settings.get('field_widget_display')

    browser = EntityBrowser.objects.filter(key=browser_key).first() if browser_key else None
    if browser is None:
        return [str(_('No entity browser selected.'))]

    summary = [str(_('Entity browser: %(browser)s') % {'browser': browser.label})]
    if display_id:
        label = get_display_definitions().get(display_id)
        if label:
            summary.append(str(_('Entity display: %(name)s') % {'name': label}))
    return summary
