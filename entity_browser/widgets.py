"""
Entity reference widget.

Renders the selected entities as a weighted table next to the launcher of
a configured entity browser. The browser writes the editor's full selection
into a hidden ``<name>-target_id`` input and fires
``entity_browser_value_updated``; the widget is then re-rendered with the
rows that were already on the form reconciled against that selection.

Submitted data layout for a field named ``assets``:

    assets-target_id            "5 9 3"
    assets-current-0-target_id  "5"
    assets-current-0-weight     "0"
    assets-current-0-description "Cover image"
"""
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from django import forms
from django.core import signing
from django.urls import NoReverseMatch, reverse
from django.utils.translation import gettext_lazy as _

from entity_browser.conf import get_setting
from entity_browser.displays import create_display, load_target
from entity_browser.events import JSCallbacks
from entity_browser.services.reconciler import (
    ReferenceValue,
    apply_row_weights,
    reconcile,
    serialize,
    sort_by_weight,
)

logger = logging.getLogger(__name__)

SETTINGS_SALT = "entity_browser.widget_settings"

ROW_KEY = re.compile(r'^(?P<name>.+)-current-(?P<delta>\d+)-target_id$')


@dataclass
class WidgetState:
    """Values read back from a submitted form: the rows on the form and the browser selection."""
    current: list[ReferenceValue] = field(default_factory=list)
    incoming: str = ''


class EntityBrowserWidget(forms.Widget):
    template_name = 'entity_browser/widgets/entity_reference.html'

    class Media:
        css = {'all': ['entity_browser/entity_reference.css']}
        js = ['entity_browser/entity_reference.js']

    def __init__(self, attrs=None, entity_browser=None, field_widget_display=None,
                 field_widget_display_settings=None, target_type=None, cardinality=-1):
        super().__init__(attrs)
        self.entity_browser = entity_browser
        self.field_widget_display = field_widget_display or get_setting('DEFAULT_DISPLAY')
        self.field_widget_display_settings = field_widget_display_settings or {}
        self.target_type = target_type
        self.cardinality = cardinality

    def get_settings(self) -> dict:
        return {
            'entity_browser': self.entity_browser,
            'field_widget_display': self.field_widget_display,
            'field_widget_display_settings': self.field_widget_display_settings,
            'target_type': self.target_type,
            'cardinality': self.cardinality,
        }

    # -------------------------------------------------------------------------
    # Collaborators
    # -------------------------------------------------------------------------

    def get_browser(self):
        """The configured EntityBrowser, or None when unset or deleted."""
        if not self.entity_browser:
            return None
        from entity_browser.models import EntityBrowser
        browser = EntityBrowser.objects.filter(key=self.entity_browser).first()
        if browser is None:
            logger.warning(f"Entity browser '{self.entity_browser}' does not exist")
        return browser

    def get_display(self):
        return create_display(
            self.field_widget_display,
            {**self.field_widget_display_settings, 'entity_type': self.target_type},
        )

    def register_selection_callback(self, callbacks, callback_name=None) -> bool:
        """Register the selection callback if ``callbacks`` belongs to this widget's browser."""
        if not self.entity_browser or callbacks.browser_id != self.entity_browser:
            return False
        callbacks.register(callback_name or get_setting('SELECTION_CALLBACK'))
        return True

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def value_from_datadict(self, data, files, name):
        rows = []
        for key in data:
            match = ROW_KEY.match(key)
            if not match or match.group('name') != name:
                continue
            delta = int(match.group('delta'))
            prefix = f'{name}-current-{delta}'
            try:
                weight = int(data.get(f'{prefix}-weight', delta))
            except (TypeError, ValueError):
                weight = delta
            rows.append((delta, ReferenceValue(
                target_id=(data.get(key) or '').strip(),
                weight=weight,
                description=data.get(f'{prefix}-description', ''),
            )))
        rows.sort(key=lambda row: row[0])
        return WidgetState(
            current=sort_by_weight(value for _delta, value in rows),
            incoming=data.get(f'{name}-target_id', ''),
        )

    def value_omitted_from_data(self, data, files, name):
        if f'{name}-target_id' in data:
            return False
        return not any(ROW_KEY.match(key) for key in data if key.startswith(f'{name}-current-'))

    def build_reference_set(self, value: Any) -> list[ReferenceValue]:
        """
        Reference set to display for ``value``.

        A WidgetState means the form is being rebuilt: its rows are the
        explicit request state and get reconciled with the selection.
        Anything else is the initial value loaded from storage.
        """
        if isinstance(value, WidgetState):
            return apply_row_weights(reconcile(value.current, value.incoming))
        if value is None or value == '':
            return []
        if isinstance(value, str):
            return apply_row_weights(reconcile([], value))
        if isinstance(value, (ReferenceValue, dict)) or not hasattr(value, '__iter__'):
            value = [value]
        return apply_row_weights(reconcile(value, ''))

    def format_value(self, value):
        return serialize(self.build_reference_set(value))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def get_operations(self, entity) -> list[dict]:
        operations = []
        if entity is not None:
            opts = entity._meta
            try:
                url = reverse(f'admin:{opts.app_label}_{opts.model_name}_change', args=[entity.pk])
            except NoReverseMatch:
                url = None
            if url:
                operations.append({'name': 'edit', 'title': _('Edit'), 'url': url})
        operations.append({'name': 'remove', 'title': _('Remove'), 'url': None})
        return operations

    def build_rows(self, name, values, display) -> list[dict]:
        rows = []
        for value in values:
            entity = load_target(self.target_type, value.target_id) if self.target_type else None
            rows.append({
                'delta': value.weight,
                'prefix': f'{name}-current-{value.weight}',
                'target_id': value.target_id,
                'weight': value.weight,
                'weight_title': _('Weight for row %(number)s') % {'number': value.weight + 1},
                'description': value.description,
                'display': display.render(value.target_id) if display else value.target_id,
                'operations': self.get_operations(entity),
            })
        return rows

    def get_hx_vals(self, name, widget_id) -> str:
        """Signed settings posted with the selection so the HTMX endpoint can rebuild this widget."""
        return json.dumps({
            'widget_settings': signing.dumps(
                {'name': name, 'widget_id': widget_id, 'settings': self.get_settings()},
                salt=SETTINGS_SALT,
            ),
        })

    def get_context(self, name, value, attrs):
        context = super().get_context(name, value, attrs)
        values = self.build_reference_set(value)
        base_id = context['widget']['attrs'].get('id') or f'id_{name}'
        hidden_id = f'{base_id}-target-id'

        messages = []
        browser = self.get_browser()
        launcher = None
        callbacks = []
        if browser is None:
            messages.append(_('No entity browser selected.'))
        else:
            js_callbacks = JSCallbacks(browser.key)
            self.register_selection_callback(js_callbacks)
            callbacks = js_callbacks.callbacks
            browser_display = browser.get_display()
            if browser_display is None:
                messages.append(_('No entity browser selected.'))
            else:
                launcher = browser_display.display_entity_browser(hidden_id, js_callbacks)

        display = self.get_display()
        if display is None:
            messages.append(_('No entity display selected.'))

        context['widget'].update({
            'details_id': base_id,
            'hidden_id': hidden_id,
            'table_id': f'{base_id}-table',
            'target_id_name': f'{name}-target_id',
            'target_id_value': serialize(values),
            'weight_class': f'{name}-weight',
            'open': bool(values),
            'multiple': self.cardinality != 1,
            'browser': browser,
            'launcher': launcher,
            'callbacks': callbacks,
            'messages': messages,
            'rows': self.build_rows(name, values, display),
            'settings': self.get_settings(),
            'hx_vals': self.get_hx_vals(name, base_id),
        })
        return context
