"""
Field widget display plugins.

A display turns one selected entity identifier into the preview shown in
its widget row. Displays are looked up by string id from a registry:

    @register_display("label")
    class LabelDisplay(FieldWidgetDisplay):
        ...

    display = create_display("label", {"entity_type": "main.asset"})
    display.render("42")
"""
import logging
from typing import Optional

from django import forms
from django.apps import apps
from django.template.loader import render_to_string
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from entity_browser.conf import get_setting

logger = logging.getLogger(__name__)

_registry: dict[str, type['FieldWidgetDisplay']] = {}


def register_display(plugin_id: str):
    """Class decorator adding a display plugin to the registry."""
    def decorator(cls):
        cls.plugin_id = plugin_id
        _registry[plugin_id] = cls
        return cls
    return decorator


def get_display_definitions() -> dict[str, str]:
    """Map of registered display ids to their labels."""
    return {plugin_id: str(cls.label) for plugin_id, cls in _registry.items()}


def create_display(plugin_id: Optional[str], settings: Optional[dict] = None) -> Optional['FieldWidgetDisplay']:
    """
    Instantiate a display plugin.

    Returns None when no display is configured or the id is unknown, so
    callers can show a "no display selected" state instead of failing.
    """
    if not plugin_id:
        return None
    cls = _registry.get(plugin_id)
    if cls is None:
        logger.warning(f"Unknown field widget display: {plugin_id}")
        return None
    return cls(settings)


def get_target_model(target_type: Optional[str]):
    """Resolve an ``app_label.model`` string to a model class, or None."""
    if not target_type:
        return None
    try:
        return apps.get_model(target_type)
    except (LookupError, ValueError):
        logger.warning(f"Unknown target type: {target_type}")
        return None


def load_target(target_type: Optional[str], identifier: str):
    """Load the referenced entity, or None if it cannot be found."""
    model = get_target_model(target_type)
    if model is None:
        return None
    try:
        return model._default_manager.get(pk=identifier)
    except (model.DoesNotExist, ValueError, TypeError):
        logger.warning(f"Referenced {target_type} {identifier} not found")
        return None


def render_missing(identifier: str) -> str:
    return format_html(
        '<span class="entity-browser-missing">{}</span>',
        _('Missing item %(id)s') % {'id': identifier},
    )


class FieldWidgetDisplay:
    """Base class for field widget displays."""
    plugin_id = None
    label = ''
    settings_form_class = None

    def __init__(self, settings: Optional[dict] = None):
        self.settings = {**self.default_settings(), **(settings or {})}

    @classmethod
    def default_settings(cls) -> dict:
        return {'entity_type': None}

    def settings_form(self, data=None, prefix=None):
        """Return a bound or unbound settings form, or None if there is nothing to configure."""
        if self.settings_form_class is None:
            return None
        return self.settings_form_class(data=data, initial=self.settings, prefix=prefix)

    def render(self, identifier: str, settings: Optional[dict] = None) -> str:
        raise NotImplementedError


class LabelDisplaySettingsForm(forms.Form):
    link = forms.BooleanField(required=False, label=_('Link label to the referenced entity'))


@register_display('label')
class LabelDisplay(FieldWidgetDisplay):
    """Displays the entity's label."""
    label = _('Entity label')
    settings_form_class = LabelDisplaySettingsForm

    @classmethod
    def default_settings(cls):
        return {**super().default_settings(), 'link': False}

    def render(self, identifier, settings=None):
        settings = {**self.settings, **(settings or {})}
        entity = load_target(settings['entity_type'], identifier)
        if entity is None:
            return render_missing(identifier)
        if settings.get('link') and hasattr(entity, 'get_absolute_url'):
            return format_html('<a href="{}">{}</a>', entity.get_absolute_url(), str(entity))
        return format_html('{}', str(entity))


class RenderedEntitySettingsForm(forms.Form):
    VIEW_MODES = [
        ('teaser', _('Teaser')),
        ('full', _('Full')),
        ('compact', _('Compact')),
    ]
    view_mode = forms.ChoiceField(choices=VIEW_MODES, label=_('View mode'))


@register_display('rendered_entity')
class RenderedEntityDisplay(FieldWidgetDisplay):
    """
    Renders the entity through a template.

    Looks up, in order:
        entity_browser/display/<app_label>/<model_name>_<view_mode>.html
        entity_browser/display/<model_name>.html
        entity_browser/display/entity.html
    """
    label = _('Rendered entity')
    settings_form_class = RenderedEntitySettingsForm

    @classmethod
    def default_settings(cls):
        return {**super().default_settings(), 'view_mode': get_setting('DEFAULT_VIEW_MODE')}

    def render(self, identifier, settings=None):
        settings = {**self.settings, **(settings or {})}
        entity = load_target(settings['entity_type'], identifier)
        if entity is None:
            return render_missing(identifier)
        opts = entity._meta
        view_mode = settings.get('view_mode') or get_setting('DEFAULT_VIEW_MODE')
        return render_to_string(
            [
                f'entity_browser/display/{opts.app_label}/{opts.model_name}_{view_mode}.html',
                f'entity_browser/display/{opts.model_name}.html',
                'entity_browser/display/entity.html',
            ],
            {'entity': entity, 'view_mode': view_mode, 'identifier': identifier},
        )


@register_display('entity_id')
class EntityIdDisplay(FieldWidgetDisplay):
    """Displays the bare identifier without loading the entity."""
    label = _('Entity ID')

    def render(self, identifier, settings=None):
        return format_html('<code>{}</code>', identifier)
