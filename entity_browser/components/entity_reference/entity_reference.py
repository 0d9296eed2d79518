"""
Entity Reference Component for the entity browser.

Re-renders an entity reference widget after its browser reports a new
selection. The widget's hidden input posts here on the
``entity_browser_value_updated`` event and swaps in the returned markup.
"""
import logging

from django_components import Component, register
from django.core import signing
from django.http import HttpRequest, HttpResponseBadRequest
from django.urls import path
from django.views.decorators.http import require_POST

from entity_browser.widgets import SETTINGS_SALT, EntityBrowserWidget

logger = logging.getLogger(__name__)

SETTINGS_KEYS = (
    'entity_browser',
    'field_widget_display',
    'field_widget_display_settings',
    'target_type',
    'cardinality',
)


def widget_settings_from_request(data) -> dict:
    """
    Field name, widget id and widget settings signed into ``hx_vals``.

    Raises signing.BadSignature when the value is missing or was not
    issued by this site for a rendered widget.
    """
    payload = signing.loads(data.get('widget_settings') or '', salt=SETTINGS_SALT)
    if not isinstance(payload, dict) or not isinstance(payload.get('settings'), dict):
        raise signing.BadSignature('Malformed widget settings')
    settings = payload['settings']
    return {
        'name': payload.get('name') or '',
        'widget_id': payload.get('widget_id') or None,
        'settings': {key: settings[key] for key in SETTINGS_KEYS if key in settings},
    }


@register("entity_reference")
class EntityReference(Component):
    template_name = "entity_reference/entity_reference.html"

    def get_context_data(self, name="", value=None, settings=None, widget_id=None, **kwargs):
        """
        Args:
            name: Form field name (with form prefix)
            value: Initial values or a WidgetState from a submitted form
            settings: Widget settings, see EntityBrowserWidget.get_settings()
            widget_id: DOM id of the widget, defaults to ``id_<name>``
        """
        widget = EntityBrowserWidget(**(settings or {}))
        context = widget.get_context(name, value, {'id': widget_id or f'id_{name}'})
        return {'widget': context['widget']}

    @staticmethod
    @require_POST
    def htmx_select(request: HttpRequest):
        try:
            posted = widget_settings_from_request(request.POST)
        except signing.BadSignature:
            logger.warning("Rejected entity reference rebuild with invalid widget settings")
            return HttpResponseBadRequest("Invalid widget settings")

        name = posted['name']
        widget = EntityBrowserWidget(**posted['settings'])
        state = widget.value_from_datadict(request.POST, request.FILES, name)
        logger.debug(f"Selection updated for {name}: '{state.incoming}' ({len(state.current)} rows on form)")
        return EntityReference.render_to_response(
            kwargs={
                'name': name,
                'value': state,
                'settings': posted['settings'],
                'widget_id': posted['widget_id'],
            },
            request=request,
        )

    @classmethod
    def get_urls(cls):
        return [
            path('entity-reference/select/', cls.htmx_select, name='entity_reference_select'),
        ]
