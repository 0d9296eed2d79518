"""
App settings for entity_browser.

Override any of these in the project settings:

    ENTITY_BROWSER = {
        'DEFAULT_DISPLAY': 'label',
        'SELECTION_CALLBACK': 'entityBrowserEntityReference.selectionCompleted',
    }
"""
from django.conf import settings

DEFAULTS = {
    # Field widget display used when a widget does not configure one
    'DEFAULT_DISPLAY': None,
    # JS callback run when a browser completes a selection
    'SELECTION_CALLBACK': 'entityBrowserEntityReference.selectionCompleted',
    'DEFAULT_VIEW_MODE': 'teaser',
    # Fallback picker URL; formatted with the browser key
    'BROWSER_URL': '/entity-browser/{key}/',
}


def get_setting(name):
    """Return an entity_browser setting, falling back to the default."""
    overrides = getattr(settings, 'ENTITY_BROWSER', {}) or {}
    return overrides.get(name, DEFAULTS[name])
