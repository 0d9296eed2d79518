"""
Entity browser display plugins.

A browser display renders the launcher that opens the external picker:
a modal dialog, an inline iframe, or a link to a standalone page. The
picker itself lives outside this app; the launcher only carries the data
attributes its JS needs to report the selection back.
"""
import logging
from typing import Optional

from django.template.loader import render_to_string
from django.utils.translation import gettext_lazy as _

from entity_browser.conf import get_setting

logger = logging.getLogger(__name__)

_registry: dict[str, type['BrowserDisplay']] = {}


def register_browser_display(plugin_id: str):
    def decorator(cls):
        cls.plugin_id = plugin_id
        _registry[plugin_id] = cls
        return cls
    return decorator


def create_browser_display(browser) -> Optional['BrowserDisplay']:
    cls = _registry.get(browser.display)
    if cls is None:
        logger.warning(f"Unknown browser display '{browser.display}' for browser {browser.key}")
        return None
    return cls(browser)


class BrowserDisplay:
    plugin_id = None
    template_name = 'entity_browser/browser/launcher.html'

    def __init__(self, browser):
        self.browser = browser
        self.settings = {**self.default_settings(), **(browser.display_settings or {})}

    @classmethod
    def default_settings(cls):
        return {'link_text': str(_('Select entities'))}

    def get_url(self) -> str:
        return self.settings.get('url') or get_setting('BROWSER_URL').format(key=self.browser.key)

    def get_context(self, selection_target: str, callbacks) -> dict:
        return {
            'display': self.plugin_id,
            'browser': self.browser,
            'url': self.get_url(),
            'link_text': self.settings['link_text'],
            'selection_target': selection_target,
            'callbacks': ' '.join(callbacks or ()),
            'settings': self.settings,
        }

    def display_entity_browser(self, selection_target: str, callbacks=None) -> str:
        """Render the launcher for the widget whose hidden input is ``selection_target``."""
        return render_to_string(self.template_name, self.get_context(selection_target, callbacks))


@register_browser_display('modal')
class ModalDisplay(BrowserDisplay):
    @classmethod
    def default_settings(cls):
        return {**super().default_settings(), 'width': 650, 'height': 500}


@register_browser_display('iframe')
class IFrameDisplay(BrowserDisplay):
    @classmethod
    def default_settings(cls):
        return {**super().default_settings(), 'width': '100%', 'height': 500}


@register_browser_display('standalone')
class StandaloneDisplay(BrowserDisplay):
    pass
