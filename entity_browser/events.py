"""
JS callback registration for entity browsers.

When a browser completes a selection it runs every callback registered for
it. Widgets register explicitly:

    callbacks = JSCallbacks('media_library')
    widget.register_selection_callback(callbacks)
    callbacks.callbacks  # ['entityBrowserEntityReference.selectionCompleted']
"""
from typing import Iterable


class JSCallbacks:
    """Ordered set of JS callback names for one browser."""

    def __init__(self, browser_id: str):
        self.browser_id = browser_id
        self._callbacks: list[str] = []

    def register(self, callback_name: str) -> None:
        if callback_name and callback_name not in self._callbacks:
            self._callbacks.append(callback_name)

    @property
    def callbacks(self) -> list[str]:
        return list(self._callbacks)

    def __iter__(self):
        return iter(self._callbacks)

    def __len__(self):
        return len(self._callbacks)


def collect_js_callbacks(browser_id: str, widgets: Iterable) -> JSCallbacks:
    """Ask each widget on a page to register its callback for a browser."""
    callbacks = JSCallbacks(browser_id)
    for widget in widgets:
        widget.register_selection_callback(callbacks)
    return callbacks
