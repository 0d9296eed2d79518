"""
Tests for field widget and browser display plugins.
"""
import pytest
from entity_browser.browsers import create_browser_display
from entity_browser.displays import (
    EntityIdDisplay,
    LabelDisplay,
    RenderedEntityDisplay,
    create_display,
    get_display_definitions,
    get_target_model,
)
from entity_browser.events import JSCallbacks
from entity_browser.models import EntityBrowser
from main.models import Asset


class TestDisplayRegistry:
    """Tests for the display plugin registry."""

    def test_builtin_definitions(self):
        definitions = get_display_definitions()

        assert definitions['label'] == 'Entity label'
        assert definitions['rendered_entity'] == 'Rendered entity'
        assert definitions['entity_id'] == 'Entity ID'

    def test_create_known_display(self):
        display = create_display('label', {'entity_type': 'main.asset'})

        assert isinstance(display, LabelDisplay)
        assert display.settings == {'entity_type': 'main.asset', 'link': False}

    @pytest.mark.parametrize('plugin_id', [None, '', 'no_such_display'])
    def test_unresolved_display_is_none(self, plugin_id):
        assert create_display(plugin_id) is None

    def test_settings_form(self):
        form = create_display('rendered_entity').settings_form(data={'view_mode': 'full'})

        assert form.is_valid()
        assert form.cleaned_data == {'view_mode': 'full'}

    def test_no_settings_form(self):
        assert EntityIdDisplay().settings_form() is None

    def test_target_model(self):
        assert get_target_model('main.asset') is Asset
        assert get_target_model('main.nothing') is None
        assert get_target_model('not-a-model-path') is None
        assert get_target_model(None) is None


@pytest.mark.django_db
class TestDisplayRendering:
    """Tests for rendering selected entities."""

    def test_label(self, sample_assets):
        display = create_display('label', {'entity_type': 'main.asset'})

        assert display.render(str(sample_assets[0].pk)) == 'Logo'

    def test_label_escapes(self):
        asset = Asset.objects.create(name='<b>Bold</b>')
        display = create_display('label', {'entity_type': 'main.asset'})

        assert display.render(str(asset.pk)) == '&lt;b&gt;Bold&lt;/b&gt;'

    def test_label_link(self, article):
        display = create_display('label', {'entity_type': 'main.article', 'link': True})

        assert display.render(str(article.pk)) == f'<a href="/main/articles/{article.pk}/">Launch</a>'

    def test_render_settings_override(self, article):
        display = create_display('label', {'entity_type': 'main.article'})

        assert display.render(str(article.pk), {'link': True}).startswith('<a href=')

    @pytest.mark.parametrize('identifier', ['999', 'abc'])
    def test_missing_entity(self, identifier):
        display = create_display('label', {'entity_type': 'main.asset'})

        html = display.render(identifier)

        assert 'entity-browser-missing' in html
        assert identifier in html

    def test_rendered_entity(self, sample_assets):
        display = create_display('rendered_entity', {'entity_type': 'main.asset'})

        html = display.render(str(sample_assets[1].pk))

        assert 'entity-browser-display-teaser' in html
        assert 'Brochure' in html

    def test_entity_id_needs_no_lookup(self):
        assert create_display('entity_id').render('42') == '<code>42</code>'


@pytest.mark.django_db
class TestBrowserDisplay:
    """Tests for entity browser launchers."""

    def test_modal_launcher(self, browser):
        callbacks = JSCallbacks(browser.key)
        callbacks.register('entityBrowserEntityReference.selectionCompleted')

        html = browser.get_display().display_entity_browser('id_assets-target-id', callbacks)

        assert 'data-entity-browser="asset_library"' in html
        assert 'data-selection-target="id_assets-target-id"' in html
        assert 'data-callbacks="entityBrowserEntityReference.selectionCompleted"' in html
        assert 'href="/entity-browser/asset_library/"' in html
        assert 'data-dialog-width="800"' in html
        assert 'Select assets' in html

    def test_iframe_launcher(self):
        browser = EntityBrowser.objects.create(
            key='docs', label='Documents', display='iframe', display_settings={'url': '/pick/docs/'}
        )

        html = browser.get_display().display_entity_browser('target')

        assert '<iframe src="/pick/docs/"' in html

    def test_unknown_display(self):
        browser = EntityBrowser(key='broken', label='Broken', display='popup')

        assert create_browser_display(browser) is None
