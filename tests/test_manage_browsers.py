"""
Tests for the manage_browsers management command.
"""
from io import StringIO
import pytest
from django.core.management import call_command
from entity_browser.models import EntityBrowser


def run(*args):
    out = StringIO()
    call_command('manage_browsers', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestManageBrowsers:
    """Tests for manage_browsers actions."""

    def test_list_empty(self):
        assert 'No entity browsers defined' in run('list')

    def test_create_and_list(self):
        output = run('create', 'media', 'Media library', '--display', 'iframe', '--height', '600')

        assert "Created entity browser 'media' (iframe)" in output
        browser = EntityBrowser.objects.get(key='media')
        assert browser.display_settings == {'height': '600'}
        assert 'Media library' in run('list')

    def test_create_duplicate(self, browser):
        assert 'already exists' in run('create', 'asset_library', 'Again')
        assert EntityBrowser.objects.count() == 1

    def test_delete(self, browser):
        assert "Deleted entity browser 'asset_library'" in run('delete', 'asset_library')
        assert not EntityBrowser.objects.exists()

    def test_delete_missing(self):
        assert 'not found' in run('delete', 'nothing')

    def test_summary(self, browser):
        output = run('summary', '--browser', 'asset_library', '--display', 'label')

        assert 'Entity browser: Asset library' in output
        assert 'Entity display: Entity label' in output

    def test_summary_without_browser(self):
        assert 'No entity browser selected.' in run('summary')

    def test_displays(self):
        output = run('displays')

        assert 'label' in output
        assert 'rendered_entity' in output
