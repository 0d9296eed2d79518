"""
Pytest configuration and shared fixtures for testing.
"""
import pytest
from django.test import Client

from entity_browser.services.reconciler import ReferenceValue


@pytest.fixture
def client():
    """Django test client."""
    return Client()


@pytest.fixture
def current_values():
    """References already attached to a field, with edited metadata."""
    return [
        ReferenceValue(target_id='5', weight=0, description='Cover image'),
        ReferenceValue(target_id='9', weight=1, description=''),
        ReferenceValue(target_id='3', weight=2, description='Footer logo'),
    ]


@pytest.fixture
def widget_settings():
    """Settings for a widget selecting main.Asset through the asset library browser."""
    return {
        'entity_browser': 'asset_library',
        'field_widget_display': 'label',
        'field_widget_display_settings': {},
        'target_type': 'main.asset',
    }


@pytest.fixture(scope='function')
def browser(db):
    """Create the asset library browser in database."""
    from entity_browser.models import EntityBrowser

    return EntityBrowser.objects.create(
        key='asset_library',
        label='Asset library',
        display='modal',
        display_settings={'width': 800, 'link_text': 'Select assets'},
    )


@pytest.fixture(scope='function')
def sample_assets(db):
    """Create sample assets in database."""
    from main.models import Asset

    assets = []
    for name, kind in [('Logo', 'image'), ('Brochure', 'document'), ('Teaser', 'video')]:
        assets.append(Asset.objects.create(name=name, kind=kind))
    return assets


@pytest.fixture(scope='function')
def article(db):
    """Create a sample article in database."""
    from main.models import Article

    return Article.objects.create(title='Launch', body='Product launch')
