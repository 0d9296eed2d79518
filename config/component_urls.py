"""
URL patterns for HTMX component endpoints.
Each component registers its own URLs here.
"""
from entity_browser.components.entity_reference.entity_reference import EntityReference

urlpatterns = []

# Register component URLs
for component_class in [EntityReference]:
    if hasattr(component_class, 'get_urls'):
        urlpatterns.extend(component_class.get_urls())
