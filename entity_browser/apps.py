from django.apps import AppConfig


class EntityBrowserConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'entity_browser'
    verbose_name = 'Entity browser'
