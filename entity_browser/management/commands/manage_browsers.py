"""
Management command to manage entity browser configurations.

Usage:
    # List all browsers
    python manage.py manage_browsers list

    # Create a browser
    python manage.py manage_browsers create media_library "Media library" --display modal --width 800

    # Delete a browser
    python manage.py manage_browsers delete media_library

    # Summarize widget settings
    python manage.py manage_browsers summary --browser media_library --display label
"""
import logging
from django.core.management.base import BaseCommand
from entity_browser.displays import get_display_definitions
from entity_browser.fields import settings_summary
from entity_browser.models import EntityBrowser

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Manage entity browser configurations'

    def add_arguments(self, parser):
        subparsers = parser.add_subparsers(dest='action', help='Action to perform')

        # list
        subparsers.add_parser('list', help='List all entity browsers')

        # create
        create_parser = subparsers.add_parser('create', help='Create entity browser')
        create_parser.add_argument('key', type=str, help='Browser key')
        create_parser.add_argument('label', type=str, help='Browser label')
        create_parser.add_argument('--display', type=str, default='modal',
                                   choices=[c[0] for c in EntityBrowser.DISPLAY_CHOICES],
                                   help='Launcher display')
        create_parser.add_argument('--width', type=str, default=None, help='Dialog/iframe width')
        create_parser.add_argument('--height', type=str, default=None, help='Dialog/iframe height')
        create_parser.add_argument('--link-text', type=str, default=None, help='Launcher link text')
        create_parser.add_argument('--url', type=str, default=None, help='Picker URL')

        # delete
        delete_parser = subparsers.add_parser('delete', help='Delete entity browser')
        delete_parser.add_argument('key', type=str, help='Browser key to delete')

        # summary
        summary_parser = subparsers.add_parser('summary', help='Summarize widget settings')
        summary_parser.add_argument('--browser', type=str, default=None, help='Browser key')
        summary_parser.add_argument('--display', type=str, default=None, help='Field widget display id')

        # displays
        subparsers.add_parser('displays', help='List field widget displays')

    def handle(self, *args, **options):
        action = options.get('action')

        if not action:
            self.stdout.write(self.style.ERROR("Please specify an action: list, create, delete, summary, displays"))
            return

        handler = {
            'list': self._handle_list,
            'create': self._handle_create,
            'delete': self._handle_delete,
            'summary': self._handle_summary,
            'displays': self._handle_displays,
        }.get(action)

        if handler:
            handler(options)
        else:
            self.stdout.write(self.style.ERROR(f"Unknown action: {action}"))

    def _handle_list(self, options):
        """List all entity browsers."""
        browsers = EntityBrowser.objects.all()

        if not browsers.exists():
            self.stdout.write(self.style.WARNING("No entity browsers defined. Use 'create' to add one."))
            return

        self.stdout.write(f"\n{'Key':<25} {'Label':<30} {'Display':<12}")
        self.stdout.write("-" * 67)
        for browser in browsers:
            self.stdout.write(f"{browser.key:<25} {browser.label:<30} {browser.display:<12}")

    def _handle_create(self, options):
        """Create an entity browser."""
        key = options['key']
        if EntityBrowser.objects.filter(key=key).exists():
            self.stdout.write(self.style.ERROR(f"Entity browser '{key}' already exists"))
            return

        display_settings = {}
        for option, setting in [('width', 'width'), ('height', 'height'),
                                ('link_text', 'link_text'), ('url', 'url')]:
            if options.get(option):
                display_settings[setting] = options[option]

        browser = EntityBrowser.objects.create(
            key=key,
            label=options['label'],
            display=options['display'],
            display_settings=display_settings,
        )
        logger.info(f"Created entity browser: {browser.key}")
        self.stdout.write(self.style.SUCCESS(f"Created entity browser '{browser.key}' ({browser.display})"))

    def _handle_delete(self, options):
        """Delete an entity browser."""
        key = options['key']
        deleted, _ = EntityBrowser.objects.filter(key=key).delete()
        if not deleted:
            self.stdout.write(self.style.ERROR(f"Entity browser '{key}' not found"))
            return
        logger.info(f"Deleted entity browser: {key}")
        self.stdout.write(self.style.SUCCESS(f"Deleted entity browser '{key}'"))

    def _handle_summary(self, options):
        """Print the settings summary a widget would show."""
        for line in settings_summary({
            'entity_browser': options.get('browser'),
            'field_widget_display': options.get('display'),
        }):
            self.stdout.write(line)

    def _handle_displays(self, options):
        """List registered field widget displays."""
        for plugin_id, label in sorted(get_display_definitions().items()):
            self.stdout.write(f"{plugin_id:<20} {label}")
