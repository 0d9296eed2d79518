"""
Entity browser models.

EntityBrowser is the configuration entity naming an external picker.
ReferenceItem stores one selected entity of an entity reference field.
"""
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models


class EntityBrowser(models.Model):
    """Configured external selection dialog, identified by its key."""
    DISPLAY_CHOICES = [
        ('modal', 'Modal'),
        ('iframe', 'iFrame'),
        ('standalone', 'Standalone'),
    ]

    key = models.SlugField(max_length=100, unique=True)
    label = models.CharField(max_length=255)
    display = models.CharField(max_length=20, choices=DISPLAY_CHOICES, default='modal')
    display_settings = models.JSONField(
        default=dict,
        blank=True,
        help_text='Display options, e.g. {"width": 650, "height": 500, "link_text": "Select items"}'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['label']

    def __str__(self):
        return self.label

    def get_display(self):
        """Return the display plugin that renders this browser's launcher."""
        from entity_browser.browsers import create_browser_display
        return create_browser_display(self)


class ReferenceItem(models.Model):
    """Persisted field item of an entity reference field."""
    owner_type = models.ForeignKey(
        ContentType,
        on_delete=models.CASCADE,
        related_name='+'
    )
    owner_id = models.CharField(max_length=255)
    owner = GenericForeignKey('owner_type', 'owner_id')
    field_name = models.CharField(max_length=100)
    delta = models.PositiveIntegerField(default=0, help_text="Position within the field")
    target_id = models.CharField(max_length=255)
    description = models.CharField(max_length=512, blank=True, default='')

    class Meta:
        ordering = ['owner_type', 'owner_id', 'field_name', 'delta']
        unique_together = ['owner_type', 'owner_id', 'field_name', 'delta']

    def __str__(self):
        return f"{self.field_name}[{self.delta}] -> {self.target_id}"
