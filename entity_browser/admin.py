from django.contrib import admin
from .models import EntityBrowser, ReferenceItem


@admin.register(EntityBrowser)
class EntityBrowserAdmin(admin.ModelAdmin):
    list_display = ['label', 'key', 'display', 'updated_at']
    list_filter = ['display']
    search_fields = ['label', 'key']
    prepopulated_fields = {'key': ['label']}
    readonly_fields = ['created_at', 'updated_at']


@admin.register(ReferenceItem)
class ReferenceItemAdmin(admin.ModelAdmin):
    list_display = ['owner_type', 'owner_id', 'field_name', 'delta', 'target_id', 'description_short']
    list_filter = ['owner_type', 'field_name']
    search_fields = ['owner_id', 'target_id', 'description']

    def description_short(self, obj):
        return obj.description[:50] + '...' if len(obj.description) > 50 else obj.description
    description_short.short_description = 'Description'
