from django.contrib import admin
from .models import Article, Asset


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ['name', 'kind', 'created_at']
    list_filter = ['kind']
    search_fields = ['name']


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = ['title', 'created_at', 'updated_at']
    search_fields = ['title', 'body']
    readonly_fields = ['created_at', 'updated_at']
