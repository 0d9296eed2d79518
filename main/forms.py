"""
Article edit form with an entity reference field for its assets.
"""
from django import forms
from entity_browser.fields import EntityReferenceField
from entity_browser.services.storage import load_reference_set, save_reference_set
from .models import Article

ASSETS_FIELD = 'assets'


class ArticleForm(forms.ModelForm):
    assets = EntityReferenceField(
        entity_browser='asset_library',
        field_widget_display='label',
        target_type='main.asset',
        validate_targets=True,
        required=False,
    )

    class Meta:
        model = Article
        fields = ['title', 'body']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.initial[ASSETS_FIELD] = load_reference_set(self.instance, ASSETS_FIELD)

    def save(self, commit=True):
        article = super().save(commit=commit)
        if commit:
            field = self.fields[ASSETS_FIELD]
            save_reference_set(article, ASSETS_FIELD, field.to_item_records(self.cleaned_data[ASSETS_FIELD]))
        return article
