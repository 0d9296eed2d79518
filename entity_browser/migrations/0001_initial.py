import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('contenttypes', '0002_remove_content_type_name'),
    ]

    operations = [
        migrations.CreateModel(
            name='EntityBrowser',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.SlugField(max_length=100, unique=True)),
                ('label', models.CharField(max_length=255)),
                ('display', models.CharField(choices=[('modal', 'Modal'), ('iframe', 'iFrame'), ('standalone', 'Standalone')], default='modal', max_length=20)),
                ('display_settings', models.JSONField(blank=True, default=dict, help_text='Display options, e.g. {"width": 650, "height": 500, "link_text": "Select items"}')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['label'],
            },
        ),
        migrations.CreateModel(
            name='ReferenceItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('owner_id', models.CharField(max_length=255)),
                ('field_name', models.CharField(max_length=100)),
                ('delta', models.PositiveIntegerField(default=0, help_text='Position within the field')),
                ('target_id', models.CharField(max_length=255)),
                ('description', models.CharField(blank=True, default='', max_length=512)),
                ('owner_type', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='contenttypes.contenttype')),
            ],
            options={
                'ordering': ['owner_type', 'owner_id', 'field_name', 'delta'],
                'unique_together': {('owner_type', 'owner_id', 'field_name', 'delta')},
            },
        ),
    ]
