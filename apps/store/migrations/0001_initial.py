import apps.store.models
from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='GeneratedImage',
            fields=[
                ('seq', models.BigAutoField(primary_key=True, serialize=False)),
                ('artifact_id', models.CharField(default=apps.store.models.new_identity, max_length=64, unique=True)),
                ('prompt_id', models.CharField(blank=True, db_index=True, max_length=255, null=True)),
                ('prompt_name', models.CharField(max_length=255)),
                ('prompt_text', models.TextField()),
                ('result_image_data', models.TextField()),
                ('original_file_name', models.CharField(default='ai-generated-image.jpg', max_length=255)),
                ('byte_size', models.PositiveIntegerField(default=0)),
                ('mime_type', models.CharField(default='image/jpeg', max_length=100)),
                ('model_name', models.CharField(blank=True, default='', max_length=100)),
                ('response_text', models.TextField(blank=True, default='')),
                ('source_type', models.CharField(default='generated', editable=False, max_length=20)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'generated_images',
                'ordering': ['seq'],
            },
        ),
        migrations.CreateModel(
            name='ReferenceImage',
            fields=[
                ('seq', models.BigAutoField(primary_key=True, serialize=False)),
                ('image_id', models.CharField(db_index=True, default=apps.store.models.new_identity, max_length=64)),
                ('prompt_id', models.CharField(db_index=True, max_length=255)),
                ('prompt_name', models.CharField(max_length=255)),
                ('prompt_text', models.TextField()),
                ('reference_image_data', models.TextField()),
                ('original_file_name', models.CharField(default='uploaded-image', max_length=255)),
                ('byte_size', models.PositiveIntegerField(default=0)),
                ('mime_type', models.CharField(default='image/jpeg', max_length=100)),
                ('uploaded_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'images',
                'ordering': ['seq'],
            },
        ),
    ]
