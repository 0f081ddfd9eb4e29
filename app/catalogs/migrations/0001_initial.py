import django.utils.timezone
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='ConsultationReason',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, verbose_name='name')),
                ('is_active', models.BooleanField(default=True, help_text='Only active entries can be chosen for new appointments', verbose_name='active')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='created at')),
                ('created_by', models.CharField(default='system', max_length=254, verbose_name='created by')),
                ('updated_at', models.DateTimeField(blank=True, null=True, verbose_name='updated at')),
                ('updated_by', models.CharField(blank=True, max_length=254, verbose_name='updated by')),
                ('description', models.TextField(blank=True, verbose_name='description')),
            ],
            options={
                'verbose_name': 'Consultation reason',
                'verbose_name_plural': 'Consultation reasons',
                'db_table': 'consultation_reasons',
                'ordering': ['name'],
                'abstract': False,
                'indexes': [models.Index(fields=['is_active'], name='reasons_active_idx')],
            },
        ),
        migrations.CreateModel(
            name='Process',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, verbose_name='name')),
                ('is_active', models.BooleanField(default=True, help_text='Only active entries can be chosen for new appointments', verbose_name='active')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='created at')),
                ('created_by', models.CharField(default='system', max_length=254, verbose_name='created by')),
                ('updated_at', models.DateTimeField(blank=True, null=True, verbose_name='updated at')),
                ('updated_by', models.CharField(blank=True, max_length=254, verbose_name='updated by')),
                ('start_date', models.DateField(verbose_name='start date')),
                ('end_date', models.DateField(verbose_name='end date')),
            ],
            options={
                'verbose_name': 'Process',
                'verbose_name_plural': 'Processes',
                'db_table': 'processes',
                'ordering': ['name'],
                'abstract': False,
                'indexes': [models.Index(fields=['is_active'], name='processes_active_idx')],
            },
        ),
    ]
