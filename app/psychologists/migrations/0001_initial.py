import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Psychologist',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('full_name', models.CharField(help_text="Psychologist's full name", max_length=200, verbose_name='full name')),
                ('dni', models.CharField(help_text='National identity document, 8 digits', max_length=8, validators=[django.core.validators.RegexValidator(message='DNI must be exactly 8 digits', regex='^[0-9]{8}\\Z')], verbose_name='DNI')),
                ('institutional_email', models.EmailField(help_text='Email address issued by the institution', max_length=254, verbose_name='institutional email')),
                ('personal_email', models.EmailField(blank=True, help_text='Optional personal email address', max_length=254, verbose_name='personal email')),
                ('phone', models.CharField(help_text='Contact phone number', max_length=20, verbose_name='phone')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='created at')),
                ('created_by', models.CharField(default='system', max_length=254, verbose_name='created by')),
                ('updated_at', models.DateTimeField(blank=True, null=True, verbose_name='updated at')),
                ('updated_by', models.CharField(blank=True, max_length=254, verbose_name='updated by')),
                ('user', models.OneToOneField(blank=True, help_text='Login account whose appointments are scoped to this psychologist', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='psychologist_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Psychologist',
                'verbose_name_plural': 'Psychologists',
                'db_table': 'psychologists',
                'ordering': ['full_name'],
                'indexes': [
                    models.Index(fields=['full_name'], name='psychologists_name_idx'),
                    models.Index(fields=['dni'], name='psychologists_dni_idx'),
                ],
            },
        ),
    ]
