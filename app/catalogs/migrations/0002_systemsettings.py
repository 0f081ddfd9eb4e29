import catalogs.models
import datetime
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('catalogs', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='SystemSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('center_name', models.CharField(default='Consultorio Psicológico CEPRUNSA', max_length=200, verbose_name='center name')),
                ('center_email', models.EmailField(default='consultorio.psicologico@ceprunsa.edu.pe', max_length=254, verbose_name='center email')),
                ('center_phone', models.CharField(blank=True, default='054-123456', max_length=30, verbose_name='center phone')),
                ('center_address', models.CharField(blank=True, default='Local CEPRUNSA', max_length=255, verbose_name='center address')),
                ('default_duration', models.PositiveIntegerField(default=60, help_text='Session length in minutes', validators=[django.core.validators.MinValueValidator(15), django.core.validators.MaxValueValidator(120)], verbose_name='default duration')),
                ('min_time_advance', models.PositiveIntegerField(default=24, help_text='Hours of notice required to book an appointment', validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(72)], verbose_name='minimum advance')),
                ('max_appointments_per_day', models.PositiveIntegerField(default=8, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(20)], verbose_name='max appointments per day')),
                ('working_hours_start', models.TimeField(default=datetime.time(8, 0), verbose_name='working hours start')),
                ('working_hours_end', models.TimeField(default=datetime.time(18, 0), verbose_name='working hours end')),
                ('working_days', models.JSONField(default=catalogs.models.default_working_days, help_text='Weekday numbers, 0 = Sunday to 6 = Saturday', verbose_name='working days')),
                ('updated_at', models.DateTimeField(blank=True, null=True, verbose_name='updated at')),
                ('updated_by', models.CharField(blank=True, max_length=254, verbose_name='updated by')),
            ],
            options={
                'verbose_name': 'System settings',
                'verbose_name_plural': 'System settings',
                'db_table': 'system_settings',
            },
        ),
    ]
