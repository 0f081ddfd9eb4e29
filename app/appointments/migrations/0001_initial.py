import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalogs', '0001_initial'),
        ('psychologists', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Appointment',
            fields=[
                ('appointment_id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='Unique identifier for the appointment', primary_key=True, serialize=False)),
                ('client_full_name', models.CharField(max_length=200, verbose_name='client full name')),
                ('client_dni', models.CharField(help_text="Client's national identity document, 8 digits", max_length=8, validators=[django.core.validators.RegexValidator(message='DNI must be exactly 8 digits', regex='^[0-9]{8}\\Z')], verbose_name='client DNI')),
                ('client_situation', models.CharField(choices=[('ceprunsa', 'CEPRUNSA applicant'), ('particular', 'Private client')], help_text='ceprunsa (admissions applicant) or particular', max_length=20, verbose_name='client situation')),
                ('client_phone', models.CharField(blank=True, max_length=20, verbose_name='client phone')),
                ('client_email', models.EmailField(blank=True, max_length=254, verbose_name='client email')),
                ('process_name', models.CharField(blank=True, max_length=200, verbose_name='process name')),
                ('reason_name', models.CharField(max_length=200, verbose_name='reason name')),
                ('psychologist_name', models.CharField(max_length=200, verbose_name='psychologist name')),
                ('date', models.DateField(verbose_name='date')),
                ('time', models.TimeField(verbose_name='time')),
                ('modality', models.CharField(choices=[('presential', 'Presential'), ('virtual', 'Virtual')], default='presential', max_length=20, verbose_name='modality')),
                ('location', models.CharField(blank=True, help_text='Office address for presential sessions, meeting link for virtual ones', max_length=512, verbose_name='location')),
                ('status', models.CharField(choices=[('scheduled', 'Scheduled'), ('completed', 'Completed'), ('cancelled', 'Cancelled'), ('no-show', 'No show')], default='scheduled', max_length=20, verbose_name='status')),
                ('diagnosis', models.TextField(blank=True, verbose_name='diagnosis')),
                ('recommendations', models.TextField(blank=True, verbose_name='recommendations')),
                ('conclusions', models.TextField(blank=True, verbose_name='conclusions')),
                ('cancellation_reason', models.TextField(blank=True, verbose_name='cancellation reason')),
                ('document', models.JSONField(blank=True, null=True, verbose_name='document')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='created at')),
                ('created_by', models.CharField(default='system', max_length=254, verbose_name='created by')),
                ('updated_at', models.DateTimeField(blank=True, null=True, verbose_name='updated at')),
                ('updated_by', models.CharField(blank=True, max_length=254, verbose_name='updated by')),
                ('process', models.ForeignKey(blank=True, help_text='Admission process, only for CEPRUNSA clients', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='appointments', to='catalogs.process')),
                ('psychologist', models.ForeignKey(help_text='Psychologist attending the session', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='appointments', to='psychologists.psychologist')),
                ('reason', models.ForeignKey(help_text='Consultation reason', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='appointments', to='catalogs.consultationreason')),
            ],
            options={
                'verbose_name': 'Appointment',
                'verbose_name_plural': 'Appointments',
                'db_table': 'appointments',
                'indexes': [
                    models.Index(fields=['date', 'time'], name='appointments_schedule_idx'),
                    models.Index(fields=['psychologist', 'status'], name='appointments_psy_status_idx'),
                    models.Index(fields=['status'], name='appointments_status_idx'),
                    models.Index(fields=['client_dni'], name='appointments_client_dni_idx'),
                ],
            },
        ),
    ]
