# appointments/constants.py
from django.utils.translation import gettext_lazy as _


# Appointment lifecycle
STATUS_SCHEDULED = 'scheduled'
STATUS_COMPLETED = 'completed'
STATUS_CANCELLED = 'cancelled'
STATUS_NO_SHOW = 'no-show'

STATUS_CHOICES = [
    (STATUS_SCHEDULED, _('Scheduled')),
    (STATUS_COMPLETED, _('Completed')),
    (STATUS_CANCELLED, _('Cancelled')),
    (STATUS_NO_SHOW, _('No show')),
]

ALL_STATUSES = (STATUS_SCHEDULED, STATUS_COMPLETED, STATUS_CANCELLED, STATUS_NO_SHOW)
TERMINAL_STATUSES = frozenset({STATUS_COMPLETED, STATUS_CANCELLED, STATUS_NO_SHOW})

# Client situation
SITUATION_CEPRUNSA = 'ceprunsa'
SITUATION_PARTICULAR = 'particular'

SITUATION_CHOICES = [
    (SITUATION_CEPRUNSA, _('CEPRUNSA applicant')),
    (SITUATION_PARTICULAR, _('Private client')),
]

# Session modality
MODALITY_PRESENTIAL = 'presential'
MODALITY_VIRTUAL = 'virtual'

MODALITY_CHOICES = [
    (MODALITY_PRESENTIAL, _('Presential')),
    (MODALITY_VIRTUAL, _('Virtual')),
]

# Session results required to complete an appointment
RESULT_FIELDS = ('diagnosis', 'recommendations', 'conclusions')

PAGE_ELLIPSIS = '…'
