# appointments/views.py
from rest_framework import status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
import logging

from .models import Appointment
from .constants import STATUS_COMPLETED, STATUS_CANCELLED, STATUS_NO_SHOW
from .serializers import (
    AppointmentSerializer,
    AppointmentDraftSerializer,
    CompletionSerializer,
    CancellationSerializer,
    NoShowSerializer,
    DocumentSerializer,
    DashboardSerializer,
    PsychologistStatsSerializer,
)
from .services import (
    ActingUser,
    AppointmentFilters,
    AppointmentWorkflowService,
    Rejection,
)
from .permissions import CanViewAppointmentStatistics

logger = logging.getLogger(__name__)


def rejection_response(rejection: Rejection) -> Response:
    return Response(rejection.to_dict(), status=rejection.http_status)


class AppointmentWorkflowMixin:
    """
    Builds the workflow service and the acting user for each request
    """

    def get_workflow(self) -> AppointmentWorkflowService:
        return AppointmentWorkflowService()

    def get_acting_user(self) -> ActingUser:
        return ActingUser.from_user(self.request.user)


@extend_schema(tags=['Appointments'])
class AppointmentViewSet(AppointmentWorkflowMixin, GenericViewSet):
    """
    Appointment management.

    Role checks, visibility and status rules live in the workflow service;
    every refusal comes back as ``{'error', 'code', 'fields'?}`` with the
    status code of its rejection.
    """
    queryset = Appointment.objects.all()
    serializer_class = AppointmentSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_serializer_class(self):
        if self.action in ('create', 'partial_update'):
            return AppointmentDraftSerializer
        elif self.action == 'complete':
            return CompletionSerializer
        elif self.action == 'cancel':
            return CancellationSerializer
        elif self.action == 'mark_no_show':
            return NoShowSerializer
        elif self.action == 'attach_document':
            return DocumentSerializer
        elif self.action == 'dashboard':
            return DashboardSerializer
        return AppointmentSerializer

    def _appointment_response(self, outcome, message, success_status=status.HTTP_200_OK):
        if isinstance(outcome, Rejection):
            return rejection_response(outcome)
        return Response({
            'message': message,
            'appointment': AppointmentSerializer(outcome).data
        }, status=success_status)

    def _transition(self, request, pk, target_status, message):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        outcome = self.get_workflow().transition_appointment(
            pk, target_status, serializer.to_payload(), self.get_acting_user()
        )
        return self._appointment_response(outcome, message)

    @extend_schema(
        parameters=[
            OpenApiParameter(name='search', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY,
                             description='Case-insensitive client name or DNI substring'),
            OpenApiParameter(name='psychologist', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY,
                             description='Psychologist ID'),
            OpenApiParameter(name='process', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY,
                             description='Process ID'),
            OpenApiParameter(name='reason', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY,
                             description='Consultation reason ID'),
            OpenApiParameter(name='status', type=OpenApiTypes.STR, location=OpenApiParameter.QUERY,
                             description='scheduled, completed, cancelled or no-show'),
            OpenApiParameter(name='date', type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY,
                             description='Exact appointment date'),
            OpenApiParameter(name='page', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY,
                             description='Page number, 1-based'),
            OpenApiParameter(name='page_size', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY,
                             description='One of 10, 25, 50 or 100'),
        ],
        responses={
            200: {
                'description': 'Filtered, ordered and paginated appointments',
                'example': {
                    'count': 42,
                    'total_pages': 5,
                    'page': 1,
                    'page_size': 10,
                    'page_numbers': [1, 2, 3, 4, '…', 5],
                    'active_filters': 1,
                    'results': []
                }
            }
        },
        description="List the appointments visible to the current user"
    )
    def list(self, request):
        workflow = self.get_workflow()
        visible = workflow.visible_appointments(self.get_acting_user())
        if isinstance(visible, Rejection):
            return rejection_response(visible)

        result = workflow.query_appointments(
            visible,
            AppointmentFilters.from_params(request.query_params),
            page=request.query_params.get('page', 1),
            page_size=request.query_params.get('page_size'),
        )

        return Response({
            'count': result['total_items'],
            'total_pages': result['total_pages'],
            'page': result['page'],
            'page_size': result['page_size'],
            'page_numbers': result['page_numbers'],
            'active_filters': result['active_filters'],
            'results': AppointmentSerializer(result['items'], many=True).data
        }, status=status.HTTP_200_OK)

    @extend_schema(
        responses={200: AppointmentSerializer, 403: {'description': 'Not visible to you'}, 404: {'description': 'Not found'}},
        description="Get appointment details"
    )
    def retrieve(self, request, pk=None):
        outcome = self.get_workflow().get_appointment(pk, self.get_acting_user())
        if isinstance(outcome, Rejection):
            return rejection_response(outcome)
        return Response(AppointmentSerializer(outcome).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=AppointmentDraftSerializer,
        responses={
            201: {
                'description': 'Appointment scheduled',
                'example': {
                    'message': 'Appointment scheduled successfully',
                    'appointment': {'appointment_id': 'uuid', 'status': 'scheduled'}
                }
            },
            400: {'description': 'Missing or invalid fields, inactive process or reason'},
            403: {'description': 'Only admins and coordinators can schedule appointments'}
        },
        description="Schedule a new appointment"
    )
    def create(self, request):
        serializer = AppointmentDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        outcome = self.get_workflow().create_appointment(serializer.to_draft(), self.get_acting_user())
        return self._appointment_response(
            outcome, _('Appointment scheduled successfully'), success_status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=AppointmentDraftSerializer,
        responses={
            200: {'description': 'Appointment updated'},
            400: {'description': 'Invalid data'},
            403: {'description': 'Only admins and coordinators can edit appointments'},
            409: {'description': 'Appointment is no longer scheduled'}
        },
        description="Edit a scheduled appointment; omitted fields keep their current value"
    )
    def partial_update(self, request, pk=None):
        serializer = AppointmentDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        workflow = self.get_workflow()
        acting_user = self.get_acting_user()
        current = workflow.get_appointment(pk, acting_user)
        if isinstance(current, Rejection):
            return rejection_response(current)

        outcome = workflow.update_appointment(pk, serializer.to_draft(base=current), acting_user)
        return self._appointment_response(outcome, _('Appointment updated successfully'))

    @extend_schema(
        responses={204: None, 403: {'description': 'Forbidden'}, 404: {'description': 'Not found'}},
        description="Delete an appointment permanently"
    )
    def destroy(self, request, pk=None):
        rejection = self.get_workflow().delete_appointment(pk, self.get_acting_user())
        if rejection is not None:
            return rejection_response(rejection)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ============================================================================
    # STATUS CHANGES
    # ============================================================================

    @extend_schema(
        request=CompletionSerializer,
        responses={
            200: {
                'description': 'Appointment marked as completed',
                'example': {
                    'message': 'Appointment marked as completed',
                    'appointment': {'appointment_id': 'uuid', 'status': 'completed'}
                }
            },
            400: {'description': 'Diagnosis, recommendations and conclusions are required'},
            403: {'description': 'Your role cannot complete appointments'},
            409: {'description': 'Appointment is not scheduled'}
        },
        description="Complete a scheduled appointment with its session results"
    )
    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        return self._transition(request, pk, STATUS_COMPLETED, _('Appointment marked as completed'))

    @extend_schema(
        request=CancellationSerializer,
        responses={
            200: {'description': 'Appointment cancelled'},
            403: {'description': 'Only admins and coordinators can cancel appointments'},
            409: {'description': 'Appointment is not scheduled'}
        },
        description="Cancel a scheduled appointment"
    )
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        return self._transition(request, pk, STATUS_CANCELLED, _('Appointment cancelled successfully'))

    @extend_schema(
        request=None,
        responses={
            200: {'description': 'Appointment marked as no-show'},
            403: {'description': 'Your role cannot mark no-shows'},
            409: {'description': 'Appointment is not scheduled'}
        },
        description="Mark a scheduled appointment as a no-show"
    )
    @action(detail=True, methods=['post'], url_path='mark-no-show')
    def mark_no_show(self, request, pk=None):
        return self._transition(request, pk, STATUS_NO_SHOW, _('Appointment marked as no-show'))

    @extend_schema(
        request=DocumentSerializer,
        responses={
            200: {'description': 'Document attached'},
            400: {'description': 'Only PDF files up to 10MB are accepted'},
            409: {'description': 'Appointment is not completed'}
        },
        description="Attach the result document of a completed appointment"
    )
    @action(detail=True, methods=['post'], url_path='attach-document')
    def attach_document(self, request, pk=None):
        serializer = DocumentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        outcome = self.get_workflow().attach_document(pk, serializer.to_descriptor(), self.get_acting_user())
        return self._appointment_response(outcome, _('Document attached successfully'))

    # ============================================================================
    # AGENDA
    # ============================================================================

    @extend_schema(
        responses={200: AppointmentSerializer(many=True)},
        description="Today's visible appointments, earliest first"
    )
    @action(detail=False, methods=['get'])
    def today(self, request):
        outcome = self.get_workflow().today_appointments(self.get_acting_user())
        if isinstance(outcome, Rejection):
            return rejection_response(outcome)
        return Response(AppointmentSerializer(outcome, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        parameters=[
            OpenApiParameter(name='limit', type=OpenApiTypes.INT, location=OpenApiParameter.QUERY,
                             description='Maximum number of appointments returned'),
        ],
        responses={200: AppointmentSerializer(many=True)},
        description="Scheduled appointments after today, soonest first"
    )
    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        limit = request.query_params.get('limit')
        try:
            limit = int(limit) if limit else None
        except ValueError:
            return Response({'error': _('limit must be an integer')}, status=status.HTTP_400_BAD_REQUEST)
        if limit is not None and limit < 1:
            return Response({'error': _('limit must be at least 1')}, status=status.HTTP_400_BAD_REQUEST)

        outcome = self.get_workflow().upcoming_appointments(self.get_acting_user(), limit=limit)
        if isinstance(outcome, Rejection):
            return rejection_response(outcome)
        return Response(AppointmentSerializer(outcome, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        responses={200: DashboardSerializer},
        description="Status totals, today's agenda, upcoming appointments and, for managers, psychologist statistics"
    )
    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        outcome = self.get_workflow().dashboard(self.get_acting_user())
        if isinstance(outcome, Rejection):
            return rejection_response(outcome)
        return Response(DashboardSerializer(outcome).data, status=status.HTTP_200_OK)


@extend_schema(tags=['Appointment Analytics'])
class AppointmentAnalyticsViewSet(AppointmentWorkflowMixin, GenericViewSet):
    """
    Appointment statistics for administrators and coordinators
    """
    serializer_class = PsychologistStatsSerializer
    permission_classes = [permissions.IsAuthenticated, CanViewAppointmentStatistics]

    @extend_schema(
        responses={
            200: PsychologistStatsSerializer(many=True),
            403: {'description': 'Only admins and coordinators can view statistics'}
        },
        description="Appointment counts and completion rate per psychologist, busiest first"
    )
    @action(detail=False, methods=['get'], url_path='psychologist-stats')
    def psychologist_stats(self, request):
        outcome = self.get_workflow().psychologist_stats(self.get_acting_user())
        if isinstance(outcome, Rejection):
            return rejection_response(outcome)
        return Response(PsychologistStatsSerializer(outcome, many=True).data, status=status.HTTP_200_OK)
