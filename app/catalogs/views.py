# catalogs/views.py
from rest_framework import status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet
from rest_framework.mixins import ListModelMixin, RetrieveModelMixin
from drf_spectacular.utils import extend_schema
import logging

from .models import Process, ConsultationReason
from .serializers import (
    ProcessSerializer,
    ConsultationReasonSerializer,
    ToggleStatusSerializer,
    SystemSettingsSerializer,
)
from .services import (
    ReferenceDataService,
    CatalogEntryNotFoundError,
    CatalogValidationError,
    SystemSettingsService,
    SystemSettingsValidationError,
)
from users.permissions import CanManageCatalogs, CanManageSystemSettings

logger = logging.getLogger(__name__)


class CatalogEntryViewSet(GenericViewSet, ListModelMixin, RetrieveModelMixin):
    """
    Base ViewSet for reference entries: readable by any authenticated user,
    writable by admins
    """
    permission_classes = [permissions.IsAuthenticated, CanManageCatalogs]
    entry_label = 'Entry'

    def get_serializer_class(self):
        if self.action == 'toggle_status':
            return ToggleStatusSerializer
        return self.serializer_class

    def selectable_queryset(self):
        return ReferenceDataService.selectable_entries(self.queryset.model)

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            entry = ReferenceDataService.create_entry(
                self.queryset.model, serializer.validated_data, created_by=request.user.email
            )
        except CatalogValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.serializer_class(entry).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        entry = self.get_object()
        serializer = self.get_serializer(entry, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            entry = ReferenceDataService.update_entry(
                entry, serializer.validated_data, updated_by=request.user.email
            )
        except CatalogValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.serializer_class(entry).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        try:
            ReferenceDataService.delete_entry(self.queryset.model, pk, deleted_by=request.user.email)
        except CatalogEntryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def active(self, request):
        """
        Entries selectable for new appointments
        """
        entries = self.selectable_queryset()
        return Response(self.serializer_class(entries, many=True).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='toggle-status')
    def toggle_status(self, request, pk=None):
        """
        Activate or deactivate an entry
        """
        serializer = ToggleStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        is_active = serializer.validated_data['is_active']

        try:
            entry = ReferenceDataService.toggle_status(
                self.queryset.model, pk, is_active, updated_by=request.user.email
            )
        except CatalogEntryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        message = f"{self.entry_label} {'activated' if is_active else 'deactivated'}"
        return Response({
            'message': message,
            'entry': self.serializer_class(entry).data
        }, status=status.HTTP_200_OK)


@extend_schema(tags=['Processes'])
class ProcessViewSet(CatalogEntryViewSet):
    """
    Admission processes
    GET/POST /api/catalogs/processes/, GET/PATCH/DELETE /api/catalogs/processes/{id}/
    """
    queryset = Process.objects.all()
    serializer_class = ProcessSerializer
    entry_label = 'Process'


@extend_schema(tags=['Consultation Reasons'])
class ConsultationReasonViewSet(CatalogEntryViewSet):
    """
    Consultation reasons
    GET/POST /api/catalogs/reasons/, GET/PATCH/DELETE /api/catalogs/reasons/{id}/
    """
    queryset = ConsultationReason.objects.all()
    serializer_class = ConsultationReasonSerializer
    entry_label = 'Consultation reason'


@extend_schema(tags=['System Settings'])
class SystemSettingsViewSet(GenericViewSet):
    """
    Office-wide settings (admin only)
    GET/PATCH /api/catalogs/settings/
    """
    serializer_class = SystemSettingsSerializer
    permission_classes = [permissions.IsAuthenticated, CanManageSystemSettings]

    @extend_schema(
        responses={200: SystemSettingsSerializer},
        description="Current settings, created with defaults on first access"
    )
    def retrieve(self, request):
        settings = SystemSettingsService.get_settings()
        return Response(SystemSettingsSerializer(settings).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=SystemSettingsSerializer,
        responses={200: SystemSettingsSerializer, 400: {'description': 'Invalid settings'}},
        description="Update the center details and appointment defaults"
    )
    def partial_update(self, request):
        settings = SystemSettingsService.get_settings()
        serializer = SystemSettingsSerializer(settings, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            settings = SystemSettingsService.update_settings(
                serializer.validated_data, updated_by=request.user.email
            )
        except SystemSettingsValidationError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SystemSettingsSerializer(settings).data, status=status.HTTP_200_OK)
