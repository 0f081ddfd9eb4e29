# psychologists/views.py
from rest_framework import status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet
from rest_framework.mixins import ListModelMixin, RetrieveModelMixin
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import extend_schema
import logging

from .models import Psychologist
from .serializers import PsychologistSerializer
from .services import (
    PsychologistService,
    PsychologistNotFoundError,
    PsychologistLinkError,
)
from users.permissions import CanManagePsychologists

logger = logging.getLogger(__name__)


@extend_schema(tags=['Psychologists'])
class PsychologistViewSet(GenericViewSet, ListModelMixin, RetrieveModelMixin):
    """
    Psychologist records: readable by any authenticated user,
    writable by admins and coordinators
    """
    queryset = Psychologist.objects.select_related('user').all()
    serializer_class = PsychologistSerializer
    permission_classes = [permissions.IsAuthenticated, CanManagePsychologists]

    def get_permissions(self):
        """Set permissions based on action"""
        if self.action == 'me':
            permission_classes = [permissions.IsAuthenticated]
        else:
            permission_classes = [permissions.IsAuthenticated, CanManagePsychologists]
        return [permission() for permission in permission_classes]

    @extend_schema(
        description="List all psychologists",
        responses={200: PsychologistSerializer(many=True)}
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        description="Get a psychologist record",
        responses={200: PsychologistSerializer}
    )
    def retrieve(self, request, *args, **kwargs):
        return super().retrieve(request, *args, **kwargs)

    @extend_schema(
        request=PsychologistSerializer,
        responses={
            201: PsychologistSerializer,
            400: {'description': 'Invalid data provided'},
            403: {'description': 'Only admins and coordinators can create psychologists'}
        },
        description="Create a psychologist record"
    )
    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            psychologist = PsychologistService.create_psychologist(
                serializer.validated_data, created_by=request.user.email
            )
        except PsychologistLinkError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'message': _('Psychologist created successfully'),
            'psychologist': PsychologistSerializer(psychologist).data
        }, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=PsychologistSerializer,
        responses={
            200: PsychologistSerializer,
            400: {'description': 'Invalid data provided'},
            404: {'description': 'Psychologist not found'}
        },
        description="Update a psychologist record"
    )
    def partial_update(self, request, pk=None):
        psychologist = self.get_object()
        serializer = self.get_serializer(psychologist, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            psychologist = PsychologistService.update_psychologist(
                psychologist, serializer.validated_data, updated_by=request.user.email
            )
        except PsychologistLinkError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'message': _('Psychologist updated successfully'),
            'psychologist': PsychologistSerializer(psychologist).data
        }, status=status.HTTP_200_OK)

    @extend_schema(
        responses={204: None, 404: {'description': 'Psychologist not found'}},
        description="Delete a psychologist record; existing appointments keep the name"
    )
    def destroy(self, request, pk=None):
        try:
            PsychologistService.delete_psychologist(pk, deleted_by=request.user.email)
        except PsychologistNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        responses={
            200: PsychologistSerializer,
            404: {'description': 'No psychologist record linked to this login'}
        },
        description="Psychologist record linked to the current login"
    )
    @action(detail=False, methods=['get'])
    def me(self, request):
        """
        GET /api/psychologists/me/
        """
        psychologist = PsychologistService.get_psychologist_by_user(request.user)
        if psychologist is None:
            return Response({
                'error': _('No psychologist record is linked to your account')
            }, status=status.HTTP_404_NOT_FOUND)

        return Response(PsychologistSerializer(psychologist).data, status=status.HTTP_200_OK)
