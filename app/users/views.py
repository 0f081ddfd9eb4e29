# users/views.py
from rest_framework import status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet
from rest_framework.mixins import ListModelMixin, RetrieveModelMixin
from rest_framework.authtoken.models import Token
from django.utils.translation import gettext_lazy as _
from drf_spectacular.utils import extend_schema
import logging

from .models import User
from .permissions import IsAdminRole
from .serializers import (
    UserSerializer,
    UserCreateSerializer,
    UserRoleSerializer,
    LoginSerializer,
)
from .services import UserService
from .exceptions import (
    EmailAlreadyExistsError,
    InvalidRoleError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class AuthViewSet(GenericViewSet):
    """
    Token authentication endpoints
    """
    permission_classes = [permissions.AllowAny]
    serializer_class = LoginSerializer

    @extend_schema(
        request=LoginSerializer,
        responses={
            200: {
                'description': 'Login successful',
                'example': {
                    'message': 'Login successful',
                    'user': {'id': 'uuid', 'email': 'coordinator@example.com', 'role': 'coordinator'},
                    'token': 'token-key'
                }
            },
            400: {'description': 'Invalid credentials'}
        },
        description="User login",
        tags=['Authentication']
    )
    @action(detail=False, methods=['post'])
    def login(self, request):
        """
        User login
        POST /api/auth/login/
        """
        serializer = LoginSerializer(data=request.data, context={'request': request})

        if serializer.is_valid():
            user = serializer.validated_data['user']
            token, created = Token.objects.get_or_create(user=user)

            return Response({
                'message': _('Login successful'),
                'user': UserSerializer(user).data,
                'token': token.key
            }, status=status.HTTP_200_OK)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    @extend_schema(
        request=None,
        responses={
            200: {'description': 'Logged out successfully'},
        },
        description="User logout - deletes authentication token",
        tags=['Authentication']
    )
    @action(detail=False, methods=['post'], permission_classes=[permissions.IsAuthenticated])
    def logout(self, request):
        """
        User logout
        POST /api/auth/logout/
        """
        Token.objects.filter(user=request.user).delete()
        return Response({
            'message': _('Logged out successfully')
        }, status=status.HTTP_200_OK)

    @extend_schema(
        responses={
            200: {'description': "Current user's profile including the linked psychologist id"},
        },
        description="Get current authenticated user's profile",
        tags=['Authentication']
    )
    @action(detail=False, methods=['get'], permission_classes=[permissions.IsAuthenticated])
    def me(self, request):
        """
        Get current user profile
        GET /api/auth/me/
        """
        profile_data = UserService.get_user_profile(request.user)
        return Response(profile_data, status=status.HTTP_200_OK)


@extend_schema(tags=['User Management'])
class UserViewSet(GenericViewSet, ListModelMixin, RetrieveModelMixin):
    """
    ViewSet for user management (admin only)
    """
    queryset = User.objects.all().order_by('email')
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated, IsAdminRole]

    def get_serializer_class(self):
        if self.action == 'create':
            return UserCreateSerializer
        elif self.action == 'update_role':
            return UserRoleSerializer
        return UserSerializer

    @extend_schema(
        description="List all users (Admin only)",
        responses={200: UserSerializer(many=True)}
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        description="Retrieve a specific user (Admin only)",
        responses={200: UserSerializer}
    )
    def retrieve(self, request, *args, **kwargs):
        return super().retrieve(request, *args, **kwargs)

    @extend_schema(
        request=UserCreateSerializer,
        responses={201: UserSerializer, 400: {'description': 'Invalid data or email already registered'}},
        description="Create a user with a role (Admin only)"
    )
    def create(self, request):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = UserService.create_user(
                created_by=request.user.email,
                **serializer.validated_data
            )
        except (EmailAlreadyExistsError, InvalidRoleError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=UserRoleSerializer,
        responses={200: UserSerializer, 404: {'description': 'User not found'}},
        description="Change a user's role (Admin only)"
    )
    @action(detail=True, methods=['post'], url_path='role')
    def update_role(self, request, pk=None):
        serializer = UserRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = UserService.update_role(pk, serializer.validated_data['role'], request.user.email)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidRoleError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(
        responses={204: None, 404: {'description': 'User not found'}},
        description="Delete a user (Admin only)"
    )
    def destroy(self, request, pk=None):
        if str(request.user.pk) == str(pk):
            return Response({'error': _('You cannot delete your own account')},
                            status=status.HTTP_400_BAD_REQUEST)
        try:
            UserService.delete_user(pk, request.user.email)
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)
