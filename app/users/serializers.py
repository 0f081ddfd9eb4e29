# users/serializers.py
from rest_framework import serializers
from django.contrib.auth import authenticate
from django.utils.translation import gettext_lazy as _

from .models import User


class UserSerializer(serializers.ModelSerializer):
    """
    Basic serializer for User model - returns user data
    """
    class Meta:
        model = User
        fields = [
            'id', 'email', 'display_name', 'role', 'is_active',
            'created_at', 'created_by', 'updated_at'
        ]
        read_only_fields = [
            'id', 'created_at', 'created_by', 'updated_at'
        ]


class UserCreateSerializer(serializers.Serializer):
    """
    Serializer for creating users (admin use)
    """
    email = serializers.EmailField()
    display_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, default=User.ROLE_USER)
    password = serializers.CharField(write_only=True, min_length=8, required=False)


class UserRoleSerializer(serializers.Serializer):
    """
    Serializer for changing a user's role
    """
    role = serializers.ChoiceField(
        choices=User.ROLE_CHOICES,
        help_text=_("New role: admin, coordinator, psychologist or user")
    )


class LoginSerializer(serializers.Serializer):
    """
    Serializer for user login
    """
    email = serializers.EmailField(
        help_text=_("Your email address")
    )
    password = serializers.CharField(
        style={'input_type': 'password'},
        help_text=_("Your password")
    )

    def validate(self, attrs):
        """
        Validate credentials and return user
        """
        email = attrs.get('email')
        password = attrs.get('password')

        user = authenticate(
            request=self.context.get('request'),
            username=email,  # We use email as username
            password=password
        )

        if not user:
            raise serializers.ValidationError(
                _("Invalid email or password"),
                code='authorization'
            )

        if not user.is_active:
            raise serializers.ValidationError(
                _("User account is disabled"),
                code='authorization'
            )

        attrs['user'] = user
        return attrs
