from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from apps.families.models import FamilyMembership

from .models import User


class UserSerializer(serializers.ModelSerializer):
    """User profile with the caller's family id and role."""

    family_id = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'first_name',
            'last_name',
            'family_id',
            'role',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields

    def _membership(self, obj):
        # Queried directly; user.family_membership may be cached from before a join
        cache = self.context.setdefault('_memberships', {})
        if obj.pk not in cache:
            cache[obj.pk] = FamilyMembership.objects.filter(user=obj).first()
        return cache[obj.pk]

    def get_family_id(self, obj):
        membership = self._membership(obj)
        return str(membership.family_id) if membership else None

    def get_role(self, obj):
        membership = self._membership(obj)
        return membership.role if membership else None


class UserUpdateSerializer(serializers.ModelSerializer):
    """Profile update; a new password is re-hashed."""

    password = serializers.CharField(
        write_only=True,
        required=False,
        validators=[validate_password],
        style={'input_type': 'password'}
    )

    class Meta:
        model = User
        fields = ['first_name', 'last_name', 'password']

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        for field, value in validated_data.items():
            setattr(instance, field, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class UserRegistrationSerializer(serializers.Serializer):
    """
    Validate registration input.

    ``invitation_code`` takes priority over ``family_name``; with neither
    the user starts without a family.
    """

    username = serializers.CharField(min_length=3, max_length=150)
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=False,
        style={'input_type': 'password'}
    )
    first_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    family_name = serializers.CharField(max_length=200, required=False, allow_null=True, allow_blank=True)
    invitation_code = serializers.CharField(max_length=16, required=False, allow_null=True, allow_blank=True)

    def validate_username(self, value):
        return value.strip()

    def validate(self, attrs):
        """Validate password confirmation."""
        confirm = attrs.pop('password_confirm', None)
        if confirm is not None and attrs['password'] != confirm:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class DeleteAccountSerializer(serializers.Serializer):
    password = serializers.CharField(
        required=True,
        write_only=True,
        help_text="Current password for confirmation"
    )
