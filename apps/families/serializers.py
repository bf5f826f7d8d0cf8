from rest_framework import serializers

from .models import Family, FamilyInvitation, FamilyMembership


class FamilyMemberSerializer(serializers.ModelSerializer):
    """Member row: the user's identity plus their role in the family."""

    id = serializers.UUIDField(source='user.id', read_only=True)
    username = serializers.CharField(source='user.username', read_only=True)
    first_name = serializers.CharField(source='user.first_name', read_only=True)
    last_name = serializers.CharField(source='user.last_name', read_only=True)

    class Meta:
        model = FamilyMembership
        fields = ['id', 'username', 'first_name', 'last_name', 'role', 'joined_at']
        read_only_fields = fields


class FamilySerializer(serializers.ModelSerializer):
    """Main serializer for families."""

    members = serializers.SerializerMethodField()
    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Family
        fields = [
            'id',
            'name',
            'members',
            'member_count',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_members(self, obj):
        memberships = obj.memberships.select_related('user').order_by('role', 'joined_at')
        return FamilyMemberSerializer(memberships, many=True).data

    def get_member_count(self, obj):
        return obj.memberships.count()

    def get_user_role(self, obj):
        """Get current user's role in the family."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.get_user_role(request.user)
        return None


class FamilySummarySerializer(serializers.ModelSerializer):
    """Lightweight family info returned by auth endpoints."""

    class Meta:
        model = Family
        fields = ['id', 'name', 'created_at']
        read_only_fields = fields


class FamilyCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating and renaming families."""

    class Meta:
        model = Family
        fields = ['name']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Family name cannot be empty.')
        return value


class FamilyInvitationSerializer(serializers.ModelSerializer):
    """Serializer for family invitations."""

    family_name = serializers.CharField(source='family.name', read_only=True)
    invited_by_name = serializers.SerializerMethodField()

    class Meta:
        model = FamilyInvitation
        fields = [
            'id',
            'family',
            'family_name',
            'invited_by',
            'invited_by_name',
            'invited_username',
            'invitation_code',
            'status',
            'created_at',
        ]
        read_only_fields = fields

    def get_invited_by_name(self, obj):
        return obj.invited_by.get_display_name()


class InviteByUsernameSerializer(serializers.Serializer):
    """Serializer for inviting a user by username."""

    username = serializers.CharField(max_length=150, required=True)


class JoinFamilySerializer(serializers.Serializer):
    """Serializer for joining a family with an invitation code."""

    invitation_code = serializers.CharField(max_length=16, required=True)


class RemoveMemberSerializer(serializers.Serializer):
    """Serializer for removing a member."""

    user_id = serializers.UUIDField(required=True)
