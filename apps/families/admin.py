# ==========================================
# apps/families/admin.py
# ==========================================

from django.contrib import admin
from apps.families.models import Family, FamilyMembership, FamilyInvitation


class FamilyMembershipInline(admin.TabularInline):
    """Inline admin for family memberships."""
    model = FamilyMembership
    extra = 0
    fields = ['user', 'role', 'joined_at']
    readonly_fields = ['joined_at']


class FamilyInvitationInline(admin.TabularInline):
    """Inline admin for family invitations."""
    model = FamilyInvitation
    extra = 0
    fields = ['invited_username', 'invitation_code', 'invited_by', 'status', 'created_at']
    readonly_fields = ['invitation_code', 'created_at']


@admin.register(Family)
class FamilyAdmin(admin.ModelAdmin):
    """Admin interface for Families."""

    list_display = ['name', 'member_count', 'created_at']
    search_fields = ['name', 'memberships__user__username']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [FamilyMembershipInline, FamilyInvitationInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def member_count(self, obj):
        """Show number of members."""
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(FamilyMembership)
class FamilyMembershipAdmin(admin.ModelAdmin):
    """Admin interface for Family Memberships."""

    list_display = ['user', 'family', 'role', 'joined_at']
    list_filter = ['role', 'joined_at']
    search_fields = ['user__username', 'family__name']
    readonly_fields = ['joined_at']
    ordering = ['-joined_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'family')


@admin.register(FamilyInvitation)
class FamilyInvitationAdmin(admin.ModelAdmin):
    """Admin interface for Family Invitations."""

    list_display = ['invitation_code', 'family', 'invited_username', 'invited_by', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['invitation_code', 'invited_username', 'family__name']
    readonly_fields = ['invitation_code', 'created_at', 'updated_at']
    ordering = ['-created_at']
