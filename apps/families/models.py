# ==========================================
# apps/families/models.py
# ==========================================

from django.db import models
import uuid


class FamilyRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    MEMBER = 'member', 'Member'


class InvitationStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    REJECTED = 'rejected', 'Rejected'


class Family(models.Model):
    """A household sharing one ledger."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'families'
        ordering = ['-created_at']
        verbose_name_plural = 'families'

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def get_user_role(self, user):
        try:
            return self.memberships.get(user=user).role
        except FamilyMembership.DoesNotExist:
            return None

    def is_admin(self, user):
        return self.get_user_role(user) == FamilyRole.ADMIN


class FamilyMembership(models.Model):
    """A user's place in a family. A user belongs to at most one family."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField('users.User', on_delete=models.CASCADE, related_name='family_membership')
    family = models.ForeignKey(Family, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=FamilyRole.choices, default=FamilyRole.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'family_memberships'
        indexes = [
            models.Index(fields=['family', 'role'], name='family_mem_family_role_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.family.name} ({self.role})"


class FamilyInvitation(models.Model):
    """Invitation to join a family, redeemable by its code."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    family = models.ForeignKey(Family, on_delete=models.CASCADE, related_name='invitations')
    invited_by = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='invitations_sent')
    # Blank for code-only invitations that anyone holding the code may redeem
    invited_username = models.CharField(max_length=150, blank=True)
    invitation_code = models.CharField(max_length=16, unique=True, db_index=True, editable=False)
    status = models.CharField(
        max_length=20,
        choices=InvitationStatus.choices,
        default=InvitationStatus.PENDING,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'family_invitations'
        indexes = [
            models.Index(fields=['family', 'status'], name='family_inv_family_status_idx'),
            models.Index(fields=['invited_username'], name='family_inv_username_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        target = self.invited_username or 'code'
        return f"{self.family.name} -> {target} ({self.status})"

    @property
    def is_pending(self):
        return self.status == InvitationStatus.PENDING

    def is_addressed_to(self, user):
        """Code-only invitations are addressed to everyone."""
        return not self.invited_username or self.invited_username == user.username
