from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.users.serializers import UserSerializer

from .models import Family
from .serializers import (
    FamilySerializer,
    FamilyCreateSerializer,
    FamilyMemberSerializer,
    FamilyInvitationSerializer,
    InviteByUsernameSerializer,
    JoinFamilySerializer,
    RemoveMemberSerializer,
)

from apps.families.services import (
    get_family_for_user,
    create_family,
    update_family,
    get_family_for_member,
    get_family_members,
    create_invitation,
    get_family_invitations,
    get_pending_invitations_for_user,
    join_family_by_code,
    accept_invitation as accept_invitation_service,
    decline_invitation as decline_invitation_service,
    leave_family,
    remove_member,
    # Exceptions
    FamiliesServiceError,
    FamilyNotFoundError,
    AlreadyInFamilyError,
    NotMemberError,
    InsufficientPermissionsError,
    InvitationNotFoundError,
    InvitationNotForUserError,
    LastAdminCannotLeaveError,
    CannotRemoveSelfError,
)


class FamilyViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for families.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: The caller's family (as a one-element list)
    create: Create a new family; the caller becomes its admin
    retrieve: Get a family (members only)
    update: Rename a family (admin only)
    partial_update: Rename a family (admin only)
    """

    serializer_class = FamilySerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    def get_queryset(self):
        """Return only families where user is a member."""
        return Family.objects.filter(
            memberships__user=self.request.user
        ).prefetch_related('memberships').distinct()

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return FamilyCreateSerializer
        return FamilySerializer

    def create(self, request, *args, **kwargs):
        """Create a new family."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            family = create_family(
                name=serializer.validated_data['name'],
                creator=request.user
            )
        except AlreadyInFamilyError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = FamilySerializer(family, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Rename a family (admin only)."""
        family = self.get_object()
        serializer = self.get_serializer(family, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)

        try:
            family = update_family(
                family_id=family.id,
                user=request.user,
                name=serializer.validated_data.get('name')
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        output_serializer = FamilySerializer(family, context={'request': request})
        return Response(output_serializer.data)

    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the family."""
        try:
            family = get_family_for_member(family_id=pk, user=request.user)
        except FamilyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        memberships = get_family_members(family_id=family.id)
        return Response({
            'family': {'id': str(family.id), 'name': family.name},
            'members': FamilyMemberSerializer(memberships, many=True).data,
        })

    @extend_schema(
        request=InviteByUsernameSerializer,
        responses={200: FamilyInvitationSerializer(many=True), 201: FamilyInvitationSerializer},
    )
    @action(detail=True, methods=['get', 'post'])
    def invitations(self, request, pk=None):
        """
        List the family's invitations, or invite a user by username.

        GET  /api/families/{id}/invitations/
        POST /api/families/{id}/invitations/  {"username": "..."}
        """
        if request.method == 'GET':
            try:
                invitations = get_family_invitations(family_id=pk, user=request.user)
            except FamilyNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
            except NotMemberError as e:
                return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
            return Response(FamilyInvitationSerializer(invitations, many=True).data)

        serializer = InviteByUsernameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            invitation = create_invitation(
                family_id=pk,
                invited_by=request.user,
                username=serializer.validated_data['username'].strip()
            )
        except FamilyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(FamilyInvitationSerializer(invitation).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={201: FamilyInvitationSerializer})
    @action(detail=True, methods=['post'])
    def generate_invitation(self, request, pk=None):
        """Create a code-only invitation anyone holding the code can redeem."""
        try:
            invitation = create_invitation(family_id=pk, invited_by=request.user)
        except FamilyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(FamilyInvitationSerializer(invitation).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None)
    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a family."""
        try:
            leave_family(family_id=pk, user=request.user)
        except FamilyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (LastAdminCannotLeaveError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'message': 'Successfully left the family'})

    @extend_schema(request=RemoveMemberSerializer)
    @action(detail=True, methods=['delete'])
    def remove_member(self, request, pk=None):
        """Remove a member from the family (admin only)."""
        serializer = RemoveMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            remove_member(
                family_id=pk,
                user_id=serializer.validated_data['user_id'],
                removed_by=request.user
            )
        except FamilyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (CannotRemoveSelfError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'message': 'Member removed successfully'})


def _membership_response(request, membership):
    return Response({
        'user': UserSerializer(request.user).data,
        'family': FamilySerializer(membership.family, context={'request': request}).data,
    })


@extend_schema(
    responses={200: FamilySerializer},
    description="Get the current user's family with its members.",
    tags=['families'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_family(request):
    """Get the family the user belongs to."""
    family = get_family_for_user(request.user)
    if family is None:
        return Response({'error': 'User does not belong to a family'}, status=status.HTTP_404_NOT_FOUND)

    return Response(FamilySerializer(family, context={'request': request}).data)


@extend_schema(
    request=JoinFamilySerializer,
    description="Join a family with an invitation code.",
    tags=['families'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def join_family(request):
    """Join a family using an invitation code."""
    serializer = JoinFamilySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        membership = join_family_by_code(
            user=request.user,
            invitation_code=serializer.validated_data['invitation_code']
        )
    except InvitationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except FamiliesServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return _membership_response(request, membership)


@extend_schema(
    responses={200: FamilyInvitationSerializer(many=True)},
    description="Pending invitations addressed to the current user.",
    tags=['families'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_invitations(request):
    """List pending invitations addressed to the user."""
    invitations = get_pending_invitations_for_user(user=request.user)
    return Response(FamilyInvitationSerializer(invitations, many=True).data)


@extend_schema(request=None, tags=['families'])
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def accept_invitation(request, invitation_id):
    """Accept an invitation addressed to the user."""
    try:
        membership = accept_invitation_service(invitation_id=invitation_id, user=request.user)
    except InvitationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvitationNotForUserError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except FamiliesServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return _membership_response(request, membership)


@extend_schema(request=None, responses={200: FamilyInvitationSerializer}, tags=['families'])
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def decline_invitation(request, invitation_id):
    """Decline an invitation addressed to the user."""
    try:
        invitation = decline_invitation_service(invitation_id=invitation_id, user=request.user)
    except InvitationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvitationNotForUserError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except FamiliesServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(FamilyInvitationSerializer(invitation).data)
