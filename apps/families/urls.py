from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'families'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.FamilyViewSet, basename='family')

urlpatterns = [
    # Family ViewSet routes
    # GET    /api/families/                            - The caller's family
    # POST   /api/families/                            - Create family
    # GET    /api/families/{id}/                       - Family details (members)
    # PATCH  /api/families/{id}/                       - Rename (admin)

    # Custom family actions
    # GET    /api/families/{id}/members/               - List members
    # GET    /api/families/{id}/invitations/           - List invitations
    # POST   /api/families/{id}/invitations/           - Invite by username
    # POST   /api/families/{id}/generate_invitation/   - Code-only invitation
    # POST   /api/families/{id}/leave/                 - Leave family
    # DELETE /api/families/{id}/remove_member/         - Remove member (admin)

    # Additional endpoints
    path('my/', views.my_family, name='my-family'),
    path('join/', views.join_family, name='join'),
    path('invitations/', views.my_invitations, name='my-invitations'),
    path('invitations/<uuid:invitation_id>/accept/', views.accept_invitation, name='invitation-accept'),
    path('invitations/<uuid:invitation_id>/decline/', views.decline_invitation, name='invitation-decline'),

    # Include router URLs
    path('', include(router.urls)),
]
