from rest_framework import permissions

from apps.families.services import get_family_for_user


class HasFamily(permissions.BasePermission):
    """
    Permission: User must belong to a family.

    Stores the caller's family on the view as ``view.family`` so the view
    can scope its querysets.
    """
    message = 'You must belong to a family to access this resource.'

    def has_permission(self, request, view):
        family = get_family_for_user(request.user)
        view.family = family
        return family is not None
