from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated

from .permissions import HasFamily


class FamilyScopedMixin:
    """
    Restrict a view to objects of the caller's family.

    Objects of other families are simply absent from the queryset, so
    they answer 404 rather than 403.
    """

    permission_classes = [IsAuthenticated, HasFamily]
    family = None

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.family is None:
            # Schema generation runs without a request
            return queryset.none()
        return queryset.filter(family=self.family)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['family'] = self.family
        return context


class FamilyScopedRelatedField(serializers.PrimaryKeyRelatedField):
    """
    Primary key field that only resolves objects of the caller's family.

    Reads the family from the serializer context that
    ``FamilyScopedMixin`` provides; without one nothing resolves.
    """

    def get_queryset(self):
        queryset = super().get_queryset()
        family = self.context.get('family')
        if family is None:
            return queryset.none()
        return queryset.filter(family=family)
