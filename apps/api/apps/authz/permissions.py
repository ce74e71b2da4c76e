"""
Role-based permissions shared by the clinical and reports endpoints.
"""
from rest_framework import permissions
from apps.authz.models import RoleChoices


class IsClinicalStaff(permissions.BasePermission):
    """
    Clinical data access: Admin and Practitioner roles only.

    Reception users can book visits but must not browse clinical records,
    photos or generated reports.
    """

    allowed_roles = {RoleChoices.ADMIN, RoleChoices.PRACTITIONER}

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        if request.user.is_superuser:
            return True

        user_roles = set(
            request.user.user_roles.values_list('role__name', flat=True)
        )
        return bool(user_roles & self.allowed_roles)
