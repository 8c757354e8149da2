from rest_framework import permissions


def is_admin_user(user) -> bool:
    return bool(user and user.is_authenticated and getattr(user, 'is_admin_role', False))


def is_super_admin_user(user) -> bool:
    return bool(user and user.is_authenticated and getattr(user, 'is_super_admin', False))


class IsAdminRole(permissions.BasePermission):
    """
    Allows access to console operators (admin and super admin).
    """
    message = 'Admin access required'

    def has_permission(self, request, view):
        return is_admin_user(request.user)


class IsSuperAdmin(permissions.BasePermission):
    """
    Allows access to super admins only (approve/decline rights).
    """
    message = 'Super Admin access required'

    def has_permission(self, request, view):
        return is_super_admin_user(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    message = 'Admin access required'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin_user(request.user)


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Object-level permission: the owning customer or a console operator.
    Views name the owner field through ``owner_field``.
    """
    message = 'Unauthorized'

    def has_object_permission(self, request, view, obj):
        if is_admin_user(request.user):
            return True
        owner_field = getattr(view, 'owner_field', 'user')
        return getattr(obj, f'{owner_field}_id', None) == request.user.id


class IsOwnerOrAdminOrReadOnly(IsOwnerOrAdmin):
    """Anyone who can see the object may read it; only the owner or an operator may change it."""

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_object_permission(request, view, obj)
