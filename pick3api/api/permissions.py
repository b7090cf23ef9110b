import enum

from rest_framework import permissions

from .models import Role


class Capability(enum.Enum):
    PARTICIPATE = 'participate'
    OPERATE = 'operate'


def has_capability(member, capability):
    """
    Single authorization gate for the giveaway endpoints.

    Anonymous callers (``None``) have no capability at all.
    """
    if member is None or not getattr(member, 'is_authenticated', False):
        return False
    role = getattr(member, 'role', None)
    if role is None:
        return False
    if capability is Capability.PARTICIPATE:
        return role != Role.BANNED
    if capability is Capability.OPERATE:
        return role >= Role.ADMIN
    raise ValueError(f'Unknown capability {capability!r}')


class CapabilityPermission(permissions.BasePermission):
    capability = None

    def has_permission(self, request, view):
        return has_capability(request.user, self.capability)


class CanParticipate(CapabilityPermission):
    capability = Capability.PARTICIPATE
    message = 'Your account has been restricted from participating in giveaways.'


class IsOperator(CapabilityPermission):
    capability = Capability.OPERATE
    message = 'Operator access required.'
