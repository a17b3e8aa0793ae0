"""
Access policy: maps course roles granted to a user onto discourse capabilities.
"""
import logging

log = logging.getLogger(__name__)


class Capabilities(object):
    ADD_INSTANCE = 'discourse:addinstance'
    VIEW_DISCOURSE_TEACHER = 'discourse:viewdiscourseteacher'
    VIEW_DISCOURSE_STUDENT = 'discourse:viewdiscoursestudent'
    EDIT_SUBMISSION = 'discourse:editsubmission'
    EDIT_PHASE = 'discourse:editphase'
    SWITCH_PHASE = 'discourse:switchphase'
    VIEW_ALL_GROUPS = 'discourse:viewallgroups'
    VIEW_GROUP_PARTICIPANTS = 'discourse:viewgroupparticipants'


class GroupModes(object):
    NO_GROUPS = 0
    SEPARATE_GROUPS = 1
    VISIBLE_GROUPS = 2


_TEACHING_ROLES = ('instructor', 'staff')

DEFAULT_CAPABILITY_ROLES = {
    Capabilities.ADD_INSTANCE: _TEACHING_ROLES,
    Capabilities.VIEW_DISCOURSE_TEACHER: _TEACHING_ROLES + ('assistant',),
    Capabilities.VIEW_DISCOURSE_STUDENT: ('student',),
    Capabilities.EDIT_SUBMISSION: ('student',),
    Capabilities.EDIT_PHASE: _TEACHING_ROLES,
    Capabilities.SWITCH_PHASE: _TEACHING_ROLES,
    Capabilities.VIEW_ALL_GROUPS: _TEACHING_ROLES + ('assistant',),
    Capabilities.VIEW_GROUP_PARTICIPANTS: _TEACHING_ROLES + ('assistant', 'student'),
}


class AccessPolicy(object):
    """
    Answers capability checks for a single user in a single course.
    """
    def __init__(self, granted_roles, capability_roles=None):
        """
        :param collections.Iterable[str] granted_roles: course roles granted to the user
        :param dict[str, collections.Iterable[str]] capability_roles: overrides for capability -> roles mapping
        """
        self.granted_roles = set(granted_roles or ())
        self.capability_roles = dict(DEFAULT_CAPABILITY_ROLES)
        if capability_roles:
            self.capability_roles.update(capability_roles)

    def has_capability(self, capability):
        allowed_roles = set(self.capability_roles.get(capability, ()))
        result = bool(allowed_roles & self.granted_roles)
        log.debug("Capability %s for roles %s: %s", capability, self.granted_roles, result)
        return result


def can_view_all_groups(policy, group_mode):
    return policy.has_capability(Capabilities.VIEW_ALL_GROUPS) or group_mode == GroupModes.VISIBLE_GROUPS
