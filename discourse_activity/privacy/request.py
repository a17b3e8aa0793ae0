"""
Values passed between the privacy request workflow and plugin providers: contexts, context lists and user lists.
"""
from datetime import datetime

import pytz

DATETIME_EXPORT_FORMAT = "%A, %d %B %Y, %H:%M"


class ContextLevels(object):
    SYSTEM = 10
    USER = 30
    COURSE = 50
    MODULE = 70


class Context(object):
    contextlevel = None

    def __init__(self, id, instanceid):  # pylint: disable=redefined-builtin
        self.id = id
        self.instanceid = instanceid

    def __eq__(self, other):
        return type(self) is type(other) and (self.id, self.instanceid) == (other.id, other.instanceid)

    def __hash__(self):
        return hash((type(self).__name__, self.id, self.instanceid))

    def __repr__(self):
        return "{}(id={}, instanceid={})".format(type(self).__name__, self.id, self.instanceid)


class CourseContext(Context):
    contextlevel = ContextLevels.COURSE


class ModuleContext(Context):
    """
    Context of a single activity; ``instanceid`` is the course module id
    """
    contextlevel = ContextLevels.MODULE


class ContextList(object):
    """
    Context ids found for a user; filled by plugin providers
    """
    def __init__(self, component=None):
        self.component = component
        self._contextids = []

    def add_context_ids(self, context_ids):
        for context_id in context_ids:
            if context_id not in self._contextids:
                self._contextids.append(context_id)
        return self

    def get_contextids(self):
        return list(self._contextids)

    def __len__(self):
        return len(self._contextids)

    def __iter__(self):
        return iter(self._contextids)


class ApprovedContextList(object):
    """
    Contexts of a single user a privacy request was approved for
    """
    def __init__(self, user, component, contexts):
        self._user = user
        self.component = component
        self._contexts = list(contexts)

    def get_user(self):
        return self._user

    def get_contexts(self):
        return list(self._contexts)

    def get_contextids(self):
        return [context.id for context in self._contexts]

    def __len__(self):
        return len(self._contexts)

    def __iter__(self):
        return iter(self._contexts)


class UserList(object):
    """
    Users having data in a single context; filled by plugin providers
    """
    def __init__(self, context, component=None):
        self._context = context
        self.component = component
        self._userids = []

    def get_context(self):
        return self._context

    def add_users(self, user_ids):
        for user_id in user_ids:
            if user_id not in self._userids:
                self._userids.append(user_id)
        return self

    def get_userids(self):
        return list(self._userids)

    def __len__(self):
        return len(self._userids)


class ApprovedUserList(object):
    """
    Users of a single context a privacy request was approved for
    """
    def __init__(self, context, component, userids):
        self._context = context
        self.component = component
        self._userids = list(userids)

    def get_context(self):
        return self._context

    def get_userids(self):
        return list(self._userids)

    def __len__(self):
        return len(self._userids)


def transform_datetime(timestamp):
    """
    Converts unix timestamp into human readable UTC date for exports
    """
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp, tz=pytz.UTC).strftime(DATETIME_EXPORT_FORMAT)
