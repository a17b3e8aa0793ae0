"""
Interfaces a plugin implements to take part in privacy requests. Each one covers a single concern, so a
plugin declares exactly what it supports by the interfaces it inherits from.
"""
from discourse_activity.utils import MUST_BE_OVERRIDDEN


class MetadataProvider(object):
    """ Plugin stores personal data and can describe it """

    def get_metadata(self, collection):
        """
        :param discourse_activity.privacy.metadata.MetadataCollection collection: collection to add items to
        :rtype: discourse_activity.privacy.metadata.MetadataCollection
        """
        raise NotImplementedError(MUST_BE_OVERRIDDEN)


class PluginProvider(object):
    """ Plugin can find, export and delete personal data of a single user """

    def get_contexts_for_userid(self, user_id):
        """
        :rtype: discourse_activity.privacy.request.ContextList
        """
        raise NotImplementedError(MUST_BE_OVERRIDDEN)

    def export_user_data(self, contextlist):
        """
        :param discourse_activity.privacy.request.ApprovedContextList contextlist:
        """
        raise NotImplementedError(MUST_BE_OVERRIDDEN)

    def delete_data_for_all_users_in_context(self, context):
        """
        :param discourse_activity.privacy.request.Context context:
        """
        raise NotImplementedError(MUST_BE_OVERRIDDEN)

    def delete_data_for_user(self, contextlist):
        """
        :param discourse_activity.privacy.request.ApprovedContextList contextlist:
        """
        raise NotImplementedError(MUST_BE_OVERRIDDEN)


class UserlistProvider(object):
    """ Plugin can tell which users have data in a context, and delete data of several of them """

    def get_users_in_context(self, userlist):
        """
        :param discourse_activity.privacy.request.UserList userlist:
        """
        raise NotImplementedError(MUST_BE_OVERRIDDEN)

    def delete_data_for_users(self, userlist):
        """
        :param discourse_activity.privacy.request.ApprovedUserList userlist:
        """
        raise NotImplementedError(MUST_BE_OVERRIDDEN)


class ExportWriter(object):
    """ Host-side sink for exported data """

    def with_context(self, context):
        """
        :return: object exposing ``export_data(subcontext, data)``
        """
        raise NotImplementedError(MUST_BE_OVERRIDDEN)


class ContextHelper(object):
    """ Host-side export of generic activity data (name, intro, intro files) """

    def get_context_data(self, context, user):
        """
        :rtype: dict
        """
        raise NotImplementedError(MUST_BE_OVERRIDDEN)

    def export_context_files(self, context, user):
        raise NotImplementedError(MUST_BE_OVERRIDDEN)
