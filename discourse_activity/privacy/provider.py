"""
Privacy provider of the discourse activity: declares the personal data it stores and exports or deletes it
on request.
"""
import logging

from discourse_activity import messages
from discourse_activity.privacy.interfaces import MetadataProvider, PluginProvider, UserlistProvider
from discourse_activity.privacy.request import ContextList, ModuleContext, transform_datetime
from discourse_activity.utils import Constants

log = logging.getLogger(__name__)

PARTICIPANTS_TABLE = 'discourse_participants'
SUBMISSIONS_TABLE = 'discourse_submissions'
MESSAGE_SUBSYSTEM = 'core_message'
COMPONENT = 'mod_discourse'


class DiscoursePrivacyProvider(MetadataProvider, PluginProvider, UserlistProvider):
    """
    Implementation of the privacy provider interfaces for the discourse activity.

    Participants and submissions live on the API server; generic activity data and the export sink are
    provided by the host.
    """
    def __init__(self, discourse_api, writer, helper, transform=transform_datetime):
        """
        :param discourse_activity.discourse_api.TypedDiscourseAPI discourse_api: data access
        :param discourse_activity.privacy.interfaces.ExportWriter writer: export sink
        :param discourse_activity.privacy.interfaces.ContextHelper helper: generic activity data export
        :param callable transform: timestamp to exported date conversion
        """
        self.discourse_api = discourse_api
        self.writer = writer
        self.helper = helper
        self.transform = transform

    def get_metadata(self, collection):
        collection.add_database_table(PARTICIPANTS_TABLE, {
            'userid': messages.PRIVACY_PARTICIPANTS_USERID,
            'discourse': messages.PRIVACY_PARTICIPANTS_DISCOURSE,
            'groupids': messages.PRIVACY_PARTICIPANTS_GROUPIDS,
        }, messages.PRIVACY_PARTICIPANTS)

        collection.add_database_table(SUBMISSIONS_TABLE, {
            'discourse': messages.PRIVACY_SUBMISSIONS_DISCOURSE,
            'groupid': messages.PRIVACY_SUBMISSIONS_GROUPID,
            'submission': messages.PRIVACY_SUBMISSIONS_SUBMISSION,
            'currentversion': messages.PRIVACY_SUBMISSIONS_CURRENTVERSION,
            'format': messages.PRIVACY_SUBMISSIONS_FORMAT,
            'timecreated': messages.PRIVACY_SUBMISSIONS_TIMECREATED,
            'timemodified': messages.PRIVACY_SUBMISSIONS_TIMEMODIFIED,
        }, messages.PRIVACY_SUBMISSIONS)

        collection.add_subsystem_link(MESSAGE_SUBSYSTEM, {}, messages.PRIVACY_CORE_MESSAGE)

        # There are no user preferences in the discourse.
        return collection

    def get_contexts_for_userid(self, user_id):
        """
        Contexts of all discourses the user participates in.

        :param int user_id:
        :rtype: ContextList
        """
        contextlist = ContextList(COMPONENT)
        contextlist.add_context_ids(
            participation.contextid for participation in self.discourse_api.get_user_participations(user_id)
        )
        return contextlist

    def get_users_in_context(self, userlist):
        context = userlist.get_context()
        log.debug("Looking up discourse users in context %s", context)

        if not isinstance(context, ModuleContext):
            return

        userlist.add_users(self.discourse_api.get_users_in_course_module(context.instanceid))

    def export_user_data(self, contextlist):
        if not len(contextlist):  # pylint: disable=len-as-condition
            return

        user = contextlist.get_user()
        contexts_by_id = {context.id: context for context in contextlist.get_contexts()}

        participations = self.discourse_api.get_user_participations(user.id, contextlist.get_contextids())
        for participation in participations:
            context = contexts_by_id.get(participation.contextid)
            if context is None:
                context = ModuleContext(participation.contextid, participation.cmid)

            if participation.timemodified == 0:
                timemodified = None
            else:
                timemodified = self.transform(participation.timemodified)

            discourse_data = {
                'id': participation.discourse,
                'timecreated': self.transform(participation.timecreated),
                'timemodified': timemodified,
                'user data': {
                    'userid': participation.userid,
                },
            }

            self.export_discourse_data_for_user(discourse_data, context, [], user)

    def export_discourse_data_for_user(self, discourse_data, context, subcontext, user):
        """
        Exports the personal data of a single discourse along with the generic data of the activity.

        :param dict discourse_data: personal data to export
        :param ModuleContext context: context of the discourse activity
        :param list subcontext: location within the context this data belongs to
        :param user: user the data is exported for
        """
        context_data = dict(self.helper.get_context_data(context, user) or {})
        context_data.update(discourse_data)
        self.writer.with_context(context).export_data(subcontext, context_data)
        self.helper.export_context_files(context, user)

    def _get_discourse_module(self, context):
        course_module = self.discourse_api.get_course_module(context.instanceid)
        if course_module is None:
            return None
        if course_module.modulename not in (None, Constants.MODULE_NAME):
            return None
        return course_module

    def delete_data_for_all_users_in_context(self, context):
        if not isinstance(context, ModuleContext):
            return

        course_module = self._get_discourse_module(context)
        if course_module is None:
            return

        discourse_id = course_module.instance
        # Two separate requests: participants may be gone while submissions remain if the second one fails
        if self.discourse_api.participants_exist(discourse_id):
            log.info("Deleting all participants of discourse %s", discourse_id)
            self.discourse_api.delete_participants(discourse_id)

        if self.discourse_api.submissions_exist(discourse_id):
            log.info("Deleting all submissions of discourse %s", discourse_id)
            self.discourse_api.delete_submissions(discourse_id)

    def delete_data_for_user(self, contextlist):
        user_id = contextlist.get_user().id

        for context in contextlist.get_contexts():
            course_module = self._get_discourse_module(context)
            if course_module is None:
                continue

            if self.discourse_api.participants_exist(course_module.instance, [user_id]):
                log.info("Deleting participant %s of discourse %s", user_id, course_module.instance)
                self.discourse_api.delete_participants(course_module.instance, [user_id])

    def delete_data_for_users(self, userlist):
        context = userlist.get_context()
        user_ids = userlist.get_userids()
        if not user_ids:
            return

        course_module = self._get_discourse_module(context)
        if course_module is None:
            return

        if self.discourse_api.participants_exist(course_module.instance, user_ids):
            log.info("Deleting participants %s of discourse %s", user_ids, course_module.instance)
            self.discourse_api.delete_participants(course_module.instance, user_ids)
