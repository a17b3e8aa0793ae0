# -*- coding: utf-8 -*-
import logging

from lazy.lazy import lazy
from xblock.core import XBlock
from xblock.fields import Boolean, DateTime, Integer, Scope, String
from xblock.validation import ValidationMessage
from web_fragments.fragment import Fragment

from discourse_activity import messages
from discourse_activity.access import Capabilities, GroupModes, can_view_all_groups
from discourse_activity.api_error import ApiError
from discourse_activity.mixins import AuthXBlockMixin, CommonMixinCollection
from discourse_activity.phases import (
    Phases, PhaseState, normalize_phase, resolve_phase_switch, deadlines_in_order
)
from discourse_activity.utils import (
    gettext as _, Constants, add_resource, discourse_protected_view, discourse_protected_handler,
    key_error_protected_handler, conversion_protected_handler, get_block_content_id, utcnow, to_timestamp
)
from discourse_activity.view import DiscourseViewModel

log = logging.getLogger(__name__)


class DiscourseEvents(object):
    PREFIX = 'xblock.discourse.'
    COURSE_MODULE_VIEWED = PREFIX + 'course_module_viewed'
    PHASE_SWITCHED = PREFIX + 'phase_switched'
    SUBMISSION_UPDATED = PREFIX + 'submission_updated'


def _deadline_field(display_name):
    return DateTime(
        display_name=display_name,
        help=_(u"Scheduled start of the phase; leave empty to switch this phase manually only"),
        scope=Scope.settings,
        default=None
    )


def _hint_field(display_name):
    return String(
        display_name=display_name,
        help=_(u"Hint shown to students while the phase is active"),
        scope=Scope.settings,
        multiline_editor=True,
        default=u""
    )


@XBlock.wants("settings")
class DiscourseXBlock(CommonMixinCollection, XBlock):
    """
    XBlock guiding groups of students through four sequential discussion phases
    """
    display_name = String(
        display_name=_(u"Display Name"),
        help=_(u"This is a name of the discourse"),
        scope=Scope.settings,
        default=messages.MODULE_NAME
    )

    intro = String(
        display_name=_(u"Description"),
        help=_(u"Introduction shown above the phase overview"),
        scope=Scope.settings,
        multiline_editor='html',
        default=u""
    )

    autoswitch = Boolean(
        display_name=_(u'Activate mode "Automatic phase switch"'),
        help=_(u"The phases are changed automatically at the times specified below"),
        scope=Scope.settings,
        default=False
    )

    group_mode = Integer(
        display_name=_(u"Group mode"),
        help=_(u"With visible groups every student sees all groups of the discourse"),
        scope=Scope.settings,
        values=(
            {'display_name': _(u"No groups"), 'value': GroupModes.NO_GROUPS},
            {'display_name': _(u"Separate groups"), 'value': GroupModes.SEPARATE_GROUPS},
            {'display_name': _(u"Visible groups"), 'value': GroupModes.VISIBLE_GROUPS},
        ),
        default=GroupModes.SEPARATE_GROUPS
    )

    deadlinephaseone = _deadline_field(_(u"Completion of the solo phase"))
    deadlinephasetwo = _deadline_field(_(u"Completion of the 1st group phase"))
    deadlinephasethree = _deadline_field(_(u"Completion of the 2nd group phase"))
    deadlinephasefour = _deadline_field(_(u"Completion of the collaborative phase"))

    hintphaseone = _hint_field(_(u"Note on the solo phase"))
    hintphasetwo = _hint_field(_(u"Note on the 1st group phase"))
    hintphasethree = _hint_field(_(u"Note on the 2nd group phase"))
    hintphasefour = _hint_field(_(u"Note on the collaborative phase"))

    # Shared by every user of the block, so a switch made in the LMS is seen by all of them
    activephase = Integer(
        display_name=_(u"Active phase"),
        scope=Scope.user_state_summary,
        default=Phases.SOLO
    )

    timemodified = DateTime(
        display_name=_(u"Last phase switch"),
        scope=Scope.user_state_summary,
        default=None
    )

    # submissions are entered in a textarea and rendered escaped
    SUBMISSION_FORMAT = 'plain'

    editable_fields = (
        'display_name', 'intro', 'autoswitch', 'group_mode',
        'deadlinephaseone', 'deadlinephasetwo', 'deadlinephasethree', 'deadlinephasefour',
        'hintphaseone', 'hintphasetwo', 'hintphasethree', 'hintphasefour',
    )
    has_score = False

    template_location = "discourse"

    @property
    def discourse_id(self):
        return get_block_content_id(self)

    @property
    def deadlines(self):
        """
        :rtype: dict[int, datetime.datetime]
        """
        return {phase: getattr(self, Phases.deadline_field(phase)) for phase in Phases.ALL}

    @property
    def hints(self):
        """
        :rtype: dict[int, str]
        """
        return {phase: getattr(self, Phases.hint_field(phase)) for phase in Phases.ALL}

    @property
    def phase_state(self):
        return PhaseState(self.activephase)

    @lazy
    def groups(self):
        """
        :rtype: list[discourse_activity.discourse_api.dtos.GroupDetails]
        """
        try:
            return self.discourse_api.get_discourse_groups(self.discourse_id)
        except ApiError as exception:
            log.exception(exception)
            return []

    def get_group_submissions(self):
        """
        Latest submission of each group

        :rtype: dict[int, discourse_activity.discourse_api.dtos.SubmissionDetails]
        """
        submissions_by_group = {}
        for submission in self.discourse_api.get_submissions(self.discourse_id):
            known = submissions_by_group.get(submission.groupid)
            if known is None or submission.currentversion > known.currentversion:
                submissions_by_group[submission.groupid] = submission
        return submissions_by_group

    def get_group_submission(self, group_id):
        submissions = list(self.discourse_api.get_submissions(self.discourse_id, group_id=group_id))
        if not submissions:
            return None
        return max(submissions, key=lambda submission: submission.currentversion)

    def publish_event(self, event_type, payload):
        event_data = {
            'objectid': self.discourse_id,
            'course_id': self.course_id,
            'user_id': self.user_id,
        }
        event_data.update(payload)
        self.runtime.publish(self, event_type, event_data)

    def switch_to_phase(self, requested_phase, automatic=False):
        """
        Persists the new active phase; anything but a known phase switches back to the solo phase.
        Callers are responsible for capability checks.

        :rtype: int
        """
        previous_phase = self.activephase
        new_phase = normalize_phase(requested_phase)
        self.activephase = new_phase
        self.timemodified = utcnow()
        self.save()

        log.info(
            "Discourse %s switched from phase %s to phase %s (requested %s, automatic: %s)",
            self.discourse_id, previous_phase, new_phase, requested_phase, automatic
        )
        self.publish_event(DiscourseEvents.PHASE_SWITCHED, {
            'previous_phase': previous_phase,
            'phase': new_phase,
            'automatic': automatic,
        })
        return new_phase

    def get_due_phase(self, now):
        return resolve_phase_switch(now, normalize_phase(self.activephase), self.deadlines)

    def apply_automatic_switch(self, now):
        """
        Switches through every phase that became due; only runs when automatic switching is enabled.

        :return: phase that is due but was not switched to, for the "should switch" notice
        :rtype: int or None
        """
        due_phase = self.get_due_phase(now)
        if not self.autoswitch:
            return due_phase

        while due_phase is not None:
            self.switch_to_phase(due_phase, automatic=True)
            due_phase = self.get_due_phase(now)
        return None

    def get_view_model(self, should_switch_phase):
        """
        :rtype: DiscourseViewModel
        """
        try:
            submissions = self.get_group_submissions()
        except ApiError as exception:
            log.exception(exception)
            submissions = {}

        return DiscourseViewModel(
            block_id=self.discourse_id,
            user_id=self.user_id,
            groups=self.groups,
            submissions=submissions,
            autoswitch=self.autoswitch,
            phase_state=self.phase_state,
            hints=self.hints,
            deadlines=self.deadlines,
            can_edit_phase=self.has_capability(Capabilities.EDIT_PHASE),
            can_switch_phase=self.has_capability(Capabilities.SWITCH_PHASE),
            can_view_all_groups=can_view_all_groups(self.access_policy, self.group_mode),
            can_view_group_participants=self.has_capability(Capabilities.VIEW_GROUP_PARTICIPANTS),
            can_edit_submission=self.has_capability(Capabilities.EDIT_SUBMISSION),
            should_switch_phase=should_switch_phase,
        )

    @discourse_protected_view
    def student_view(self, context):  # pylint: disable=unused-argument
        self.publish_event(DiscourseEvents.COURSE_MODULE_VIEWED, {})

        should_switch_phase = self.apply_automatic_switch(utcnow())
        view_model = self.get_view_model(should_switch_phase)

        render_context = {
            'discourse': self,
            'display_name': self.display_name,
            'intro': self.intro,
            'view': view_model.export_for_template(),
        }

        fragment = Fragment()
        fragment.add_content(self.render_template('student_view', render_context))
        add_resource(self, 'css', 'public/css/discourse.css', fragment)
        add_resource(self, 'javascript', 'public/js/discourse.js', fragment)
        fragment.initialize_js("DiscourseBlock")
        return fragment

    @XBlock.json_handler
    @discourse_protected_handler
    @key_error_protected_handler
    @AuthXBlockMixin.requires_capability(Capabilities.SWITCH_PHASE, messages.CANT_SWITCH_PHASE)
    def switch_phase(self, data, _suffix=''):
        new_phase = self.switch_to_phase(data[Constants.NEW_PHASE_PARAMETER_NAME])
        return {
            'result': 'success',
            'activephase': new_phase,
            'message': messages.PHASE_SWITCHED.format(phase_name=Phases.get_human_name(new_phase)),
        }

    @XBlock.json_handler
    @discourse_protected_handler
    @key_error_protected_handler
    @conversion_protected_handler
    @AuthXBlockMixin.requires_capability(Capabilities.EDIT_SUBMISSION, messages.CANT_EDIT_SUBMISSION)
    def submit_submission(self, data, _suffix=''):
        group_id = int(data[Constants.GROUP_ID_PARAMETER_NAME])
        content = data[Constants.SUBMISSION_PARAMETER_NAME]
        edited_version = int(data.get(Constants.CURRENT_VERSION_PARAMETER_NAME) or 0)

        try:
            return self.save_group_submission(group_id, content, edited_version)
        except ApiError as exception:
            log.exception(exception)
            return {'result': 'error', 'message': exception.message}

    def save_group_submission(self, group_id, content, edited_version):
        """
        Hands in or updates the text of a group. ``edited_version`` is the version the author started from;
        if another group member saved in the meantime the submission is rejected.
        """
        group = next((group for group in self.groups if group.id == group_id), None)
        if group is None:
            return {'result': 'error', 'message': messages.GROUP_INVALID}

        if self.user_id not in group.user_ids:
            return {'result': 'error', 'message': messages.NO_GROUP_MEMBER}

        if not isinstance(content, str) or not content.strip():
            return {'result': 'error', 'message': messages.FILL_OUT_FIELD}

        existing = self.get_group_submission(group_id)
        now = to_timestamp(utcnow())
        submission_data = {
            'discourse': self.discourse_id,
            'groupid': group_id,
            'submission': content,
            'format': self.SUBMISSION_FORMAT,
            'timemodified': now,
        }

        if existing is None:
            submission_data['currentversion'] = 1
            submission_data['timecreated'] = now
            submission = self.discourse_api.create_submission(submission_data)
        else:
            if existing.currentversion != edited_version:
                log.info(
                    "Rejected doubled submission for group %s: stored version %s, edited version %s",
                    group_id, existing.currentversion, edited_version
                )
                return {'result': 'error', 'message': messages.SUBMISSION_FAILED_DOUBLED}
            submission_data['currentversion'] = existing.currentversion + 1
            submission = self.discourse_api.update_submission(existing.id, submission_data)

        self.publish_event(DiscourseEvents.SUBMISSION_UPDATED, {
            'group_id': group_id,
            'currentversion': submission_data['currentversion'],
        })
        return {
            'result': 'success',
            'message': messages.SUBMISSION_SAVED,
            'submission_id': submission.id,
            'currentversion': submission_data['currentversion'],
        }

    def validate_field_data(self, validation, data):
        super(DiscourseXBlock, self).validate_field_data(validation, data)
        deadlines = {phase: getattr(data, Phases.deadline_field(phase), None) for phase in Phases.ALL}
        if not deadlines_in_order(deadlines):
            validation.add(ValidationMessage(ValidationMessage.ERROR, messages.DEADLINES_NOT_IN_ORDER))
