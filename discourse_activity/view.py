""" View-model consumed by the discourse student view template """
from discourse_activity import messages
from discourse_activity.phases import Phases
from discourse_activity.utils import format_date


class DiscourseViewModel(object):
    """
    Holds everything the student view needs to render the phase overview.

    :type groups: list[discourse_activity.discourse_api.dtos.GroupDetails]
    :type submissions: dict[int, discourse_activity.discourse_api.dtos.SubmissionDetails]
    """
    # pylint: disable=too-many-instance-attributes,too-many-arguments
    def __init__(
            self, block_id, user_id, groups, submissions, autoswitch, phase_state, hints, deadlines,
            can_edit_phase, can_switch_phase, can_view_all_groups, can_view_group_participants, can_edit_submission,
            should_switch_phase
    ):
        self.block_id = block_id
        self.user_id = user_id
        self.groups = groups
        self.submissions = submissions
        self.autoswitch = autoswitch
        self.phase_state = phase_state
        self.hints = hints
        self.deadlines = deadlines
        self.can_edit_phase = can_edit_phase
        self.can_switch_phase = can_switch_phase
        self.can_view_all_groups = can_view_all_groups
        self.can_view_group_participants = can_view_group_participants
        self.can_edit_submission = can_edit_submission
        self.should_switch_phase = should_switch_phase

    @property
    def visible_groups(self):
        if self.can_view_all_groups:
            return list(self.groups)
        return [group for group in self.groups if self.user_id in group.user_ids]

    @property
    def notice(self):
        if self.autoswitch:
            return None
        if self.should_switch_phase:
            return messages.SHOULD_SWITCH_PHASE_TO
        return messages.NO_AUTOSWITCH

    def _export_group(self, group):
        submission = self.submissions.get(group.id)
        participants = []
        if self.can_view_group_participants:
            participants = [user.full_name for user in group.users]
        return {
            'id': group.id,
            'name': group.name,
            'participants': participants,
            'participants_label': messages.GROUP_PARTICIPANTS.format(participants=u", ".join(participants)),
            'submitted': submission is not None,
            'submission_state': messages.SUBMISSION_SAVED if submission is not None else messages.NO_SUBMISSION,
            'currentversion': submission.currentversion if submission is not None else 0,
            'text': submission.submission if submission is not None else u"",
            'editable': self.can_edit_submission and self.user_id in group.user_ids,
        }

    def _export_phase(self, phase, groups):
        name = Phases.get_human_name(phase)
        hint = self.hints.get(phase)
        deadline = format_date(self.deadlines.get(phase))
        return {
            'number': phase,
            'name': name,
            'active': phase == self.phase_state.activephase,
            'hint': hint,
            'hint_label': messages.PHASE_HINT.format(hint=hint) if hint else None,
            'deadline': deadline,
            'deadline_label': messages.PHASE_DEADLINE.format(deadline=deadline) if deadline else None,
            'switch_label': messages.SWITCH_TO_PHASE.format(phase_name=name),
            'groups': [self._export_group(group) for group in groups if group.phase == phase],
        }

    def export_for_template(self):
        groups = self.visible_groups
        result = {
            'block_id': self.block_id,
            'autoswitch': self.autoswitch,
            'activephase': self.phase_state.activephase,
            'activephasename': self.phase_state.name,
            'phases': [self._export_phase(phase, groups) for phase in Phases.ALL],
            'caneditphase': self.can_edit_phase,
            'canswitchphase': self.can_switch_phase,
            'canviewallgroups': self.can_view_all_groups,
            'canviewgroupparticipants': self.can_view_group_participants,
            'caneditsubmission': self.can_edit_submission,
            'shouldswitchphase': self.should_switch_phase or False,
            'notice': self.notice,
            'nogroups': not groups,
            'nogroups_message': messages.NO_GROUPS,
            'submit_label': messages.HAND_IN,
        }
        result.update(self.phase_state.as_dict())
        return result
