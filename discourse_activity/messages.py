from discourse_activity.utils import gettext as _

# Generic messages
MODULE_NAME = _(u"Discourse")

# Phases
PHASE_ONE = _(u"Solo phase")
PHASE_TWO = _(u"1st group phase")
PHASE_THREE = _(u"2nd group phase")
PHASE_FOUR = _(u"Collaborative phase")
PHASE_SWITCHED = _(u"Active phase is now: {phase_name}")
PHASE_DEADLINE = _(u"Scheduled start: {deadline}")
PHASE_HINT = _(u"Hint: {hint}")
SWITCH_TO_PHASE = _(u"Switch to {phase_name}")
NO_AUTOSWITCH = _(u"The automatic phase switch is deactivated. The phases must therefore be changed manually.")
SHOULD_SWITCH_PHASE_TO = _(
    u"The automatic phase switch is deactivated. The next phase should be activated by now."
)
DEADLINES_NOT_IN_ORDER = _(
    u"Phase deadlines must be increasing: the 1st group phase must end before the 2nd group phase, "
    u"and the 2nd group phase before the collaborative phase."
)

# Groups and submissions
NO_GROUPS = _(u"No groups available")
GROUP_INVALID = _(u"Group not found")
NO_GROUP_MEMBER = _(u"Not possible because not a group member")
FILL_OUT_FIELD = _(u"Please fill out this field")
SUBMISSION_FAILED_DOUBLED = _(
    u"Submission failed. Another group member has already made a submission recently."
)
SUBMISSION_SAVED = _(u"Submission handed in")
NO_SUBMISSION = _(u"No submission yet")
GROUP_PARTICIPANTS = _(u"Participants: {participants}")
HAND_IN = _(u"Hand in")

# Access
CANT_SWITCH_PHASE = _(u"You are not allowed to switch the phase of this discourse")
CANT_EDIT_SUBMISSION = _(u"You are not allowed to submit or edit group texts")

# Privacy
PRIVACY_PARTICIPANTS = _(u"Contains the groups of all discourse participants.")
PRIVACY_PARTICIPANTS_USERID = _(u"User ID of the participant")
PRIVACY_PARTICIPANTS_DISCOURSE = _(u"ID of the discourse of the participant")
PRIVACY_PARTICIPANTS_GROUPIDS = _(u"IDs of the discourse groups of the participant")
PRIVACY_SUBMISSIONS = _(u"Contains data of all discourse submissions.")
PRIVACY_SUBMISSIONS_DISCOURSE = _(u"ID of the discourse in which the submission was made")
PRIVACY_SUBMISSIONS_GROUPID = _(u"ID of the group from which the submission was made")
PRIVACY_SUBMISSIONS_SUBMISSION = _(u"Submission content")
PRIVACY_SUBMISSIONS_CURRENTVERSION = _(u"Current version of the submission")
PRIVACY_SUBMISSIONS_FORMAT = _(u"Submission format")
PRIVACY_SUBMISSIONS_TIMECREATED = _(u"Date on which the submission was made")
PRIVACY_SUBMISSIONS_TIMEMODIFIED = _(u"Time of the last revision of the submission")
PRIVACY_CORE_MESSAGE = _(
    u"The discourse plugin sends messages to users and saves their content in the database."
)
