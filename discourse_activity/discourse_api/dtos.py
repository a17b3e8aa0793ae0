""" Contains DTOs used in Discourse API. DTOs mostly follow structure of API responses """


class ReducedUserDetails(object):
    """ User data embedded in a group detail response """
    def __init__(self, **kwargs):
        self.id = kwargs.get('id')
        self.url = kwargs.get('url')
        self.username = kwargs.get('username')
        self.email = kwargs.get('email')
        self.first_name = kwargs.get('first_name')
        self.last_name = kwargs.get('last_name')
        self._full_name = kwargs.get('full_name', None)

    @property
    def full_name(self):
        if self._full_name:
            return self._full_name
        parts = [str(part) for part in (self.first_name, self.last_name) if part is not None]
        return u" ".join(parts) or self.username


class CourseModuleDetails(object):
    """
    Course module record: ``instance`` is the id of the discourse the module wraps
    """
    def __init__(self, **kwargs):
        self.id = kwargs.get('id')
        self.instance = kwargs.get('instance')
        self.course_id = kwargs.get('course_id')
        self.modulename = kwargs.get('modulename')


class GroupDetails(object):
    """
    :type users: list[ReducedUserDetails]
    """
    def __init__(self, **kwargs):
        self.id = kwargs.get('id')
        self.name = kwargs.get('name')
        self.phase = kwargs.get('phase')
        users = kwargs.get('users')
        self.users = []
        if users:
            self.users = [ReducedUserDetails(**user_detail) for user_detail in users]

    @property
    def user_ids(self):
        return set(user.id for user in self.users)


class ParticipantDetails(object):
    def __init__(self, **kwargs):
        self.id = kwargs.get('id')
        self.discourse = kwargs.get('discourse')
        self.userid = kwargs.get('userid')
        self.groupids = kwargs.get('groupids') or []


class SubmissionDetails(object):
    def __init__(self, **kwargs):
        self.id = kwargs.get('id')
        self.discourse = kwargs.get('discourse')
        self.groupid = kwargs.get('groupid')
        self.submission = kwargs.get('submission')
        self.format = kwargs.get('format')
        self.currentversion = kwargs.get('currentversion') or 0
        self.timecreated = kwargs.get('timecreated') or 0
        self.timemodified = kwargs.get('timemodified') or 0


class ParticipationDetails(object):
    """
    Joined context / course module / discourse / participant row, as used by privacy requests
    """
    def __init__(self, **kwargs):
        self.contextid = kwargs.get('contextid')
        self.cmid = kwargs.get('cmid')
        self.discourse = kwargs.get('discourse')
        self.name = kwargs.get('name')
        self.timecreated = kwargs.get('timecreated') or 0
        self.timemodified = kwargs.get('timemodified') or 0
        self.userid = kwargs.get('userid')
        self.participant = kwargs.get('participant')
