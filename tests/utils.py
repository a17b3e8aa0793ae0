from datetime import datetime

import mock
import pytz

from discourse_activity.api_error import ApiError
from discourse_activity.discourse_api import TypedDiscourseAPI
from discourse_activity.discourse_api.dtos import (
    CourseModuleDetails, GroupDetails, ParticipationDetails, SubmissionDetails
)


class TestConstants(object):
    class Users(object):
        USER1_ID = 1
        USER2_ID = 2
        USER3_ID = 3

        OUTSIDER_ID = 200

    class Groups(object):
        GROUP1_ID = 1
        GROUP2_ID = 2
        GROUP3_ID = 3


def make_group(group_id, phase, user_ids=(), name=None):
    return GroupDetails(
        id=group_id, phase=phase, name=name or "Group {}".format(group_id),
        users=[{"id": user_id, "username": "user{}".format(user_id)} for user_id in user_ids]
    )


def make_submission(submission_id, group_id, currentversion, discourse='discourse-1'):
    return SubmissionDetails(
        id=submission_id, discourse=discourse, groupid=group_id, submission=u"Text {}".format(currentversion),
        format='plain', currentversion=currentversion, timecreated=1600000000, timemodified=1600000000
    )


def make_course_module(cmid, instance, modulename='discourse'):
    return CourseModuleDetails(id=cmid, instance=instance, course_id='course-v1:Org+Course+Run', modulename=modulename)


def make_participation(contextid, cmid, discourse, userid, timecreated=1600000000, timemodified=0):
    return ParticipationDetails(
        contextid=contextid, cmid=cmid, discourse=discourse, name="Discourse {}".format(discourse),
        timecreated=timecreated, timemodified=timemodified, userid=userid
    )


def utc(*args):
    return datetime(*args).replace(tzinfo=pytz.UTC)


def get_mock_discourse_api():
    """ Mock api with canned responses """
    mock_api = mock.Mock(spec=TypedDiscourseAPI)
    mock_api.get_user_roles_for_course = mock.Mock(return_value=set())
    mock_api.get_discourse_groups = mock.Mock(return_value=[])
    mock_api.get_submissions = mock.Mock(return_value=[])
    mock_api.get_participants = mock.Mock(return_value=[])
    mock_api.participants_exist = mock.Mock(return_value=False)
    mock_api.submissions_exist = mock.Mock(return_value=False)
    mock_api.get_user_participations = mock.Mock(return_value=[])
    mock_api.get_users_in_course_module = mock.Mock(return_value=[])
    mock_api.get_course_module = mock.Mock(return_value=None)
    return mock_api


class TestWithPatchesMixin(object):
    def make_patch(self, obj, member_name, new=mock.DEFAULT):
        patcher = mock.patch.object(obj, member_name, new)
        patch_instance = patcher.start()
        self.addCleanup(patcher.stop)
        return patch_instance


def make_api_error(code, reason):
    error_mock = mock.Mock()
    error_mock.code = code
    error_mock.reason = reason
    error_mock.read.return_value = ''
    return ApiError(error_mock)


def raise_api_error(code, reason):
    raise make_api_error(code, reason)
