import json
import logging
from urllib.parse import urlencode

from discourse_activity.api_error import ApiError, api_error_protect
from discourse_activity.json_requests import DELETE, GET, PUT, POST
from discourse_activity.utils import memoize_with_expiration, is_absolute
from discourse_activity.discourse_api.dtos import (
    CourseModuleDetails, GroupDetails, ParticipantDetails, SubmissionDetails, ParticipationDetails
)

log = logging.getLogger(__name__)

API_PREFIX = '/'.join(['api', 'server'])
DISCOURSES_API = '/'.join([API_PREFIX, 'discourses'])
DISCOURSE_SUBMISSIONS_API = '/'.join([API_PREFIX, 'discourse_submissions'])
COURSE_MODULES_API = '/'.join([API_PREFIX, 'course_modules'])
USERS_API = '/'.join([API_PREFIX, 'users'])
COURSES_API = '/'.join([API_PREFIX, 'courses'])


def _join_ids(ids):
    return ",".join(str(item) for item in ids)


class DiscourseAPI(object):
    """
    Transport layer: builds urls on the API server and sends json requests.
    """
    def __init__(self, address, dry_run=False):
        self._api_server_address = address
        self.dry_run = dry_run

    def build_url(self, url_parts, query_params=None, no_trailing_slash=False):
        url = "/".join([str(url_part) for url_part in url_parts])
        if not is_absolute(url):
            url = self._api_server_address + "/" + url
        if not no_trailing_slash:
            url += "/"
        if query_params:
            url += "?" + urlencode(query_params)

        return url

    @api_error_protect
    def _do_send_request(self, method, url, data=None):
        if self.dry_run:
            return {}

        if data is not None:
            response = method(url, data)
        else:
            response = method(url)

        # pylint: disable=comparison-with-callable
        if method == DELETE:
            return None

        return json.loads(response.read())

    def send_request(self, method, url_parts, data=None, query_params=None, no_trailing_slash=False):
        url = self.build_url(url_parts, query_params, no_trailing_slash)
        return self._do_send_request(method, url, data)

    def _consume_paged_response(self, method, entry_url, data=None):
        next_page_url = entry_url

        while next_page_url:
            response = self._do_send_request(method, next_page_url, data) or {}
            for item in response.get('results', []):
                yield item

            next_page_url = response.get('next')


class TypedDiscourseAPI(DiscourseAPI):
    """
    Typed access to discourse participants, groups and submissions.

    Some of the methods return non-reentrant iterables (i.e. generators) - clients are responsible to
    convert them to reentrant collection if need more than one pass over the response
    """
    @memoize_with_expiration()
    def get_course_module(self, cmid):
        """
        :param int cmid: Course module ID
        :rtype: CourseModuleDetails or None
        """
        try:
            response = self.send_request(GET, (COURSE_MODULES_API, cmid), no_trailing_slash=True)
        except ApiError as exception:
            if exception.code == 404:
                return None
            raise
        return CourseModuleDetails(**response)

    @memoize_with_expiration()
    def get_user_roles_for_course(self, user_id, course_id):
        """
        Returns role names user has for a given course.

        :param int user_id: User Id
        :param str course_id: Course id
        :rtype: set[str]
        """
        qs_params = {
            "user_id": user_id,
        }
        response = self.send_request(GET, (COURSES_API, course_id, 'roles'), query_params=qs_params)
        return set(role['role'] for role in response or [])

    # No caching here - group membership changes when groups are regenerated
    def get_discourse_groups(self, discourse_id):
        """
        :param discourse_id: Discourse ID
        :rtype: list[GroupDetails]
        """
        url = self.build_url((DISCOURSES_API, discourse_id, 'groups'))
        return [GroupDetails(**item) for item in self._consume_paged_response(GET, url)]

    def _participants_query(self, user_ids):
        if user_ids is None:
            return None
        return {'user_ids': _join_ids(user_ids)}

    def get_participants(self, discourse_id, user_ids=None):
        """
        :param discourse_id: Discourse ID
        :param collections.Iterable[int] user_ids: optional filter
        :rtype: collections.Iterable[ParticipantDetails]
        """
        url = self.build_url(
            (DISCOURSES_API, discourse_id, 'participants'), query_params=self._participants_query(user_ids)
        )
        for item in self._consume_paged_response(GET, url):
            yield ParticipantDetails(**item)

    def participants_exist(self, discourse_id, user_ids=None):
        return next(iter(self.get_participants(discourse_id, user_ids)), None) is not None

    def delete_participants(self, discourse_id, user_ids=None):
        """
        Deletes participants of the discourse in a single request; all of them if ``user_ids`` is None
        """
        self.send_request(
            DELETE, (DISCOURSES_API, discourse_id, 'participants'), query_params=self._participants_query(user_ids)
        )

    # Do not cache - submission handler updates submissions, than checks which versions are there
    def get_submissions(self, discourse_id, group_id=None):
        """
        :param discourse_id: Discourse ID
        :param int group_id: optional filter
        :rtype: collections.Iterable[SubmissionDetails]
        """
        query_params = {'group_id': group_id} if group_id is not None else None
        url = self.build_url((DISCOURSES_API, discourse_id, 'submissions'), query_params=query_params)
        for item in self._consume_paged_response(GET, url):
            yield SubmissionDetails(**item)

    def submissions_exist(self, discourse_id):
        return next(iter(self.get_submissions(discourse_id)), None) is not None

    def delete_submissions(self, discourse_id):
        self.send_request(DELETE, (DISCOURSES_API, discourse_id, 'submissions'))

    def create_submission(self, submission_data):
        return SubmissionDetails(**(self.send_request(POST, (DISCOURSE_SUBMISSIONS_API,), data=submission_data) or {}))

    def update_submission(self, submission_id, submission_data):
        response = self.send_request(PUT, (DISCOURSE_SUBMISSIONS_API, submission_id), data=submission_data)
        return SubmissionDetails(**(response or {}))

    def get_user_participations(self, user_id, context_ids=None):
        """
        :param int user_id: User ID
        :param collections.Iterable[int] context_ids: optional filter
        :rtype: collections.Iterable[ParticipationDetails]
        """
        query_params = {'context_ids': _join_ids(context_ids)} if context_ids is not None else None
        url = self.build_url((USERS_API, user_id, 'discourses'), query_params=query_params)
        for item in self._consume_paged_response(GET, url):
            yield ParticipationDetails(**item)

    def get_users_in_course_module(self, cmid):
        """
        :param int cmid: Course module ID
        :rtype: list[int]
        """
        url = self.build_url((COURSE_MODULES_API, cmid, 'participants'))
        return [item['userid'] for item in self._consume_paged_response(GET, url)]
