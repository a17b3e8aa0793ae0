import functools
import logging
import os

from lazy.lazy import lazy
from xblock.completable import XBlockCompletionMode
from xblockutils.studio_editable import StudioEditableXBlockMixin

from discourse_activity.access import AccessPolicy
from discourse_activity.api_error import ApiError
from discourse_activity.discourse_api import DiscourseAPIXBlockMixin
from discourse_activity.utils import DiscourseAccessDeniedError, loader

log = logging.getLogger(__name__)


class CourseAwareXBlockMixin(object):
    @property
    def course_id(self):
        raw_course_id = getattr(self.runtime, 'course_id', 'all')
        return str(raw_course_id)


class UserAwareXBlockMixin(object):
    @lazy
    def anonymous_student_id(self):
        try:
            return self.runtime.anonymous_student_id
        except AttributeError:
            log.warning("Runtime does not have anonymous_student_id attribute - trying user_id")
            return self.runtime.user_id

    @lazy
    # pylint: disable=broad-except
    def user_id(self):
        try:
            return int(self.real_user_id(self.anonymous_student_id))
        except Exception as exc:
            # Suppressing logs when access through studio
            if not getattr(self.runtime, 'is_author_mode', False):
                log.exception(exc)
            try:
                return int(self.runtime.user_id)
            except Exception as exc:
                log.exception(exc)
                return None

    _known_real_user_ids = {}

    def real_user_id(self, anonymous_student_id):
        if anonymous_student_id not in self._known_real_user_ids:
            if hasattr(self.runtime, 'get_real_user'):
                self._known_real_user_ids[anonymous_student_id] = self.runtime.get_real_user(anonymous_student_id).id
            else:
                self._known_real_user_ids[anonymous_student_id] = anonymous_student_id
        return self._known_real_user_ids[anonymous_student_id]


class SettingsMixin(object):
    block_settings_key = 'discourse_activity'

    def _get_setting(self, setting, default):
        result = default
        settings_service = self.runtime.service(self, "settings")
        if settings_service:
            xblock_settings = settings_service.get_settings_bucket(self)
            if xblock_settings and setting in xblock_settings:
                result = xblock_settings[setting]
        return result


class AuthXBlockMixin(SettingsMixin, DiscourseAPIXBlockMixin, CourseAwareXBlockMixin, UserAwareXBlockMixin):
    CAPABILITY_ROLES_KEY = "capability_roles"

    @property
    def capability_roles(self):
        """
        :return: Deployment overrides for capability -> course roles mapping
        :rtype: dict[str, list[str]]
        """
        return self._get_setting(self.CAPABILITY_ROLES_KEY, {})

    def granted_roles(self, user_id):
        """
        :rtype: set[str]
        """
        if user_id is None:
            return set()
        try:
            return self.discourse_api.get_user_roles_for_course(user_id, self.course_id)
        except ApiError as exception:
            log.exception(exception)
            return set()

    @lazy
    def access_policy(self):
        """
        :rtype: discourse_activity.access.AccessPolicy
        """
        return AccessPolicy(self.granted_roles(self.user_id), self.capability_roles)

    def has_capability(self, capability):
        return self.access_policy.has_capability(capability)

    def check_capability(self, capability, message):
        """
        :raise DiscourseAccessDeniedError: If current user does not hold ``capability``
        """
        if not self.has_capability(capability):
            raise DiscourseAccessDeniedError(message)

    @staticmethod
    def requires_capability(capability, message):

        def decorator(func):
            @functools.wraps(func)
            def check_capability_wrapper(self, *args, **kwargs):
                self.check_capability(capability, message)
                return func(self, *args, **kwargs)

            return check_capability_wrapper

        return decorator


class TemplateManagerMixin(object):
    BASE_TEMPLATE_LOCATION = "templates/html"
    template_location = None

    def render_template(self, template, context, template_suffix=".html"):
        template_path = os.path.join(self.BASE_TEMPLATE_LOCATION, self.template_location, template + template_suffix)
        return loader.render_django_template(template_path, context)


class CompletionMixin(object):
    completion_mode = XBlockCompletionMode.EXCLUDED


class CommonMixinCollection(
        StudioEditableXBlockMixin, AuthXBlockMixin, TemplateManagerMixin, CompletionMixin,
):
    pass
