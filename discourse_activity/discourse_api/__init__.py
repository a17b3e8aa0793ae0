''' API calls with respect to discourse participants, groups and submissions '''

from django.conf import settings
from lazy.lazy import lazy

from discourse_activity.discourse_api.api_implementation import TypedDiscourseAPI

# This code runs in LMS, so 127.0.0.1 is always correct location for API server
DEFAULT_API_SERVER = "http://127.0.0.1:8000"


def get_api_server_address():
    return getattr(settings, 'API_LOOPBACK_ADDRESS', DEFAULT_API_SERVER)


class DiscourseAPIXBlockMixin(object):
    _discourse_api = None

    @lazy
    def discourse_api(self):
        # shared instance keeps memoized course module and role lookups across blocks
        if DiscourseAPIXBlockMixin._discourse_api is None:
            author_mode = getattr(self.runtime, 'is_author_mode', False)
            DiscourseAPIXBlockMixin._discourse_api = TypedDiscourseAPI(get_api_server_address(), author_mode)

        return DiscourseAPIXBlockMixin._discourse_api
