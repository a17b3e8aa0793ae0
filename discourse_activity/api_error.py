import functools
import json
import logging
from urllib.error import URLError

from discourse_activity.utils import gettext as _


log = logging.getLogger(__name__)

# connection failures and other errors that never reached the API server
CLIENT_ERROR_CODE = 1000

STATUS_MESSAGES = {
    403: _(u"The API server refused the request"),
    404: _(u"Requested object was not found on the API server"),
}


def read_error_content(error):
    """
    Returns the JSON object the API server sent along with an error response, or an empty dict when there
    is no body, or it is not a JSON object.
    """
    try:
        body = error.read()
    except (AttributeError, OSError):
        return {}

    if isinstance(body, bytes):
        body = body.decode('utf-8', 'replace')
    try:
        content = json.loads(body)
    except (TypeError, ValueError):
        return {}
    return content if isinstance(content, dict) else {}


class ApiError(Exception):
    """
    Raised when a request to the API server fails.

    ``message`` is taken from the ``message`` key of the response body when the server provides one, then
    from the known messages per status code, and finally from the HTTP reason phrase.
    """
    def __init__(self, thrown_error):
        self.http_error = thrown_error
        self.code = getattr(thrown_error, 'code', CLIENT_ERROR_CODE)
        self.content = read_error_content(thrown_error)

        self.message = (
            self.content.get("message") or STATUS_MESSAGES.get(self.code) or str(thrown_error.reason)
        )

        super(ApiError, self).__init__(self.message)

    def __str__(self):
        return "ApiError '{}' ({})".format(self.message, self.code)


def api_error_protect(func):
    """
    Decorator converting failed API server requests into ApiError
    """
    @functools.wraps(func)
    def call_api_method(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except URLError as error:
            api_error = ApiError(error)
            log.exception("Error calling %s: %s", func.__name__, api_error)
            raise api_error from error

    return call_api_method
