# -*- coding: utf-8 -*-
import calendar
import functools
import logging
import urllib.parse
from datetime import date, datetime, timedelta

import pytz
from web_fragments.fragment import Fragment
from xblockutils.resources import ResourceLoader

DEFAULT_EXPIRATION_TIME = timedelta(seconds=10)


log = logging.getLogger(__name__)
loader = ResourceLoader(__name__)


# Make '_' a no-op so we can scrape strings
def gettext(text):
    return text


_ = gettext


MUST_BE_OVERRIDDEN = gettext(u"Must be overridden in inherited class")


class Constants(object):
    NEW_PHASE_PARAMETER_NAME = 'newphase'
    GROUP_ID_PARAMETER_NAME = 'group_id'
    SUBMISSION_PARAMETER_NAME = 'submission'
    CURRENT_VERSION_PARAMETER_NAME = 'currentversion'
    MODULE_NAME = 'discourse'


class DiscourseAccessDeniedError(Exception):
    def __init__(self, detail):
        self.value = detail
        super(DiscourseAccessDeniedError, self).__init__()

    def __str__(self):
        return u"Access denied: {}".format(self.value)


def format_date(date_value):
    if date_value is None:
        return None
    fmt = "%b %d %H:%M" if date_value.year == date.today().year else "%b %d %Y %H:%M"
    return date_value.strftime(fmt)


def utcnow():
    return datetime.utcnow().replace(tzinfo=pytz.UTC)


def to_timestamp(datetime_value):
    """
    Converts datetime to unix timestamp; naive datetimes are treated as UTC.
    """
    if datetime_value is None:
        return 0
    if datetime_value.tzinfo is not None:
        datetime_value = datetime_value.astimezone(pytz.UTC)
    return calendar.timegm(datetime_value.timetuple())


def make_key(*args):
    return ":".join([str(a) for a in args])


def discourse_protected_view(func):
    """
    Decorator for a view function, if this function will raise a
    DiscourseAccessDeniedError this function will return a proper error
    template.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DiscourseAccessDeniedError as exc:
            error_fragment = Fragment()
            error_fragment.add_content(
                loader.render_django_template(
                    'templates/html/loading_error.html', {'error_message': str(exc)}
                )
            )
            return error_fragment

    return wrapper


def discourse_protected_handler(func):
    """
    Decorator for a view handler, if this function will raise a
    DiscourseAccessDeniedError this function will return a proper error json.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DiscourseAccessDeniedError as exc:
            return {
                'result': 'error',
                'message': str(exc)
            }

    return wrapper


def key_error_protected_handler(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyError as exception:
            log.exception("Missing required argument %s", str(exception))
            return {'result': 'error', 'message': "Missing required argument {}".format(str(exception))}

    return wrapper


def conversion_protected_handler(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (TypeError, ValueError) as exception:
            message = "Conversion failed: {}".format(exception)
            log.exception(message)
            return {'result': 'error', 'message': message}

    return wrapper


def memoize_with_expiration(expires_after=DEFAULT_EXPIRATION_TIME):
    """
    This memoization decorator provides lightweight caching mechanism. It is not thread-safe and contain
    no cache invalidation features except cache expiration - use only on data that are unlikely to be changed
    within single request (i.e. course module and user role data)
    :param timedelta expires_after: Caching period
    """
    def decorator(func):
        cache = func.cache = {}

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            key_list = (
                tuple([func.__name__]) + tuple(args) + tuple(
                    "{}:{}".format(key, value) for key, value in kwargs.items()
                )
            )
            key = make_key(key_list)
            if key not in cache or cache[key]['timestamp'] + expires_after <= datetime.now():
                result = func(*args, **kwargs)
                log.info("Updating cached value for key %s", key)
                cache[key] = {
                    'timestamp': datetime.now(),
                    'result': result
                }

            return cache[key]['result']

        return wrapper

    return decorator


def add_resource(block, resource_type, path, fragment, via_url=False):
    if via_url:
        action = fragment.add_javascript_url if resource_type == 'javascript' else fragment.add_css_url
        action_parameter = block.runtime.local_resource_url(block, path)
    else:
        action = fragment.add_javascript if resource_type == 'javascript' else fragment.add_css
        action_parameter = loader.load_unicode(path)

    action(action_parameter)


def get_block_content_id(block):
    return str(block.scope_ids.usage_id)


def is_absolute(url):
    """
    :param url[str] url to asses
    Returns a boolean value indicating if given `url` is absolute or not.
    """
    return bool(urllib.parse.urlparse(url).netloc)
