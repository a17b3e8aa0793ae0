from datetime import datetime
from unittest import TestCase

import ddt
import mock
import pytz

from discourse_activity.utils import (
    DiscourseAccessDeniedError, conversion_protected_handler, discourse_protected_handler,
    discourse_protected_view, format_date, get_block_content_id, is_absolute, key_error_protected_handler,
    loader, memoize_with_expiration, to_timestamp
)
from tests.utils import TestWithPatchesMixin, utc


@ddt.ddt
class TestUtils(TestCase):
    @ddt.data('usage1', 'usage2', 123, 'block-v1:Org+C1+R1+type@discourse+block@abc')
    def test_get_block_content_id(self, usage):
        block = mock.Mock()
        block.scope_ids.usage_id = usage
        self.assertEqual(get_block_content_id(block), str(usage))

    @ddt.data(
        (None, 0),
        (utc(1970, 1, 1), 0),
        (utc(2021, 1, 5, 12), 1609848000),
        (datetime(2021, 1, 5, 12), 1609848000),
        (datetime(2021, 1, 5, 20, tzinfo=pytz.FixedOffset(480)), 1609848000),
    )
    @ddt.unpack
    def test_to_timestamp(self, value, expected):
        self.assertEqual(to_timestamp(value), expected)

    def test_format_date(self):
        self.assertIsNone(format_date(None))
        self.assertEqual(format_date(datetime(2015, 3, 9, 5, 6)), "Mar 09 2015 05:06")

    @ddt.data(
        ('http://localhost/api', True),
        ('api/server/discourses', False),
        ('/api/server', False),
    )
    @ddt.unpack
    def test_is_absolute(self, url, expected):
        self.assertEqual(is_absolute(url), expected)


class TestProtectionDecorators(TestCase, TestWithPatchesMixin):
    def test_protected_view(self):
        render_mock = self.make_patch(loader, 'render_django_template', mock.Mock(return_value=u"<p>error</p>"))

        @discourse_protected_view
        def view():
            raise DiscourseAccessDeniedError("Not allowed")

        fragment = view()

        self.assertEqual(fragment.content, u"<p>error</p>")
        render_mock.assert_called_once_with(
            'templates/html/loading_error.html', {'error_message': "Access denied: Not allowed"}
        )

    def test_protected_handler(self):
        @discourse_protected_handler
        def handler():
            raise DiscourseAccessDeniedError("Not allowed")

        self.assertEqual(handler(), {'result': 'error', 'message': "Access denied: Not allowed"})

    def test_key_error_protected_handler(self):
        @key_error_protected_handler
        def handler(data):
            return data['missing']

        result = handler({})
        self.assertEqual(result['result'], 'error')
        self.assertIn('missing', result['message'])

    def test_conversion_protected_handler(self):
        @conversion_protected_handler
        def handler(value):
            return int(value)

        self.assertEqual(handler('12'), 12)
        self.assertEqual(handler('qwe')['result'], 'error')


class TestMemoizeWithExpiration(TestCase):
    def test_caches_within_expiration(self):
        calls = []

        @memoize_with_expiration()
        def cached_func(value):
            calls.append(value)
            return value * 2

        self.assertEqual(cached_func(1), 2)
        self.assertEqual(cached_func(1), 2)
        self.assertEqual(cached_func(2), 4)

        self.assertEqual(calls, [1, 2])
