"""
JSON requests to the API server.

Every request carries a JSON content type and, when the deployment configures ``EDX_API_KEY``, the API key
header. Request bodies are serialized to JSON; responses are returned as is, callers read and decode them.
"""
import json
import logging
from urllib.request import Request, urlopen

from django.conf import settings

# capitalised names match the HTTP methods they send
# pylint: disable=invalid-name

log = logging.getLogger(__name__)

TIMEOUT = 20


def json_headers():
    headers = {"Content-Type": "application/json"}
    api_key = getattr(settings, "EDX_API_KEY", None)
    if api_key:
        headers["X-Edx-Api-Key"] = api_key
    return headers


def _send(method, url_path, data=None):
    """
    :param str method: HTTP method
    :param str url_path: absolute url
    :param data: JSON-serializable request body, or None for requests without one
    """
    body = None
    if data is not None:
        body = json.dumps(data).encode('utf-8')
        log.debug("Sending %s request to %s with data %s", method, url_path, data)
    else:
        log.debug("Sending %s request to %s", method, url_path)

    request = Request(url=url_path, data=body, headers=json_headers(), method=method)
    response = urlopen(request, timeout=TIMEOUT)

    log.debug("%s %s answered with %s", method, url_path, response.status)
    return response


def GET(url_path):
    return _send('GET', url_path)


def POST(url_path, data):
    return _send('POST', url_path, data)


def PUT(url_path, data):
    return _send('PUT', url_path, data)


def DELETE(url_path):
    return _send('DELETE', url_path)
