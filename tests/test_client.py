import warnings

import pytest
import responses
from responses import matchers

from controller_sdk.client import API_VERSION, Client
from controller_sdk.errors import (
    APIMismatchError,
    APIMismatchWarning,
    ControllerError,
    NotFoundError,
    ServerError,
)

BASE = "http://controller.example.com"

LIMITED_FIXTURE = """
{
    "count": 4,
    "next": "http://replaced.example.com/limited2/",
    "previous": null,
    "results": [
        {"test": "foo"},
        {"test": "bar"}
    ]
}
"""


@pytest.fixture
def mock():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def _client(url=BASE, token=""):
    client = Client(url, token, False)
    client.user_agent = "test"
    return client


def test_check_connection(mock):
    mock.add(responses.GET, BASE + "/v2/", status=401,
             headers={"DEIS_API_VERSION": API_VERSION})
    client = _client()
    assert client.check_connection() is None
    assert client.controller_api_version == API_VERSION
    assert mock.calls[0].request.headers["User-Agent"] == "test"


def test_check_connection_rejects_non_controller(mock):
    mock.add(responses.GET, BASE + "/v2/", status=200,
             headers={"DEIS_API_VERSION": API_VERSION})
    with pytest.raises(ControllerError, match="does not appear to be a valid"):
        _client().check_connection()


def test_api_mismatch(mock):
    mock.add(responses.GET, BASE + "/v2/", status=401,
             headers={"DEIS_API_VERSION": "3.0"})
    client = _client()
    with pytest.raises(APIMismatchError):
        client.check_connection()
    assert client.controller_api_version == "3.0"


def test_basic_request(mock):
    mock.add(responses.POST, BASE + "/request/", body="request",
             headers={"DEIS_API_VERSION": API_VERSION,
                      "DEIS_PLATFORM_VERSION": "v9000"})
    client = _client(token="token")
    client.hooks_token = "token"

    with warnings.catch_warnings():
        warnings.simplefilter("error", APIMismatchWarning)
        response = client.request("POST", "/request/", b"test")

    assert response.text == "request"
    assert client.controller_api_version == API_VERSION
    assert client.controller_version == "v9000"
    assert client.controller_url == BASE

    sent = mock.calls[0].request
    assert sent.headers["Authorization"] == "token token"
    assert sent.headers["X-Deis-Builder-Auth"] == "token"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.headers["User-Agent"] == "test"
    assert sent.body == b"test"


def test_request_warns_on_api_mismatch(mock):
    mock.add(responses.GET, BASE + "/thing/", body="ok",
             headers={"DEIS_API_VERSION": "3.0"})
    client = _client()
    with pytest.warns(APIMismatchWarning):
        response = client.request("GET", "/thing/")
    assert response.text == "ok"
    assert client.controller_api_version == "3.0"


def test_request_raises_mapped_error(mock):
    mock.add(responses.GET, BASE + "/missing/", status=404, body="App not found")
    with pytest.raises(NotFoundError) as info:
        _client().request("GET", "/missing/")
    assert str(info.value) == "App not found"


def test_limited_request(mock):
    mock.add(responses.GET, BASE + "/limited/", body=LIMITED_FIXTURE,
             headers={"DEIS_API_VERSION": API_VERSION},
             match=[matchers.query_param_matcher({"limit": "2"})])
    client = _client(token="token")
    results, count = client.limited_request("/limited/", 2)
    assert results == [{"test": "foo"}, {"test": "bar"}]
    assert count == 4
    assert client.controller_api_version == API_VERSION
    assert client.controller_url == BASE


@pytest.mark.parametrize("url", [BASE + "/", BASE])
def test_healthcheck(mock, url):
    mock.add(responses.GET, BASE + "/healthz", status=200,
             headers={"DEIS_API_VERSION": API_VERSION})
    client = _client(url)
    assert client.healthcheck() is None
    assert mock.calls[0].request.url == BASE + "/healthz"
    assert client.controller_api_version == API_VERSION


def test_healthcheck_server_error(mock):
    mock.add(responses.GET, BASE + "/healthz", status=500)
    with pytest.raises(ServerError):
        _client().healthcheck()


def test_missing_scheme_defaults_to_http():
    assert Client("controller.example.com").controller_url == BASE