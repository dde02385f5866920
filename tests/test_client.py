import pytest
import requests

from library_api_client import BookCatalogAPI


class TestClientSession:
    """Minimal ``requests.Session`` stand-in that forwards to a TestClient."""

    __test__ = False

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, json=None, headers=None, timeout=None):
        self.calls.append((method, url, headers))
        result = self.test_client.request(method, url, json=json, headers=headers)
        response = requests.Response()
        response.status_code = result.status_code
        response._content = result.content
        response.headers.update(result.headers)
        response.url = url
        return response


class OfflineSession:
    def request(self, **kwargs):
        raise requests.ConnectionError("connection refused")


@pytest.fixture
def api(client):
    session = TestClientSession(client)
    return BookCatalogAPI(base_url="http://testserver/", session=session, api_key="secret")


def test_round_trip_through_client(api, gatsby):
    created, error = api.create_book(gatsby)
    assert error is None
    book, error = api.get_book(created["id"])
    assert error is None
    assert book == dict(gatsby, id=created["id"])

    _, error = api.partial_update_book(created["id"], {"available": False})
    assert error is None
    _, error = api.update_book(created["id"], {"title": "Gatsby"})
    assert error is None
    books, error = api.list_books()
    assert [(b["title"], b["available"]) for b in books] == [("Gatsby", False)]

    deleted, error = api.delete_book(created["id"])
    assert deleted is True
    assert api.list_books() == ([], None)


def test_errors_carry_status_and_detail(api, gatsby):
    api.create_book(gatsby)
    data, error = api.create_book(gatsby)
    assert data is None
    assert error["status_code"] == 409
    assert gatsby["isbn"] in error["message"]

    deleted, error = api.delete_book(999)
    assert deleted is False
    assert error["status_code"] == 404


def test_sends_bearer_token(api):
    api.info()
    method, url, headers = api.session.calls[-1]
    assert (method, url) == ("GET", "http://testserver/info/")
    assert headers["Authorization"] == "Bearer secret"


def test_connection_failure_is_reported():
    api = BookCatalogAPI(base_url="http://127.0.0.1:9", session=OfflineSession())
    books, error = api.list_books()
    assert books == []
    assert error["status_code"] is None
    assert "connection refused" in error["message"]
