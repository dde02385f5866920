import pytest
from fastapi.testclient import TestClient

from library_api.app.main import create_app
from library_api.app.storage import InMemoryBookRepository, SQLiteBookRepository


GATSBY = {
    "title": "The Great Gatsby",
    "author": "F. Scott Fitzgerald",
    "published_date": "1925-04-10",
    "isbn": "9780743273565",
    "available": True,
}

DUNE = {
    "title": "Dune",
    "author": "Frank Herbert",
    "published_date": "1965-08-01",
    "isbn": "9780441013593",
    "available": False,
}


@pytest.fixture
def gatsby():
    return dict(GATSBY)


@pytest.fixture
def dune():
    return dict(DUNE)


@pytest.fixture(params=["memory", "sqlite"])
def repository(request, tmp_path):
    if request.param == "memory":
        return InMemoryBookRepository()
    return SQLiteBookRepository(str(tmp_path / "books.db"))


@pytest.fixture
def client(repository):
    with TestClient(create_app(repository)) as test_client:
        yield test_client
