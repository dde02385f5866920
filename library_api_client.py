"""Library Books API client.

This module defines a small client wrapper around the Books REST API
served by ``library_api``.  The client uses the ``requests`` library
internally and exposes one method per operation:

* :meth:`list_books` – return every book.
* :meth:`get_book` – fetch a single book by its identifier.
* :meth:`create_book` – create a book and return ``{id, message}``.
* :meth:`update_book` – PUT changes to a book.
* :meth:`partial_update_book` – PATCH changes to a book.
* :meth:`delete_book` – remove a book.
* :meth:`info` – service name, version and storage backend.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list) and
``error`` is a dictionary with ``status_code`` and ``message`` keys,
where ``message`` is taken from the server's ``detail`` field when
present.  The client never retries; retry policy belongs to callers.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class BookCatalogAPI:
    """Client for interacting with the Library Books API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
        prefix: str = "",
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            api_key: Optional token.  If set, an ``Authorization`` header
                with the value ``Bearer <api_key>`` is sent with every
                request, for deployments behind an authenticating proxy.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
            prefix: Path prefix the API is mounted under (``API_PREFIX``
                on the server side).
        """
        self.base_url = base_url.rstrip("/") + prefix.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``, etc.).
            path: Path relative to :attr:`base_url` (e.g. ``/books/``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Book operations
    # ------------------------------------------------------------------
    def list_books(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/books/")
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    def get_book(self, book_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/books/{book_id}/")

    def create_book(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a book.

        Args:
            payload: Book fields.  ``published_date`` must be an ISO
                date string.
        Returns:
            A tuple ``(result, error)`` where ``result`` holds the new
            ``id`` and a ``message``.
        """
        return self._request("POST", "/books/", json_body=payload)

    def update_book(self, book_id: int, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PUT", f"/books/{book_id}/", json_body=payload)

    def partial_update_book(self, book_id: int, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PATCH", f"/books/{book_id}/", json_body=payload)

    def delete_book(self, book_id: int) -> Tuple[bool, Optional[Error]]:
        """Delete a book.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/books/{book_id}/")
        return error is None, error

    def info(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/info/")
