"""Book Catalog API client.

This module defines a small client wrapper around the book catalog
REST API and a command line interface on top of it.  The client uses
the ``requests`` library internally to make HTTP calls.

The client exposes one method per server operation:

* :meth:`list_books` – return every book.
* :meth:`get_book` – fetch a single book by its identifier.
* :meth:`create_book` – create a book from a payload.
* :meth:`update_book` – replace the editable fields of a book.
* :meth:`delete_book` – delete a book.
* :meth:`search_books` – search title, author and genre.

Every method returns a ``(data, error)`` tuple.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list) and
``error`` is a dictionary with ``status_code`` and ``message``.

Command line usage::

    python book_catalog_client.py list
    python book_catalog_client.py create --title Dune --author Herbert --isbn 111
    python book_catalog_client.py search "herb"
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class BookCatalogClient:
    """Client for interacting with the book catalog API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
            api_prefix: Prefix the books router is mounted under.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.books_path = f"{api_prefix.rstrip('/')}/books"
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Perform an HTTP request and return ``(envelope, error)``."""
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
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
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _book_path(self, book_id: str) -> str:
        return f"{self.books_path}/{quote(str(book_id), safe='')}"

    # ------------------------------------------------------------------
    # Book operations
    # ------------------------------------------------------------------
    def list_books(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        envelope, error = self._request("GET", self.books_path)
        if error:
            return [], error
        return (envelope or {}).get("data", []), None

    def get_book(self, book_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        envelope, error = self._request("GET", self._book_path(book_id))
        if error:
            return None, error
        return (envelope or {}).get("data"), None

    def create_book(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a book.

        Args:
            payload: Book fields in wire form (``title``, ``author``,
                ``isbn``, ``genre``, ``publishedYear``, ``description``).
        """
        envelope, error = self._request("POST", self.books_path, json_body=payload)
        if error:
            return None, error
        return (envelope or {}).get("data"), None

    def update_book(
        self, book_id: str, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update a book.

        ``title`` and ``author`` must always be sent.  Empty
        ``genre``, ``publishedYear`` or ``description`` values leave
        the stored values as they are.
        """
        envelope, error = self._request("PUT", self._book_path(book_id), json_body=payload)
        if error:
            return None, error
        return (envelope or {}).get("data"), None

    def delete_book(self, book_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        envelope, error = self._request("DELETE", self._book_path(book_id))
        if error:
            return None, error
        return (envelope or {}).get("data"), None

    def search_books(self, query: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        path = f"{self.books_path}/search/{quote(query, safe='')}"
        envelope, error = self._request("GET", path)
        if error:
            return [], error
        return (envelope or {}).get("data", []), None


# ----------------------------------------------------------------------
# Command line interface
# ----------------------------------------------------------------------
def _payload_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for attr, key in (
        ("title", "title"),
        ("author", "author"),
        ("isbn", "isbn"),
        ("genre", "genre"),
        ("published_year", "publishedYear"),
        ("description", "description"),
    ):
        value = getattr(args, attr)
        if value is not None:
            payload[key] = value
    return payload


def _add_book_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", help="Book title")
    parser.add_argument("--author", help="Book author")
    parser.add_argument("--isbn", help="ISBN; must be unique")
    parser.add_argument("--genre", help="Genre")
    parser.add_argument("--published-year", dest="published_year", type=int, help="Year of publication")
    parser.add_argument("--description", help="Free text description")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Command line client for the Book Catalog API.")
    ap.add_argument(
        "--base-url",
        default=os.getenv("BOOK_API_URL", "http://localhost:3000"),
        help="Server base URL (default: $BOOK_API_URL or http://localhost:3000)",
    )
    ap.add_argument("--api-prefix", default="/api", help="Prefix of the books API (default: /api)")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all books")

    p = sub.add_parser("get", help="Show one book")
    p.add_argument("book_id")

    p = sub.add_parser("create", help="Create a book")
    _add_book_fields(p)

    p = sub.add_parser("update", help="Update a book")
    p.add_argument("book_id")
    _add_book_fields(p)

    p = sub.add_parser("delete", help="Delete a book")
    p.add_argument("book_id")

    p = sub.add_parser("search", help="Search title, author and genre")
    p.add_argument("query")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    client = BookCatalogClient(base_url=args.base_url, api_prefix=args.api_prefix)

    if args.command == "list":
        data, error = client.list_books()
    elif args.command == "get":
        data, error = client.get_book(args.book_id)
    elif args.command == "create":
        data, error = client.create_book(_payload_from_args(args))
    elif args.command == "update":
        data, error = client.update_book(args.book_id, _payload_from_args(args))
    elif args.command == "delete":
        data, error = client.delete_book(args.book_id)
    else:
        data, error = client.search_books(args.query)

    if error:
        print(f"[!] {error['message']} (status {error['status_code']})", file=sys.stderr)
        return 1
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
