"""Message board API client.

This module provides a small client for the message service and a
view-model that frontends can bind to.  It uses the ``requests`` library
internally.

* :class:`MessageAPI` performs the two HTTP calls.  Each method returns a
  tuple ``(data, error)``; exactly one of them is ``None``.  Errors are
  dictionaries with ``status_code`` (``None`` for transport failures) and
  a human-readable ``message``.
* :class:`MessageBoard` keeps what a screen needs to render: the message
  currently displayed, ``loading``/``updating`` flags and the last error.
  It never discards a displayed message because a call failed.

Nothing here retries automatically.  After a failed load, call
:meth:`MessageBoard.retry`.

The module can also be run as a script::

    python message_api.py get
    python message_api.py --base-url http://localhost:8000 set "Hi there"
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Dict, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

MESSAGE_PATH = "/api/message"

ApiResult = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class MessageAPI:
    """Client for ``GET`` and ``POST /api/message``."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8000``.
            session: Optional requests session.  If not supplied a session
                will be created automatically.
            timeout: Seconds to wait for the server before giving up.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> ApiResult:
        """Perform an HTTP request and decode the JSON answer.

        Returns:
            ``(data, None)`` on a 2xx response, otherwise ``(None, error)``.
            For HTTP errors the message is taken from the ``details`` (or
            ``error``) field of the server's JSON body.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json(), None
        except requests.HTTPError as exc:
            resp = exc.response
            status = resp.status_code if resp is not None else None
            message = ""
            if resp is not None:
                try:
                    err_json = resp.json()
                except ValueError:
                    message = resp.text
                else:
                    # Proxies and frameworks may answer with a list or a bare
                    # string instead of an {"error", "details"} object.
                    if isinstance(err_json, dict):
                        message = err_json.get("details") or err_json.get("error") or ""
                    message = message or str(err_json)
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except ValueError as exc:
            logger.error("API returned invalid JSON: %s", exc)
            return None, {"status_code": None, "message": f"Invalid response from server: {exc}"}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": f"Could not reach the server: {exc}"}

    # ------------------------------------------------------------------
    # Message operations
    # ------------------------------------------------------------------
    def get_message(self) -> ApiResult:
        """Fetch the current message.

        Returns:
            A tuple ``(message, error)`` where ``message`` is a string.
        """
        data, error = self._request("GET", MESSAGE_PATH)
        if error:
            return None, error
        if not isinstance(data, dict) or not isinstance(data.get("message"), str):
            return None, {"status_code": None, "message": "Unexpected response from server"}
        return data["message"], None

    def update_message(self, text: str) -> ApiResult:
        """Replace the message with ``text``.

        Returns:
            A tuple ``(updated, error)`` where ``updated`` is the message as
            stored by the server.
        """
        data, error = self._request("POST", MESSAGE_PATH, json_body={"newMessage": text})
        if error:
            return None, error
        if not isinstance(data, dict) or not isinstance(data.get("updatedMessage"), str):
            return None, {"status_code": None, "message": "Unexpected response from server"}
        return data["updatedMessage"], None


class MessageBoard:
    """State behind a screen that shows and edits the message.

    ``state`` is ``"loading"`` until the first message arrives and while a
    fetch is in flight, ``"error"`` after a failed call and ``"ready"``
    otherwise.  ``updating`` is set only while a new message is being
    submitted; it is what a frontend uses to disable its input.

    Input rejected locally (empty text) is reported in
    ``validation_error`` and does not change ``state``.
    """

    def __init__(self, api: MessageAPI) -> None:
        self.api = api
        self.message: Optional[str] = None
        self.loading = False
        self.updating = False
        self.error: Optional[str] = None
        self.validation_error: Optional[str] = None

    @property
    def state(self) -> str:
        if self.loading or (self.message is None and not self.error):
            return "loading"
        if self.error:
            return "error"
        return "ready"

    def load(self) -> bool:
        """Fetch the current message.  Returns ``True`` on success."""
        self.loading = True
        self.error = None
        try:
            message, error = self.api.get_message()
        finally:
            self.loading = False
        if error:
            self.error = f"Failed to load message: {error['message']}"
            return False
        self.message = message
        return True

    def retry(self) -> bool:
        """Re-issue the fetch after a failure."""
        return self.load()

    def submit(self, text: str) -> bool:
        """Send ``text`` as the new message.

        Empty input is rejected locally without a request.  On success the
        displayed message becomes the value the server stored.
        """
        if not isinstance(text, str) or not text.strip():
            self.validation_error = "Message cannot be empty."
            return False
        self.validation_error = None
        if self.updating:
            return False
        self.updating = True
        self.error = None
        try:
            updated, error = self.api.update_message(text.strip())
        finally:
            self.updating = False
        if error:
            self.error = f"Failed to update message: {error['message']}"
            return False
        self.message = updated
        return True


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Read or replace the message on a message board server.")
    parser.add_argument(
        "--base-url",
        default=os.getenv("MESSAGE_API_BASE_URL", "http://localhost:8000"),
        help="Server base URL (default: $MESSAGE_API_BASE_URL or http://localhost:8000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=float(os.getenv("MESSAGE_API_TIMEOUT", "10")),
        help="Request timeout in seconds",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("get", help="Print the current message")
    set_parser = sub.add_parser("set", help="Replace the message")
    set_parser.add_argument("text", help="New message text")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(message)s")
    board = MessageBoard(MessageAPI(base_url=args.base_url, timeout=args.timeout))
    if args.command == "get":
        ok = board.load()
    else:
        ok = board.submit(args.text)
    if not ok:
        print(board.validation_error or board.error, file=sys.stderr)
        return 1
    print(board.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
