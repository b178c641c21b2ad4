"""GitHub Gist adapter - HTTP client for entry mirroring."""

import json
import logging

import requests

from lifelog.core.entries import Entry

logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"
ZEN_URL = f"{API_BASE}/zen"
API_VERSION = "2022-11-28"
GIST_FILENAME = "lg_cli_storage.json"
GIST_DESCRIPTION = "Life Logger CLI Storage"


class RemoteError(Exception):
    """Raised when the Gist API fails or cannot be reached."""

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


def _serialize(entries: list[Entry]) -> str:
    return json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)


class GistAdapter:
    """
    GitHub Gist adapter.

    Implements RemoteStore protocol. One private gist holds one JSON file with
    the entry array verbatim. No merge logic - just I/O.
    """

    def __init__(self, session: requests.Session | None = None, timeout: float = 10.0):
        self._session = session or requests.Session()
        self.timeout = timeout

    def _headers(self, token: str) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": API_VERSION,
        }

    def _api_request(self, method: str, endpoint: str, token: str, payload: dict | None = None) -> dict:
        """Make authenticated API request."""
        try:
            resp = self._session.request(
                method,
                f"{API_BASE}{endpoint}",
                headers=self._headers(token),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteError(f"GitHub API unreachable: {e}") from e

        if not resp.ok:
            raise RemoteError(
                f"GitHub API error: {resp.status_code} - {resp.text}",
                status=resp.status_code,
                body=resp.text,
            )
        return resp.json()

    def _files_payload(self, entries: list[Entry]) -> dict:
        return {GIST_FILENAME: {"content": _serialize(entries)}}

    def create_remote(self, token: str, entries: list[Entry]) -> str:
        """Create a private gist holding the entries. Returns the gist id."""
        data = self._api_request(
            "POST",
            "/gists",
            token,
            {
                "description": GIST_DESCRIPTION,
                "public": False,
                "files": self._files_payload(entries),
            },
        )
        logger.debug(f"Created gist with ID: {data['id']}")
        return data["id"]

    def update_remote(self, token: str, remote_id: str, entries: list[Entry]) -> None:
        """Replace the gist's storage file with the entries."""
        self._api_request(
            "PATCH",
            f"/gists/{remote_id}",
            token,
            {"description": GIST_DESCRIPTION, "files": self._files_payload(entries)},
        )
        logger.debug(f"Updated gist with ID: {remote_id}")

    def fetch_remote(self, token: str, remote_id: str) -> list[Entry] | None:
        """Fetch entries from a gist. Returns None if it has no storage file."""
        data = self._api_request("GET", f"/gists/{remote_id}", token)
        gist_file = data.get("files", {}).get(GIST_FILENAME)
        if not gist_file or not gist_file.get("content"):
            logger.warning(f"Gist does not contain {GIST_FILENAME}")
            return None

        try:
            items = json.loads(gist_file["content"])
            entries = [Entry.from_dict(item) for item in items]
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Gist {remote_id} holds malformed entries: {e}", body=gist_file["content"]) from e

        logger.debug(f"Fetched {len(entries)} entries from gist with ID: {remote_id}")
        return entries

    def is_online(self) -> bool:
        """Lightweight reachability check with a 3 second timeout."""
        try:
            return self._session.get(ZEN_URL, timeout=3).ok
        except requests.RequestException as e:
            logger.debug(f"Internet check failed: {e}")
            return False
