# ============================================================================
# FILE: songly/core/soundcloud_client.py
# ============================================================================
from typing import Any, Dict, List, Optional
import logging
import threading
import time

import httpx

from songly.config import settings
from songly.core.errors import SonglyError

logger = logging.getLogger(__name__)

TOKEN_ENDPOINT = "oauth2/token"
# Refresh when the token has less than this many seconds left
REFRESH_MARGIN_SECONDS = 300

class SoundcloudError(SonglyError):
    """Upstream SoundCloud API failure"""

    status = 502

    def __init__(self, messages: List[str], status_code: Optional[int] = None):
        super().__init__(messages[0] if messages else "SoundCloud API error")
        self.messages = messages
        self.status_code = status_code

    @property
    def payload(self):
        return self.messages

class SoundcloudClient:
    """
    Client for the SoundCloud API

    Holds the live OAuth tokens; build one per process and share it.
    """

    def __init__(
        self,
        client_id: str = None,
        client_secret: str = None,
        base_url: str = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.client_id = client_id if client_id is not None else settings.SOUNDCLOUD_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else settings.SOUNDCLOUD_CLIENT_SECRET
        self.access_token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self.expires_at: Optional[float] = None

        self._lock = threading.Lock()
        self._http = httpx.Client(
            base_url=(base_url or settings.SOUNDCLOUD_BASE_URL).rstrip("/") + "/",
            headers={"accept": "application/json; charset=utf-8"},
            transport=transport,
            timeout=10.0,
        )

    def close(self) -> None:
        self._http.close()

    def _error_messages(self, response: httpx.Response) -> List[str]:
        try:
            body = response.json()
        except ValueError:
            return [response.reason_phrase or f"HTTP {response.status_code}"]

        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            message = error["message"]
            return message if isinstance(message, list) else [message]
        if isinstance(error, str):
            return [body.get("error_description") or error]
        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            return [e.get("error_message", str(e)) if isinstance(e, dict) else str(e) for e in errors]
        return [response.reason_phrase or f"HTTP {response.status_code}"]

    def request(self, endpoint: str, data: Optional[Dict[str, Any]] = None, method: str = "GET") -> Any:
        """
        General request to the SoundCloud API

        Any endpoint except the token one first makes sure the access token is
        usable. GET sends `data` as query parameters, other methods as JSON.
        """
        data = data or {}
        method = method.upper()
        headers = {}

        if endpoint == TOKEN_ENDPOINT:
            response = self._http.request(method, endpoint, data=data)
        else:
            self.ensure_token()
            headers["Authorization"] = f"OAuth {self.access_token or ''}"
            if method == "GET":
                response = self._http.request(method, endpoint, params=data, headers=headers)
            else:
                response = self._http.request(method, endpoint, json=data, headers=headers)

        if response.is_error:
            messages = self._error_messages(response)
            logger.error(f"SoundCloud API error {response.status_code} on {endpoint}: {messages[0]}")
            raise SoundcloudError(messages, response.status_code)

        return response.json()

    def _store_token(self, res: Dict[str, Any]) -> None:
        self.access_token = res["access_token"]
        self.refresh_token = res.get("refresh_token")
        self.expires_at = time.time() + float(res.get("expires_in", 0))

    def get_access_token(self) -> None:
        """Get a fresh access token with the client-credentials grant"""
        res = self.request(TOKEN_ENDPOINT, {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "client_credentials",
        }, "POST")
        self._store_token(res)
        logger.info("SoundCloud access token acquired")

    def refresh_access_token(self) -> None:
        """Trade the refresh token for a new access token"""
        res = self.request(TOKEN_ENDPOINT, {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "refresh_token",
            "refresh_token": self.refresh_token,
        }, "POST")
        self._store_token(res)
        logger.info("SoundCloud access token refreshed")

    def ensure_token(self) -> None:
        """Fetch a token when expired, refresh it when close to expiring"""
        with self._lock:
            now = time.time()
            if self.expires_at is None or now >= self.expires_at:
                self.get_access_token()
            elif now > self.expires_at - REFRESH_MARGIN_SECONDS:
                if self.refresh_token:
                    self.refresh_access_token()
                else:
                    self.get_access_token()

    def get_track_id(self, link: str) -> str:
        """Resolve a soundcloud.com track URL to its track id"""
        res = self.request("resolve", {"url": link})
        return str(res["id"])

    def get_stream_url(self, track_id: str) -> Optional[str]:
        """Get a playable stream URL for a track, preferring progressive MP3 over HLS"""
        res = self.request(f"tracks/{track_id}/streams")
        for key in ("http_mp3_128_url", "hls_mp3_128_url", "hls_aac_160_url", "hls_opus_64_url"):
            if res.get(key):
                return res[key]
        return None
