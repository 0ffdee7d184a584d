"""Tests for the SoundCloud API client, against a mocked transport."""

import json
import time

import httpx
import pytest

from songly.core.soundcloud_client import SoundcloudClient, SoundcloudError


class FakeSoundcloud:
    """Minimal stand-in for the SoundCloud API."""

    def __init__(self):
        self.requests = []
        self.token_count = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/oauth2/token":
            form = dict(httpx.QueryParams(request.content.decode()))
            self.token_count += 1
            if form.get("client_secret") != "secret":
                return httpx.Response(401, json={"error": "invalid_client", "error_description": "Bad client"})
            return httpx.Response(200, json={
                "access_token": f"access-{self.token_count}",
                "refresh_token": f"refresh-{self.token_count}",
                "expires_in": 3600,
                "grant_type": form["grant_type"],
            })

        if request.headers.get("Authorization", "") != f"OAuth access-{self.token_count}":
            return httpx.Response(401, json={"error": {"message": "Unauthorized"}})

        if path == "/resolve":
            if request.url.params.get("url") == "https://soundcloud.com/daftpunkofficialmusic/get-lucky":
                return httpx.Response(200, json={"id": 254111945, "kind": "track"})
            return httpx.Response(404, json={"errors": [{"error_message": "404 - Not Found"}]})

        if path == "/tracks/254111945/streams":
            return httpx.Response(200, json={
                "hls_mp3_128_url": "https://cf-hls-media.sndcdn.com/playlist.m3u8",
                "http_mp3_128_url": "https://cf-media.sndcdn.com/track.mp3",
            })

        return httpx.Response(404, json={"errors": [{"error_message": "404 - Not Found"}]})


@pytest.fixture
def fake():
    return FakeSoundcloud()


@pytest.fixture
def soundcloud(fake):
    client = SoundcloudClient(
        client_id="client",
        client_secret="secret",
        base_url="https://api.soundcloud.test",
        transport=httpx.MockTransport(fake),
    )
    yield client
    client.close()


class TestTokens:
    """Test acquiring and refreshing tokens."""

    def test_gets_token(self, soundcloud):
        soundcloud.get_access_token()
        assert soundcloud.access_token == "access-1"
        assert soundcloud.refresh_token == "refresh-1"
        assert soundcloud.expires_at > time.time()

    def test_refreshes_token(self, soundcloud, fake):
        soundcloud.get_access_token()
        soundcloud.refresh_access_token()
        assert soundcloud.access_token == "access-2"
        assert soundcloud.refresh_token == "refresh-2"
        form = dict(httpx.QueryParams(fake.requests[-1].content.decode()))
        assert form["grant_type"] == "refresh_token"
        assert form["refresh_token"] == "refresh-1"

    def test_ensure_token_fetches_when_missing(self, soundcloud, fake):
        soundcloud.ensure_token()
        assert soundcloud.access_token == "access-1"
        assert fake.token_count == 1

    def test_ensure_token_keeps_fresh_token(self, soundcloud, fake):
        soundcloud.ensure_token()
        soundcloud.ensure_token()
        assert fake.token_count == 1

    def test_ensure_token_refreshes_near_expiry(self, soundcloud, fake):
        soundcloud.ensure_token()
        soundcloud.expires_at = time.time() + 60
        soundcloud.ensure_token()
        assert soundcloud.access_token == "access-2"
        form = dict(httpx.QueryParams(fake.requests[-1].content.decode()))
        assert form["grant_type"] == "refresh_token"

    def test_ensure_token_refetches_after_expiry(self, soundcloud, fake):
        soundcloud.ensure_token()
        soundcloud.expires_at = time.time() - 1
        soundcloud.ensure_token()
        form = dict(httpx.QueryParams(fake.requests[-1].content.decode()))
        assert form["grant_type"] == "client_credentials"

    def test_bad_credentials(self, fake):
        client = SoundcloudClient(
            client_id="client",
            client_secret="wrong",
            base_url="https://api.soundcloud.test",
            transport=httpx.MockTransport(fake),
        )
        with pytest.raises(SoundcloudError) as exc_info:
            client.get_access_token()
        assert exc_info.value.messages == ["Bad client"]
        assert exc_info.value.status_code == 401
        client.close()


class TestRequests:
    """Test API calls."""

    def test_gets_track_id(self, soundcloud):
        link = "https://soundcloud.com/daftpunkofficialmusic/get-lucky"
        assert soundcloud.get_track_id(link) == "254111945"

    def test_sends_oauth_header(self, soundcloud, fake):
        soundcloud.get_track_id("https://soundcloud.com/daftpunkofficialmusic/get-lucky")
        assert fake.requests[-1].headers["Authorization"] == "OAuth access-1"

    def test_gets_stream_url(self, soundcloud):
        assert soundcloud.get_stream_url("254111945") == "https://cf-media.sndcdn.com/track.mp3"

    def test_unknown_track(self, soundcloud):
        with pytest.raises(SoundcloudError) as exc_info:
            soundcloud.get_track_id("https://soundcloud.com/nobody/nothing")
        assert exc_info.value.messages == ["404 - Not Found"]
        assert exc_info.value.to_dict()["error"]["message"] == ["404 - Not Found"]

    def test_post_sends_json(self, soundcloud, fake):
        with pytest.raises(SoundcloudError):
            soundcloud.request("likes/tracks/1", {"note": "hi"}, "POST")
        assert json.loads(fake.requests[-1].content) == {"note": "hi"}
