import unittest

import requests

from ambient.data_sources import unsplash_client
from ambient.data_sources.base import ProviderError, UntrustedUrlError


class DummyResp:
    def __init__(self, payload=None, status_error=None):
        self._payload = payload
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error

    def json(self):
        return self._payload


class RecordingSession:
    def __init__(self, resp):
        self.resp = resp
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.resp


def _photo_payload():
    return {
        "id": "abc",
        "urls": {"regular": "https://images.unsplash.com/photo-1"},
        "user": {"name": "Ada Lovelace", "links": {"html": "https://unsplash.com/@ada"}},
        "links": {"download_location": "https://api.unsplash.com/photos/abc/download?ixid=xyz"},
    }


class TestUnsplashClient(unittest.TestCase):
    def setUp(self):
        self._orig_session = unsplash_client.session

    def tearDown(self):
        unsplash_client.session = self._orig_session

    def test_fetch_random_photo(self):
        session = RecordingSession(DummyResp(_photo_payload()))
        unsplash_client.session = session

        photo = unsplash_client.fetch_random_photo(1920, 1080, "winter snow", access_key="k3y")
        self.assertEqual(photo.url, "https://images.unsplash.com/photo-1?w=1920&h=1080&fit=crop&q=85")
        self.assertEqual(photo.author, "Ada Lovelace")
        self.assertEqual(photo.author_url, "https://unsplash.com/@ada")
        self.assertEqual(photo.download_location, "https://api.unsplash.com/photos/abc/download?ixid=xyz")

        url, kwargs = session.calls[0]
        self.assertTrue(url.endswith("/photos/random"))
        self.assertEqual(kwargs["params"]["query"], "winter snow")
        self.assertEqual(kwargs["params"]["orientation"], "landscape")
        self.assertEqual(kwargs["headers"]["Authorization"], "Client-ID k3y")

    def test_unparsable_photo(self):
        unsplash_client.session = RecordingSession(DummyResp({"errors": ["Rate Limit Exceeded"]}))

        with self.assertRaises(ProviderError) as ctx:
            unsplash_client.fetch_random_photo(800, 600, "night", access_key="k3y")
        self.assertIn("Failed to parse photo data", str(ctx.exception))

    def test_http_failure(self):
        unsplash_client.session = RecordingSession(DummyResp(status_error=requests.HTTPError("401")))

        with self.assertRaises(ProviderError) as ctx:
            unsplash_client.fetch_random_photo(800, 600, "night", access_key="bad")
        self.assertIn("Failed to fetch photo", str(ctx.exception))

    def test_trigger_download(self):
        session = RecordingSession(DummyResp())
        unsplash_client.session = session

        unsplash_client.trigger_download("https://api.unsplash.com/photos/abc/download", access_key="k3y")
        url, kwargs = session.calls[0]
        self.assertEqual(url, "https://api.unsplash.com/photos/abc/download")
        self.assertEqual(kwargs["headers"]["Authorization"], "Client-ID k3y")

    def test_trigger_download_failure(self):
        unsplash_client.session = RecordingSession(DummyResp(status_error=requests.HTTPError("404")))

        with self.assertRaises(ProviderError) as ctx:
            unsplash_client.trigger_download("https://api.unsplash.com/photos/abc/download", access_key="k3y")
        self.assertIn("Failed to trigger download", str(ctx.exception))

    def test_trigger_download_rejects_foreign_host(self):
        session = RecordingSession(DummyResp())
        unsplash_client.session = session

        for url in (
            "http://attacker.example/steal",
            "http://api.unsplash.com/photos/abc/download",
            "https://api.unsplash.com.attacker.example/photos/abc/download",
        ):
            with self.assertRaises(UntrustedUrlError):
                unsplash_client.trigger_download(url, access_key="k3y")
        self.assertEqual(session.calls, [])


if __name__ == "__main__":
    unittest.main()
