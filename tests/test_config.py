import os
import unittest

from ambient.config import Settings


class _EnvPatch:
    def __init__(self, **values):
        self.values = values
        self.previous = {}

    def __enter__(self):
        for key, value in self.values.items():
            self.previous[key] = os.environ.get(key)
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        return self

    def __exit__(self, *exc):
        for key, value in self.previous.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        with _EnvPatch(AMBIENT_PHOTO_TTL_SECONDS=None, AMBIENT_DATA_SOURCE=None):
            s = Settings(_env_file=None)
            self.assertEqual(s.photo_ttl_seconds, 1800)
            self.assertEqual(s.weather_ttl_seconds, 1800)
            self.assertEqual(s.data_source, "live")

    def test_ttl_override(self):
        with _EnvPatch(AMBIENT_PHOTO_TTL_SECONDS="60"):
            s = Settings(_env_file=None)
            self.assertEqual(s.photo_ttl_seconds, 60)

    def test_unsplash_key_accepts_unprefixed_name(self):
        with _EnvPatch(AMBIENT_UNSPLASH_ACCESS_KEY=None, UNSPLASH_ACCESS_KEY="from-env"):
            s = Settings(_env_file=None)
            self.assertEqual(s.unsplash_access_key, "from-env")

    def test_base_url_trailing_slash_stripped(self):
        with _EnvPatch(AMBIENT_UNSPLASH_BASE_URL="https://api.unsplash.com/"):
            s = Settings(_env_file=None)
            self.assertEqual(s.unsplash_base_url, "https://api.unsplash.com")


if __name__ == "__main__":
    unittest.main()
