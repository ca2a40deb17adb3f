import os
import unittest

from app.config import Settings


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        previous = os.environ.pop("ECOWATTER_TOKEN_LIFETIME_SECONDS", None)
        try:
            s = Settings()
            self.assertEqual(s.token_lifetime_seconds, 7200)
            self.assertEqual(s.rate_limit_seconds, 3)
            self.assertEqual(s.token_url, "https://digital.iservices.rte-france.com/token/oauth")
            self.assertTrue(s.api_base_url.endswith("/ecowatt/v4/sandbox"))
        finally:
            if previous is not None:
                os.environ["ECOWATTER_TOKEN_LIFETIME_SECONDS"] = previous

    def test_auth_token_env_override(self):
        previous = os.environ.get("ECOWATTER_AUTH_TOKEN")
        try:
            os.environ["ECOWATTER_AUTH_TOKEN"] = "Y2xpZW50OnNlY3JldA=="
            s = Settings()
            self.assertEqual(s.auth_token, "Y2xpZW50OnNlY3JldA==")
        finally:
            if previous is None:
                os.environ.pop("ECOWATTER_AUTH_TOKEN", None)
            else:
                os.environ["ECOWATTER_AUTH_TOKEN"] = previous

    def test_base_url_trailing_slash_is_stripped(self):
        previous = os.environ.get("ECOWATTER_API_BASE_URL")
        try:
            os.environ["ECOWATTER_API_BASE_URL"] = "http://example.com/ecowatt/v4/"
            s = Settings()
            self.assertEqual(s.api_base_url, "http://example.com/ecowatt/v4")
        finally:
            if previous is None:
                os.environ.pop("ECOWATTER_API_BASE_URL", None)
            else:
                os.environ["ECOWATTER_API_BASE_URL"] = previous

    def test_rate_limit_override(self):
        previous = os.environ.get("ECOWATTER_RATE_LIMIT_SECONDS")
        try:
            os.environ["ECOWATTER_RATE_LIMIT_SECONDS"] = "10"
            s = Settings()
            self.assertEqual(s.rate_limit_seconds, 10)
        finally:
            if previous is None:
                os.environ.pop("ECOWATTER_RATE_LIMIT_SECONDS", None)
            else:
                os.environ["ECOWATTER_RATE_LIMIT_SECONDS"] = previous


if __name__ == "__main__":
    unittest.main()
