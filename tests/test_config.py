"""Tests for ClientSettings construction and environment loading."""

import os
import unittest
from unittest import mock

import pydantic

from helpers import API_KEY  # noqa: F401  (puts the project root on sys.path)

from mailosaur_client.config import DEFAULT_BASE_URL, ClientSettings, default_server


class TestClientSettings(unittest.TestCase):
    def test_from_env_reads_all_fields(self):
        env = {
            "MAILOSAUR_API_KEY": "key-from-env",
            "MAILOSAUR_BASE_URL": "https://sandbox.example.test",
            "MAILOSAUR_SMTP_HOST": "smtp.example.test",
            "MAILOSAUR_SMTP_PORT": "2525",
            "MAILOSAUR_TIMEOUT": "5",
            "MAILOSAUR_WAIT_TIMEOUT": "20",
            "MAILOSAUR_POLL_INTERVAL": "0.5",
            "MAILOSAUR_SERVER": "srv42",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = ClientSettings.from_env()
            self.assertEqual(default_server(), "srv42")
        self.assertEqual(settings.api_key.get_secret_value(), "key-from-env")
        self.assertEqual(settings.base_url, "https://sandbox.example.test/")
        self.assertEqual(settings.smtp_host, "smtp.example.test")
        self.assertEqual(settings.smtp_port, 2525)
        self.assertEqual(settings.request_timeout, 5.0)
        self.assertEqual(settings.wait_timeout, 20.0)
        self.assertEqual(settings.poll_interval, 0.5)

    def test_from_env_defaults(self):
        with mock.patch.dict(os.environ, {"MAILOSAUR_API_KEY": "k"}, clear=True):
            settings = ClientSettings.from_env()
        self.assertEqual(settings.base_url, DEFAULT_BASE_URL)
        self.assertEqual(settings.smtp_host, "mailosaur.io")
        self.assertEqual(settings.smtp_port, 25)

    def test_missing_api_key_fails(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValueError) as ctx:
                ClientSettings.from_env()
        self.assertIn("MAILOSAUR_API_KEY", str(ctx.exception))

    def test_api_key_is_not_exposed(self):
        settings = ClientSettings(api_key="super-secret")
        self.assertNotIn("super-secret", repr(settings))
        self.assertNotIn("super-secret", str(settings.model_dump()))

    def test_rejects_blank_key_and_non_positive_timeouts(self):
        with self.assertRaises(pydantic.ValidationError):
            ClientSettings(api_key="   ")
        with self.assertRaises(pydantic.ValidationError):
            ClientSettings(api_key="k", wait_timeout=0)
        with self.assertRaises(pydantic.ValidationError):
            ClientSettings(api_key="k", poll_interval=-1)

    def test_is_frozen(self):
        settings = ClientSettings(api_key="k")
        with self.assertRaises(pydantic.ValidationError):
            settings.base_url = "https://elsewhere.test/"


if __name__ == "__main__":
    unittest.main()
