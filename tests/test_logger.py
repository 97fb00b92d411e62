"""Tests for the structlog processors."""

import unittest

import structlog

from helpers import API_KEY

from mailosaur_client.utils.logger import get_logger, redact_secrets


class TestRedactSecrets(unittest.TestCase):
    def test_masks_credentials_case_insensitively(self):
        event = {"event": "session.init", "api_key": API_KEY, "Authorization": "Basic abc", "path": "api/messages"}
        result = redact_secrets(None, "info", event)
        self.assertEqual(result["api_key"], "***")
        self.assertEqual(result["Authorization"], "***")
        self.assertEqual(result["path"], "api/messages")
        self.assertEqual(result["event"], "session.init")

    def test_get_logger_binds_context(self):
        logger = get_logger("mailosaur_client.test", server="abc123")
        self.assertEqual(structlog.get_context(logger)["server"], "abc123")


if __name__ == "__main__":
    unittest.main()
