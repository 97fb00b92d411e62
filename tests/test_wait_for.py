"""Tests for messages.wait_for polling, deadline and cancellation."""

import asyncio
import time
import unittest
from datetime import datetime, timedelta, timezone

import httpx

from helpers import API_KEY, SERVER, add_test_message, make_client, make_settings

from mailosaur_client import MailosaurClient, NotFoundError, ValidationError, WaitTimeoutError
from mailosaur_client.testing import MockMailosaurService


def _search_calls(service: MockMailosaurService) -> int:
    return sum(1 for r in service.requests if r.url.path == "/api/messages/search")


class TestWaitFor(unittest.TestCase):
    def setUp(self):
        self.service = MockMailosaurService(api_key=API_KEY, servers=(SERVER,))
        self.address = f"wait_for_test.{SERVER}@mailosaur.io"

    def test_returns_full_email_once_it_arrives(self):
        """Polls until the message lands, then fetches it in full."""

        async def run():
            async with make_client(self.service) as client:

                async def deliver():
                    await asyncio.sleep(0.05)
                    return add_test_message(self.service, "late", sent_to=self.address)

                delivery = asyncio.create_task(deliver())
                email = await client.messages.wait_for(SERVER, {"sentTo": self.address}, timeout=2)
                return email, await delivery

        email, delivered_id = asyncio.run(run())
        self.assertEqual(email.id, delivered_id)
        self.assertFalse(email.is_summary)
        self.assertEqual(email.to[0].address, self.address)
        self.assertGreaterEqual(_search_calls(self.service), 2)

    def test_times_out_with_distinct_error(self):
        async def run():
            async with make_client(self.service) as client:
                await client.messages.wait_for(SERVER, {"sentTo": self.address}, timeout=0.1)

        started = time.monotonic()
        with self.assertRaises(WaitTimeoutError):
            asyncio.run(run())
        self.assertLess(time.monotonic() - started, 2)
        self.assertGreaterEqual(_search_calls(self.service), 2)

    def test_default_timeout_comes_from_settings(self):
        async def run():
            async with make_client(self.service, wait_timeout=0.05) as client:
                await client.messages.wait_for(SERVER, {"subject": "never"})

        with self.assertRaises(WaitTimeoutError):
            asyncio.run(run())

    def test_ignores_messages_received_before_the_call(self):
        add_test_message(
            self.service, "early", sent_to=self.address, received=datetime.now(timezone.utc) - timedelta(minutes=1)
        )

        async def run():
            async with make_client(self.service) as client:
                await client.messages.wait_for(SERVER, {"sentTo": self.address}, timeout=0.05)

        with self.assertRaises(WaitTimeoutError):
            asyncio.run(run())

    def test_default_window_tolerates_clock_skew(self):
        """A service clock a couple of seconds behind still matches new mail."""
        message_id = add_test_message(
            self.service, "skewed", sent_to=self.address, received=datetime.now(timezone.utc) - timedelta(seconds=2)
        )

        async def run():
            async with make_client(self.service) as client:
                return await client.messages.wait_for(SERVER, {"sentTo": self.address}, timeout=0.5)

        self.assertEqual(asyncio.run(run()).id, message_id)

    def test_stalled_request_is_bounded_by_timeout(self):
        async def slow_handler(request):
            await asyncio.sleep(3)
            return httpx.Response(200, json={"items": []})

        async def run():
            async with MailosaurClient(make_settings(), transport=httpx.MockTransport(slow_handler)) as client:
                await client.messages.wait_for(SERVER, {"sentTo": self.address}, timeout=0.3)

        started = time.monotonic()
        with self.assertRaises(WaitTimeoutError):
            asyncio.run(run())
        self.assertLess(time.monotonic() - started, 1.5)

    def test_received_after_widens_the_window(self):
        since = datetime.now(timezone.utc) - timedelta(minutes=1)
        message_id = add_test_message(self.service, "early", sent_to=self.address)

        async def run():
            async with make_client(self.service) as client:
                return await client.messages.wait_for(
                    SERVER, {"sentTo": self.address}, timeout=0.5, received_after=since
                )

        self.assertEqual(asyncio.run(run()).id, message_id)

    def test_earliest_match_wins(self):
        now = datetime.now(timezone.utc)
        later = add_test_message(self.service, "second", sent_to=self.address, received=now + timedelta(seconds=2))
        first = add_test_message(self.service, "first", sent_to=self.address, received=now + timedelta(seconds=1))

        async def run():
            async with make_client(self.service) as client:
                return await client.messages.wait_for(SERVER, {"sentTo": self.address}, received_after=now)

        email = asyncio.run(run())
        self.assertEqual(email.id, first)
        self.assertNotEqual(email.id, later)

    def test_other_errors_are_not_retried(self):
        async def run():
            async with make_client(self.service) as client:
                await client.messages.wait_for("unknown-server", {"subject": "x"}, timeout=5)

        started = time.monotonic()
        with self.assertRaises(NotFoundError):
            asyncio.run(run())
        self.assertLess(time.monotonic() - started, 1)
        self.assertEqual(_search_calls(self.service), 1)

    def test_invalid_criteria_and_timeout_rejected(self):
        async def run():
            async with make_client(self.service) as client:
                with self.assertRaises(ValidationError):
                    await client.messages.wait_for(SERVER, {})
                with self.assertRaises(ValidationError):
                    await client.messages.wait_for(SERVER, {"sentTo": "nope"})
                with self.assertRaises(ValidationError):
                    await client.messages.wait_for(SERVER, {"subject": "x"}, timeout=0)

        asyncio.run(run())
        self.assertEqual(self.service.requests, [])

    def test_can_be_cancelled_by_caller(self):
        async def run():
            async with make_client(self.service) as client:
                await asyncio.wait_for(
                    client.messages.wait_for(SERVER, {"subject": "never"}, timeout=30),
                    timeout=0.05,
                )

        started = time.monotonic()
        with self.assertRaises(asyncio.TimeoutError):
            asyncio.run(run())
        self.assertLess(time.monotonic() - started, 2)


if __name__ == "__main__":
    unittest.main()
