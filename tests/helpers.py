"""Shared builders for unit tests: settings, mock service and sample bodies."""

import sys
from pathlib import Path

# Allow importing mailosaur_client when running from project root without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from mailosaur_client import ClientSettings, MailosaurClient
from mailosaur_client.testing import MockMailosaurService

API_KEY = "test-api-key"
SERVER = "abc123"

HTML_BODY = (
    '<div dir="ltr"><img src="https://mailosaur.com/favicon.ico" />'
    "<p>this is a test.</p><p>{token} html</p>"
    '<p><a href="https://mailosaur.com/">mailosaur</a></p>'
    '<p><a href="https://mailosaur.com/"><img src="cid:ii_1435fadb31d523f6" alt="Inline image 1" /></a></p>'
    '<p><a href="http://invalid/">invalid</a></p></div>'
)
TEXT_BODY = (
    "this is a test.\n\n"
    "this is a link: https://mailosaur.com/\n\n"
    "{token} text\n\n"
    "https://mailosaur.com/\n"
)

CAT_PNG = bytes(range(256)) * 320 + b"\x89PNG"
DOG_PNG = bytes(range(256)) * 828 + b"\x00" * 112


def make_settings(**overrides) -> ClientSettings:
    values = {"api_key": API_KEY, "poll_interval": 0.01, "wait_timeout": 0.5}
    values.update(overrides)
    return ClientSettings(**values)


def make_client(service: MockMailosaurService, **overrides) -> MailosaurClient:
    return MailosaurClient(make_settings(**overrides), transport=service.transport())


def add_test_message(service: MockMailosaurService, token: str, sent_to: str | None = None, **kwargs) -> str:
    """Deliver a message shaped like the integration fixture's test email."""
    return service.add_message(
        kwargs.pop("server", SERVER),
        subject=f"{token} subject",
        sent_to=sent_to or f"{token}.{SERVER}@mailosaur.io",
        sender=f"{token}.sender@mailosaur.io",
        html=HTML_BODY.format(token=token),
        text=TEXT_BODY.format(token=token),
        attachments=(
            ("cat.png", "image/png", CAT_PNG),
            ("dog.png", "image/png", DOG_PNG),
        ),
        **kwargs,
    )
