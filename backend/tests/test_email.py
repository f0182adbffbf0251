"""Tests for email rendering and delivery through Resend."""

import json

import httpx
import pytest

from campus_portal.services.approval_service import build_decision_links
from campus_portal.services.email_service import (
    EmailDeliveryError,
    LogMailer,
    OutgoingEmail,
    ResendMailer,
    get_mailer,
    render_template,
)


def test_decision_links():
    approve, reject = build_decision_links("https://portal.inst.edu/", "abc")
    assert approve == "https://portal.inst.edu/approve?token=abc&action=approve"
    assert reject == "https://portal.inst.edu/approve?token=abc&action=reject"


def test_template_omits_empty_description():
    html = render_template(
        "approval_request.html",
        portal_name="campus-portal",
        item_type="shop",
        item_label="Shop",
        item_name="Kiosk",
        submitter_name="Asha",
        submitter_email="asha@inst.edu",
        description="",
        approve_url="https://x/approve?token=t&action=approve",
        reject_url="https://x/approve?token=t&action=reject",
        expiry_days=30,
    )
    assert "Description:" not in html
    assert "New Shop Submission" in html
    assert "expire in 30 days" in html


@pytest.mark.asyncio
async def test_resend_mailer_posts_payload():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers["authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "email-1"})

    mailer = ResendMailer("re_test", "https://api.resend.test/emails", transport=httpx.MockTransport(handler))
    await mailer.send(OutgoingEmail(to=["prof@inst.edu"], subject="Hi", html="<p>x</p>", sender="Portal <a@b.c>"))

    assert captured["auth"] == "Bearer re_test"
    assert captured["body"] == {"from": "Portal <a@b.c>", "to": ["prof@inst.edu"], "subject": "Hi", "html": "<p>x</p>"}


@pytest.mark.asyncio
async def test_resend_mailer_raises_on_provider_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(422, json={"message": "invalid"}))
    mailer = ResendMailer("re_test", "https://api.resend.test/emails", transport=transport)

    with pytest.raises(EmailDeliveryError):
        await mailer.send(OutgoingEmail(to=["prof@inst.edu"], subject="Hi", html="", sender="a@b.c"))


def test_log_mailer_used_without_api_key(monkeypatch):
    from campus_portal.core.config import settings

    monkeypatch.setattr(settings, "resend_api_key", "")
    assert isinstance(get_mailer(), LogMailer)
