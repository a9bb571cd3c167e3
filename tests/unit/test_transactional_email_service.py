from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import aiosmtplib
import pytest

from cms.db import schemas
from cms.errors import DeliveryError, ValidationError
from cms.services.transactional_email_service import (
    EmailProvider,
    SmtpEmailService,
    TransactionalEmailConfig,
    TransactionalEmailService,
)


@pytest.fixture
def resend_env(monkeypatch):
    monkeypatch.setenv("EMAIL_PROVIDER", "resend")
    monkeypatch.setenv("RESEND_API_KEY", "re_test")
    monkeypatch.setenv("FROM_EMAIL", "noreply@napps.ng")
    monkeypatch.setenv("FROM_NAME", "NAPPS")
    monkeypatch.delenv("REPLY_TO_EMAIL", raising=False)


def test_config_validate_and_is_configured(monkeypatch, resend_env):
    cfg = TransactionalEmailConfig()
    assert cfg.provider == EmailProvider.RESEND
    assert cfg.is_configured() is True
    assert cfg.validate() == []
    assert cfg.sender == "NAPPS <noreply@napps.ng>"

    monkeypatch.setenv("RESEND_API_KEY", "")
    cfg = TransactionalEmailConfig()
    assert cfg.is_configured() is False
    assert any("RESEND_API_KEY" in e for e in cfg.validate())

    monkeypatch.setenv("EMAIL_PROVIDER", "smtp")
    monkeypatch.setenv("SMTP_HOST", "")
    cfg = TransactionalEmailConfig()
    assert cfg.provider == EmailProvider.SMTP
    assert any("SMTP_HOST" in e for e in cfg.validate())


@pytest.mark.asyncio
async def test_send_via_resend_builds_provider_payload(resend_env):
    svc = TransactionalEmailService()
    with patch("resend.Emails.send", return_value={"id": "msg_123"}) as send:
        receipt = await svc.send({
            "to": ["a@example.com", "b@example.com"],
            "subject": "Hello",
            "html": "<p>Hi</p>",
            "reply_to": "office@napps.ng",
            "tags": [{"name": "category", "value": "test"}],
        })

    assert receipt.id == "msg_123"
    assert receipt.provider == "resend"
    assert receipt.recipients == 2
    params = send.call_args.args[0]
    assert params["from"] == "NAPPS <noreply@napps.ng>"
    assert params["to"] == ["a@example.com", "b@example.com"]
    assert params["html"] == "<p>Hi</p>"
    assert "text" not in params
    assert params["reply_to"] == "office@napps.ng"
    assert params["tags"] == [{"name": "category", "value": "test"}]


@pytest.mark.asyncio
async def test_message_without_body_is_rejected(resend_env):
    svc = TransactionalEmailService()
    with patch("resend.Emails.send") as send:
        with pytest.raises(ValidationError):
            await svc.send(schemas.EmailMessage(to="a@example.com", subject="Empty"))
    send.assert_not_called()


@pytest.mark.asyncio
async def test_unconfigured_provider_raises_delivery_error(monkeypatch, resend_env):
    monkeypatch.setenv("RESEND_API_KEY", "")
    svc = TransactionalEmailService()
    with pytest.raises(DeliveryError) as exc:
        await svc.send(schemas.EmailMessage(to="a@example.com", subject="Hi", text="x"))
    assert exc.value.message == "Email service not configured"


@pytest.mark.asyncio
async def test_provider_failure_carries_diagnostic(resend_env):
    svc = TransactionalEmailService()
    with patch("resend.Emails.send", side_effect=RuntimeError("domain not verified")):
        with pytest.raises(DeliveryError) as exc:
            await svc.send(schemas.EmailMessage(to="a@example.com", subject="Hi", text="x"))
    assert exc.value.detail == "domain not verified"


@pytest.mark.asyncio
async def test_newsletter_is_one_send_with_all_recipients():
    provider = MagicMock()
    provider.name = "fake"
    provider.send = AsyncMock(return_value=schemas.DeliveryReceipt(id="n1", provider="fake", recipients=3))
    svc = TransactionalEmailService(provider_service=provider)

    recipients = ["a@example.com", "b@example.com", "c@example.com"]
    receipt = await svc.send_newsletter(
        recipients, "March Update", "<p>News body</p>", featured_image="https://img.example.com/x.png"
    )

    assert receipt.id == "n1"
    provider.send.assert_awaited_once()
    message = provider.send.await_args.args[0]
    assert message.recipients == recipients
    assert message.subject == "NAPPS Newsletter - March Update"
    assert "<p>News body</p>" in message.html
    assert "https://img.example.com/x.png" in message.html
    assert message.text
    assert [t.model_dump() for t in message.tags] == [{"name": "category", "value": "newsletter"}]


@pytest.mark.asyncio
async def test_newsletter_failure_aborts_whole_batch():
    provider = MagicMock()
    provider.name = "fake"
    provider.send = AsyncMock(side_effect=DeliveryError("Email sending failed: rate limited"))
    svc = TransactionalEmailService(provider_service=provider)

    with pytest.raises(DeliveryError):
        await svc.send_newsletter(["a@example.com", "b@example.com"], "T", "C")
    assert provider.send.await_count == 1


@pytest.mark.asyncio
async def test_newsletter_validates_recipients_before_sending():
    provider = MagicMock()
    provider.send = AsyncMock()
    svc = TransactionalEmailService(provider_service=provider)

    with pytest.raises(ValidationError):
        await svc.send_newsletter([], "T", "C")
    with pytest.raises(ValidationError):
        await svc.send_newsletter(["broken"], "T", "C")
    provider.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_event_notification_renders_details():
    provider = MagicMock()
    provider.name = "fake"
    provider.send = AsyncMock(return_value=schemas.DeliveryReceipt(id="e1", provider="fake", recipients=1))
    svc = TransactionalEmailService(provider_service=provider)

    await svc.send_event_notification(
        ["a@example.com"],
        event_name="Annual Conference",
        event_date=datetime(2025, 3, 14, 10, 0),
        event_location="Abuja",
        description="Proprietors meet.",
        registration_link="https://napps.ng/register",
    )

    message = provider.send.await_args.args[0]
    assert message.subject == "Event Notification - Annual Conference"
    assert "14 March 2025" in message.html
    assert "Abuja" in message.html
    assert "https://napps.ng/register" in message.html
    assert "Register: https://napps.ng/register" in message.text
    assert message.tags[0].value == "event-notification"


@pytest.mark.asyncio
async def test_smtp_provider_sends_single_message(monkeypatch):
    monkeypatch.setenv("EMAIL_PROVIDER", "smtp")
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "587")
    monkeypatch.setenv("SMTP_USE_TLS", "true")
    monkeypatch.delenv("SMTP_USERNAME", raising=False)
    monkeypatch.delenv("SMTP_PASSWORD", raising=False)
    monkeypatch.setenv("FROM_EMAIL", "noreply@napps.ng")
    svc = TransactionalEmailService()
    assert isinstance(svc.provider_service, SmtpEmailService)
    conn = MagicMock()
    conn.login = AsyncMock()
    conn.send_message = AsyncMock(return_value=({}, "250 OK"))
    smtp_cls = MagicMock()
    smtp_cls.return_value.__aenter__.return_value = conn
    smtp_cls.return_value.__aexit__.return_value = False

    with patch("aiosmtplib.SMTP", smtp_cls):
        receipt = await svc.send(schemas.EmailMessage(
            to=["a@example.com", "b@example.com"], subject="Hi", html="<b>Hi</b>", text="Hi"
        ))

    assert receipt.provider == "smtp"
    assert receipt.recipients == 2
    smtp_cls.assert_called_once_with(hostname="smtp.example.com", port=587, start_tls=True)
    conn.login.assert_not_awaited()
    conn.send_message.assert_awaited_once()
    mime = conn.send_message.await_args.args[0]
    assert mime["To"] == "a@example.com, b@example.com"
    assert mime["Subject"] == "Hi"
    assert receipt.id == mime["Message-ID"]


@pytest.mark.asyncio
async def test_smtp_provider_failure_is_delivery_error(monkeypatch):
    monkeypatch.setenv("EMAIL_PROVIDER", "smtp")
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_USERNAME", "mailer")
    monkeypatch.setenv("SMTP_PASSWORD", "secret")
    monkeypatch.setenv("FROM_EMAIL", "noreply@napps.ng")

    conn = MagicMock()
    conn.login = AsyncMock()
    conn.send_message = AsyncMock(side_effect=aiosmtplib.SMTPException("relay refused"))
    smtp_cls = MagicMock()
    smtp_cls.return_value.__aenter__.return_value = conn
    smtp_cls.return_value.__aexit__.return_value = False

    svc = TransactionalEmailService()
    with patch("aiosmtplib.SMTP", smtp_cls):
        with pytest.raises(DeliveryError) as exc:
            await svc.send(schemas.EmailMessage(to="a@example.com", subject="Hi", text="Hi"))

    conn.login.assert_awaited_once_with("mailer", "secret")
    assert "relay refused" in exc.value.detail


def test_html_to_text_conversion():
    svc = TransactionalEmailService(provider_service=MagicMock())
    html = "<html><body>Hello &amp; world &lt;3&gt; &#39;quote&#39;</body></html>"
    assert "Hello & world <3> 'quote'" in svc._html_to_text(html)


@pytest.mark.asyncio
async def test_unknown_provider_disables_sending_only(monkeypatch):
    monkeypatch.setenv("EMAIL_PROVIDER", "carrier-pigeon")

    svc = TransactionalEmailService()
    assert svc.provider_service is None
    status = svc.status()
    assert status["provider"] == "carrier-pigeon"
    assert status["configured"] is False
    assert any("carrier-pigeon" in e for e in status["errors"])

    with pytest.raises(DeliveryError):
        await svc.send(schemas.EmailMessage(to="a@example.com", subject="Hi", text="Hi"))
