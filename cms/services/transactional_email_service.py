"""
Transactional Email Service

Sends CMS communications (one-off messages, newsletters, event
notifications) through a transactional email provider.

Supports:
- Resend (default)
- SMTP via aiosmtplib

Every failure surfaces as ``cms.errors.DeliveryError``; bulk sends issue a
single provider call carrying the full recipient list, so a batch either
goes out or fails as a whole.
"""

import os
import re
import logging
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any, List

import aiosmtplib
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, TemplateError, select_autoescape

from cms.db import schemas
from cms.db.query_utils import coerce_payload
from cms.errors import DeliveryError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates" / "email"


class EmailProvider(Enum):
    """Supported email service providers."""
    RESEND = "resend"
    SMTP = "smtp"


class TransactionalEmailConfig:
    """Configuration for transactional email services."""

    def __init__(self):
        # Provider selection; unknown values leave sending disabled
        self.provider_setting = os.getenv('EMAIL_PROVIDER', 'resend').lower()
        try:
            self.provider = EmailProvider(self.provider_setting)
        except ValueError:
            logger.error(f"Unsupported EMAIL_PROVIDER '{self.provider_setting}', email sending disabled")
            self.provider = None

        # Common settings
        self.from_email = os.getenv('FROM_EMAIL', 'noreply@napps.ng')
        self.from_name = os.getenv('FROM_NAME', 'NAPPS')
        self.reply_to_email = os.getenv('REPLY_TO_EMAIL', '')
        self.frontend_url = os.getenv('FRONTEND_URL', '')

        # Resend
        self.resend_api_key = os.getenv('RESEND_API_KEY', '')

        # SMTP
        self.smtp_host = os.getenv('SMTP_HOST', '')
        self.smtp_port = int(os.getenv('SMTP_PORT', '587'))
        self.smtp_username = os.getenv('SMTP_USERNAME', '')
        self.smtp_password = os.getenv('SMTP_PASSWORD', '')
        self.smtp_use_tls = os.getenv('SMTP_USE_TLS', 'true').lower() == 'true'

        # Template configuration
        self.template_dir = os.getenv('EMAIL_TEMPLATE_DIR', str(DEFAULT_TEMPLATE_DIR))

    def is_configured(self) -> bool:
        """Check if the selected provider is properly configured."""
        if self.provider == EmailProvider.RESEND:
            return bool(self.resend_api_key and self.from_email)
        elif self.provider == EmailProvider.SMTP:
            return bool(self.smtp_host and self.smtp_port and self.from_email)
        return False

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.from_email:
            errors.append("FROM_EMAIL is required")

        if self.provider is None:
            errors.append(f"EMAIL_PROVIDER '{self.provider_setting}' is not supported (use resend or smtp)")
        elif self.provider == EmailProvider.RESEND:
            if not self.resend_api_key:
                errors.append("RESEND_API_KEY is required for Resend provider")
        elif self.provider == EmailProvider.SMTP:
            if not self.smtp_host:
                errors.append("SMTP_HOST is required for SMTP provider")
            if not self.smtp_port or self.smtp_port <= 0:
                errors.append("SMTP_PORT must be a positive integer")

        return errors

    @property
    def sender(self) -> str:
        return f"{self.from_name} <{self.from_email}>" if self.from_name else self.from_email


class ResendEmailService:
    """Email service implementation for Resend."""

    name = "resend"

    def __init__(self, config: TransactionalEmailConfig):
        self.config = config
        self.client = None
        self._setup_client()

    def _setup_client(self):
        """Setup Resend client."""
        try:
            import resend
            resend.api_key = self.config.resend_api_key
            self.client = resend
        except ImportError:
            logger.error("Resend library not installed. Install with: pip install resend")
            raise

    async def send(self, message: schemas.EmailMessage) -> schemas.DeliveryReceipt:
        """Send email via Resend."""
        params: Dict[str, Any] = {
            "from": message.from_email or self.config.sender,
            "to": message.recipients,
            "subject": message.subject,
        }
        if message.html:
            params["html"] = message.html
        if message.text:
            params["text"] = message.text
        reply_to = message.reply_to or self.config.reply_to_email
        if reply_to:
            params["reply_to"] = reply_to
        if message.tags:
            params["tags"] = [tag.model_dump() for tag in message.tags]

        try:
            result = self.client.Emails.send(params)
        except Exception as e:
            raise DeliveryError(f"Email sending failed: {e}", detail=str(e)) from e

        return schemas.DeliveryReceipt(
            id=str(result.get("id", "")),
            provider=self.name,
            recipients=len(message.recipients),
        )


class SmtpEmailService:
    """Email service implementation for a plain SMTP relay."""

    name = "smtp"

    def __init__(self, config: TransactionalEmailConfig):
        self.config = config

    def _build_message(self, message: schemas.EmailMessage) -> MIMEMultipart:
        mime = MIMEMultipart('alternative')
        mime['From'] = message.from_email or self.config.sender
        mime['To'] = ", ".join(message.recipients)
        mime['Subject'] = message.subject
        mime['Message-ID'] = make_msgid()

        reply_to = message.reply_to or self.config.reply_to_email
        if reply_to:
            mime['Reply-To'] = reply_to

        # Plain part first so clients prefer HTML when both exist
        if message.text:
            mime.attach(MIMEText(message.text, 'plain', 'utf-8'))
        if message.html:
            mime.attach(MIMEText(message.html, 'html', 'utf-8'))
        return mime

    async def send(self, message: schemas.EmailMessage) -> schemas.DeliveryReceipt:
        """Send email via SMTP."""
        mime = self._build_message(message)
        try:
            async with aiosmtplib.SMTP(
                hostname=self.config.smtp_host,
                port=self.config.smtp_port,
                start_tls=self.config.smtp_use_tls,
            ) as smtp:
                if self.config.smtp_username and self.config.smtp_password:
                    await smtp.login(self.config.smtp_username, self.config.smtp_password)
                await smtp.send_message(mime)
        except (aiosmtplib.SMTPException, OSError) as e:
            raise DeliveryError(f"SMTP sending failed: {e}", detail=str(e)) from e

        return schemas.DeliveryReceipt(
            id=mime['Message-ID'],
            provider=self.name,
            recipients=len(message.recipients),
        )


class TransactionalEmailService:
    """Main transactional email service that delegates to provider implementations."""

    def __init__(self, config: Optional[TransactionalEmailConfig] = None, provider_service=None):
        self.config = config or TransactionalEmailConfig()
        self.provider_service = provider_service
        self.template_env = None
        if self.provider_service is None:
            self._setup_provider()
        self._setup_templates()

    def _setup_provider(self):
        """Setup the email provider service."""
        if not self.config.is_configured():
            logger.warning("Email service not configured")
            return

        if self.config.provider == EmailProvider.RESEND:
            self.provider_service = ResendEmailService(self.config)
            logger.info("Initialized Resend email service")
        elif self.config.provider == EmailProvider.SMTP:
            self.provider_service = SmtpEmailService(self.config)
            logger.info("Initialized SMTP email service")

    def _setup_templates(self):
        """Setup Jinja2 template environment."""
        template_path = Path(self.config.template_dir)
        if not template_path.exists():
            logger.warning(f"Email template directory not found: {template_path}, using packaged templates")
            template_path = DEFAULT_TEMPLATE_DIR
        self.template_env = Environment(
            loader=FileSystemLoader(str(template_path)),
            autoescape=select_autoescape(["html"]),
        )

    @property
    def provider_name(self) -> str:
        return getattr(self.provider_service, "name", self.config.provider_setting)

    async def send(self, message) -> schemas.DeliveryReceipt:
        """
        Send one message via the configured provider.

        Args:
            message: ``EmailMessage`` or a mapping with the same fields

        Returns:
            DeliveryReceipt with the provider's message id

        Raises:
            ValidationError: the message has neither html nor text body
            DeliveryError: provider missing, misconfigured or failing
        """
        message = coerce_payload(schemas.EmailMessage, message)
        if not message.html and not message.text:
            raise ValidationError("Email must have either HTML or text content")

        if not self.provider_service:
            raise DeliveryError("Email service not configured")

        recipients = message.recipients
        logger.info(f"Sending email '{message.subject}' to {len(recipients)} recipient(s) via {self.provider_name}")
        try:
            receipt = await self.provider_service.send(message)
        except DeliveryError as e:
            logger.error(f"Email sending failed: {e.message}")
            raise
        logger.info(f"Email sent successfully via {receipt.provider} with ID: {receipt.id}")
        return receipt

    async def send_newsletter(
        self,
        recipients: List[str],
        title: str,
        content: str,
        featured_image: Optional[str] = None,
    ) -> schemas.DeliveryReceipt:
        request = coerce_payload(schemas.NewsletterRequest, {
            "recipients": recipients,
            "title": title,
            "content": content,
            "featured_image": featured_image,
        })
        html, text = self.render_template("newsletter", {
            "title": request.title,
            "content": request.content,
            "featured_image": request.featured_image,
            "frontend_url": self.config.frontend_url,
        })
        return await self.send(schemas.EmailMessage(
            to=request.recipients,
            subject=f"NAPPS Newsletter - {request.title}",
            html=html,
            text=text,
            tags=[schemas.EmailTag(name="category", value="newsletter")],
        ))

    async def send_event_notification(
        self,
        recipients: List[str],
        event_name: str,
        event_date: datetime,
        event_location: str,
        description: str,
        registration_link: Optional[str] = None,
    ) -> schemas.DeliveryReceipt:
        request = coerce_payload(schemas.EventNotificationRequest, {
            "recipients": recipients,
            "event_name": event_name,
            "event_date": event_date,
            "event_location": event_location,
            "description": description,
            "registration_link": registration_link,
        })
        html, text = self.render_template(
            "event_notification",
            request.model_dump(exclude={"recipients"}),
        )
        return await self.send(schemas.EmailMessage(
            to=request.recipients,
            subject=f"Event Notification - {request.event_name}",
            html=html,
            text=text,
            tags=[schemas.EmailTag(name="category", value="event-notification")],
        ))

    def render_template(self, template_name: str, context: Dict[str, Any]) -> tuple[str, str]:
        """
        Render email template with context.

        Returns:
            Tuple of (html_content, text_content)
        """
        try:
            html_content = self.template_env.get_template(f"{template_name}.html").render(**context)
        except TemplateError as e:
            raise DeliveryError(f"Template rendering failed for {template_name}: {e}") from e

        try:
            text_content = self.template_env.get_template(f"{template_name}.txt").render(**context)
        except TemplateNotFound:
            # Generate basic text content from HTML if no text template
            text_content = self._html_to_text(html_content)
        return html_content, text_content

    def _html_to_text(self, html_content: str) -> str:
        """Convert HTML to basic text content."""
        text = re.sub(r'<[^>]+>', '', html_content)
        text = text.replace('&amp;', '&').replace('&lt;', '<').replace('&gt;', '>')
        text = text.replace('&quot;', '"').replace('&#39;', "'")
        text = re.sub(r'\s+', ' ', text).strip()
        return text

    def status(self) -> Dict[str, Any]:
        """Report configuration state for health checks."""
        errors = self.config.validate()
        return {
            'provider': self.config.provider_setting,
            'configured': self.provider_service is not None and not errors,
            'errors': errors,
        }


# Global email service instance
_email_service = None


def get_transactional_email_service() -> TransactionalEmailService:
    """Get singleton transactional email service instance."""
    global _email_service
    if _email_service is None:
        _email_service = TransactionalEmailService()
    return _email_service


def reset_transactional_email_service_for_tests():
    global _email_service
    _email_service = None
