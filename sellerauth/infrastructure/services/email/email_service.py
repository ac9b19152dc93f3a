"""SMTP delivery of one-time codes with fastapi-mail and Jinja2 templates.

In test mode (forced in development and test environments) messages are
rendered and logged but never handed to an SMTP server.
"""

from pathlib import Path
from typing import Any, Optional

import structlog
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from jinja2 import Environment, FileSystemLoader, TemplateError

from sellerauth.core.exceptions import EmailServiceError
from sellerauth.core.logging import mask_email
from sellerauth.domain.interfaces.services import IEmailSender
from sellerauth.domain.value_objects.email_dispatch import EmailDispatchResult
from sellerauth.domain.value_objects.otp import OtpPurpose

logger = structlog.get_logger(__name__)

_TEMPLATES = {
    OtpPurpose.EMAIL_VERIFICATION: ("verification.html", "Verify your email address"),
    OtpPurpose.PASSWORD_RESET: ("password_reset.html", "Reset your password"),
}


class EmailService(IEmailSender):
    """Infrastructure email service for sending OTP emails.

    ``initialize`` must run before the first send; it builds the template
    environment and, outside test mode, the SMTP connection.

    Attributes:
        jinja_env: Jinja2 environment for template rendering
        fastmail: FastMail instance, ``None`` in test mode
    """

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        from_email: str,
        from_name: str,
        templates_dir: str,
        smtp_username: Optional[str] = None,
        smtp_password: Optional[str] = None,
        use_tls: bool = True,
        use_ssl: bool = False,
        test_mode: bool = False,
        app_name: str = "Seller Auth",
        otp_expire_minutes: int = 10,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.from_email = from_email
        self.from_name = from_name
        self.templates_dir = Path(templates_dir)
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password
        self.use_tls = use_tls
        self.use_ssl = use_ssl
        self.test_mode = test_mode
        self.app_name = app_name
        self.otp_expire_minutes = otp_expire_minutes
        self.jinja_env: Optional[Environment] = None
        self.fastmail: Optional[FastMail] = None

    @classmethod
    def from_settings(cls, settings) -> "EmailService":
        return cls(
            smtp_host=settings.EMAIL_SMTP_HOST,
            smtp_port=settings.EMAIL_SMTP_PORT,
            from_email=settings.EMAIL_FROM_EMAIL,
            from_name=settings.EMAIL_FROM_NAME,
            templates_dir=settings.EMAIL_TEMPLATES_DIR,
            smtp_username=settings.EMAIL_SMTP_USERNAME,
            smtp_password=settings.EMAIL_SMTP_PASSWORD.get_secret_value() if settings.EMAIL_SMTP_PASSWORD else None,
            use_tls=settings.EMAIL_SMTP_USE_TLS,
            use_ssl=settings.EMAIL_SMTP_USE_SSL,
            test_mode=settings.EMAIL_TEST_MODE,
            app_name=settings.EMAIL_FROM_NAME,
            otp_expire_minutes=settings.OTP_EXPIRE_MINUTES,
        )

    async def initialize(self) -> None:
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        if self.test_mode:
            self.fastmail = None
            logger.info("Email service in test mode - emails will be logged")
            return

        config = ConnectionConfig(
            MAIL_USERNAME=self.smtp_username or "",
            MAIL_PASSWORD=self.smtp_password or "",
            MAIL_FROM=self.from_email,
            MAIL_PORT=self.smtp_port,
            MAIL_SERVER=self.smtp_host,
            MAIL_FROM_NAME=self.from_name,
            MAIL_STARTTLS=self.use_tls,
            MAIL_SSL_TLS=self.use_ssl,
            USE_CREDENTIALS=bool(self.smtp_username and self.smtp_password),
            VALIDATE_CERTS=True,
        )
        self.fastmail = FastMail(config)
        logger.info("FastMail configured", smtp_host=self.smtp_host, smtp_port=self.smtp_port)

    async def send_otp(
        self,
        email: str,
        code: str,
        purpose: OtpPurpose,
        name: Optional[str] = None,
    ) -> EmailDispatchResult:
        template_name, subject = _TEMPLATES[purpose]
        html_content = self._render_template(
            template_name,
            name=name or email,
            otp=code,
            expire_minutes=self.otp_expire_minutes,
            app_name=self.app_name,
        )

        if self.test_mode:
            logger.info(
                "Email sent in test mode",
                to_email=mask_email(email),
                subject=subject,
                purpose=purpose.value,
                html_length=len(html_content),
            )
            return EmailDispatchResult()

        if self.fastmail is None:
            raise EmailServiceError("Email service has not been initialized", code="email_not_initialized")

        message = MessageSchema(
            subject=subject,
            recipients=[email],
            body=html_content,
            subtype=MessageType.html,
        )
        try:
            await self.fastmail.send_message(message)
        except Exception as e:
            logger.error("Email sending failed", to_email=mask_email(email), purpose=purpose.value, error=str(e))
            raise EmailServiceError("Email sending failed", detail=str(e)) from e

        logger.info("Email sent", to_email=mask_email(email), purpose=purpose.value)
        return EmailDispatchResult()

    def _render_template(self, template_name: str, **context: Any) -> str:
        if self.jinja_env is None:
            raise EmailServiceError("Email service has not been initialized", code="email_not_initialized")
        try:
            return self.jinja_env.get_template(template_name).render(**context)
        except TemplateError as e:
            logger.error("Template rendering failed", template=template_name, error=str(e))
            raise EmailServiceError("Template rendering failed", detail=str(e)) from e
