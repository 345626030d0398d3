"""Email service using SendGrid."""

import logging

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import settings
from app.constants import NotificationKind

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending transactional emails via SendGrid."""

    @staticmethod
    def _send_email(to_email: str, subject: str, html_content: str) -> bool:
        """Send email via SendGrid. Returns True if successful."""
        if not settings.sendgrid_api_key:
            logger.warning("SendGrid API key not configured, skipping email send")
            return False

        message = Mail(
            from_email=(settings.email_from_address, settings.email_from_name),
            to_emails=to_email,
            subject=subject,
            html_content=html_content,
        )

        try:
            sg = SendGridAPIClient(settings.sendgrid_api_key)
            response = sg.send(message)
            logger.info(f"Email sent to {to_email}, status: {response.status_code}")
            return response.status_code in (200, 201, 202)
        except Exception:
            # Delivery is fire-and-forget; a failed send must not fail the request
            logger.exception(f"Failed to send email to {to_email}")
            return False

    @classmethod
    def send_notification(cls, email: str, kind: str, token: str | None = None) -> bool:
        """Render and send the message for a notification kind."""
        senders = {
            NotificationKind.VERIFICATION: cls.send_verification_email,
            NotificationKind.PASSWORD_RESET: cls.send_password_reset_email,
        }
        if kind in senders:
            return senders[kind](email, token)
        if kind == NotificationKind.WELCOME:
            return cls.send_welcome_email(email)
        if kind == NotificationKind.PASSWORD_CHANGED:
            return cls.send_password_changed_notification(email)
        logger.error("Unknown notification kind: %s", kind)
        return False

    @classmethod
    def send_verification_email(cls, email: str, token: str) -> bool:
        """Send email verification link."""
        verify_url = f"{settings.frontend_url}/verify?token={token}"
        hours = settings.verification_token_expire_hours
        html = f"""
        <h2>Verify Your Email</h2>
        <p>Welcome to {settings.email_from_name}! Click the link below to verify your email address:</p>
        <p><a href="{verify_url}">{verify_url}</a></p>
        <p>This link expires in {hours} hours.</p>
        <p>If you didn't create an account, you can ignore this email.</p>
        """
        return cls._send_email(email, f"Verify Your Email - {settings.email_from_name}", html)

    @classmethod
    def send_welcome_email(cls, email: str) -> bool:
        """Send welcome email after verification."""
        login_url = f"{settings.frontend_url}/login"
        html = f"""
        <h2>Welcome to {settings.email_from_name}!</h2>
        <p>Your email has been verified. Upload a PDF to get your first summary and quiz.</p>
        <p><a href="{login_url}">Log in</a></p>
        """
        return cls._send_email(email, f"Welcome to {settings.email_from_name}!", html)

    @classmethod
    def send_password_reset_email(cls, email: str, token: str) -> bool:
        """Send password reset link."""
        reset_url = f"{settings.frontend_url}/reset-password?token={token}"
        hours = settings.password_reset_token_expire_hours
        html = f"""
        <h2>Reset Your Password</h2>
        <p>We received a request to reset your password. Click the link below to reset it:</p>
        <p><a href="{reset_url}">{reset_url}</a></p>
        <p>This link expires in {hours} hour(s).</p>
        <p>If you didn't request this, you can ignore this email. Your password will remain unchanged.</p>
        """
        return cls._send_email(
            email, f"Password Reset Request - {settings.email_from_name}", html
        )

    @classmethod
    def send_password_changed_notification(cls, email: str) -> bool:
        """Notify user their password was changed."""
        html = """
        <h2>Password Changed</h2>
        <p>Your password was successfully changed. Other devices have been signed out.</p>
        <p>If you didn't make this change, please reset your password immediately.</p>
        """
        return cls._send_email(
            email, f"Your Password Was Changed - {settings.email_from_name}", html
        )
