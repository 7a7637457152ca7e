"""
Email Service
Sends login credentials to approved organizations
"""

import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

import aiosmtplib

from careernest.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails"""

    @staticmethod
    def build_credentials_message(to: str, organization_name: str, username: str, password: str) -> MIMEMultipart:
        login_url = f"{settings.FRONTEND_URL}/Role"

        message = MIMEMultipart("alternative")
        message["Subject"] = f"Your {settings.APP_NAME} Credentials"
        message["From"] = settings.EMAIL_FROM
        message["To"] = to

        html_body = f"""
        <html>
          <body style="font-family: Arial, Helvetica, sans-serif; line-height: 1.6; color: #222;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
              <h2 style="color: #0c10cf;">{settings.APP_NAME}: Organization Approved</h2>

              <p>Hi {organization_name or 'Organization'},</p>

              <p>Your organization has been approved. Here are your login credentials:</p>

              <div style="background-color: #f8f9fa; padding: 15px; border-left: 4px solid #0c10cf; margin: 20px 0;">
                <p>Username: <code>{username}</code></p>
                <p>Password: <code>{password}</code></p>
              </div>

              <p>Please change your password after first login.</p>

              <p>
                <a href="{login_url}" style="background-color: #0c10cf; color: white; padding: 10px 16px; text-decoration: none; border-radius: 6px; display: inline-block;">
                  Go to Login
                </a>
              </p>

              <p style="font-size: 12px; color: #666;">If you did not request this, ignore this message.</p>
            </div>
          </body>
        </html>
        """

        text_body = f"""
{settings.APP_NAME}: Organization Approved

Username: {username}
Password: {password}

Login: {login_url}
Please change your password after first login.
        """

        message.attach(MIMEText(text_body, "plain"))
        message.attach(MIMEText(html_body, "html"))
        return message

    @staticmethod
    async def send_credentials_email(to: str, organization_name: str, username: str, password: str) -> bool:
        """
        Send organization login credentials

        Args:
            to: Recipient email
            organization_name: Approved organization's name
            username: Generated username
            password: Generated plaintext password

        Returns:
            True if the email was sent (or previewed without SMTP), False otherwise
        """
        if not to:
            logger.warning("Credentials email skipped: no recipient")
            return False

        try:
            message = EmailService.build_credentials_message(to, organization_name, username, password)

            if not settings.SMTP_HOST:
                # Development mode - no SMTP configured
                logger.info(
                    "EMAIL (development preview) to=%s subject=%s username=%s",
                    to, message["Subject"], username
                )
                return True

            async with aiosmtplib.SMTP(hostname=settings.SMTP_HOST, port=settings.SMTP_PORT) as smtp:
                if settings.SMTP_USER and settings.SMTP_PASSWORD:
                    await smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                await smtp.sendmail(settings.EMAIL_FROM, to, message.as_string())
            logger.info("Credentials email sent to %s", to)
            return True

        except Exception as e:
            logger.warning("Credentials email to %s failed: %s", to, e)
            return False


# Create singleton instance
email_service = EmailService()
