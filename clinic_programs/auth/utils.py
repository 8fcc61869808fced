"""
Authentication utility functions for registration notifications.

Delivery is best-effort: callers schedule ``notify_registration`` as a
background task and a failed send is only logged.
"""
import logging
import smtplib
import socket
import ssl
import time
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from datetime import datetime

from ..config import settings

# Set up logging
logger = logging.getLogger(__name__)

# Connection timeout settings
SMTP_TIMEOUT = 30  # seconds
MAX_RETRIES = 3
RETRY_DELAY = 2  # seconds between retries

def email_configured() -> bool:
    """
    Validates that all required email configuration variables are set.

    Returns:
        bool: True if all required config is present, False otherwise
    """
    required_configs = [
        settings.mail_username,
        settings.mail_password,
        settings.mail_from,
        settings.mail_server
    ]
    return all(required_configs)

def build_registration_message(email: str, full_name: str, role: str) -> MIMEMultipart:
    """
    Build the registration confirmation message.

    Args:
        email: Recipient address
        full_name: Recipient's name used in the greeting
        role: Role the account was registered with

    Returns:
        MIMEMultipart: Message ready to send
    """
    html_content = f"""
    <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h1>Registration Confirmation</h1>
                <p>Hello {full_name},</p>
                <p>Welcome to our platform! We are excited to have you on board.</p>
                <p>Your account has been created with the <strong>{role}</strong> role.
                   You can now log in with this email address.</p>
                <p>Best regards,<br>Clinic Programs Team</p>
                <p style="font-size: 12px; color: #777;">&copy; {datetime.now().year} Clinic Programs.</p>
            </div>
        </body>
    </html>
    """

    msg = MIMEMultipart()
    msg["From"] = settings.mail_from
    msg["To"] = email
    msg["Subject"] = "Registration Confirmation"
    msg.attach(MIMEText(html_content, "html"))
    return msg

def send_registration_confirmation_email(email: str, full_name: str, role: str) -> None:
    """
    Sends the registration confirmation email over SMTP with retry logic.

    Args:
        email: Recipient address
        full_name: Recipient's name
        role: Role the account was registered with

    Raises:
        RuntimeError: If email is not configured or sending fails after all retries
    """
    if not email_configured():
        raise RuntimeError("Email configuration is incomplete")

    msg = build_registration_message(email, full_name, role)
    last_exception = None

    for attempt in range(1, MAX_RETRIES + 1):
        try:
            logger.info(f"Email send attempt {attempt}/{MAX_RETRIES} to {email}")
            with smtplib.SMTP(settings.mail_server, settings.mail_port, timeout=SMTP_TIMEOUT) as server:
                server.ehlo()
                if settings.mail_starttls:
                    server.starttls(context=ssl.create_default_context())
                    server.ehlo()
                server.login(settings.mail_username, settings.mail_password)
                server.send_message(msg)
            logger.info(f"Registration confirmation email sent to {email}")
            return

        except (smtplib.SMTPAuthenticationError, smtplib.SMTPRecipientsRefused) as e:
            # Retrying will not fix credentials or a rejected recipient
            logger.error(f"SMTP error on attempt {attempt}: {str(e)}")
            last_exception = e
            break

        except (smtplib.SMTPException, socket.timeout, OSError) as e:
            logger.warning(f"SMTP connection error on attempt {attempt}: {str(e)}")
            last_exception = e
            if attempt < MAX_RETRIES:
                time.sleep(RETRY_DELAY)

    raise RuntimeError(f"Failed to send email after {attempt} attempt(s). Last error: {str(last_exception)}")

def notify_registration(email: str, full_name: str, role: str) -> bool:
    """
    Background task wrapper that never raises.

    Returns:
        bool: True when the email was delivered
    """
    try:
        send_registration_confirmation_email(email, full_name, role)
        return True
    except Exception as e:
        logger.error(f"Failed to send registration confirmation email to {email}: {str(e)}")
        return False
