"""Account notification emails sent through the SendGrid v3 HTTP API.

Sends are fire-and-forget: routes schedule them as background tasks, and a
failed send is logged, never raised to the caller.
"""
import logging
import httpx
import tasktracker.config as cfg

logger = logging.getLogger(__name__)

SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"


def _send(to: str, subject: str, text: str) -> bool:
    if not cfg.SENDGRID_API_KEY:
        logger.debug("Email disabled, skipping %r to %s", subject, to)
        return False
    body = {
        "personalizations": [{"to": [{"email": to}]}],
        "from": {"email": cfg.EMAIL_FROM},
        "subject": subject,
        "content": [{"type": "text/plain", "value": text}],
    }
    headers = {
        "Authorization": f"Bearer {cfg.SENDGRID_API_KEY}",
        "Content-Type": "application/json",
    }
    try:
        response = httpx.post(SENDGRID_URL, json=body, headers=headers, timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Email %r to %s failed: %s", subject, to, e)
        return False
    return True


def send_welcome_email(email: str, name: str) -> bool:
    return _send(
        email,
        "Thanks for joining in!",
        f"Welcome to the app, {name}. Let me know how you get along with the app.",
    )


def send_cancellation_email(email: str, name: str) -> bool:
    return _send(
        email,
        "Account cancellation confirmation.",
        f"{name}, we're sorry to see you go. Can you tell us about what lead you to this decision?",
    )
