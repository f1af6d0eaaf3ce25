"""
SMTP email delivery with Jinja2 templates.

Each template ``<name>`` is a pair of files in ``templates/``:
``<name>.html`` for the body and ``<name>_subject.txt`` for the subject.
Delivery happens on a small thread pool so requests never wait on SMTP.
"""

import smtplib
from concurrent.futures import Future, ThreadPoolExecutor
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.config.settings import Settings, settings as app_settings
from app.core.logging import get_logger

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


class EmailProvider:
    """Renders and sends transactional emails."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.config = config or app_settings
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(['html', 'xml'])
        )
        self._executor = executor

    @property
    def enabled(self) -> bool:
        return self.config.email_enabled

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="email")
        return self._executor

    def render(self, template_name: str, context: Dict[str, Any]) -> Dict[str, str]:
        """Render subject and HTML body for a template."""
        context = {"app_name": self.config.APP_NAME, "currency": self.config.CURRENCY, **context}
        subject = self.env.get_template(f"{template_name}_subject.txt").render(**context)
        content = self.env.get_template(f"{template_name}.html").render(**context)
        return {"subject": " ".join(subject.split()), "content": content}

    def send(
        self,
        to_address: str,
        template_name: str,
        context: Dict[str, Any],
    ) -> Optional[Future]:
        """
        Queue an email for delivery.

        Returns:
            The delivery future, or None when email is not configured
        """
        if not self.enabled:
            logger.debug("Email disabled, skipping", extra={"template": template_name})
            return None

        rendered = self.render(template_name, context)
        return self._get_executor().submit(
            self._deliver, to_address, rendered["subject"], rendered["content"]
        )

    def _deliver(self, to_address: str, subject: str, content: str) -> bool:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = formataddr((self.config.EMAIL_FROM_NAME, self.config.EMAIL_FROM_ADDRESS))
        message["To"] = to_address
        message.attach(MIMEText(content, "html", "utf-8"))

        try:
            with smtplib.SMTP(self.config.SMTP_HOST, self.config.SMTP_PORT, timeout=10) as server:
                if self.config.SMTP_TLS:
                    server.starttls()
                if self.config.SMTP_USER and self.config.SMTP_PASSWORD:
                    server.login(self.config.SMTP_USER, self.config.SMTP_PASSWORD)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Email delivery failed: {e}", extra={"recipient": to_address})
            return False

        logger.info("Email sent", extra={"recipient": to_address, "subject": subject})
        return True
