"""
Tests for templated email delivery.
"""
import smtplib
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.config.settings import Settings
from app.services.notification import EmailProvider
from app.services.notification import email_provider as email_module


class FakeSMTP:
    sent = []
    fail = False

    def __init__(self, host, port, timeout=None):
        self.host = host

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        pass

    def send_message(self, message):
        if FakeSMTP.fail:
            raise smtplib.SMTPException("relay refused")
        FakeSMTP.sent.append(message)


@pytest.fixture
def smtp(monkeypatch):
    FakeSMTP.sent = []
    FakeSMTP.fail = False
    monkeypatch.setattr(email_module.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


@pytest.fixture
def provider():
    config = Settings(
        SMTP_HOST="smtp.example.com",
        EMAIL_FROM_ADDRESS="office@example.com",
        CURRENCY="INR",
    )
    executor = ThreadPoolExecutor(max_workers=1)
    yield EmailProvider(config=config, executor=executor)
    executor.shutdown(wait=True)


def test_render_bill_created(provider):
    rendered = provider.render(
        "bill_created",
        {"student_name": "Asha", "month_year": "2024-05", "total": "900.00", "discount": 100},
    )
    assert rendered["subject"].endswith("bill for 2024-05")
    assert "INR 900.00" in rendered["content"]
    assert "discount" in rendered["content"]


def test_disabled_without_smtp_host():
    provider = EmailProvider(config=Settings(SMTP_HOST=None))
    assert provider.enabled is False
    assert provider.send("asha@example.com", "bill_created", {}) is None


def test_send_delivers(provider, smtp):
    future = provider.send(
        "asha@example.com",
        "room_allocated",
        {"student_name": "Asha", "room_number": "101", "start_date": "2024-06-01"},
    )
    assert future.result(timeout=5) is True
    [message] = smtp.sent
    assert message["To"] == "asha@example.com"


def test_delivery_failure_is_reported_not_raised(provider, smtp):
    smtp.fail = True
    future = provider.send(
        "asha@example.com",
        "payment_received",
        {"month_year": "2024-05", "amount": "10", "method": "cash", "status": "PARTIAL", "balance": "90"},
    )
    assert future.result(timeout=5) is False
