import smtplib
from unittest.mock import patch

import pytest

import mailer
from database import create_document
from mailer import MailerNotConfigured, batched, send_broadcast


@pytest.fixture
def smtp():
    with patch("mailer.smtplib.SMTP") as smtp_cls:
        yield smtp_cls.return_value


@pytest.fixture
def subscribers(admin):
    for i in range(4):
        create_document("user", {"email": f"fan{i}@example.com", "name": f"fan{i}", "role": "user"})


def test_batched():
    assert batched(["a", "b", "c"], 2) == [["a", "b"], ["c"]]


def test_broadcast_sends_in_bcc_batches(smtp, monkeypatch):
    monkeypatch.setattr(mailer.Config, "EMAIL_BATCH_SIZE", 2)
    result = send_broadcast(["a@x.com", "b@x.com", "c@x.com"], "owner@robusta.in", "News", "Fresh beans")

    assert result == {"success": True, "recipientCount": 3, "batches": 2}
    assert smtp.send_message.call_count == 2
    first = smtp.send_message.call_args_list[0]
    assert first.kwargs["to_addrs"] == ["a@x.com", "b@x.com"]
    assert first.kwargs["from_addr"] == "admin@robusta.in"
    msg = first.args[0]
    assert msg["Bcc"] is None
    assert msg["To"] is None
    assert msg["From"] == "Robusta Admin <owner@robusta.in>"
    smtp.starttls.assert_called_once()
    smtp.quit.assert_called_once()


def test_broadcast_rejects_empty_list(smtp):
    with pytest.raises(ValueError):
        send_broadcast([], "owner@robusta.in", "News", "Fresh beans")
    smtp.send_message.assert_not_called()


def test_missing_credentials(monkeypatch):
    monkeypatch.setattr(mailer.Config, "EMAIL_PASS", None)
    with pytest.raises(MailerNotConfigured):
        send_broadcast(["a@x.com"], "owner@robusta.in", "News", "Fresh beans")


def test_recipients(client, admin_headers, subscribers):
    res = client.get("/api/marketing/recipients", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["totalRecipients"] == 5


def test_broadcast_endpoint(client, admin_headers, subscribers, smtp):
    res = client.post("/api/marketing/broadcast", headers=admin_headers, json={"subject": "News", "textContent": "Fresh beans"})
    assert res.status_code == 200
    assert res.json()["recipientCount"] == 5
    sent = smtp.send_message.call_args.kwargs["to_addrs"]
    assert "fan3@example.com" in sent
    assert str(smtp.send_message.call_args.args[0]["From"]) == "owner <owner@robusta.in>"


def test_broadcast_requires_subject_and_content(client, admin_headers, smtp):
    res = client.post("/api/marketing/broadcast", headers=admin_headers, json={"subject": "News"})
    assert res.status_code == 400
    assert res.json()["message"] == "Subject and content are required"
    smtp.send_message.assert_not_called()


def test_broadcast_smtp_failure(client, admin_headers, subscribers, smtp):
    smtp.send_message.side_effect = OSError("connection reset")
    res = client.post("/api/marketing/broadcast", headers=admin_headers, json={"subject": "News", "textContent": "x"})
    assert res.status_code == 500
    assert res.json()["message"].startswith("Error sending email")


def test_test_email(client, admin_headers, smtp):
    res = client.post("/api/marketing/test", headers=admin_headers, json={"to": "me@example.com", "subject": "Hi", "textContent": "Preview"})
    assert res.status_code == 200
    assert smtp.send_message.call_args.kwargs["to_addrs"] == ["me@example.com"]


def test_templates(client, admin_headers):
    res = client.post("/api/marketing/template", headers=admin_headers, json={
        "templateName": "welcome", "subject": "Welcome", "htmlContent": "<p>Hi</p>",
    })
    assert res.status_code == 201
    assert res.json()["template"]["template_name"] == "welcome"
    assert [t["template_name"] for t in client.get("/api/marketing/templates", headers=admin_headers).json()] == ["welcome"]

    res = client.post("/api/marketing/template", headers=admin_headers, json={"templateName": "empty"})
    assert res.status_code == 400


def test_failed_login_closes_the_connection(smtp):
    smtp.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
    with pytest.raises(smtplib.SMTPAuthenticationError):
        send_broadcast(["a@x.com"], "owner@robusta.in", "News", "Fresh beans")
    smtp.close.assert_called_once()
    smtp.send_message.assert_not_called()
