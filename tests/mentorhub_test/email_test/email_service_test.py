import unittest
from unittest.mock import MagicMock
from sendgrid.helpers.mail import Mail
from mentorhub.dto.email_dto import EmailMessageDto
from mentorhub.email.email_service import EmailService


class TestEmailService(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.logger = MagicMock()

        self.mock_retry_utils = MagicMock()
        self.mock_retry_utils.get_retry_on_transient.side_effect = (
            lambda fn, *args: fn(*args)
        )

        self.mock_sendgrid_client = MagicMock()
        self.mock_sendgrid_client.send.return_value = MagicMock(
            status_code=202, headers={"X-Message-Id": "msg-123"}
        )

        self.service = EmailService(
            logger=self.logger,
            retry_utils=self.mock_retry_utils,
            sendgrid_client=self.mock_sendgrid_client,
            from_address="noreply@example.org",
            from_name="Mentorship Portal",
        )

    async def test_send(self):
        """Test send an email and report the provider message id."""
        result = await self.service.send(
            to="tunde@example.org",
            subject="Hello",
            html="<p>Hi</p>",
            to_name="Tunde Bello",
            text="Hi",
            reply_to="support@example.org",
        )

        self.assertTrue(result.success)
        self.assertEqual(result.message_id, "msg-123")
        self.mock_retry_utils.get_retry_on_transient.assert_called_once()

        message = self.mock_sendgrid_client.send.call_args.args[0]
        self.assertIsInstance(message, Mail)
        payload = message.get()
        self.assertEqual(payload["subject"], "Hello")
        self.assertEqual(payload["from"]["email"], "noreply@example.org")
        self.assertEqual(payload["reply_to"]["email"], "support@example.org")
        self.assertEqual(
            payload["personalizations"][0]["to"][0]["email"], "tunde@example.org"
        )

    async def test_send_without_client(self):
        """Test a missing provider client is reported, not raised."""
        self.service.sendgrid_client = None

        result = await self.service.send(to="a@example.org", subject="s", html="h")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Email service not configured")
        self.assertFalse(self.service.is_configured())

    async def test_send_without_sender(self):
        """Test a missing sender address is reported, not raised."""
        self.service.from_address = None

        result = await self.service.send(to="a@example.org", subject="s", html="h")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "Email sender not configured")
        self.mock_sendgrid_client.send.assert_not_called()

    async def test_send_without_recipient(self):
        """Test an empty recipient is reported without calling the provider."""
        result = await self.service.send(to="", subject="s", html="h")

        self.assertFalse(result.success)
        self.mock_sendgrid_client.send.assert_not_called()

    async def test_send_provider_failure(self):
        """Test a provider exception becomes a failed result."""
        self.mock_sendgrid_client.send.side_effect = RuntimeError("503 unavailable")

        result = await self.service.send(to="a@example.org", subject="s", html="h")

        self.assertFalse(result.success)
        self.assertEqual(result.error, "503 unavailable")
        self.logger.error.assert_called_once()

    async def test_send_bulk(self):
        """Test bulk send counts successes and failures."""
        ok = MagicMock(headers={"X-Message-Id": "ok"})

        def _send(message):
            if message.get()["personalizations"][0]["to"][0]["email"] == "bad@example.org":
                raise RuntimeError("rejected")
            return ok

        self.mock_sendgrid_client.send.side_effect = _send
        emails = [
            EmailMessageDto(to="a@example.org", subject="s", html="h"),
            EmailMessageDto(to="bad@example.org", subject="s", html="h"),
            EmailMessageDto(to="b@example.org", subject="s", html="h"),
        ]

        result = await self.service.send_bulk(emails)

        self.assertTrue(result.success)
        self.assertEqual(result.sent, 2)
        self.assertEqual(result.failed, 1)
        self.assertEqual(result.errors, ["rejected"])

    async def test_send_bulk_all_failed(self):
        """Test bulk send is unsuccessful when nothing was sent."""
        self.service.sendgrid_client = None

        result = await self.service.send_bulk(
            [EmailMessageDto(to="a@example.org", subject="s", html="h")]
        )

        self.assertFalse(result.success)
        self.assertEqual(result.failed, 1)


if __name__ == "__main__":
    unittest.main()
