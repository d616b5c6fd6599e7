import asyncio
from sendgrid.helpers.mail import Mail, From, To, ReplyTo

from mentorhub.dto.email_dto import (
    EmailMessageDto,
    EmailResultDto,
    BulkEmailResultDto,
)


class EmailService:
    """
    Sends transactional emails through SendGrid.

    `send` never raises to its caller: misconfiguration and provider failures are
    reported through the returned EmailResultDto so lifecycle callers can log and
    continue.
    """

    def __init__(
        self,
        logger,
        retry_utils,
        sendgrid_client,
        from_address: str | None,
        from_name: str | None = None,
    ):
        """
        Initialize the EmailService.

        Args:
            logger: The logger instance for logging messages.
            retry_utils (RetryUtils): Provides the transient-error retry policy.
            sendgrid_client (SendGridAPIClient | None): The provider client, None when unconfigured.
            from_address (str | None): Sender email address.
            from_name (str | None): Sender display name.
        """
        self.logger = logger
        self.retry_utils = retry_utils
        self.sendgrid_client = sendgrid_client
        self.from_address = from_address
        self.from_name = from_name

    def is_configured(self) -> bool:
        """Whether both the provider client and the sender address are available."""
        return bool(self.sendgrid_client and self.from_address)

    def _build_message(
        self,
        to: str,
        subject: str,
        html: str,
        to_name: str | None,
        text: str | None,
        reply_to: str | None,
    ) -> Mail:
        message = Mail(
            from_email=From(self.from_address, self.from_name),
            to_emails=To(to, to_name or to),
            subject=subject,
            html_content=html,
            plain_text_content=text,
        )
        if reply_to:
            message.reply_to = ReplyTo(reply_to)
        return message

    def _send_with_retry(self, message: Mail):
        return self.retry_utils.get_retry_on_transient(
            self.sendgrid_client.send, message
        )

    async def send(
        self,
        to: str,
        subject: str,
        html: str,
        to_name: str | None = None,
        text: str | None = None,
        reply_to: str | None = None,
    ) -> EmailResultDto:
        """
        Send a single email.

        The blocking SendGrid call runs in a worker thread and is retried on
        transient errors.

        Args:
            to (str): Recipient address.
            subject (str): Subject line.
            html (str): HTML body.
            to_name (str | None): Recipient display name; defaults to the address.
            text (str | None): Plain-text alternative.
            reply_to (str | None): Reply-To address.

        Returns:
            EmailResultDto: `success=True` with the provider message id, or
            `success=False` with an error description.
        """
        if not self.sendgrid_client:
            self.logger.error("[EmailService] SendGrid client is not configured")
            return EmailResultDto(success=False, error="Email service not configured")

        if not self.from_address:
            self.logger.error("[EmailService] sender address is not configured")
            return EmailResultDto(success=False, error="Email sender not configured")

        if not to:
            return EmailResultDto(success=False, error="Recipient address is required")

        try:
            message = self._build_message(to, subject, html, to_name, text, reply_to)
            response = await asyncio.to_thread(self._send_with_retry, message)
        except Exception as e:
            self.logger.error(
                "[EmailService] failed to send email to %s (subject=%s): %s",
                to,
                subject,
                e,
            )
            return EmailResultDto(success=False, error=str(e) or "Failed to send email")

        headers = getattr(response, "headers", None) or {}
        message_id = headers.get("X-Message-Id")
        self.logger.info(
            "[EmailService] email sent to %s (subject=%s, message_id=%s)",
            to,
            subject,
            message_id,
        )
        return EmailResultDto(success=True, message_id=message_id)

    async def send_bulk(self, emails: list[EmailMessageDto]) -> BulkEmailResultDto:
        """
        Send several emails concurrently.

        Returns:
            BulkEmailResultDto: Counts of sent and failed messages with the errors.
            `success` is True when at least one email was sent.
        """
        results = await asyncio.gather(
            *(
                self.send(
                    to=email.to,
                    subject=email.subject,
                    html=email.html,
                    to_name=email.to_name,
                    text=email.text,
                    reply_to=email.reply_to,
                )
                for email in emails
            )
        )

        sent = sum(1 for result in results if result.success)
        errors = [result.error for result in results if not result.success]

        return BulkEmailResultDto(
            success=sent > 0,
            sent=sent,
            failed=len(results) - sent,
            errors=[error for error in errors if error],
        )
