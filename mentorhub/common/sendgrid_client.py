import os
from sendgrid import SendGridAPIClient
from mentorhub.common.environment_constants import SENDGRID_API_KEY


class SendGridClient:
    """
    Creates and caches the SendGrid API client.

    A missing or placeholder API key does not fail application start-up:
    the cached client is None and the email service reports
    "Email service not configured" for every send.
    """

    def __init__(self, logger, api_key: str | None = None):
        """
        Initialize the SendGrid client wrapper.

        Args:
            logger: Logger instance for logging.
            api_key (str | None): API key; read from SENDGRID_API_KEY when omitted.
        """
        self.logger = logger
        self._api_key = api_key if api_key is not None else os.getenv(SENDGRID_API_KEY)
        self._sendgrid_client = self.create_sendgrid_client()

    def create_sendgrid_client(self) -> SendGridAPIClient | None:
        """
        Create the SendGrid client when a usable API key is configured.

        Returns:
            SendGridAPIClient | None: The client, or None when not configured.
        """
        if not self._api_key:
            self.logger.warning(
                "[SendGridClient] %s missing from environment", SENDGRID_API_KEY
            )
            return None

        if self._api_key.startswith("your_"):
            self.logger.warning(
                "[SendGridClient] %s appears to be a placeholder", SENDGRID_API_KEY
            )
            return None

        client = SendGridAPIClient(self._api_key)
        self.logger.info("Created SendGrid client successfully.")
        return client

    def get_sendgrid_client(self) -> SendGridAPIClient | None:
        """
        Return the cached SendGrid client.

        Returns:
            SendGridAPIClient | None: The client, or None when not configured.
        """
        return self._sendgrid_client
