# favsync Session Gate
# Session validation with escalation to an email alert

import logging
from collections.abc import Callable
from datetime import datetime

from favsync.config.schema import Credential
from favsync.notify.mailer import NotificationDispatcher
from favsync.remote.client import FavClient, RemoteError

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

LOGIN_FAILED_SUBJECT = "[favsync] Bilibili session establishment failed"
LOGIN_FAILED_CONTEXT = (
    "Initial login with cookies failed. Check that the cookies in the configuration are correct and not expired."
)
SESSION_EXPIRED_SUBJECT = "[favsync] Bilibili session expired"
SESSION_EXPIRED_CONTEXT = (
    "The Bilibili cookies have expired or failed validation, favsync has stopped. Update the cookies now."
)


class CriticalFailure(Exception):
    """Fatal, notified failure that stops the scheduler."""

    def __init__(self, subject: str, message: str, timestamp: datetime):
        self.subject = subject
        self.message = message
        self.timestamp = timestamp
        super().__init__(message)


class SessionGate:
    """
    Validates the Bilibili session at startup and before every round.

    A failed check is always fatal: the failure is logged, an alert is
    dispatched (best effort), and CriticalFailure is raised.
    """

    def __init__(
        self,
        client: FavClient,
        credential: Credential,
        dispatcher: NotificationDispatcher,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.client = client
        self.credential = credential
        self.dispatcher = dispatcher
        self._clock = clock

    def validate_startup(self) -> None:
        """
        Establish the session from the configured cookies.

        Raises:
            CriticalFailure: If login fails.
        """
        logger.info("Logging in to Bilibili with cookies...")
        try:
            self.client.establish_session(self.credential.cookie_string())
        except RemoteError as e:
            raise self._escalate(e, LOGIN_FAILED_SUBJECT, LOGIN_FAILED_CONTEXT) from e
        logger.info("Login succeeded.")

    def validate_round(self) -> None:
        """
        Check that the stored session is still accepted.

        Raises:
            CriticalFailure: If the session expired.
        """
        logger.info("Checking cookie status...")
        try:
            self.client.check_session()
        except RemoteError as e:
            raise self._escalate(e, SESSION_EXPIRED_SUBJECT, SESSION_EXPIRED_CONTEXT) from e
        logger.info("Cookie check passed.")

    def _escalate(self, error: Exception, subject: str, context: str) -> CriticalFailure:
        timestamp = self._clock()
        message = f"{context}\nError details: {error}\nError time: {timestamp.strftime(TIME_FORMAT)}"
        logger.error(message)
        self.dispatcher.dispatch(subject, message)
        return CriticalFailure(subject, message, timestamp)
