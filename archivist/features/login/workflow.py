"""Login state machine.

The operator is authenticated against two servers in turn::

    UNAUTHENTICATED -> CONNECTING_SUBMISSION -> CONNECTING_RETRIEVAL -> AUTHENTICATED

A failed connection in either connecting state prints the error, asks for a
complete new set of credentials and retries the same stage. How many times
that may happen is governed by :class:`RetryPolicy`.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from archivist.core.email.imap import RetrievalClient
from archivist.core.email.smtp import SubmissionClient
from archivist.core.models import Session
from archivist.ui.catalog import PromptKey
from archivist.ui.components import StatusMessage
from archivist.utils.config import LoginConfig
from archivist.utils.errors import AuthenticationError, LoginAbortedError, NetworkError
from archivist.utils.logging import get_logger

from .credentials import CredentialBuilder

logger = get_logger(__name__)

ClientT = TypeVar("ClientT")

SubmissionFactory = Callable[[Session], SubmissionClient]
RetrievalFactory = Callable[[Session], RetrievalClient]


class LoginStage(Enum):
    """States of the login state machine."""

    UNAUTHENTICATED = "unauthenticated"
    CONNECTING_SUBMISSION = "connecting_submission"
    CONNECTING_RETRIEVAL = "connecting_retrieval"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class RetryPolicy:
    """How often a connecting stage may fail before login is abandoned.

    ``max_attempts=None`` never gives up.
    """

    max_attempts: Optional[int] = None
    backoff_seconds: float = 0.0

    @classmethod
    def from_config(cls, config: LoginConfig) -> "RetryPolicy":
        return cls(max_attempts=config.max_attempts, backoff_seconds=config.backoff_seconds)

    def allows_retry(self, failures: int) -> bool:
        """Whether another attempt may follow ``failures`` failed ones."""
        return self.max_attempts is None or failures < self.max_attempts


@dataclass
class AuthenticatedSession:
    """Result of a successful login: the final credentials and both clients."""

    session: Session
    submission: SubmissionClient
    retrieval: RetrievalClient


class LoginStateMachine:
    """Drives the submission and retrieval logins."""

    def __init__(
        self,
        credentials: CredentialBuilder,
        submission_factory: SubmissionFactory,
        retrieval_factory: RetrievalFactory,
        messages: StatusMessage,
        policy: RetryPolicy = RetryPolicy(),
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.credentials = credentials
        self.submission_factory = submission_factory
        self.retrieval_factory = retrieval_factory
        self.messages = messages
        self.catalog = credentials.reader.catalog
        self.policy = policy
        self._sleep = sleep

        self.state = LoginStage.UNAUTHENTICATED
        self.history: List[LoginStage] = [self.state]
        self.failures: Dict[LoginStage, int] = {}

    def _enter(self, stage: LoginStage) -> None:
        logger.debug(f"Login state {self.state.value} -> {stage.value}")
        self.state = stage
        self.history.append(stage)

    def rebuild(self, previous: Session) -> Session:
        """Transition function for a retry: a completely new session."""
        logger.info(f"Discarding credentials for {previous.address}, asking again")
        return self.credentials.build_session()

    def _open_submission(self, session: Session) -> SubmissionClient:
        client = self.submission_factory(session)
        if not client.test_connection():
            raise NetworkError(
                f"Connectivity check against {session.submission_host} failed",
                details={"host": session.submission_host},
            )
        return client

    def _open_retrieval(self, session: Session) -> RetrievalClient:
        return self.retrieval_factory(session)

    def _connect_stage(
        self,
        session: Session,
        host_of: Callable[[Session], str],
        open_client: Callable[[Session], ClientT],
    ) -> Tuple[Session, ClientT]:
        """Attempt the current stage until it succeeds or the policy gives up."""
        failures = 0

        while True:
            host = host_of(session)
            self.messages.status(f"{self.catalog[PromptKey.LOGIN_CONNECTING]}{host}...")

            try:
                client = open_client(session)
            except (AuthenticationError, NetworkError) as e:
                failures += 1
                self.failures[self.state] = self.failures.get(self.state, 0) + 1
                logger.warning(f"Login stage {self.state.value} failed on {host}: {e.message}")
                self.messages.error(
                    f"{self.catalog[PromptKey.LOGIN_CONNECT_FAIL]}{host}: {e.message}"
                )

                if not self.policy.allows_retry(failures):
                    self.messages.error(self.catalog[PromptKey.LOGIN_ABORTED])
                    raise LoginAbortedError(
                        f"Gave up on {host} after {failures} failed attempt(s)",
                        details={"host": host, "attempts": failures},
                    ) from e

                self.messages.plain(self.catalog[PromptKey.LOGIN_RETRY])
                if self.policy.backoff_seconds:
                    self._sleep(self.policy.backoff_seconds)

                session = self.rebuild(session)
                continue

            self.messages.success(f"{self.catalog[PromptKey.LOGIN_CONNECT_SUCCEED]}{host}.")
            return session, client

    def run(self, session: Optional[Session] = None) -> AuthenticatedSession:
        """Log in to both servers, asking for credentials first if none are given.

        Raises:
            LoginAbortedError: If the retry policy is exhausted on a stage
        """
        self.messages.plain(self.catalog[PromptKey.LOGIN])
        if session is None:
            session = self.credentials.build_session()

        self._enter(LoginStage.CONNECTING_SUBMISSION)
        session, submission = self._connect_stage(
            session, lambda s: s.submission_host, self._open_submission
        )

        self._enter(LoginStage.CONNECTING_RETRIEVAL)
        session, retrieval = self._connect_stage(
            session, lambda s: s.retrieval_host, self._open_retrieval
        )

        self._enter(LoginStage.AUTHENTICATED)
        self.messages.plain(f"{self.catalog[PromptKey.LOGIN_SUCCEED]}{session.address}")
        logger.info(f"Authenticated as {session.address}")

        return AuthenticatedSession(session=session, submission=submission, retrieval=retrieval)
