"""Operator session model"""

from dataclasses import dataclass, field

from archivist.core.validation.email import EmailValidator

SUBMISSION_PREFIX = "smtp."
RETRIEVAL_PREFIX = "imap."


@dataclass(frozen=True)
class Session:
    """Credentials of the logged-in operator and the servers derived from them.

    Instances are immutable; a login retry produces a brand new ``Session``
    through :meth:`from_credentials`, so the hostnames always follow the
    current address. The password is kept out of ``repr``.
    """

    address: str
    password: str = field(repr=False)
    submission_host: str
    retrieval_host: str

    @classmethod
    def from_credentials(cls, address: str, password: str) -> "Session":
        """Build a session, deriving ``smtp.<domain>`` and ``imap.<domain>``."""
        domain = EmailValidator.domain_of(address)

        return cls(
            address=address,
            password=password,
            submission_host=f"{SUBMISSION_PREFIX}{domain}",
            retrieval_host=f"{RETRIEVAL_PREFIX}{domain}",
        )

    @property
    def domain(self) -> str:
        return EmailValidator.domain_of(self.address)
