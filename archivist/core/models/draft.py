"""Unsent message model"""

from dataclasses import dataclass
from email.mime.text import MIMEText


@dataclass
class Draft:
    """A composed message held in memory for one compose-and-send call."""

    recipient: str
    subject: str
    body: str

    def to_message(self, sender: str) -> MIMEText:
        """Build the plain-text message handed to the submission client."""
        msg = MIMEText(self.body, "plain", "utf-8")
        msg["From"] = sender
        msg["To"] = self.recipient
        msg["Subject"] = self.subject

        return msg
