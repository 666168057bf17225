"""Short-lived AWS credential set returned by STS AssumeRole."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Credentials:
    """Temporary credentials scoped to one invocation.

    Never persisted and never logged: `repr` only shows the access key id.
    """

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: str = field(repr=False)
    expiration: Optional[datetime] = None

    @classmethod
    def from_sts_response(cls, response: Dict[str, Any]) -> "Credentials":
        creds = response["Credentials"]
        return cls(
            access_key_id=creds["AccessKeyId"],
            secret_access_key=creds["SecretAccessKey"],
            session_token=creds["SessionToken"],
            expiration=creds.get("Expiration"),
        )

    def as_session_kwargs(self) -> Dict[str, str]:
        """Keyword arguments for `boto3.Session`."""
        return {
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
            "aws_session_token": self.session_token,
        }
