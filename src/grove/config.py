"""Runtime settings."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from grove.git import UserIdentity, read_user_identity


@dataclass(frozen=True)
class Settings:
    """Settings shared by every command.

    Built once when the CLI starts so commands never read git configuration
    on their own.
    """

    location: Path
    identity: UserIdentity

    def resolve_email(self, email: Optional[str]) -> str:
        """Get the filter email, defaulting to the configured user email."""
        if email is None:
            return self.identity.email
        return email


def load_settings(location: Path) -> Settings:
    """Create settings for a repository location.

    Raises:
        ConfigUnavailable: If the git configuration cannot be read
    """
    return Settings(location=location, identity=read_user_identity())
