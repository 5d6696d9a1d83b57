"""Identity carried by a session token, and the validator protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """The signed-in identity. ``id`` keys the user's profile document."""

    id: UUID
    email: str
    display_name: Optional[str] = None
    # "email" for password sign-in, otherwise the federated provider name
    sign_in_provider: Optional[str] = None


class IAuthProvider(Protocol):
    """Turns bearer tokens into identities."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """None for expired, malformed or wrongly signed tokens."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Sign a token locally; used by tests and local runs."""
        ...
