"""Identity extraction from public keys."""

from secure_messaging.crypto.protocol import PGPBackend
from secure_messaging.exceptions import FormatError


class IdentityService:
    """Reads the user identities bound to a public key."""

    def __init__(self, pgp_backend: PGPBackend) -> None:
        self._pgp = pgp_backend

    def identities_of(self, public_key: str) -> list[str]:
        """
        List identities bound to an armored public key.

        Identities are returned in the order the key stores them, without
        deduplication or syntax checks.

        Raises:
            FormatError: If the key is malformed.
        """
        key = self._pgp.load_public_key(public_key)
        return self._pgp.user_ids(key)

    def first_identity(self, public_key: str) -> str:
        """
        The first identity bound to an armored public key.

        Raises:
            FormatError: If the key is malformed or carries no identity.
        """
        identities = self.identities_of(public_key)
        if not identities:
            msg = "Public key has no user identity"
            raise FormatError(msg)
        return identities[0]
