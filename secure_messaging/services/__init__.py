"""
Business logic services for secure messaging.
"""

from secure_messaging.services.identity_service import IdentityService
from secure_messaging.services.message_service import MessageService
from secure_messaging.services.passphrase_cache import PassphraseCache

__all__ = [
    "IdentityService",
    "MessageService",
    "PassphraseCache",
]
