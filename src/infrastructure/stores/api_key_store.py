"""In-memory API key store with bcrypt-hashed keys.

Raw keys are never stored; only their bcrypt hashes are kept alongside the
client name and the user/account the key acts for.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

import bcrypt


@dataclass
class ApiKey:
    """A registered API key.

    Attributes:
        name: Client identifier used in logs and rate limiting
        key_hash: bcrypt hash of the raw key
        user_id: User the key acts as
        account_id: Account the key is scoped to
        is_active: False once revoked
    """

    name: str
    key_hash: str
    user_id: str
    account_id: str
    is_active: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_used_at: datetime | None = None


_api_keys: list[ApiKey] = []


def register_api_key(raw_key: str, name: str, user_id: str, account_id: str) -> ApiKey:
    """Hash and register a raw API key.

    Raises:
        ValueError: If the key or name is empty
    """
    if not raw_key:
        raise ValueError("raw_key cannot be empty")
    if not name:
        raise ValueError("name cannot be empty")

    key_hash = bcrypt.hashpw(raw_key.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
    api_key = ApiKey(name=name, key_hash=key_hash, user_id=user_id, account_id=account_id)
    _api_keys.append(api_key)
    return api_key


def find_active_key(raw_key: str) -> ApiKey | None:
    """Return the active key matching a raw key and mark it as used."""
    for api_key in _api_keys:
        if api_key.is_active and bcrypt.checkpw(
            raw_key.encode("utf-8"), api_key.key_hash.encode("utf-8")
        ):
            api_key.last_used_at = datetime.now(timezone.utc)
            return api_key
    return None


def revoke_api_key(name: str) -> bool:
    """Revoke every active key registered under a name."""
    revoked = False
    for api_key in _api_keys:
        if api_key.name == name and api_key.is_active:
            api_key.is_active = False
            revoked = True
    return revoked


def clear_api_keys() -> None:
    """Remove all keys (for testing)."""
    _api_keys.clear()
