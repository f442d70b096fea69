"""Authentication and authorization for API requests.

Implements Bearer token authentication against bcrypt-hashed API keys and
account-level authorization of request bodies.
"""

from dataclasses import dataclass

from fastapi import HTTPException, Request, status

from src.infrastructure.stores import api_key_store


@dataclass(frozen=True)
class AuthenticatedClient:
    """Identity attached to a request by a valid API key."""

    name: str
    user_id: str
    account_id: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_api_key(request: Request) -> AuthenticatedClient:
    """Verify API key from Authorization header.

    Args:
        request: FastAPI request object

    Returns:
        The client the API key belongs to

    Raises:
        HTTPException: 401 if API key is missing, malformed, invalid, or revoked
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise _unauthorized("Missing Authorization header")

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _unauthorized(
            "Invalid Authorization header format. Expected: Bearer <token>"
        )

    api_key = api_key_store.find_active_key(parts[1])
    if api_key is None:
        raise _unauthorized("Invalid or revoked API key")

    # Attach client identity to request state for logging and auditing
    request.state.client_id = api_key.name
    request.state.user_id = api_key.user_id

    return AuthenticatedClient(
        name=api_key.name,
        user_id=api_key.user_id,
        account_id=api_key.account_id,
    )


def authorize_account(client: AuthenticatedClient, account_id: str) -> None:
    """Ensure the client may act on the given account.

    Raises:
        HTTPException: 403 if the account does not match the client's account
    """
    if account_id != client.account_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to access this account data",
        )
