# storefront/api/deps.py
from fastapi import Depends, Header, HTTPException, Request

from storefront.services.auth_service import TokenService, InvalidTokenError, TokenExpiredError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_BEARER = {"WWW-Authenticate": "Bearer"}


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user_id(
    authorization: str | None = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """Resolve the caller's user id from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header is required", headers=_BEARER)

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization format. Use: Bearer <token>",
            headers=_BEARER,
        )

    try:
        claims = tokens.decode(parts[1])
    except TokenExpiredError:
        raise HTTPException(status_code=401, detail="Token expired", headers=_BEARER)
    except InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e.__cause__}")
        raise HTTPException(status_code=401, detail="Invalid token", headers=_BEARER)

    user_id = claims.get("sub")
    if not user_id:
        raise HTTPException(status_code=400, detail="User ID not found in token")
    return str(user_id)
