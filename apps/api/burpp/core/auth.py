from typing import Optional

from jose import JWTError, jwt

from burpp.core.config import get_settings


def decode_access_token(token: str) -> Optional[str]:
    """Verify a bearer token from the auth provider and return its subject (user id)."""
    s = get_settings()
    options = {"verify_aud": s.jwt_audience is not None}
    try:
        payload = jwt.decode(
            token,
            s.jwt_secret,
            algorithms=[s.jwt_algorithm],
            audience=s.jwt_audience,
            options=options,
        )
    except JWTError:
        return None
    sub = payload.get("sub")
    return str(sub) if sub is not None else None
