from typing import Optional

from fastapi import Header, HTTPException, status

# Sessions and tokens are issued by the external identity provider; by the
# time a request reaches us the caller's identity is the X-User-Id header.
USER_ID_HEADER = "X-User-Id"


async def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Resolve the calling user's identifier or reject the request."""
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return x_user_id.strip()
