from typing import Dict, Mapping, Optional

from jose import jwt
from jose.exceptions import JWTError

from bq_forward.observability.logger import log_event

IAM_USER_HEADER = "X-Goog-Authenticated-User-Email"
LOCAL_USER_HEADER = "x-user-id"


def _decode_bearer(auth_header: Optional[str]) -> Optional[str]:
    if not auth_header or not auth_header.startswith("Bearer "):
        return None

    token = auth_header.split(" ", 1)[1]
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError as e:
        log_event("IDENTITY_TOKEN_UNREADABLE", {"error": str(e)})
        return None

    return claims.get("email") or claims.get("sub") or "unknown_user"


def extract_user_identity(headers: Mapping[str, str], payload: Dict) -> str:
    """
    Resolve the caller of a generation request from:
    1. Cloud Run IAM header
    2. JWT bearer token (claims read without verification)
    3. Local x-user-id header (CLI)
    4. Payload user_id
    5. Fallback to anonymous
    """
    user_email = headers.get(IAM_USER_HEADER)
    if user_email:
        return user_email.split(":")[-1]

    token_user = _decode_bearer(headers.get("Authorization"))
    if token_user:
        return token_user

    if headers.get(LOCAL_USER_HEADER):
        return headers[LOCAL_USER_HEADER]

    if payload.get("user_id"):
        return payload["user_id"]

    return "anonymous"
