"""
Signed session tokens for API clients.

A token is accepted either as an "Authorization: Bearer <token>" header or
as the session cookie set by the login endpoint.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Request, Response
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired


# Session duration: 24 hours
SESSION_MAX_AGE = 24 * 60 * 60  # seconds
SESSION_COOKIE_NAME = "session"
BEARER_PREFIX = "bearer "


class SessionManager:
    """Issues and verifies signed session tokens."""

    def __init__(self, secret_key: str, max_age: int = SESSION_MAX_AGE):
        self._serializer = URLSafeTimedSerializer(secret_key, salt="product-api-session")
        self.max_age = max_age

    def create_token(self, user_id: str = "admin") -> str:
        return self._serializer.dumps({
            "user_id": user_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
        })

    def read_token(self, token: str) -> Optional[dict]:
        """
        Verify a token.

        Returns:
            Session data dict or None if invalid/expired
        """
        try:
            return self._serializer.loads(token, max_age=self.max_age)
        except (BadSignature, SignatureExpired):
            return None

    def set_cookie(self, response: Response, token: str) -> None:
        """Store a token as the session cookie."""
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value=token,
            max_age=self.max_age,
            httponly=True,
            samesite="lax",
        )

    def get_session(self, request: Request) -> Optional[dict]:
        header = request.headers.get("Authorization", "")
        if header.lower().startswith(BEARER_PREFIX):
            return self.read_token(header[len(BEARER_PREFIX):].strip())

        token = request.cookies.get(SESSION_COOKIE_NAME)
        if not token:
            return None
        return self.read_token(token)

    def clear_session(self, response: Response) -> None:
        response.delete_cookie(
            key=SESSION_COOKIE_NAME,
            httponly=True,
            samesite="lax",
        )

    def is_authenticated(self, request: Request) -> bool:
        return self.get_session(request) is not None
