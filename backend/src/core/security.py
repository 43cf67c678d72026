"""Password hashing and signed access tokens."""
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

# Precomputed bcrypt hash compared against when a login email does not exist, so that
# unknown and known emails both pay for one bcrypt verification.
DUMMY_PASSWORD_HASH = "$2a$10$pRe6SEQi6edG0bEYzAaMF.S1oszSANbZORukCi7j3QFku5jC1frFW"


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of the password."""
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a bcrypt hash. A malformed hash never verifies."""
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError) as e:
        logger.warning("Password hash could not be verified: %s", e)
        return False


class InvalidTokenError(Exception):
    """Raised when an access token is malformed, badly signed, or expired."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid token: {reason}")


@dataclass
class TokenClaims:
    """Claims carried by an access token."""

    user_id: UUID
    username: str
    expires_at: datetime


class TokenService:
    """Issues and validates HMAC-signed JWT access tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_hours: int = 24,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expire_hours = expire_hours

    def generate_access_token(self, user_id: UUID, username: str) -> str:
        """
        Create a signed token for a user.

        The token embeds the user id as `sub`, the username, and an expiry
        `expire_hours` after issuance.
        """
        expires_at = datetime.now(UTC) + timedelta(hours=self._expire_hours)
        payload = {
            "sub": str(user_id),
            "username": username,
            "exp": expires_at,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate_token(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Only the configured algorithm is accepted, so unsigned (`none`) tokens and
        tokens from another algorithm family are rejected along with bad signatures
        and expired tokens.

        Raises:
            InvalidTokenError: If the token fails any check.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("expired") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        try:
            user_id = UUID(payload["sub"])
        except (ValueError, TypeError) as e:
            raise InvalidTokenError("malformed subject") from e

        return TokenClaims(
            user_id=user_id,
            username=payload.get("username", ""),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )
