"""Password hashing and token signing."""

from jose import JWTError, jwt
from passlib.context import CryptContext

from userauth.config import Settings


class PasswordHasher:
    """Salted bcrypt hashing. Every call to ``hash`` draws a fresh salt."""

    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, password: str) -> str:
        """Hash a password."""
        return self.pwd_context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return self.pwd_context.verify(plain_password, hashed_password)


class TokenSigner:
    """Stateless bearer tokens carrying an ``{id}`` claim. Tokens never expire."""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def sign(self, claims: dict) -> str:
        """Sign a claim set into a JWT."""
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict | None:
        """Decode and validate a JWT, returning its claims or None."""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None


def get_password_hasher(settings: Settings) -> PasswordHasher:
    """Build the hasher for the configured bcrypt cost."""
    return PasswordHasher(rounds=settings.bcrypt_rounds)


def get_token_signer(settings: Settings) -> TokenSigner:
    """Build the signer for the configured secret."""
    return TokenSigner(settings.secret_key, settings.jwt_algorithm)
