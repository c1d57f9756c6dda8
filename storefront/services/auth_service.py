# storefront/services/auth_service.py
from datetime import datetime, timedelta, timezone

from jose import jwt, ExpiredSignatureError, JWTError
from passlib.context import CryptContext

from storefront.data.models.user import UserModel
from storefront.utils.settings import JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


class InvalidTokenError(Exception):
    pass


class TokenExpiredError(InvalidTokenError):
    pass


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


class TokenService:
    """Issues and verifies signed bearer tokens. The secret is injected at startup."""

    def __init__(self, secret: str, algorithm: str = JWT_ALGORITHM, expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def create_access_token(self, user: UserModel, expires_delta: timedelta | None = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        claims = {
            "sub": user.id,
            "email": user.email,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "exp": expire,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except JWTError as e:
            raise InvalidTokenError("Invalid token") from e
