# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60))
CART_MUTATION_ATTEMPTS = int(os.getenv("CART_MUTATION_ATTEMPTS", 3))
SEED_PRODUCTS = os.getenv("SEED_PRODUCTS", "1").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class ConfigurationError(RuntimeError):
    pass


def require_jwt_secret(value: str | None = None) -> str:
    """Return the signing secret or fail; there is no built-in fallback."""
    secret = value or JWT_SECRET
    if not secret:
        raise ConfigurationError("JWT_SECRET is not set")
    return secret
