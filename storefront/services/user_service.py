from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.schemas import RegisterIn, LoginIn
from storefront.repos.user_repo import UserRepo
from storefront.services.auth_service import TokenService, hash_password, verify_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserAlreadyExistsError(ValueError):
    pass


class InvalidCredentialsError(ValueError):
    pass


class UserService:
    def __init__(self, db: Session, token_service: TokenService):
        self.repo = UserRepo(db)
        self.tokens = token_service

    def register(self, payload: RegisterIn) -> str:
        email = payload.email.lower()
        if self.repo.get_user_by_email(email):
            raise UserAlreadyExistsError("User already exists")

        user = UserModel(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=email,
            password_hash=hash_password(payload.password),
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError as e:
            self.repo.rollback()
            raise UserAlreadyExistsError("User already exists") from e

        logger.info(f"Registered user {created.id}")
        return self.tokens.create_access_token(created)

    def login(self, payload: LoginIn) -> str:
        user = self.repo.get_user_by_email(payload.email)
        if not user or not verify_password(payload.password, user.password_hash):
            raise InvalidCredentialsError("Incorrect email or password")
        return self.tokens.create_access_token(user)
