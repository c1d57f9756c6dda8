from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_token_service
from storefront.data.database import get_db
from storefront.domain.schemas import RegisterIn, LoginIn, TokenOut
from storefront.services.auth_service import TokenService
from storefront.services.user_service import UserService, UserAlreadyExistsError, InvalidCredentialsError

router = APIRouter(prefix="/user", tags=["user"])


def get_service(db: Session = Depends(get_db), tokens: TokenService = Depends(get_token_service)):
    return UserService(db, tokens)


@router.post("/register", response_model=TokenOut)
def register(payload: RegisterIn, service: UserService = Depends(get_service)):
    try:
        return TokenOut(access_token=service.register(payload))
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, service: UserService = Depends(get_service)):
    try:
        return TokenOut(access_token=service.login(payload))
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))
