from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from kolaypanel.config import settings
from kolaypanel.dependencies import CurrentUserDep, DbDep
from kolaypanel.rate_limit import LOGIN_LIMIT, REGISTER_LIMIT, limiter
from kolaypanel.schemas.user import Token, UserCreate, UserResponse
from kolaypanel.services.auth import authenticate_user, create_access_token, register_user

router = APIRouter()

TOKEN_COOKIE = "access_token"


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_LIMIT)
def register(request: Request, data: UserCreate, db: DbDep):
    """Yeni panel hesabi. Ayni email ile ikinci hesap acilamaz."""
    return register_user(db, data)


@router.post("/login", response_model=Token)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: DbDep,
):
    """
    Email (username alani) ve sifre ile giris.
    Token hem govdede doner hem de httponly cookie olarak yazilir;
    panel sayfalari cookie ile, API istemcileri Authorization header ile calisir.
    """
    user = authenticate_user(db, form_data.username, form_data.password)
    token = create_access_token(user.id)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        httponly=True,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return Token(access_token=token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: CurrentUserDep):
    return current_user
