from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from kolaypanel.database import get_db
from kolaypanel.models.user import User
from kolaypanel.schemas.user import AuthContext
from kolaypanel.services.auth import verify_token
from kolaypanel.services.documents import DocumentStore

# OAuth2PasswordBearer: Swagger UI'da "Authorize" butonu gosterir
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_current_user(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """
    JWT token'dan mevcut kullaniciyi dondur.
    Oncelik: Authorization header, sonra cookie.
    """
    if not token:
        token = request.cookies.get("access_token")
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token bulunamadi",
        )

    user_id = verify_token(token)
    user = db.query(User).filter(User.id == user_id).first()
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Kullanici bulunamadi veya aktif degil",
        )
    return user


def get_auth_context(
    current_user: Annotated[User, Depends(get_current_user)],
) -> AuthContext:
    """Oturumdaki kullanicidan degismez bir AuthContext olustur."""
    return AuthContext(
        user_id=current_user.id,
        email=current_user.email,
        full_name=current_user.full_name,
    )


def get_document_store(
    db: Annotated[Session, Depends(get_db)],
    ctx: Annotated[AuthContext, Depends(get_auth_context)],
) -> DocumentStore:
    """Oturumdaki kullaniciya ait dokuman deposu."""
    return DocumentStore(db, ctx.user_id)


# Router'larda kisa kullanim icin
StoreDep = Annotated[DocumentStore, Depends(get_document_store)]
ContextDep = Annotated[AuthContext, Depends(get_auth_context)]
DbDep = Annotated[Session, Depends(get_db)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
