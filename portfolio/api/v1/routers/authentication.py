from fastapi import APIRouter, Depends, Response, status

from portfolio.api.v1.dependencies import get_auth_service, get_current_user
from portfolio.core.config import settings
from portfolio.db.models.users import User
from portfolio.features.authentication.schemas import SessionOut, SignInIn, SignUpIn, SignUpOut
from portfolio.features.authentication.services import AuthService
from portfolio.features.users.schemas import UserOut

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={404: {"description": "Not Found"}},
)

# -----------------------------
# Sign-up
# -----------------------------
@router.post(
    "/sign-up",
    summary="Créer un compte",
    description="Le fournisseur d'identité envoie un email de confirmation.",
    status_code=status.HTTP_201_CREATED,
    response_model=SignUpOut,
    responses={409: {"description": "Email ou pseudo déjà utilisé"}},
)
def sign_up(payload: SignUpIn, svc: AuthService = Depends(get_auth_service)):
    return svc.sign_up(payload)

# -----------------------------
# Sign-in
# -----------------------------
@router.post(
    "/sign-in",
    summary="Se connecter",
    description="Retourne le token de session, aussi posé en cookie httpOnly.",
    response_model=SessionOut,
    responses={401: {"description": "Identifiants invalides"}},
)
def sign_in(
    payload: SignInIn,
    response: Response,
    svc: AuthService = Depends(get_auth_service),
):
    session = svc.sign_in(payload)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=session.access_token,
        httponly=True,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        secure=settings.AUTH_COOKIE_SECURE,
        max_age=settings.AUTH_COOKIE_MAX_AGE,
        path=settings.AUTH_COOKIE_PATH,
    )
    return session

# -----------------------------
# Sign-out
# -----------------------------
@router.post(
    "/sign-out",
    summary="Se déconnecter (suppression du cookie de session)",
    status_code=status.HTTP_204_NO_CONTENT,
)
def sign_out(response: Response):
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path=settings.AUTH_COOKIE_PATH)
    return None

# -----------------------------
# Me (profil courant)
# -----------------------------
@router.get(
    "/me",
    summary="Récupérer l'utilisateur courant",
    response_model=UserOut,
    responses={401: {"description": "Token absent, invalide ou expiré"}},
)
def me(user: User = Depends(get_current_user)):
    return user
