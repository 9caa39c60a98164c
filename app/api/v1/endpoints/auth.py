from fastapi import APIRouter, HTTPException, status

from app.api.deps import Store, CurrentUser
from app.core.exceptions import EmailAlreadyRegisteredError, InvalidCredentialsError
from app.models.user import User
from app.schemas.auth import SignupRequest, LoginRequest, AuthResponse, UserPublic
from app.schemas.referral import UserProfile
from app.services.auth_service import AuthService

router = APIRouter(tags=["Authentication"])


def _auth_response(auth_service: AuthService, user: User) -> AuthResponse:
    token, expires_in = auth_service.create_token(user)
    return AuthResponse(
        token=token,
        token_type="bearer",
        expires_in=expires_in,
        user=UserPublic.model_validate(user),
    )


@router.post("/auth/signup", response_model=AuthResponse)
async def signup(
    data: SignupRequest,
    store: Store,
):
    """
    Create an account, optionally referred by another user's code.
    """
    auth_service = AuthService(store)

    try:
        user = auth_service.register_user(
            email=data.email,
            password=data.password,
            name=data.name,
            referrer_code=data.ref,
        )
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    return _auth_response(auth_service, user)


@router.post("/auth/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    store: Store,
):
    """
    Authenticate user and return an access token.
    """
    auth_service = AuthService(store)

    try:
        user = auth_service.authenticate_user(data.email, data.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _auth_response(auth_service, user)


@router.get("/me", response_model=UserProfile)
async def get_current_user_info(
    current_user: CurrentUser,
):
    """
    Get current authenticated user's information.
    """
    return UserProfile.model_validate(current_user)
