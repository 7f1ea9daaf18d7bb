"""FastAPI endpoints for accounts: registration, login, recovery, profile and user administration."""

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from storefront.identity.api.dependencies import get_current_principal, require_admin
from storefront.identity.api.schemas import (
    AuthResponse,
    ChangeRoleRequest,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenResponse,
    UpdateProfileRequest,
    UserResponse,
    VerifyEmailRequest,
)
from storefront.identity.authentication import authenticate, issue_refresh_token, load_user, refresh_access_token
from storefront.identity.profile import ChangeUserRole, UpdateProfile
from storefront.identity.recovery import RequestPasswordReset, ResetPassword, VerifyEmail
from storefront.identity.registration import RegisterUser
from storefront.identity.tokens import Principal, create_access_token
from storefront.identity.user import User
from storefront.shared.errors import AuthenticationError, RateLimitExceededError
from storefront.shared.rate_limit import client_address, get_login_limiter

router = APIRouter(prefix="/auth", tags=["auth"])
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        is_verified=bool(user.is_verified),
        created_at=user.created_at,
    )


@router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    command = RegisterUser(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    token = create_access_token(user_id=str(user.id), email=user.email, role=user.role)
    return AuthResponse(user=_user_response(user), token=token, refresh_token=issue_refresh_token(user))


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, request: Request) -> AuthResponse:
    """Only failed attempts count towards the per-address login limit."""
    limiter = get_login_limiter()
    client = client_address(request)
    allowance = limiter.check(client)
    if not allowance.allowed:
        raise RateLimitExceededError("Too many login attempts, please try again later.", allowance.retry_after)

    try:
        user, token = authenticate(body.email, body.password)
    except AuthenticationError:
        limiter.record(client)
        raise
    return AuthResponse(user=_user_response(user), token=token, refresh_token=issue_refresh_token(user))


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest) -> TokenResponse:
    return TokenResponse(token=refresh_access_token(body.refresh_token))


@router.post("/logout", response_model=MessageResponse)
async def logout(principal: Principal = Depends(get_current_principal)) -> MessageResponse:
    # Tokens are stateless; the client discards them
    return MessageResponse(message="Logged out successfully")


@router.post("/verify-email", response_model=MessageResponse)
async def verify_email(body: VerifyEmailRequest) -> MessageResponse:
    current_domain.process(VerifyEmail(token=body.token), asynchronous=False)
    return MessageResponse(message="Email verified successfully")


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(body: ForgotPasswordRequest) -> MessageResponse:
    current_domain.process(RequestPasswordReset(email=body.email), asynchronous=False)
    return MessageResponse(message="If an account exists with that email, a reset link has been sent")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(body: ResetPasswordRequest) -> MessageResponse:
    current_domain.process(ResetPassword(token=body.token, password=body.password), asynchronous=False)
    return MessageResponse(message="Password reset successfully")


@router.get("/me", response_model=UserResponse)
@router.get("/profile", response_model=UserResponse)
async def me(principal: Principal = Depends(get_current_principal)) -> UserResponse:
    return _user_response(load_user(principal))


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    body: UpdateProfileRequest, principal: Principal = Depends(get_current_principal)
) -> UserResponse:
    user = load_user(principal)
    current_domain.process(
        UpdateProfile(user_id=str(user.id), **body.model_dump(exclude_unset=True)),
        asynchronous=False,
    )
    return _user_response(current_domain.repository_for(User).get(user.id))


# --- Administration ---


@admin_router.get("/users", response_model=list[UserResponse])
async def list_users() -> list[UserResponse]:
    return [_user_response(u) for u in current_domain.repository_for(User).list_all()]


@admin_router.put("/users/{user_id}/role", response_model=UserResponse)
async def change_user_role(user_id: str, body: ChangeRoleRequest) -> UserResponse:
    current_domain.process(ChangeUserRole(user_id=user_id, role=body.role), asynchronous=False)
    return _user_response(current_domain.repository_for(User).get(user_id))
