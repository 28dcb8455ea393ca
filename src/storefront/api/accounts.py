"""FastAPI endpoints for registration, sign-in and profile management."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.account.authentication import AuthenticateUser
from storefront.account.profile import UpdateProfile
from storefront.account.registration import RegisterUser
from storefront.account.user import User
from storefront.api.schemas import (
    LoginRequest,
    ProfileView,
    RegisterRequest,
    StatusResponse,
    UpdateProfileRequest,
    UserIdResponse,
)

account_router = APIRouter(prefix="/accounts", tags=["accounts"])


@account_router.post("/register", status_code=201, response_model=UserIdResponse)
async def register(body: RegisterRequest) -> UserIdResponse:
    command = RegisterUser(
        username=body.username,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        phone_number=body.phone_number,
        address=body.address,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=user_id)


@account_router.post("/login", response_model=UserIdResponse)
async def login(body: LoginRequest) -> UserIdResponse:
    """Verify credentials. Token issuance is left to the hosting application."""
    user_id = current_domain.process(
        AuthenticateUser(email=body.email, password=body.password),
        asynchronous=False,
    )
    return UserIdResponse(user_id=user_id)


@account_router.get("/{user_id}", response_model=ProfileView)
async def get_profile(user_id: str) -> ProfileView:
    return ProfileView.from_user(current_domain.repository_for(User).get(user_id))


@account_router.put("/{user_id}", response_model=StatusResponse)
async def update_profile(user_id: str, body: UpdateProfileRequest) -> StatusResponse:
    command = UpdateProfile(
        user_id=user_id,
        username=body.username,
        first_name=body.first_name,
        last_name=body.last_name,
        phone_number=body.phone_number,
        address=body.address,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
