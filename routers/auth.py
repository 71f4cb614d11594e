from fastapi import APIRouter, Response
from starlette import status

from core.errors import unwrap
from schemas.auth_schemas import AuthRequest, RefreshTokenRequest, Token
from utils.deps import auth_service_dependency
from utils.logger import get_logger

logger = get_logger(__name__)


router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_class=Response)
def register(body: AuthRequest, auth_service: auth_service_dependency):
    unwrap(auth_service.register(body.email, body.password))
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/login", response_model=Token)
def login(body: AuthRequest, auth_service: auth_service_dependency):
    tokens = unwrap(auth_service.login(body.email, body.password))
    return Token(access_token=tokens.access_token, refresh_token=tokens.refresh_token)


@router.post("/refresh", response_model=Token)
def refresh(body: RefreshTokenRequest, auth_service: auth_service_dependency):
    """
    Exchange a refresh token for a new pair. The old refresh token stops working.
    """
    tokens = unwrap(auth_service.refresh(body.refresh_token))
    return Token(access_token=tokens.access_token, refresh_token=tokens.refresh_token)
