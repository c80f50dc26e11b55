"""
Account endpoints.

Registration and login are open; everything else requires a session.
On login the session token is handed to the client in an HTTP-only
cookie, which logout clears again.
"""

from fastapi import APIRouter, Depends, Request, Response

from ..dependencies import get_account_service
from ...core.security import get_session_token, require_session
from ...schemas.playlist import OkResponse
from ...schemas.user import LoginRequest, LoginResponse, Profile, RegisterRequest
from ...services.account_service import AccountService


router = APIRouter()


@router.post("/register", response_model=OkResponse, response_model_exclude_none=True)
def register(
    body: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> OkResponse:
    """Create an account.

    All six fields are required and the password needs at least six
    characters including a letter and a digit.  Responds with 409 when
    the username is taken (case-insensitive).  Does not log the user in.
    """
    service.register(body)
    return OkResponse()


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    service: AccountService = Depends(get_account_service),
) -> LoginResponse:
    """Check credentials and set the session cookie."""
    token, profile = service.login(body.username, body.password)
    response.set_cookie(
        key=request.app.state.settings.session_cookie_name,
        value=token,
        httponly=True,
        samesite="lax",
    )
    return LoginResponse(user=profile)


@router.post("/logout", response_model=OkResponse, response_model_exclude_none=True)
def logout(
    request: Request,
    response: Response,
    service: AccountService = Depends(get_account_service),
) -> OkResponse:
    """End the current session.  Always succeeds."""
    service.logout(get_session_token(request))
    response.delete_cookie(request.app.state.settings.session_cookie_name)
    return OkResponse()


@router.get("/me", response_model=Profile)
def me(
    username: str = Depends(require_session),
    service: AccountService = Depends(get_account_service),
) -> Profile:
    """Return the profile of the logged-in user."""
    return service.me(username)
