"""Authentication state of the current visitor.

One ``AuthSession`` is created per running client and handed to everything
that needs to know who is signed in. Each successful sign-in gets a fresh
``login_id`` so one-shot work tied to a login (the guest cart merge) can tell
logins apart.
"""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    name: str | None = None
    email: str | None = None
    mobile_number: str | None = Field(default=None, alias="mobileNumber")
    role: str = "USER"


class AuthResponse(BaseModel):
    """Payload returned by the login, OTP and registration endpoints."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    access_token: str = Field(alias="accessToken")
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    user: UserProfile


class AuthSession:
    def __init__(self) -> None:
        self.access_token: str | None = None
        self.refresh_token: str | None = None
        self.user: UserProfile | None = None
        self.login_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def sign_in(self, auth: AuthResponse) -> str:
        self.access_token = auth.access_token
        self.refresh_token = auth.refresh_token
        self.user = auth.user
        self.login_id = uuid4().hex
        return self.login_id

    def sign_out(self) -> None:
        self.access_token = None
        self.refresh_token = None
        self.user = None
        self.login_id = None

    def token(self) -> str | None:
        """Bearer token for outgoing API requests."""
        return self.access_token
