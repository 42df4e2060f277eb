from pydantic import BaseModel


class TokenRequest(BaseModel):
    """Username/password exchange for an access token."""
    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT token response."""
    access_token: str
    token_type: str = "bearer"


class TokenIdentity(BaseModel):
    """Identity carried by a verified access token."""
    username: str
    is_admin: bool = False
