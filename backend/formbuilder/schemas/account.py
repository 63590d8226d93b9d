"""
FormBuilder Backend - Account Request/Response Schemas
=======================================================

What:  API contract for POST /register and POST /login.
"""

from pydantic import BaseModel, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password and the bcrypt
# package rejects anything longer.
MAX_PASSWORD_BYTES = 72


class CredentialsRequest(BaseModel):
    """Body of both /register and /login."""
    username: str = Field(min_length=1, max_length=255, description="Unique login name")
    password: str = Field(min_length=1, description="Plain-text password")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class RegisterResponse(BaseModel):
    """
    What:  Returned by POST /register with HTTP 201.

    `token` is already a valid bearer credential, so the client is logged
    in right after registering.
    """
    message: str = Field(default="User registered successfully")
    token: str = Field(description="Bearer credential for the new account")


class LoginResponse(BaseModel):
    token: str = Field(description="Bearer credential for the account")
