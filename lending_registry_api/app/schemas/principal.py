"""
Pydantic models for principals.

Registration takes the plain secret; it is hashed by the directory and
never returned.  Login exchanges an identifier and secret for a bearer
token that must accompany every authenticated request.
"""

from pydantic import BaseModel, Field


class PrincipalBase(BaseModel):
    principal_id: str = Field(..., min_length=1, examples=["S002"])
    name: str = Field(..., examples=["Jane Roe"])
    role: str = Field("STUDENT", examples=["STUDENT"])


class PrincipalCreate(PrincipalBase):
    """Schema for registering a principal."""

    secret: str = Field(..., min_length=1, examples=["strongpassword"])


class PrincipalRead(PrincipalBase):
    """Schema for reading a principal from the API."""

    model_config = {
        "from_attributes": True,
    }


class LoginRequest(BaseModel):
    principal_id: str
    secret: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    principal: PrincipalRead
