from pydantic import BaseModel, Field, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError


class LoginRequest(BaseModel):
    # Plain string: a malformed email is just another unknown account
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_like_registration(cls, v: str) -> str:
        """Well-formed addresses get the same normalization EmailStr applies at signup."""
        try:
            return validate_email(v)[1]
        except PydanticCustomError:
            return v


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
