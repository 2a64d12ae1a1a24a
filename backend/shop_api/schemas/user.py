"""
Shop API Backend: User Schemas
===============================

What:  Pydantic models for the users endpoints.
Note:  The password field is part of the existing users contract and is
       returned in plaintext by GET /api/users.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """One row of the users table."""
    id: int = Field(examples=[1])
    name: str = Field(examples=["John Doe"])
    username: str = Field(examples=["johnnn"])
    email: str = Field(examples=["john.doe@example.com"])
    password: str = Field(examples=["password123"])
    picture: Optional[str] = Field(default=None, examples=["profile.jpg"])


class RegisterRequest(BaseModel):
    """
    JSON body of POST /api/users.

    Every field is optional: absent values reach register_sp as NULL and the
    procedure decides whether that is acceptable.
    """
    username: Optional[str] = Field(default=None, examples=["johnnn"])
    email: Optional[str] = Field(default=None, examples=["john.doe@example.com"])
    password: Optional[str] = Field(default=None, examples=["password123"])
    first_name: Optional[str] = Field(default=None, examples=["John"])
    last_name: Optional[str] = Field(default=None, examples=["Doe"])


class UserCreatedResponse(BaseModel):
    """Returned by POST /api/users with HTTP 201."""
    user: List[dict] = Field(
        default_factory=list,
        description="Row set returned by register_sp",
    )
    message: str = Field(default="User has been created successfully!")
