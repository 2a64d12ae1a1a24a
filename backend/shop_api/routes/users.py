"""
Shop API Backend: User Route Handlers
======================================

What:  GET/POST /api/users and GET /api/users/{email}/{password}.
Note:  Credentials travel in the URL path, as existing clients expect.
       The request logger records the route template, not the raw path,
       so they do not end up in the access log.
"""

from typing import List

from fastapi import APIRouter, Depends

from shop_api.database import Database, Row, get_database
from shop_api.schemas.user import RegisterRequest, User, UserCreatedResponse
from shop_api.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Users"])

_SERVER_ERROR = {500: {"description": "Server error (raw database message, text/plain)"}}


@router.get(
    "/users",
    response_model=None,
    responses={200: {"description": "A list of users", "model": List[User]}, **_SERVER_ERROR},
    summary="Get all users",
    description="Returns a list of all users.",
)
async def list_users(db: Database = Depends(get_database)) -> List[Row]:
    return await user_service.list_users(db)


@router.get(
    "/users/{email}/{password}",
    response_model=None,
    responses={
        200: {"description": "Matching users (empty when none)", "model": List[User]},
        **_SERVER_ERROR,
    },
    summary="Get a user by email and password",
    description="Returns the rows login_sp yields for this email and password.",
)
async def get_user_by_credentials(
    email: str,
    password: str,
    db: Database = Depends(get_database),
) -> List[Row]:
    return await user_service.find_by_credentials(db, email=email, password=password)


@router.post(
    "/users",
    status_code=201,
    response_model=UserCreatedResponse,
    responses={201: {"description": "User created successfully"}, **_SERVER_ERROR},
    summary="Create a new user",
    description="Registers a user through register_sp.",
)
async def register_user(
    payload: RegisterRequest,
    db: Database = Depends(get_database),
) -> UserCreatedResponse:
    rows = await user_service.register(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return UserCreatedResponse(user=rows)
