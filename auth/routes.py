"""
Auth API routes: register, login.

Route prefix: /auth
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.dependencies import get_auth_service
from auth.service import AuthService

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class Credentials(BaseModel):
    username: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=1)


class PublicUser(BaseModel):
    id: str = Field(..., alias="_id")
    username: str


class RegisterResponse(BaseModel):
    message: str
    user: PublicUser


class LoginResponse(BaseModel):
    token: str
    userID: str


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=RegisterResponse, response_model_by_alias=True)
async def register(
    req: Credentials,
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new user."""
    return await auth.register(req.username, req.password)


@router.post("/login", response_model=LoginResponse)
async def login(
    req: Credentials,
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with username + password."""
    return await auth.login(req.username, req.password)
