"""
FastAPI dependencies (shared across routes).

The process-wide handles live on ``app.state`` (built once by
``main.create_app``); these accessors hand them to route handlers.
"""

from __future__ import annotations

from fastapi import Request

from auth.jwt import TokenSigner
from auth.service import AuthService
from recipes.service import RecipeService


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_recipe_service(request: Request) -> RecipeService:
    return request.app.state.recipe_service


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer
