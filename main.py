"""
Recipe backend: application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_middleware
from auth.jwt import TokenSigner
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from auth.service import AuthService
from config.settings import Settings, config
from core.errors import register_exception_handlers
from database.store import DocumentStore
from recipes.routes import router as recipes_router
from recipes.service import RecipeService

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio", "urllib3"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
) -> FastAPI:
    settings = settings or config
    store = store or DocumentStore.from_url(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.init_schema()
        logger.info("Application ready to accept requests.")
        yield
        await store.dispose()

    app = FastAPI(
        title="Recipe Backend",
        version="1.0.0",
        description="User accounts and ownership-scoped recipe CRUD.",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Process-wide handles, built once and injected into the services
    signer = TokenSigner(settings.jwt_secret)
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.settings = settings
    app.state.store = store
    app.state.token_signer = signer
    app.state.auth_service = AuthService(users=store.users, hasher=hasher, signer=signer)
    app.state.recipe_service = RecipeService(recipes=store.recipes)

    # Routes
    app.include_router(auth_router, prefix="/auth")
    app.include_router(recipes_router, prefix="/recipes")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
