import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from clario.config import Settings
from clario.database import Base, create_db_engine, create_session_factory
from clario.responses import register_exception_handlers
from clario.services.ai_service import AIService
from clario.auth.routes import router as auth_router
from clario.deadlines.routes import router as deadlines_router
from clario.documents.routes import router as documents_router
from clario.glossary.routes import router as glossary_router
from clario.ai.routes import router as ai_router
from clario.dashboard.routes import router as dashboard_router

API_PREFIX = "/api"

logger = logging.getLogger(__name__)


# --- Add middleware for COOP/COEP headers ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin-allow-popups"
        response.headers["Cross-Origin-Embedder-Policy"] = "unsafe-none"
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API. Run with ``uvicorn main:create_app --factory``."""
    settings = settings or Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Create database tables
    engine = create_db_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title="Clario Legal API",
        description="Legal deadline tracking, document analysis and glossary",
        version="1.0.0"
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.ai_service = AIService(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(deadlines_router, prefix=API_PREFIX)
    app.include_router(documents_router, prefix=API_PREFIX)
    app.include_router(glossary_router, prefix=API_PREFIX)
    app.include_router(ai_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)

    @app.get("/")
    def root():
        return {
            "message": "Clario Legal API",
            "version": "1.0.0",
            "status": "running"
        }

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    logger.info(f"Clario API ready (AI model: {settings.openai_model})")
    return app
