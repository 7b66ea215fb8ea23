"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from metabolic_impact.api.impact import router as impact_router
from metabolic_impact.app_logging import configure_logging
from metabolic_impact.containers import AppContainer
from metabolic_impact.domain.errors import MetabolicImpactError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(impact_router)

    @app.exception_handler(MetabolicImpactError)
    async def invalid_input(
        request: Request, exc: MetabolicImpactError
    ) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
