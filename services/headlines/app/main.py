# services/headlines/app/main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from services.headlines.app.client import FeedClient
from services.headlines.app.controller import FeedStateController
from shared.app_logging.logger import setup_logging
from shared.config.settings import Settings, get_settings
from shared.utils.health import create_headlines_health_checker

# Setup logging
logger = setup_logging("headlines")


def build_controller(settings: Settings) -> FeedStateController:
    client = FeedClient(settings=settings.feed)
    return FeedStateController(
        client, skip_malformed=settings.feed.skip_malformed_records
    )


def create_app(
    controller: Optional[FeedStateController] = None,
    settings: Optional[Settings] = None,
    check_endpoint: bool = True,
) -> FastAPI:
    """
    Build the headlines app around an explicitly supplied controller.

    When no controller is passed, one is built from settings at startup.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctrl = controller or build_controller(settings)
        app.state.controller = ctrl
        app.state.health_checker = create_headlines_health_checker(
            lambda: ctrl.state, settings, check_endpoint=check_endpoint
        )
        logger.info(f"Starting headlines service, feed: {settings.feed.feed_url}")
        ctrl.initialize()
        yield
        logger.info("Shutting down headlines service...")
        await ctrl.aclose()

    app = FastAPI(
        title="Health Headlines Service",
        description="Serves the health headline feed as loading/data/error snapshots.",
        version=settings.version,
        lifespan=lifespan,
    )

    @app.get("/headlines")
    def current_state(request: Request):
        """Latest published feed state."""
        return request.app.state.controller.state.model_dump(mode="json")

    @app.post("/headlines/refresh")
    async def refresh(request: Request):
        """Reset to loading, reload, and return the resulting state."""
        state = await request.app.state.controller.refresh()
        return state.model_dump(mode="json")

    @app.get("/headlines/health")
    def health(request: Request):
        return request.app.state.health_checker.run_all_checks()

    @app.get("/headlines/health/live")
    def liveness_check():
        return {"status": "alive", "service": "headlines"}

    @app.get("/headlines/health/ready")
    def readiness_check(request: Request):
        kind = request.app.state.controller.state.kind
        return {
            "status": "ready" if kind == "data" else "not_ready",
            "service": "headlines",
            "feed_state": kind,
        }

    return app


app = create_app()
