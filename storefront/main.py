# storefront/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from storefront.api.routers import admin, auth, cart, health, menu, orders
from storefront.api.state import AppState, build_state
from storefront.utils.logging import get_logger
from storefront.utils.monitoring import init_sentry

logger = get_logger(__name__)


def create_app(state: AppState | None = None, sentry_dsn: str | None = None) -> FastAPI:
    init_sentry(sentry_dsn)
    state = state or build_state()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state.poller.start()
        try:
            yield
        finally:
            # teardown must cancel the polling thread
            state.poller.stop()

    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.storefront = state

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(menu.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(admin.router)

    logger.info(f"Storefront gateway for {state.client.base_url}")
    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
