# storefront/api/routers/health.py
from fastapi import APIRouter, Depends

from storefront.api.state import AppState, get_state

router = APIRouter(tags=["health"])


@router.get("/health")
def health(state: AppState = Depends(get_state)):
    return {
        "status": "ok",
        "api_url": state.client.base_url,
        "order_poller": state.poller.running,
    }
