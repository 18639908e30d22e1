from fastapi import APIRouter, Request

from boom_booking.config import resolve_api_base_url, resolve_websocket_url
from boom_booking.responses import success_response

router = APIRouter(tags=["Client Config"])


@router.get("")
async def get_client_config(request: Request):
    """URLs the browser client should use in this deployment."""
    settings = request.app.state.settings
    return success_response(
        data={
            "api_base_url": resolve_api_base_url(settings),
            "websocket_url": resolve_websocket_url(settings),
            "environment": settings.environment,
        }
    )
