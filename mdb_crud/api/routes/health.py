"""
Connection check route.
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...observability.health import check_mongodb_health
from ..dependencies import get_mongo_client

router = APIRouter(tags=["health"])


@router.get("/check-connection", summary="To check the connection to the server.")
async def check_connection(client: Any = Depends(get_mongo_client)) -> JSONResponse:
    result = await check_mongodb_health(client)
    return JSONResponse(status_code=200 if result.healthy else 503, content=result.to_dict())
