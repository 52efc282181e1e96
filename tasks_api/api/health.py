"""Health check endpoint with store connectivity check."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from tasks_api.core.database import DocumentStore, check_db_connected, get_store
from tasks_api.schemas.health import HealthErrorResponse, HealthResponse

router = APIRouter()


@router.get(
    "",
    response_model=HealthResponse,
    responses={500: {"model": HealthErrorResponse}},
)
def get_health(
    request: Request,
    store: Annotated[DocumentStore, Depends(get_store)],
) -> HealthResponse | JSONResponse:
    """
    Return service health status and store connectivity.
    Used by load balancers and monitoring; 500 when the store is unreachable.
    """
    environment = request.app.state.settings.APP_ENV
    timestamp = datetime.now(UTC).isoformat()
    if not check_db_connected(store):
        body = HealthErrorResponse(
            environment=environment,
            timestamp=timestamp,
            error="Database unavailable",
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )
    return HealthResponse(environment=environment, timestamp=timestamp)
