from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from equipment_inventory.api.deps import get_health_service
from equipment_inventory.core.exceptions import InfrastructureError
from equipment_inventory.schemas.common import ErrorResponse, OkResponse
from equipment_inventory.services.health import HealthService

router = APIRouter(prefix="/readyz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Readiness probe",
    description="Runs SELECT 1 against the database; 503 when it is unreachable.",
)
async def readyz(svc: HealthService = Depends(get_health_service)):
    try:
        return await svc.ok()
    except InfrastructureError:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Database unavailable"},
        )
