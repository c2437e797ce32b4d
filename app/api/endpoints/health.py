from fastapi import APIRouter, HTTPException, status

from app.schemas.waitlist import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health_check():
    return HealthStatus(ok=True)


@router.api_route("/health", methods=["POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def health_method_not_allowed():
    raise HTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail="Method not allowed.")
