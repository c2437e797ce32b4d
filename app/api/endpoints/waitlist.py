from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.core.deps import get_waitlist_intake
from app.schemas.waitlist import ErrorResponse, WaitlistAccepted, WaitlistIn
from app.services.waitlist_service import WaitlistIntake

router = APIRouter()


@router.post(
    "/waitlist",
    response_model=WaitlistAccepted,
    status_code=status.HTTP_201_CREATED,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": WaitlistIn.model_json_schema()}},
        }
    },
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def join_waitlist(request: Request, intake: WaitlistIntake = Depends(get_waitlist_intake)):
    """Store one waitlist sign-up.

    Body: `{"name"?: str, "email": str, "instagram"?: str}`. Only the email is
    validated; the entry is acknowledged only after the backend confirms the write.
    """
    await intake.handle(request)
    return WaitlistAccepted(ok=True)


@router.api_route("/waitlist", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def waitlist_method_not_allowed():
    raise HTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail="Method not allowed.")
