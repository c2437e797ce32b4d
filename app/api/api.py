from fastapi import APIRouter, HTTPException, status

from app.api.endpoints import health, waitlist

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(waitlist.router, tags=["waitlist"])


# Keep unknown /api paths out of the frontend fallback
@api_router.api_route("/{path:path}", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def api_route_not_found(path: str):
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Route not found.")
