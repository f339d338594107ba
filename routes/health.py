# routes/health.py
from fastapi import APIRouter

router = APIRouter(tags=["health"])

@router.get("/api/v1/healthcheck")
@router.get("/healthcheck", include_in_schema=False)
async def health_check():
    return {"status": "UP"}
