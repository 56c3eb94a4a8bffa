from datetime import datetime
from fastapi import APIRouter
from config import ApplicationConfig

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health():
    return {
        "success": True,
        "message": f"{ApplicationConfig.SERVICE_NAME} is running",
        "timestamp": datetime.utcnow().isoformat(),
    }
