from fastapi import APIRouter

from api.v1.routes.directory import router as directory_router

router = APIRouter()
router.include_router(directory_router)
