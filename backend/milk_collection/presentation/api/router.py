"""Root ``/api`` router; each API version mounts beneath it."""

from fastapi import APIRouter

from milk_collection.presentation.api.v1.router import router as v1_router

router = APIRouter(prefix="/api")
router.include_router(v1_router)
