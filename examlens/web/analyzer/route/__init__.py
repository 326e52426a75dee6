"""Route aggregation for the question analyzer web application."""

from fastapi import APIRouter

from . import analyze

router = APIRouter()
router.include_router(analyze.router)
