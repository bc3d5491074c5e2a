from fastapi import APIRouter

from ..schemas import HealthResponse
from ..version import API_VERSION


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health():
    return {"status": "ok", "version": API_VERSION}
