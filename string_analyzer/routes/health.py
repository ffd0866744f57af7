from fastapi import APIRouter

from string_analyzer.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")
