from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    """Liveness probe; the store was pinged when the app started."""
    return {"status": "ok"}
