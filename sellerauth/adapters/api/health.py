from fastapi import APIRouter

router = APIRouter()


@router.get("")
async def health_check() -> dict:
    """Liveness probe. Does not touch the credential store."""
    return {"status": "ok"}
