import asyncio

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_resume_store
from app.errors import PersistenceError
from app.services.resume_store import ResumeStore

router = APIRouter()


@router.get("/health")
async def health(store: ResumeStore = Depends(get_resume_store)):
    """Check that a pooled database connection can run a query."""
    try:
        await asyncio.to_thread(store.ping)
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=e.message)
    return {"status": "ok"}
