from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_resume_store
from app.models import ResumeRecord, ResumeSummary
from app.services.resume_store import ResumeStore

router = APIRouter()


@router.get("/resumes", response_model=List[ResumeSummary])
def list_resumes(store: ResumeStore = Depends(get_resume_store)):
    """List stored resumes, most recent first."""
    return store.list_summaries()


@router.get("/resumes/{resume_id}", response_model=ResumeRecord)
def get_resume(resume_id: int, store: ResumeStore = Depends(get_resume_store)):
    row = store.get(resume_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return row
