import asyncio
import logging
import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.config import Settings
from app.dependencies import get_gemini_service, get_resume_store, get_settings
from app.models import ParsedResume, ResumeCreate, UploadResponse, UploadWarningResponse
from app.parsers import extract_text_from_pdf
from app.services.gemini_service import GeminiService
from app.services.json_recovery import recover_json
from app.services.resume_prompt import build_resume_prompt
from app.services.resume_store import ResumeStore

logger = logging.getLogger(__name__)

router = APIRouter()

PDF_CONTENT_TYPE = "application/pdf"
READ_CHUNK_SIZE = 64 * 1024
FALLBACK_WARNING = "Failed to parse JSON from LLM. Raw output saved."


async def read_upload_capped(upload: UploadFile, max_bytes: int) -> bytes:
    """Read the upload, refusing anything larger than max_bytes."""
    chunks = []
    total = 0
    while True:
        chunk = await upload.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum size is {max_bytes} bytes.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


def stored_file_name(original_name: str) -> str:
    # Only the basename survives, so "../x.pdf" cannot escape the upload dir.
    return f"{uuid.uuid4().hex}-{Path(original_name).name}"


@router.post("/upload")
async def upload_resume(
    resume: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    store: ResumeStore = Depends(get_resume_store),
    gemini: GeminiService = Depends(get_gemini_service),
):
    """
    Upload a resume PDF, extract it with Gemini and store the result.

    Replies with the new id and the parsed JSON, or with a warning and the
    raw model output when no JSON could be recovered from it.
    """
    if resume is None or not resume.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if resume.content_type != PDF_CONTENT_TYPE:
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")

    pdf_bytes = await read_upload_capped(resume, settings.max_upload_bytes)

    file_name = stored_file_name(resume.filename)
    upload_path = Path(settings.upload_dir) / file_name
    await asyncio.to_thread(upload_path.write_bytes, pdf_bytes)
    logger.info("Stored upload %s (%d bytes)", file_name, len(pdf_bytes))

    text = await asyncio.to_thread(extract_text_from_pdf, pdf_bytes)

    prompt = build_resume_prompt(text)
    raw_reply = await gemini.agenerate_text(prompt)

    recovered = recover_json(raw_reply)
    # A bare scalar such as null or 0 is no extraction at all.
    if not recovered.is_structured:
        logger.warning("No JSON object or array recovered from Gemini reply for %s", file_name)
        inserted = await asyncio.to_thread(store.insert_fallback, file_name, raw_reply)
        return UploadWarningResponse(warning=FALLBACK_WARNING, raw=raw_reply, id=inserted.id)

    parsed = ParsedResume.from_recovered(recovered.value)
    record = ResumeCreate.from_parsed(parsed, file_name=file_name, raw_text=text)
    inserted = await asyncio.to_thread(store.insert_full, record)
    logger.info("Stored resume %s as id %s", file_name, inserted.id)

    return UploadResponse(id=inserted.id, parsed=recovered.value)
