from fastapi import Request

from app.config import Settings
from app.services.gemini_service import GeminiService
from app.services.resume_store import ResumeStore

# Handles are built once in the app lifespan and parked on app.state.


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_resume_store(request: Request) -> ResumeStore:
    return request.app.state.resume_store


def get_gemini_service(request: Request) -> GeminiService:
    return request.app.state.gemini_service
