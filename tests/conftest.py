import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.routers import upload as upload_module
from app.services.gemini_service import GeminiService
from app.services.resume_store import ResumeStore, create_db_engine

RESUME_TEXT = "Jane Doe\njane@example.com\nPython developer {5 years}"


class FakeGemini(GeminiService):
    """Returns a canned reply (or raises it) and records the prompts."""

    def __init__(self, reply=""):
        super().__init__(client=None, model="fake-model")
        self.reply = reply
        self.prompts = []

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        upload_dir=str(tmp_path / "uploads"),
        gemini_api_key=None,
        max_upload_bytes=1024,
    )


@pytest.fixture
def store(settings):
    store = ResumeStore(create_db_engine(settings))
    store.create_schema()
    yield store
    store.dispose()


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def extracted_text(monkeypatch):
    """Replace PDF parsing with a fixed text; tests may reassign the value."""
    holder = {"text": RESUME_TEXT, "calls": 0}

    def fake_extract(data):
        holder["calls"] += 1
        return holder["text"]

    monkeypatch.setattr(upload_module, "extract_text_from_pdf", fake_extract)
    return holder


@pytest.fixture
def client(settings, store, fake_gemini, extracted_text):
    app = create_app(settings, resume_store=store, gemini_service=fake_gemini)
    with TestClient(app) as c:
        yield c


def pdf_upload(data=b"%PDF-1.4\n%%EOF", name="resume.pdf", content_type="application/pdf"):
    return {"resume": (name, data, content_type)}
