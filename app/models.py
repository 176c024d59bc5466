import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_text(value: Any) -> Optional[str]:
    """Lenient string coercion: empty/null/structured values become None."""
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value if value.strip() else None
    return None


def _as_text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    items = (_as_text(item) for item in value)
    return [item for item in items if item is not None]


def _as_object(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_object_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


class LenientModel(BaseModel):
    """Base for views over LLM output: unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


# --- Recovered LLM structure -------------------------------------------------


class PersonalInfo(LenientModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _as_text(v)


class WorkExperience(LenientModel):
    role: Optional[str] = None
    company: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    description: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _as_text(v)


class Education(LenientModel):
    degree: Optional[str] = None
    institution: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _as_text(v)


class Project(LenientModel):
    name: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)

    @field_validator("name", "description", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _as_text(v)

    @field_validator("technologies", mode="before")
    @classmethod
    def dedupe_technologies(cls, v):
        # a set of names, kept as a list in first-seen order
        return list(dict.fromkeys(_as_text_list(v)))


class AIFeedback(LenientModel):
    rating_out_of_10: Optional[int] = None
    improvement_areas: Optional[str] = None
    suggested_skills_to_learn: List[str] = Field(default_factory=list)

    @field_validator("rating_out_of_10", mode="before")
    @classmethod
    def coerce_rating(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        if isinstance(v, float):
            if not math.isfinite(v):
                return None
            v = round(v)
        return v if 0 <= v <= 10 else None

    @field_validator("improvement_areas", mode="before")
    @classmethod
    def join_areas(cls, v):
        if isinstance(v, list):
            return "; ".join(_as_text_list(v)) or None
        return _as_text(v)

    @field_validator("suggested_skills_to_learn", mode="before")
    @classmethod
    def coerce_skills(cls, v):
        return _as_text_list(v)


class ParsedResume(LenientModel):
    """Typed view over whatever JSON the model produced."""

    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: Optional[str] = None
    work_experience: List[WorkExperience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    technical_skills: List[str] = Field(default_factory=list)
    soft_skills: List[str] = Field(default_factory=list)
    ai_feedback: AIFeedback = Field(default_factory=AIFeedback)

    @field_validator("personal", "ai_feedback", mode="before")
    @classmethod
    def coerce_object(cls, v):
        return _as_object(v)

    @field_validator("summary", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _as_text(v)

    @field_validator("work_experience", "education", "projects", mode="before")
    @classmethod
    def keep_objects(cls, v):
        return _as_object_list(v)

    @field_validator("certifications", "technical_skills", "soft_skills", mode="before")
    @classmethod
    def coerce_strings(cls, v):
        return _as_text_list(v)

    @classmethod
    def from_recovered(cls, value: Any) -> "ParsedResume":
        # Arrays and scalars carry none of the expected keys.
        return cls.model_validate(_as_object(value))


# --- Persisted record ----------------------------------------------------------


class ResumeCreate(BaseModel):
    """Column values for a full insert into the resumes table."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    summary: Optional[str] = None
    work_experience: List[WorkExperience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    technical_skills: List[str] = Field(default_factory=list)
    soft_skills: List[str] = Field(default_factory=list)
    rating: Optional[int] = Field(default=None, ge=0, le=10)
    feedback: Optional[str] = None
    suggested_skills: List[str] = Field(default_factory=list)
    file_name: str
    raw_text: str = ""

    @classmethod
    def from_parsed(cls, parsed: ParsedResume, file_name: str, raw_text: str) -> "ResumeCreate":
        return cls(
            name=parsed.personal.name,
            email=parsed.personal.email,
            phone=parsed.personal.phone,
            linkedin=parsed.personal.linkedin,
            summary=parsed.summary,
            work_experience=parsed.work_experience,
            education=parsed.education,
            projects=parsed.projects,
            certifications=parsed.certifications,
            technical_skills=parsed.technical_skills,
            soft_skills=parsed.soft_skills,
            rating=parsed.ai_feedback.rating_out_of_10,
            feedback=parsed.ai_feedback.improvement_areas,
            suggested_skills=parsed.ai_feedback.suggested_skills_to_learn,
            file_name=file_name,
            raw_text=raw_text,
        )


class ResumeRecord(ResumeCreate):
    id: int
    created_at: datetime

    @field_validator(
        "work_experience",
        "education",
        "projects",
        "certifications",
        "technical_skills",
        "soft_skills",
        "suggested_skills",
        mode="before",
    )
    @classmethod
    def default_lists(cls, v):
        # NULL JSON columns read back as empty lists
        return [] if v is None else v

    @field_validator("raw_text", mode="before")
    @classmethod
    def default_text(cls, v):
        return "" if v is None else v


class ResumeSummary(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    file_name: str
    created_at: datetime


# --- API responses ---------------------------------------------------------------


class UploadResponse(BaseModel):
    id: int
    parsed: Any


class UploadWarningResponse(BaseModel):
    warning: str
    raw: str
    id: int
