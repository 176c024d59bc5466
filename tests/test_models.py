import pytest

from app.models import ParsedResume, ResumeCreate


def test_scenario_name_only_defaults_every_list():
    parsed = ParsedResume.from_recovered({"personal": {"name": "Jane"}, "summary": None})
    record = ResumeCreate.from_parsed(parsed, file_name="f.pdf", raw_text="text")

    assert record.name == "Jane"
    assert record.email is None
    assert record.summary is None
    assert record.rating is None
    assert record.feedback is None
    for field in (
        "work_experience",
        "education",
        "projects",
        "certifications",
        "technical_skills",
        "soft_skills",
        "suggested_skills",
    ):
        assert getattr(record, field) == []


@pytest.mark.parametrize("value", [[], [1, 2], "text", 3, None, True])
def test_non_object_maps_to_defaults(value):
    parsed = ParsedResume.from_recovered(value)
    assert parsed == ParsedResume()


def test_null_and_wrongly_typed_sections():
    parsed = ParsedResume.from_recovered(
        {
            "personal": None,
            "summary": "",
            "work_experience": None,
            "education": "Stanford",
            "projects": [None, "x", {"name": "Site", "technologies": None}],
            "certifications": ["AWS", None, "", 7],
            "technical_skills": "python",
            "ai_feedback": "great",
        }
    )
    assert parsed.personal.name is None
    assert parsed.summary is None
    assert parsed.work_experience == []
    assert parsed.education == []
    assert len(parsed.projects) == 1
    assert parsed.projects[0].name == "Site"
    assert parsed.projects[0].technologies == []
    assert parsed.certifications == ["AWS", "7"]
    assert parsed.technical_skills == []
    assert parsed.ai_feedback.rating_out_of_10 is None


def test_project_technologies_are_deduplicated_in_order():
    parsed = ParsedResume.from_recovered(
        {"projects": [{"name": "p", "technologies": ["react", "node", "react", "sql"]}]}
    )
    assert parsed.projects[0].technologies == ["react", "node", "sql"]


@pytest.mark.parametrize(
    "rating, expected",
    [
        (8, 8),
        (0, 0),
        (10, 10),
        (7.0, 7),
        (6.6, 7),
        ("8", None),
        ("eight", None),
        (True, None),
        (None, None),
        (11, None),
        (-1, None),
        ([8], None),
    ],
)
def test_rating_is_integer_or_null(rating, expected):
    parsed = ParsedResume.from_recovered({"ai_feedback": {"rating_out_of_10": rating}})
    assert parsed.ai_feedback.rating_out_of_10 == expected


@pytest.mark.parametrize(
    "areas, expected",
    [
        (["Add metrics", "Shorten summary"], "Add metrics; Shorten summary"),
        ("Add metrics", "Add metrics"),
        ([], None),
        (None, None),
        ({"a": 1}, None),
    ],
)
def test_feedback_joins_improvement_areas(areas, expected):
    parsed = ParsedResume.from_recovered({"ai_feedback": {"improvement_areas": areas}})
    record = ResumeCreate.from_parsed(parsed, file_name="f.pdf", raw_text="")
    assert record.feedback == expected


def test_full_mapping():
    parsed = ParsedResume.from_recovered(
        {
            "personal": {
                "name": "Jane Doe",
                "email": "jane@example.com",
                "phone": 5551234,
                "linkedin": "linkedin.com/in/jane",
                "extra": "ignored",
            },
            "summary": "Engineer",
            "work_experience": [
                {"role": "Dev", "company": "Acme", "start": "2020", "end": None, "description": "APIs"}
            ],
            "education": [{"degree": "BSc", "institution": "MIT", "start": "2014", "end": "2018"}],
            "soft_skills": ["communication"],
            "ai_feedback": {
                "rating_out_of_10": 7,
                "improvement_areas": ["metrics"],
                "suggested_skills_to_learn": ["kubernetes"],
            },
        }
    )
    record = ResumeCreate.from_parsed(parsed, file_name="abc-cv.pdf", raw_text="pdf text")

    assert record.phone == "5551234"
    assert record.linkedin == "linkedin.com/in/jane"
    assert record.work_experience[0].company == "Acme"
    assert record.work_experience[0].end is None
    assert record.education[0].notes is None
    assert record.soft_skills == ["communication"]
    assert record.rating == 7
    assert record.feedback == "metrics"
    assert record.suggested_skills == ["kubernetes"]
    assert record.file_name == "abc-cv.pdf"
    assert record.raw_text == "pdf text"
