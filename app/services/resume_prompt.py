RESUME_SCHEMA = """{
  "personal": {
    "name": string | null,
    "email": string | null,
    "phone": string | null,
    "linkedin": string | null
  },
  "summary": string | null,
  "work_experience": [ { "role": string, "company": string, "start": string|null, "end": string|null, "description": string|null } ],
  "education": [ { "degree": string|null, "institution": string|null, "start": string|null, "end": string|null, "notes": string|null } ],
  "projects": [ { "name": string, "description": string|null, "technologies": [string] } ],
  "certifications": [ string ],
  "technical_skills": [ string ],
  "soft_skills": [ string ],
  "ai_feedback": {
    "rating_out_of_10": integer,
    "improvement_areas": [ string ],
    "suggested_skills_to_learn": [ string ]
  }
}"""


def build_resume_prompt(resume_text: str) -> str:
    return f"""You are a resume parsing assistant. Return ONLY valid JSON, exactly in this shape:

{RESUME_SCHEMA}

Parse the resume below. Produce JSON values; for fields you cannot find, set null or empty arrays as appropriate. Keep fields consistent. Do NOT output any extra text.

Resume text:
\"\"\"
{resume_text}
\"\"\""""
