"""Shared fixtures: canned model responses and candidate records."""

from __future__ import annotations

import asyncio
import json
from typing import Callable, List, Optional, Union

import pytest

from cv_screener.generation import generation_service
from cv_screener.generation.generation_service import TextGenerator
from cv_screener.schemas.candidate import CandidateRecord, Employment

SAMPLE_CV_TEXT = (
    "Jane Doe\n"
    "jane.doe@example.com | +1 555 0100\n"
    "Senior Software Engineer with 6 years of experience in Python and cloud services.\n"
    "Experience: Acme Corp, Senior Engineer, Jan 2020 - Present\n"
    "Globex, Software Engineer, 2017-2019\n"
    "Skills: Python, Django, AWS, PostgreSQL\n"
)

SAMPLE_MODEL_PAYLOAD = {
    "name": "Jane Doe",
    "email": "jane.doe@example.com",
    "phone": "+1 555 0100",
    "yearsOfExperience": 6,
    "skills": ["Python", "Django", "AWS", "PostgreSQL"],
    "companies": [
        {"name": "Acme Corp", "position": "Senior Engineer", "duration": "Jan 2020 - Present"},
        {"name": "Globex", "position": "Software Engineer", "duration": "2017-2019"},
    ],
    "summary": "Senior engineer focused on Python backends and AWS.",
}


class FakeGenerator(TextGenerator):
    """Canned generator: a fixed reply, or a callable computing one from the prompt."""

    def __init__(
        self,
        reply: Union[str, Callable[[str], str], None] = None,
        delay: float = 0.0,
        errors: Optional[List[Exception]] = None,
    ) -> None:
        self.reply = json.dumps(SAMPLE_MODEL_PAYLOAD) if reply is None else reply
        self.delay = delay
        self.errors = list(errors or [])
        self.prompts: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.errors:
                raise self.errors.pop(0)
            return self.reply(prompt) if callable(self.reply) else self.reply
        finally:
            self.in_flight -= 1


@pytest.fixture
def sample_cv_text() -> str:
    return SAMPLE_CV_TEXT


@pytest.fixture
def sample_payload() -> dict:
    return json.loads(json.dumps(SAMPLE_MODEL_PAYLOAD))


@pytest.fixture
def fake_generator_cls():
    return FakeGenerator


@pytest.fixture(autouse=True)
def _reset_generator_singleton():
    generation_service.reset_default_generator()
    yield
    generation_service.reset_default_generator()


def _make_record(
    name: str = "Jane Doe",
    years: float = 5,
    skills: Optional[List[str]] = None,
    summary: str = "Backend engineer.",
    companies: Optional[List[Employment]] = None,
    file_name: str = "jane.pdf",
) -> CandidateRecord:
    return CandidateRecord(
        source_file_name=file_name,
        name=name,
        years_of_experience=years,
        skills=skills if skills is not None else ["Python", "SQL"],
        summary=summary,
        companies=companies or [],
        raw_text=f"{name}\n{summary}",
    )


@pytest.fixture
def make_record():
    return _make_record
