"""Tests for LLM profile extraction: JSON recovery and field coercion.

The model is replaced by a canned generator so adversarial responses (fenced,
prose-wrapped, truncated, empty) can be exercised deterministically.
"""

from __future__ import annotations

import asyncio
import json

import pytest

from cv_screener.cv_pipeline.profile_extractor import extract_profile, parse_model_json
from cv_screener.exceptions import ParseFailed


def _extract(generator, text: str, file_name: str = "jane.pdf"):
    return asyncio.run(extract_profile(text, file_name, generator))


def _comparable(record) -> dict:
    return record.model_dump(exclude={"id"})


def test_plain_json_response(fake_generator_cls, sample_cv_text, sample_payload) -> None:
    gen = fake_generator_cls(json.dumps(sample_payload))
    record = _extract(gen, sample_cv_text)
    assert record.name == "Jane Doe"
    assert record.email == "jane.doe@example.com"
    assert record.years_of_experience == 6
    assert record.skills == ["Python", "Django", "AWS", "PostgreSQL"]
    assert [c.company_name for c in record.companies] == ["Acme Corp", "Globex"]
    assert record.companies[0].duration_text == "Jan 2020 - Present"
    assert record.source_file_name == "jane.pdf"
    assert record.raw_text == sample_cv_text
    assert record.match_score is None
    assert len(gen.prompts) == 1


def test_prompt_contract(fake_generator_cls, sample_cv_text) -> None:
    gen = fake_generator_cls()
    _extract(gen, sample_cv_text)
    prompt = gen.prompts[0]
    assert sample_cv_text in prompt
    assert "Return ONLY valid JSON" in prompt
    assert "Do NOT invent data" in prompt
    assert '"yearsOfExperience"' in prompt


def test_fenced_response_matches_unwrapped(fake_generator_cls, sample_cv_text, sample_payload) -> None:
    body = json.dumps(sample_payload, indent=2)
    plain = _extract(fake_generator_cls(body), sample_cv_text)
    fenced = _extract(fake_generator_cls(f"```json\n{body}\n```"), sample_cv_text)
    assert _comparable(fenced) == _comparable(plain)
    assert fenced.id != plain.id


def test_prose_wrapped_object_is_recovered(fake_generator_cls, sample_cv_text, sample_payload) -> None:
    reply = f"Here is the extracted profile:\n{json.dumps(sample_payload)}\nLet me know if you need more."
    record = _extract(fake_generator_cls(reply), sample_cv_text)
    assert record.name == "Jane Doe"
    assert len(record.companies) == 2


def test_brace_matching_ignores_braces_inside_strings() -> None:
    reply = 'Sure! {"name": "A {curly} name", "summary": "uses } and {"} trailing } noise'
    assert parse_model_json(reply) == {"name": "A {curly} name", "summary": "uses } and {"}


@pytest.mark.parametrize("reply", ["not json at all", '{"name": "Jane"', "[1, 2, 3]"])
def test_unrecoverable_response_raises(fake_generator_cls, sample_cv_text, reply: str) -> None:
    with pytest.raises(ParseFailed) as excinfo:
        _extract(fake_generator_cls(reply), sample_cv_text)
    assert excinfo.value.raw_response == reply


def test_empty_response_raises(fake_generator_cls, sample_cv_text) -> None:
    with pytest.raises(ParseFailed):
        _extract(fake_generator_cls("   "), sample_cv_text)


def test_missing_and_malformed_fields_get_defaults(fake_generator_cls) -> None:
    reply = json.dumps(
        {
            "name": None,
            "email": "",
            "phone": "null",
            "yearsOfExperience": "about five",
            "skills": "Python, SQL",
            "companies": [{}, "garbage", {"name": "Initech", "achievements": ["Shipped v2", 3]}],
        }
    )
    record = _extract(fake_generator_cls(reply), "No contact details in this document. " * 3)
    assert record.name == "Unknown"
    assert record.email is None
    assert record.phone is None
    assert record.years_of_experience == 0
    assert record.skills == []
    assert record.summary == "No summary available"
    assert len(record.companies) == 2
    first, second = record.companies
    assert (first.company_name, first.position, first.duration_text) == ("Unknown Company", "Unknown Position", "N/A")
    assert first.achievements is None
    assert second.company_name == "Initech"
    assert second.achievements == ["Shipped v2"]


def test_non_list_companies_is_empty(fake_generator_cls, sample_cv_text) -> None:
    record = _extract(fake_generator_cls('{"name": "Jane", "companies": {"name": "Acme"}}'), sample_cv_text)
    assert record.companies == []


def test_negative_years_clamped(fake_generator_cls, sample_cv_text) -> None:
    record = _extract(fake_generator_cls('{"name": "Jane", "yearsOfExperience": -3}'), sample_cv_text)
    assert record.years_of_experience == 0


def test_numeric_string_years_coerced(fake_generator_cls, sample_cv_text) -> None:
    record = _extract(fake_generator_cls('{"name": "Jane", "yearsOfExperience": "4.5"}'), sample_cv_text)
    assert record.years_of_experience == 4.5


def test_email_falls_back_to_document_text(fake_generator_cls, sample_cv_text) -> None:
    record = _extract(fake_generator_cls('{"name": "Jane Doe", "email": null}'), sample_cv_text)
    assert record.email == "jane.doe@example.com"


def test_ids_are_unique(fake_generator_cls, sample_cv_text) -> None:
    gen = fake_generator_cls()
    ids = {_extract(gen, sample_cv_text).id for _ in range(5)}
    assert len(ids) == 5
