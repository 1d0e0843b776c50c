"""
CV Screener – Streamlit frontend.
No business logic in layout; extraction, filtering and scoring live in the pipeline and services.
"""

from typing import List

import streamlit as st

from cv_screener.config import EXPERIENCE_FILTER_CEILING, SUPPORTED_EXTENSIONS
from cv_screener.cv_pipeline.batch_processor import handle_upload
from cv_screener.schemas.batch import UploadedFile
from cv_screener.schemas.candidate import CandidateRecord, FilterCriteria
from cv_screener.services.export_service import export_csv
from cv_screener.services.filter_service import available_skills, rank_candidates
from cv_screener.utils.duration import format_years, total_company_years, years_from_duration


def _score_badge(score) -> str:
    if not score:
        return "⚪"
    if score >= 80:
        return "🟢"
    if score >= 60:
        return "🔵"
    if score >= 40:
        return "🟡"
    return "🔴"


def _render_candidate(cv: CandidateRecord) -> None:
    with st.container():
        st.markdown("---")
        col_a, col_b = st.columns([3, 1])
        with col_a:
            st.markdown(f"### {cv.name}")
            st.caption(f"**File:** {cv.source_file_name} · **Experience:** {cv.years_of_experience:g} years")
            contact = " · ".join(v for v in (cv.email, cv.phone) if v)
            if contact:
                st.caption(contact)
            if cv.skills:
                st.markdown(" ".join(f"`{s}`" for s in cv.skills[:15]))
        with col_b:
            st.metric("Match", f"{_score_badge(cv.match_score)} {cv.match_score or 0}%")
            if cv.original_file:
                st.download_button(
                    "Original CV",
                    data=cv.original_file,
                    file_name=cv.source_file_name,
                    mime=cv.file_type or "application/octet-stream",
                    key=f"original_{cv.id}",
                )
        st.markdown(cv.summary)
        if cv.companies:
            with st.expander(f"Experience · {format_years(total_company_years(cv.companies))} across listed roles"):
                for c in cv.companies:
                    span = format_years(years_from_duration(c.duration_text))
                    st.markdown(f"- **{c.position}** at {c.company_name} · {c.duration_text} ({span})")
                    for achievement in c.achievements or []:
                        st.markdown(f"    - {achievement}")


def render_layout() -> None:
    """Streamlit page layout; upload, filters and ranked results."""
    st.set_page_config(page_title="CV Screener", layout="wide")
    st.title("CV Screener")
    st.markdown("*Upload résumés, extract structured profiles with AI, and rank candidates.*")
    st.divider()

    if "candidates" not in st.session_state:
        st.session_state["candidates"] = []
    if "error" not in st.session_state:
        st.session_state["error"] = None
    if "file_errors" not in st.session_state:
        st.session_state["file_errors"] = []

    uploads = st.file_uploader(
        "Upload CVs",
        type=list(SUPPORTED_EXTENSIONS),
        accept_multiple_files=True,
        key="uploads",
    )
    if st.button("Process CVs", type="primary", key="process_btn"):
        files = [UploadedFile(file_name=u.name, content=u.getvalue()) for u in uploads or []]
        with st.spinner(f"Processing {len(files)} files…"):
            response = handle_upload(files)
        if response.success:
            st.session_state["candidates"] = response.data or []
            st.session_state["file_errors"] = response.errors or []
            st.session_state["error"] = None
            st.success(f"Successfully processed {response.processed_count} of {response.total_count} files")
        else:
            st.session_state["candidates"] = []
            st.session_state["file_errors"] = []
            st.session_state["error"] = response.error

    if st.session_state.get("error"):
        st.error(st.session_state["error"])
    for fe in st.session_state.get("file_errors") or []:
        st.warning(f"{fe.file_name}: {fe.error}")

    candidates: List[CandidateRecord] = st.session_state.get("candidates") or []

    # ----- Filter section -----
    st.subheader("Filters")
    fcol1, fcol2 = st.columns(2)
    with fcol1:
        min_exp, max_exp = st.slider(
            "Years of experience",
            min_value=0.0,
            max_value=float(EXPERIENCE_FILTER_CEILING),
            value=(0.0, float(EXPERIENCE_FILTER_CEILING)),
            key="experience_range",
        )
        query = st.text_input("Search", placeholder="e.g. Python, fintech, team lead", key="search_query")
    with fcol2:
        skills = st.multiselect("Skills", options=available_skills(candidates), key="skills_filter")

    criteria = FilterCriteria(min_experience=min_exp, max_experience=max_exp, skills=skills, search_query=query)
    ranked = rank_candidates(candidates, criteria) if candidates else []

    st.divider()
    st.subheader("Results")
    if not candidates:
        st.info("Upload PDF, DOCX or TXT résumés and click **Process CVs**.")
        return

    st.markdown(f"**Showing:** {len(ranked)} of {len(candidates)} candidates")
    st.download_button(
        "Export to CSV",
        data=export_csv(ranked),
        file_name="candidates.csv",
        mime="text/csv",
        key="export_csv",
    )
    for cv in ranked:
        _render_candidate(cv)


if __name__ == "__main__":
    render_layout()
