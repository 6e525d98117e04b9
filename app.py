"""
Stepwise - Learn-by-doing tutorial dashboard

Streamlit application that renders the markdown chapters as interactive
steps and quizzes and tracks progress per chapter.

Usage:
    streamlit run app.py
"""

import logging

import streamlit as st

from stepwise.classroom import ChapterCatalog, Navigator, ProgressTracker
from stepwise.config import configure_logging, create_content_source, load_settings
from stepwise.schemas import LearningState
from stepwise.viewer import (
    calculate_quiz_score,
    format_step_label,
    get_category_display_name,
    get_chapter_css,
    get_quiz_css,
    render_chapter_header,
    render_quiz_question,
    render_quiz_score,
    render_step_badge,
    render_topic_list,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

settings = load_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=settings.page_title,
    page_icon="📘",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Shared Services (one catalog and tracker per process, shared by sessions)
# -----------------------------------------------------------------------------

@st.cache_resource
def get_services() -> tuple[ChapterCatalog, ProgressTracker, Navigator]:
    source = create_content_source(settings)
    logger.info(f"Loading chapters from {source!r}")
    catalog = ChapterCatalog(source)
    tracker = ProgressTracker(catalog)
    return catalog, tracker, Navigator(catalog, tracker)


def init_session_state():
    """Initialize session state variables."""
    _, _, navigator = get_services()

    if "current_chapter_id" not in st.session_state:
        st.session_state.current_chapter_id = navigator.get_recommended_chapter_id()

    if "quiz_answers" not in st.session_state:
        st.session_state.quiz_answers = {}

    if "quiz_submitted" not in st.session_state:
        st.session_state.quiz_submitted = False


def select_chapter(chapter_id: int):
    """Select a chapter and reset per-chapter UI state."""
    st.session_state.current_chapter_id = chapter_id
    st.session_state.quiz_answers = {}
    st.session_state.quiz_submitted = False
    st.rerun()


# -----------------------------------------------------------------------------
# Sidebar: Chapter Tree
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with overall progress and the chapter tree."""
    catalog, tracker, navigator = get_services()
    st.sidebar.title(f"📘 {settings.page_title}")

    if not catalog.get_all_chapters():
        st.sidebar.error("No chapters found. Check the content directory.")
        return

    stats = tracker.get_completion_stats()
    st.sidebar.markdown(
        f"**Progress:** {stats['completed']}/{stats['total_chapters']} chapters "
        f"({stats['completion_percent']}%)"
    )
    st.sidebar.progress(stats["completion_percent"] / 100)
    st.sidebar.divider()

    current_id = st.session_state.current_chapter_id
    for nav_category in navigator.get_navigation_tree(current_id):
        label = get_category_display_name(nav_category.category)
        counts = f"({nav_category.completed_count}/{nav_category.total_count})"
        expanded = any(c.is_current for c in nav_category.chapters)
        with st.sidebar.expander(f"**{label}** {counts}", expanded=expanded):
            for nav_chapter in nav_category.chapters:
                chapter = nav_chapter.chapter
                indicator = navigator.get_status_indicator(chapter.id, current_id)
                if st.button(
                    f"{indicator} {chapter.number}. {chapter.title}",
                    key=f"chapter_{chapter.id}",
                    use_container_width=True,
                ):
                    select_chapter(chapter.id)

    st.sidebar.divider()
    col1, col2 = st.sidebar.columns(2)
    with col1:
        if st.button("Reload chapters", use_container_width=True):
            catalog.reload_chapters()
            st.rerun()
    with col2:
        if st.button("Reset progress", use_container_width=True):
            tracker.reset_all_progress()
            st.rerun()

    failures = catalog.last_failures
    if failures:
        with st.sidebar.expander(f"⚠️ {len(failures)} chapter(s) failed to load"):
            for failure in failures:
                st.caption(f"{failure.identifier}: {failure.error}")


# -----------------------------------------------------------------------------
# Main Content: Chapter View
# -----------------------------------------------------------------------------

def render_chapter_view():
    """Render the open chapter."""
    catalog, tracker, _ = get_services()

    chapter_id = st.session_state.current_chapter_id
    if chapter_id is None:
        st.info("Select a chapter from the sidebar to begin.")
        return

    chapter = catalog.get_chapter(chapter_id)
    if chapter is None:
        st.error(f"Chapter not found: {chapter_id}")
        return

    progress = tracker.get_progress(chapter.id)

    render_navigation_bar(chapter.id)

    st.markdown(get_chapter_css(), unsafe_allow_html=True)
    st.markdown(render_chapter_header(chapter, progress), unsafe_allow_html=True)
    st.progress(progress.progress_percentage / 100)

    topics = render_topic_list(chapter)
    if topics:
        st.markdown(topics, unsafe_allow_html=True)

    if progress.state == LearningState.NOT_STARTED:
        if st.button("Start chapter", type="primary"):
            tracker.start_chapter(chapter.id)
            st.rerun()

    render_steps(chapter, progress)
    render_quiz_section(chapter)
    render_completion_section(chapter.id)


def render_navigation_bar(chapter_id: int):
    """Render navigation bar with prev/next buttons."""
    _, _, navigator = get_services()
    pos, total = navigator.get_chapter_position(chapter_id)
    prev_id = navigator.get_previous_chapter_id(chapter_id)
    next_id = navigator.get_next_chapter_id(chapter_id)

    col1, col2, col3 = st.columns([1, 2, 1])
    with col1:
        if prev_id is not None and st.button("← Previous", use_container_width=True):
            select_chapter(prev_id)
    with col2:
        st.markdown(f"<center>Chapter {pos} of {total}</center>", unsafe_allow_html=True)
    with col3:
        if next_id is not None and st.button("Next →", use_container_width=True):
            select_chapter(next_id)

    st.divider()


def render_steps(chapter, progress):
    """Render each step with its completion button."""
    _, tracker, _ = get_services()
    started = progress.state != LearningState.NOT_STARTED

    for index, step in enumerate(chapter.steps):
        done = index < progress.current_step_index
        is_next = index == progress.current_step_index
        with st.expander(format_step_label(step, index, done), expanded=is_next and started):
            st.markdown(render_step_badge(step), unsafe_allow_html=True)
            st.markdown(step.content)
            if started and not done:
                if st.button("Mark step complete", key=f"step_{chapter.id}_{index}"):
                    tracker.complete_step(chapter.id, index)
                    st.rerun()


def render_quiz_section(chapter):
    """Render the end-of-chapter quiz."""
    if chapter.quiz is None or not chapter.quiz.questions:
        return

    quiz = chapter.quiz
    st.divider()
    st.subheader("Quiz")
    st.markdown(get_quiz_css(), unsafe_allow_html=True)

    answers = st.session_state.quiz_answers
    submitted = st.session_state.quiz_submitted

    for index, question in enumerate(quiz.questions):
        if submitted:
            st.markdown(
                render_quiz_question(question, index, answers.get(index), show_answer=True),
                unsafe_allow_html=True,
            )
            continue
        choice = st.radio(
            f"**Question {index + 1}:** {question.text}",
            options=list(range(len(question.options))),
            format_func=lambda option, q=question: q.options[option],
            index=None,
            key=f"quiz_{chapter.id}_{index}",
        )
        if choice is not None:
            answers[index] = choice

    if submitted:
        score = calculate_quiz_score(quiz, answers)
        st.markdown(render_quiz_score(score), unsafe_allow_html=True)
        if st.button("Try again"):
            st.session_state.quiz_answers = {}
            st.session_state.quiz_submitted = False
            st.rerun()
    elif st.button("Submit answers", disabled=len(answers) < quiz.question_count):
        _, _, navigator = get_services()
        st.session_state.quiz_submitted = True
        if calculate_quiz_score(quiz, answers)["percent"] == 100:
            navigator.complete_chapter(chapter.id)
        st.rerun()


def render_completion_section(chapter_id: int):
    """Render chapter completion section."""
    _, tracker, navigator = get_services()
    progress = tracker.get_progress(chapter_id)

    st.divider()
    if progress.state == LearningState.COMPLETED:
        st.success("Chapter completed!")
        if st.button("Mark as incomplete"):
            tracker.reset_chapter(chapter_id)
            st.rerun()
    elif st.button("Mark chapter as complete", type="primary", use_container_width=True):
        next_id = navigator.complete_chapter(chapter_id)
        if next_id is not None:
            select_chapter(next_id)
        st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()
    render_chapter_view()


if __name__ == "__main__":
    main()
