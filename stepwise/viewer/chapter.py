"""
Chapter renderer - Chapter header, topic lists and step badges.

Step bodies are markdown and are handed to Streamlit as-is; this module
only builds the HTML around them.
"""

import html
from typing import Optional

from stepwise.schemas import Chapter, ChapterProgress, ChapterStep, StepType

from .labels import get_category_display_name, get_state_class, get_state_icon


STEP_TYPE_LABELS = {
    StepType.READ: "📖 Read",
    StepType.ACTION: "🛠️ Action",
}


def get_chapter_css() -> str:
    """Get CSS styles for chapter display."""
    return """
    <style>
    .chapter-header {
        border-bottom: 2px solid #e0e0e0;
        padding-bottom: 0.8em;
        margin-bottom: 1.2em;
    }
    .chapter-category {
        color: #666;
        font-size: 0.9em;
        text-transform: uppercase;
        letter-spacing: 0.05em;
    }
    .chapter-description {
        color: #666;
        font-style: italic;
        line-height: 1.5;
    }
    .chapter-state {
        display: inline-block;
        border-radius: 12px;
        padding: 0.1em 0.7em;
        font-size: 0.85em;
    }
    .chapter-state.not-started { background: #f5f5f5; color: #757575; }
    .chapter-state.in-progress { background: #e3f2fd; color: #1565C0; }
    .chapter-state.completed { background: #e8f5e9; color: #388E3C; }
    .chapter-topics {
        background: #fafafa;
        border-left: 4px solid #1976D2;
        padding: 0.6em 1.2em;
        margin: 1em 0;
    }
    .step-badge {
        display: inline-block;
        border-radius: 6px;
        padding: 0.1em 0.5em;
        font-size: 0.8em;
        background: #f5f5f5;
    }
    .step-badge.action {
        background: #fff3e0;
        color: #e65100;
    }
    </style>
    """


def render_state_badge(progress: ChapterProgress) -> str:
    """Render the learning-state pill for a chapter."""
    css_class = get_state_class(progress.state)
    icon = get_state_icon(progress.state)
    return (
        f'<span class="chapter-state {css_class}">'
        f'{icon} {progress.progress_percentage}%</span>'
    )


def render_chapter_header(chapter: Chapter, progress: Optional[ChapterProgress] = None) -> str:
    """
    Render chapter title block.

    Args:
        chapter: Chapter to render
        progress: Optional progress snapshot shown next to the title

    Returns:
        HTML string for the header
    """
    parts = ['<div class="chapter-header">']
    parts.append(
        f'<div class="chapter-category">{html.escape(get_category_display_name(chapter.category))}</div>'
    )
    title = html.escape(f"Chapter {chapter.number}: {chapter.title}")
    badge = f" {render_state_badge(progress)}" if progress else ""
    parts.append(f'<h1>{title}{badge}</h1>')
    if chapter.description:
        parts.append(f'<p class="chapter-description">{html.escape(chapter.description)}</p>')
    parts.append('</div>')
    return ''.join(parts)


def render_topic_list(chapter: Chapter) -> str:
    """Render topics and key points; empty string when the chapter has neither."""
    sections = [("Topics", chapter.topics), ("Key points", chapter.key_points)]
    parts = []
    for label, items in sections:
        if not items:
            continue
        parts.append('<div class="chapter-topics">')
        parts.append(f'<strong>{label}</strong><ul>')
        for item in items:
            parts.append(f'<li>{html.escape(item)}</li>')
        parts.append('</ul></div>')
    return ''.join(parts)


def render_step_badge(step: ChapterStep) -> str:
    """Render the Read / Action badge for a step."""
    css_class = "step-badge action" if step.type == StepType.ACTION else "step-badge"
    return f'<span class="{css_class}">{STEP_TYPE_LABELS[step.type]}</span>'


def format_step_label(step: ChapterStep, index: int, completed: bool = False) -> str:
    """Plain-text label for a step expander, e.g. '✓ Step 2: Install the SDK'."""
    marker = "✓ " if completed else ""
    return f"{marker}Step {index + 1}: {step.title}"
