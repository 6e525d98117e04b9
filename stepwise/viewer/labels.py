"""
Display labels for categories and learning states.

Pure presentation mapping used by the sidebar and chapter headers.
"""

from stepwise.schemas import ChapterCategory, LearningState


CATEGORY_DISPLAY_NAMES = {
    ChapterCategory.INTRODUCTION: "📖 Introduction",
    ChapterCategory.SETUP: "🛠️ Environment Setup",
    ChapterCategory.API_DEVELOPMENT: "🚀 API Development",
    ChapterCategory.BLAZOR_BASICS: "⚡ Blazor Basics",
    ChapterCategory.COMPONENTS: "🧩 Components",
    ChapterCategory.STATE_MANAGEMENT: "🔄 State Management",
    ChapterCategory.DASHBOARD: "📊 Dashboard",
    ChapterCategory.ADVANCED: "🎯 Advanced Topics",
    ChapterCategory.WRAP_UP: "🎉 Wrap-Up",
}

STATE_ICONS = {
    LearningState.NOT_STARTED: "○",
    LearningState.IN_PROGRESS: "◐",
    LearningState.COMPLETED: "✓",
}

STATE_CLASSES = {
    LearningState.NOT_STARTED: "not-started",
    LearningState.IN_PROGRESS: "in-progress",
    LearningState.COMPLETED: "completed",
}


def get_category_display_name(category: ChapterCategory) -> str:
    """Display name for a category; categories without one use their value."""
    return CATEGORY_DISPLAY_NAMES.get(category, category.value)


def get_state_icon(state: LearningState) -> str:
    return STATE_ICONS.get(state, STATE_ICONS[LearningState.NOT_STARTED])


def get_state_class(state: LearningState) -> str:
    return STATE_CLASSES.get(state, STATE_CLASSES[LearningState.NOT_STARTED])
