"""
Progress tracking schemas for Stepwise.

Defines Pydantic models for learner progress including:
- Chapter learning state
- Per-chapter progress snapshot
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LearningState(str, Enum):
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"


class ChapterProgress(BaseModel):
    """
    Immutable progress snapshot for one chapter.
    The tracker swaps in a new snapshot on every change.
    """
    model_config = ConfigDict(frozen=True)

    chapter_id: int
    state: LearningState = LearningState.NOT_STARTED
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    progress_percentage: int = Field(default=0, ge=0, le=100)
    current_step_index: int = Field(default=0, ge=0)
