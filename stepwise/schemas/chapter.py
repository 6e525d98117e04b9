"""
Chapter content schemas for Stepwise.

Defines Pydantic models for parsed tutorial content including:
- Chapters and their categories
- Chapter steps (read / action)
- End-of-chapter quizzes
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ChapterCategory(str, Enum):
    INTRODUCTION = "Introduction"
    SETUP = "Setup"
    API_DEVELOPMENT = "ApiDevelopment"
    BLAZOR_BASICS = "BlazorBasics"
    COMPONENTS = "Components"
    STATE_MANAGEMENT = "StateManagement"
    DASHBOARD = "Dashboard"
    ADVANCED = "Advanced"
    WRAP_UP = "WrapUp"
    # Accepted by the parser, not used by the bundled chapters
    CSHARP_FUNDAMENTALS = "CSharpFundamentals"
    CSHARP_TYPES = "CSharpTypes"
    DATA_ACCESS = "DataAccess"
    NEXT_STEPS = "NextSteps"


class StepType(str, Enum):
    READ = "Read"
    ACTION = "Action"


# -----------------------------------------------------------------------------
# Steps and quizzes
# -----------------------------------------------------------------------------

class ChapterStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    content: str = ""          # markdown, rendered as-is by the dashboard
    type: StepType = StepType.READ


class QuizQuestion(BaseModel):
    """
    One multiple-choice question.
    correct_option_index is 0-based and is not bounds-checked against options.
    """
    model_config = ConfigDict(frozen=True)

    text: str = ""
    options: tuple[str, ...] = ()
    correct_option_index: int = 0
    explanation: str = ""


class Quiz(BaseModel):
    model_config = ConfigDict(frozen=True)

    questions: tuple[QuizQuestion, ...] = ()

    @property
    def question_count(self) -> int:
        return len(self.questions)


# -----------------------------------------------------------------------------
# Main chapter schema
# -----------------------------------------------------------------------------

class Chapter(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = 0
    number: int = 0            # display / iteration order
    title: str = ""
    description: str = ""
    route: Optional[str] = None
    category: ChapterCategory = ChapterCategory.INTRODUCTION
    topics: tuple[str, ...] = ()
    key_points: tuple[str, ...] = ()
    steps: tuple[ChapterStep, ...] = ()
    quiz: Optional[Quiz] = None

    @property
    def step_count(self) -> int:
        return len(self.steps)
