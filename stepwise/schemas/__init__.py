"""
Stepwise Schemas - Pydantic models for the tutorial runtime.

This module exports all schema classes for:
- Chapter: chapters, steps, quizzes and their enumerations
- Progress: per-chapter learning progress
"""

# Chapter schemas
from .chapter import (
    ChapterCategory,
    StepType,
    ChapterStep,
    QuizQuestion,
    Quiz,
    Chapter,
)

# Progress schemas
from .progress import (
    LearningState,
    ChapterProgress,
)

__all__ = [
    # Chapter
    'ChapterCategory',
    'StepType',
    'ChapterStep',
    'QuizQuestion',
    'Quiz',
    'Chapter',
    # Progress
    'LearningState',
    'ChapterProgress',
]
