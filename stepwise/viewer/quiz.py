"""
Quiz renderer - Multiple-choice quiz display and scoring.

Provides:
- Question rendering with the selected / correct option highlighted
- Answer checking
- Quiz scoring support
"""

import html
from typing import Optional

from stepwise.schemas import Quiz, QuizQuestion


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-container {
        background: #e3f2fd;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        border-left: 4px solid #1976D2;
    }
    .quiz-title {
        font-weight: 600;
        color: #1565C0;
        font-size: 1.1em;
        margin-bottom: 0.8em;
    }
    .quiz-question {
        font-size: 1.05em;
        color: #333;
        margin-bottom: 1em;
        line-height: 1.6;
    }
    .quiz-option {
        background: white;
        border: 1px solid #ddd;
        border-radius: 8px;
        padding: 0.6em 1em;
        margin: 0.4em 0;
    }
    .quiz-option.selected {
        border-color: #1976D2;
    }
    .quiz-option.correct {
        background: #e8f5e9;
        border-color: #388E3C;
    }
    .quiz-option.wrong {
        background: #ffebee;
        border-color: #c62828;
    }
    .quiz-explanation {
        background: #fff3e0;
        padding: 0.8em 1em;
        border-radius: 8px;
        font-size: 0.95em;
        color: #e65100;
        margin-top: 1em;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def has_valid_answer(question: QuizQuestion) -> bool:
    """Whether correct_option_index points at one of the options."""
    return 0 <= question.correct_option_index < len(question.options)


def check_answer(question: QuizQuestion, selected_index: Optional[int]) -> bool:
    """Check a selected option. Questions with an invalid answer never match."""
    if selected_index is None or not has_valid_answer(question):
        return False
    return selected_index == question.correct_option_index


def render_quiz_question(
    question: QuizQuestion,
    index: int,
    selected_index: Optional[int] = None,
    show_answer: bool = False,
) -> str:
    """
    Render a single quiz question.

    Args:
        question: QuizQuestion object
        index: 0-based position within the quiz
        selected_index: Option chosen by the learner, if any
        show_answer: Whether to mark the correct option and show the explanation

    Returns:
        HTML string for the question
    """
    parts = ['<div class="quiz-container">']
    parts.append(f'<div class="quiz-title">Question {index + 1}</div>')
    parts.append(f'<div class="quiz-question">{html.escape(question.text)}</div>')

    for option_index, option in enumerate(question.options):
        classes = ["quiz-option"]
        if option_index == selected_index:
            classes.append("selected")
        if show_answer and option_index == question.correct_option_index:
            classes.append("correct")
        elif show_answer and option_index == selected_index:
            classes.append("wrong")
        parts.append(f'<div class="{" ".join(classes)}">{html.escape(option)}</div>')

    if show_answer and question.explanation:
        parts.append(f'<div class="quiz-explanation">{html.escape(question.explanation)}</div>')

    parts.append('</div>')
    return ''.join(parts)


def calculate_quiz_score(quiz: Quiz, answers: dict[int, int]) -> dict:
    """
    Calculate quiz score.

    Args:
        quiz: Quiz being answered
        answers: Question index -> selected option index

    Returns:
        Dict with score info
    """
    total = quiz.question_count
    if total == 0:
        return {"score": 1.0, "percent": 100, "correct": 0, "total": 0}

    correct = sum(
        1 for index, question in enumerate(quiz.questions)
        if check_answer(question, answers.get(index))
    )
    score = correct / total
    return {
        "score": round(score, 2),
        "percent": round(score * 100),
        "correct": correct,
        "total": total,
    }


def render_quiz_score(score_info: dict) -> str:
    """Render quiz score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{score_info['percent']}%</div>
        <div class="quiz-score-label">{score_info['correct']} of {score_info['total']} correct</div>
    </div>
    """
