"""
Scoring engine.

Grades a student's answers against the answer key and aggregates the results
per section and per (section, category) pairing. Never raises: unresolved
section references fall back to a fixed label.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from scorelink.config import DEFAULT_CONFIG, ReportConfig
from scorelink.models import (
    CategoryResult,
    EvaluationResult,
    Question,
    Section,
    StudentInput,
)

logger = logging.getLogger(__name__)

def normalize_answer(answer: Optional[str]) -> str:
    """Trim surrounding whitespace and lowercase an answer"""
    return (answer or "").strip().lower()

def is_answer_correct(student_answer: Optional[str], correct_answer: Optional[str]) -> bool:
    """Check a single answer. An empty answer is never correct."""
    given = normalize_answer(student_answer)
    return given != "" and given == normalize_answer(correct_answer)

def round_score(value: float) -> float:
    """Round to 2 decimal places, halves rounded up"""
    return math.floor(value * 100 + 0.5) / 100

def percentage(correct: int, total: int) -> float:
    """Percentage of correct answers, 0 when nothing was seen"""
    if total <= 0:
        return 0.0
    return correct / total * 100

def evaluate(
    sections: Sequence[Section],
    questions: Sequence[Question],
    student: StudentInput,
    config: Optional[ReportConfig] = None,
) -> EvaluationResult:
    """Grade a submission

    Args:
        sections (Sequence[Section]): Exam sections.
        questions (Sequence[Question]): Question bank, in exam order.
        student (StudentInput): The submission to grade.
        config (ReportConfig, optional): Supplies the fallback section label.

    Returns:
        EvaluationResult: Per-question, per-section and per-category results.
    """
    config = config or DEFAULT_CONFIG

    is_correct: Dict[str, bool] = {}
    score_by_section: Dict[str, float] = {s.id: 0 for s in sections}
    max_score_by_section: Dict[str, float] = {s.id: 0 for s in sections}
    section_names = {s.id: s.name for s in sections}

    # Insertion order of the dict is the first-seen order of each pairing
    tallies: Dict[Tuple[str, str], List[int]] = {}

    for question in questions:
        correct = is_answer_correct(
            student.answer_for(question.id),
            question.correct_answer,
        )
        is_correct[question.id] = correct

        sid = question.section_id
        max_score_by_section[sid] = max_score_by_section.get(sid, 0) + question.points
        if correct:
            score_by_section[sid] = score_by_section.get(sid, 0) + question.points

        section_name = section_names.get(sid)
        if not section_name:
            logger.debug(
                f"Question {question.id} references unknown section '{sid}', "
                f"using '{config.fallback_section_name}'"
            )
            section_name = config.fallback_section_name

        tally = tallies.setdefault((section_name, question.category), [0, 0])
        tally[0] += 1
        if correct:
            tally[1] += 1

    category_results = [
        CategoryResult(
            category=category,
            section_name=section_name,
            total_questions=total,
            correct_count=correct,
            percentage=percentage(correct, total),
        )
        for (section_name, category), (total, correct) in tallies.items()
    ]

    total_score = round_score(sum(score_by_section.values()))
    logger.debug(
        f"Evaluated {len(questions)} questions for '{student.name}': "
        f"total score {total_score}"
    )

    return EvaluationResult(
        student_name=student.name,
        is_correct=is_correct,
        score_by_section=score_by_section,
        max_score_by_section=max_score_by_section,
        total_score=total_score,
        category_results=category_results,
    )
