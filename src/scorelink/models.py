"""
Data model shared by the scoring engine and the link codec.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Union

Number = Union[int, float]

@dataclass
class Section:
    """A graded part of the exam (e.g. Reading)

    Args:
        id (str): Unique section identifier.
        name (str): Display name.
        question_count (int): Declared number of questions. Informational only.
        color (str): Color tag from the report palette.
    """
    id: str
    name: str
    question_count: int = 0
    color: str = ""

@dataclass
class Question:
    """One scored item

    Args:
        id (str): Unique question identifier.
        section_id (str): Identifier of the owning section.
        category (str): Free-form skill tag (e.g. "Inference").
        correct_answer (str): Expected answer, compared case-insensitively.
        points (Number): Point value. Defaults to 1.
    """
    id: str
    section_id: str
    category: str
    correct_answer: str
    points: Number = 1

@dataclass
class StudentInput:
    """The submission being graded

    Args:
        name (str): Student display name.
        answers (Dict[str, str]): Raw answers keyed by question ID.
    """
    name: str
    answers: Dict[str, str] = field(default_factory=dict)

    def answer_for(self, question_id: str) -> str:
        """Get the raw answer for a question, empty if unanswered"""
        return self.answers.get(question_id) or ""

@dataclass(frozen=True)
class CategoryResult:
    """Accuracy for one (section, category) pairing"""
    category: str
    section_name: str
    total_questions: int
    correct_count: int
    percentage: float

@dataclass(frozen=True)
class EvaluationResult:
    """Result produced by `evaluate`

    Fields cannot be reassigned, but the dict and list fields are plain
    containers: the result is not hashable and callers must not mutate them.

    Args:
        student_name (str): Name of the graded student.
        is_correct (Dict[str, bool]): Correctness keyed by question ID.
        score_by_section (Dict[str, float]): Earned points keyed by section ID.
        max_score_by_section (Dict[str, float]): Possible points keyed by section ID.
        total_score (float): Sum of earned points, rounded to 2 decimal places.
        category_results (List[CategoryResult]): Aggregates in first-seen order.
    """
    student_name: str
    is_correct: Dict[str, bool]
    score_by_section: Dict[str, Number]
    max_score_by_section: Dict[str, Number]
    total_score: float
    category_results: List[CategoryResult]

    @property
    def grand_max_score(self) -> Number:
        """Get the maximum possible score across all sections"""
        return sum(self.max_score_by_section.values())

    def to_dict(self) -> dict:
        return {
            "student_name": self.student_name,
            "total_score": self.total_score,
            "grand_max_score": self.grand_max_score,
            "score_by_section": dict(self.score_by_section),
            "max_score_by_section": dict(self.max_score_by_section),
            "is_correct": dict(self.is_correct),
            "category_results": [
                {
                    "category": r.category,
                    "section_name": r.section_name,
                    "total_questions": r.total_questions,
                    "correct_count": r.correct_count,
                    "percentage": r.percentage,
                }
                for r in self.category_results
            ],
        }
