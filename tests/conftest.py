import pathlib

import pytest

from scorelink.config import DEFAULT_PALETTE
from scorelink.models import Question, Section, StudentInput

EXAMS_DIR = pathlib.Path(__file__).resolve().parent.parent / "exams"


@pytest.fixture
def exams_dir():
    return EXAMS_DIR


@pytest.fixture
def reading_exam():
    """The single-section exam used throughout the docs."""
    sections = [Section(id="R", name="Reading", question_count=2, color=DEFAULT_PALETTE[0])]
    questions = [
        Question(id="q1", section_id="R", category="Detail", correct_answer="B", points=1),
        Question(id="q2", section_id="R", category="Detail", correct_answer="A", points=2),
    ]
    student = StudentInput(name="Kim", answers={"q1": "b", "q2": "c"})
    return sections, questions, student


@pytest.fixture
def mixed_exam():
    sections = [
        Section(id="L", name="Listening", question_count=2, color=DEFAULT_PALETTE[2]),
        Section(id="G", name="Grammar", question_count=3, color="not-in-palette"),
        Section(id="E", name="Empty", question_count=0, color=DEFAULT_PALETTE[4]),
    ]
    questions = [
        Question(id="l1", section_id="L", category="Main Idea", correct_answer="A"),
        Question(id="l2", section_id="L", category="Prosody", correct_answer="c", points=2.5),
        Question(id="g1", section_id="G", category="시제", correct_answer="went"),
        Question(id="g2", section_id="G", category="Main Idea", correct_answer="had gone", points=3),
        Question(id="g3", section_id="G", category="시제", correct_answer="is"),
    ]
    student = StudentInput(
        name="이민지",
        answers={"l1": " a ", "l2": "C", "g1": "go", "g2": "Had Gone"},
    )
    return sections, questions, student
