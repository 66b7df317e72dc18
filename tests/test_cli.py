"""
Tests for the scorelink command line tool
"""
import pytest

from scorelink.link_codec import encode
from scorelink.models import Question, Section, StudentInput
from scorelink.scorelink import format_report, main, performance_band
from scorelink.scoring import evaluate


@pytest.mark.parametrize("value, band", [
    (100, "strong"),
    (80, "strong"),
    (79.9, "fair"),
    (50, "fair"),
    (49, "weak"),
    (0, "weak"),
])
def test_performance_band(value, band):
    assert performance_band(value) == band


def test_format_report(reading_exam):
    sections, questions, student = reading_exam
    lines = format_report(evaluate(sections, questions, student), sections)

    assert lines[0] == "Student: Kim"
    assert lines[1] == "Total score: 1 / 3"
    assert "=== Reading ===" in lines
    assert "Section score: 1 / 3" in lines
    assert "  Detail: 1/2 (50%, fair)" in lines
    # Reading description for Detail follows the category line
    detail = lines.index("  Detail: 1/2 (50%, fair)")
    assert lines[detail + 1].startswith("    세부사항 문제.")
    assert "=== 기타 ===" not in lines


def test_grade_writes_report(exams_dir, tmp_path):
    output = tmp_path / "out" / "report.txt"
    code = main(["grade", "--exam", str(exams_dir / "sample-exam.yaml"), "--output", str(output)])

    assert code == 0
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Student: Kim"
    assert lines[1] == "Total score: 5 / 7.5"
    assert "=== Grammar ===" in lines
    assert "Section score: 2 / 3.5" in lines


def test_share_then_open(exams_dir, tmp_path, capsys):
    code = main([
        "share",
        "--exam", str(exams_dir / "sample-exam.yaml"),
        "--base-url", "https://example.com/report",
    ])
    assert code == 0
    url = capsys.readouterr().out.strip()
    assert url.startswith("https://example.com/report#s=")

    output = tmp_path / "shared.txt"
    code = main(["open", "--link", url, "--output", str(output)])
    assert code == 0
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[:2] == ["Student: Kim", "Total score: 5 / 7.5"]


def test_share_prints_bare_token(exams_dir, capsys):
    assert main(["share", "--exam", str(exams_dir / "sample-exam.yaml")]) == 0
    assert "#" not in capsys.readouterr().out


def test_open_invalid_link_fails(capsys):
    assert main(["open", "--link", "https://example.com/#s=!!!"]) == 1


def test_missing_exam_fails(tmp_path):
    assert main(["grade", "--exam", str(tmp_path / "missing.yaml")]) == 1


def test_format_report_lists_unresolved_section():
    sections = [Section(id="R", name="Reading", question_count=1)]
    questions = [
        Question(id="q1", section_id="R", category="Detail", correct_answer="a"),
        Question(id="q2", section_id="missing", category="관사", correct_answer="the", points=2),
    ]
    student = StudentInput(name="Kim", answers={"q1": "a", "q2": "The"})
    lines = format_report(evaluate(sections, questions, student), sections)

    assert lines[1] == "Total score: 3 / 3"
    fallback = lines.index("=== 기타 ===")
    assert lines.index("=== Reading ===") < fallback
    assert lines[fallback + 1] == "Section score: 2 / 2"
    assert lines[fallback + 2] == "  관사: 1/1 (100%, strong)"


def test_open_link_without_sections_reports_fallback_block(tmp_path):
    questions = [
        Question(id="q1", section_id="R", category="Detail", correct_answer="B"),
        Question(id="q2", section_id="R", category="Detail", correct_answer="A", points=2),
    ]
    token = encode([], questions, StudentInput(name="Kim", answers={"q1": "b", "q2": "c"}))

    output = tmp_path / "report.txt"
    assert main(["open", "--link", f"https://example.com/#s={token}", "--output", str(output)]) == 0
    lines = output.read_text(encoding="utf-8").splitlines()

    assert lines[:2] == ["Student: Kim", "Total score: 1 / 3"]
    assert "=== 기타 ===" in lines
    assert "Section score: 1 / 3" in lines
    assert "  Detail: 1/2 (50%, fair)" in lines
