"""
Tests for scorelink.config
"""
import pytest

from scorelink.config import (
    DEFAULT_CONFIG,
    DEFAULT_PALETTE,
    ReportConfig,
    load_config,
    load_exam,
)
from scorelink.errors import ConfigError
from scorelink.scoring import evaluate


def test_default_config():
    assert load_config(None) is DEFAULT_CONFIG
    assert DEFAULT_CONFIG.palette == DEFAULT_PALETTE
    assert DEFAULT_CONFIG.default_points == 1
    assert DEFAULT_CONFIG.fallback_section_name == "기타"


def test_color_index():
    assert DEFAULT_CONFIG.color_index(DEFAULT_PALETTE[3]) == 3
    assert DEFAULT_CONFIG.color_index("unknown") == 0


def test_config_is_read_only():
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.default_points = 5


def test_load_sample_config(exams_dir):
    config = load_config(exams_dir / "report-config.yaml")

    assert config.palette == DEFAULT_PALETTE
    assert config.default_points == 1
    assert config.fallback_section_name == "기타"


def test_load_config_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "palette: [red, green]\n"
        "fallback_section_name: Other\n"
        "descriptions:\n"
        "  grammar:\n"
        "    Tense: Verb tenses\n",
        encoding="utf-8",
    )
    config = load_config(path)

    assert config.palette == ("red", "green")
    assert config.default_points == 1
    assert config.fallback_section_name == "Other"
    assert config.descriptions.describe("Tense", "Grammar") == "Verb tenses"
    assert config.descriptions.describe("Detail", "Reading") is not None


def test_empty_config_file_keeps_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == ReportConfig()


@pytest.mark.parametrize("content", [
    "palette: []\n",
    "palette: red\n",
    "default_points: 0\n",
    "default_points: many\n",
    "default_points: true\n",
    "descriptions: [a]\n",
    "- just\n- a list\n",
    "palette: [unclosed\n",
])
def test_load_config_rejects_invalid(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_load_sample_exam(exams_dir):
    sections, questions, student = load_exam(exams_dir / "sample-exam.yaml")

    assert [s.id for s in sections] == ["reading", "grammar"]
    assert [s.color for s in sections] == [DEFAULT_PALETTE[0], DEFAULT_PALETTE[1]]
    assert [q.points for q in questions] == [1, 2, 1, 1, 1.5, 1]
    assert student.name == "Kim"
    assert student.answers["g2"] == ""


def test_sample_exam_grades(exams_dir):
    result = evaluate(*load_exam(exams_dir / "sample-exam.yaml"))

    assert result.score_by_section == {"reading": 3, "grammar": 2}
    assert result.max_score_by_section == {"reading": 4, "grammar": 3.5}
    assert result.total_score == 5


@pytest.mark.parametrize("content", [
    "sections:\n  - {name: NoId}\n",
    "sections:\n  - {id: a, name: A, color: 9}\n",
    "sections:\n  - {id: a, name: A}\n  - {id: a, name: B}\n",
    "questions:\n  - {id: q, section_id: a, points: -1}\n",
    "questions:\n  - {id: q, section_id: a}\n  - {id: q, section_id: a}\n",
    "questions:\n  - {id: q}\n",
    "questions:\n  - {id: q, section_id: a, points: true}\n",
    "questions:\n  - {id: q, section_id: a, points: .nan}\n",
])
def test_load_exam_rejects_invalid(tmp_path, content):
    path = tmp_path / "exam.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_exam(path)
