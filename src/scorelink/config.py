"""
Report configuration and exam file loading.

The color palette, default point value and fallback section label must be the
same on the encoding and decoding side of a share link, so they live in a
read-only `ReportConfig` that is passed to each operation.
"""

from dataclasses import dataclass, field
import logging
import math
import pathlib
from typing import List, Optional, Tuple

import yaml

from scorelink.descriptions import CategoryDescriptions
from scorelink.errors import ConfigError
from scorelink.models import Question, Section, StudentInput

# Settings
DEFAULT_PALETTE = (
    "from-blue-500 to-indigo-600",
    "from-emerald-500 to-teal-600",
    "from-rose-500 to-pink-600",
    "from-amber-500 to-orange-600",
    "from-violet-500 to-purple-600",
)
DEFAULT_POINTS = 1
DEFAULT_FALLBACK_SECTION_NAME = "기타"

logger = logging.getLogger(__name__)

################################################################################
# Classes

@dataclass(frozen=True)
class ReportConfig:
    """Read-only tables shared by scoring, encoding and decoding

    Args:
        palette (Tuple[str, ...]): Ordered section color tags.
        default_points (int): Point value omitted from share links.
        fallback_section_name (str): Label for questions whose section is unknown.
        descriptions (CategoryDescriptions): Optional category descriptions.
    """
    palette: Tuple[str, ...] = DEFAULT_PALETTE
    default_points: int = DEFAULT_POINTS
    fallback_section_name: str = DEFAULT_FALLBACK_SECTION_NAME
    descriptions: CategoryDescriptions = field(default_factory=CategoryDescriptions)

    def color_index(self, color: str) -> int:
        """Get the palette index of a color tag, 0 if it is not in the palette"""
        try:
            return self.palette.index(color)
        except ValueError:
            return 0

DEFAULT_CONFIG = ReportConfig()

################################################################################
# Module-level functions

def _is_positive_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0

def _read_yaml(path) -> dict:
    """Read a YAML mapping from a file"""
    path = pathlib.Path(path).resolve()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load {path}: {e}")
        raise ConfigError(f"Failed to load {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top level of {path}")
    logger.info(f"Loaded {path}")
    return data

def load_config(path=None) -> ReportConfig:
    """Load the report configuration from a YAML file

    Any of the keys `palette`, `default_points`, `fallback_section_name` and
    `descriptions` (with `reading`, `listening`, `grammar` tables) may be given.
    Missing keys keep their defaults.

    Args:
        path (str, optional): Path to the YAML file. Defaults are used if None.

    Returns:
        ReportConfig: The loaded configuration.
    """
    if path is None:
        return DEFAULT_CONFIG

    data = _read_yaml(path)
    kwargs = {}

    if "palette" in data:
        palette = data["palette"]
        if not isinstance(palette, list) or not palette:
            raise ConfigError("'palette' must be a non-empty list of color tags")
        kwargs["palette"] = tuple(str(color) for color in palette)

    if "default_points" in data:
        default_points = data["default_points"]
        if not _is_positive_number(default_points):
            raise ConfigError("'default_points' must be a positive number")
        kwargs["default_points"] = default_points

    if "fallback_section_name" in data:
        kwargs["fallback_section_name"] = str(data["fallback_section_name"])

    if "descriptions" in data:
        tables = data["descriptions"] or {}
        if not isinstance(tables, dict):
            raise ConfigError("'descriptions' must be a mapping")
        defaults = CategoryDescriptions()
        kwargs["descriptions"] = CategoryDescriptions(
            reading=dict(tables.get("reading", defaults.reading) or {}),
            listening=dict(tables.get("listening", defaults.listening) or {}),
            grammar=dict(tables.get("grammar", defaults.grammar) or {}),
        )

    config = ReportConfig(**kwargs)
    logger.debug(f"Report configuration: {config}")
    return config

def load_exam(
    path,
    config: Optional[ReportConfig] = None,
) -> Tuple[List[Section], List[Question], StudentInput]:
    """Load sections, questions and a student submission from a YAML file

    Expected layout:

        student:
          name: Kim
          answers: {q1: b, q2: c}
        sections:
          - {id: R, name: Reading, question_count: 2, color: 0}
        questions:
          - {id: q1, section_id: R, category: Detail, correct_answer: B}

    A section `color` may be a palette tag or an integer palette index.

    Args:
        path (str): Path to the exam file.
        config (ReportConfig, optional): Configuration used to resolve colors.

    Returns:
        tuple: (sections, questions, student)
    """
    config = config or DEFAULT_CONFIG
    data = _read_yaml(path)

    try:
        sections = []
        for entry in data.get("sections") or []:
            color = entry.get("color", config.palette[0])
            if isinstance(color, int) and not isinstance(color, bool):
                if not 0 <= color < len(config.palette):
                    raise ConfigError(f"Color index out of range: {color}")
                color = config.palette[color]
            sections.append(Section(
                id=str(entry["id"]),
                name=str(entry["name"]),
                question_count=int(entry.get("question_count", 0)),
                color=str(color),
            ))

        questions = []
        for entry in data.get("questions") or []:
            points = entry.get("points", config.default_points)
            if not _is_positive_number(points):
                raise ConfigError(f"Invalid points for question {entry.get('id')}: {points}")
            questions.append(Question(
                id=str(entry["id"]),
                section_id=str(entry["section_id"]),
                category=str(entry.get("category", "")),
                correct_answer=str(entry.get("correct_answer", "")),
                points=points,
            ))

        student_data = data.get("student") or {}
        answers = student_data.get("answers") or {}
        student = StudentInput(
            name=str(student_data.get("name", "")),
            answers={
                str(key): "" if value is None else str(value)
                for key, value in answers.items()
            },
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Malformed exam file {path}: {e}") from e

    section_ids = [s.id for s in sections]
    if len(set(section_ids)) != len(section_ids):
        raise ConfigError("Section identifiers must be unique")
    question_ids = [q.id for q in questions]
    if len(set(question_ids)) != len(question_ids):
        raise ConfigError("Question identifiers must be unique")

    logger.debug(
        f"Loaded exam with {len(sections)} sections and {len(questions)} questions"
    )
    return sections, questions, student
