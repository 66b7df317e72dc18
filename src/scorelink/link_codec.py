"""
Share link codec.

Packs sections, questions and a student's answers into a compact text record
and compresses it into a URL-fragment-safe token:

    studentName ~ sectionRecords ~ categoryDictionary ~ questionRecords ~ answerList

    sectionRecords      "name,count,colorIndex" joined by ";"
    categoryDictionary  distinct category labels joined by ","
    questionRecords     "categoryIndex,correctAnswer,points" joined by ";"
    answerList          raw answers joined by ";"

Question and section identifiers are not transmitted. List order is the only
link between a question, its record and its answer, so decoding regenerates
identifiers from position.
"""

import decimal
import logging
import math
import re
from typing import List, Optional, Sequence, Tuple

from lzstring import LZString

from scorelink.config import DEFAULT_CONFIG, ReportConfig
from scorelink.errors import LinkDecodeError, LinkGenerationError
from scorelink.models import Number, Question, Section, StudentInput

# Separators
TOP_SEP = "~"
RECORD_SEP = ";"
FIELD_SEP = ","

NUM_TOP_FIELDS = 5
NUM_RECORD_FIELDS = 3

# URL fragment parameter carrying the token
FRAGMENT_PARAM = "s"

_INT_RE = re.compile(r"[0-9]+")
_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]+)?")

logger = logging.getLogger(__name__)

################################################################################
# Helpers

def section_id_for(index: int) -> str:
    """Identifier given to the section at a position when decoding"""
    return f"section-{index + 1}"

def question_id_for(index: int) -> str:
    """Identifier given to the question at a position when decoding"""
    return f"q{index + 1}"

def build_category_dictionary(questions: Sequence[Question]) -> List[str]:
    """Distinct category labels in first-occurrence order"""
    return list(dict.fromkeys(q.category for q in questions))

def format_points(points: Number, default_points: Number = 1) -> str:
    """Write a point value, empty when it equals the default"""
    if isinstance(points, bool) or not isinstance(points, (int, float)):
        raise TypeError(f"Point value must be a number, got {points!r}")
    if not math.isfinite(points) or points <= 0:
        raise ValueError(f"Point value must be positive, got {points}")
    if points == default_points:
        return ""
    if isinstance(points, float) and points.is_integer():
        return str(int(points))
    text = format(decimal.Decimal(repr(points)), "f")
    if not _NUMBER_RE.fullmatch(text):
        raise ValueError(f"Point value cannot be written: {points!r}")
    return text

def parse_points(text: str, default_points: Number = 1) -> Number:
    """Read a point value written by `format_points`"""
    if text == "":
        return default_points
    if not _NUMBER_RE.fullmatch(text):
        raise LinkDecodeError(f"Invalid point value: {text!r}")
    value = float(text)
    if not math.isfinite(value) or value <= 0:
        raise LinkDecodeError(f"Invalid point value: {text!r}")
    return int(value) if value.is_integer() else value

def _parse_index(text: str, what: str, limit: Optional[int] = None) -> int:
    if not _INT_RE.fullmatch(text):
        raise LinkDecodeError(f"Invalid {what}: {text!r}")
    value = int(text)
    if limit is not None and value >= limit:
        raise LinkDecodeError(f"{what.capitalize()} out of range: {value}")
    return value

def _check_value(value: str, what: str, separators: str) -> str:
    """Reject values that would break the field they are written into"""
    if not isinstance(value, str):
        raise TypeError(f"{what} must be a string, got {type(value).__name__}")
    for sep in separators:
        if sep in value:
            raise ValueError(f"{what} may not contain '{sep}': {value!r}")
    return value

def _split_records(text: str, what: str) -> List[List[str]]:
    if text == "":
        return []
    records = []
    for record in text.split(RECORD_SEP):
        fields = record.split(FIELD_SEP)
        if len(fields) != NUM_RECORD_FIELDS:
            raise LinkDecodeError(
                f"Expected {NUM_RECORD_FIELDS} fields in {what} record, "
                f"got {len(fields)}: {record!r}"
            )
        records.append(fields)
    return records

def to_utf16_units(text: str) -> str:
    """Split characters above U+FFFF into surrogate pairs

    The compressor works on one 16-bit unit per character, the way JavaScript
    strings are stored, so astral characters must be handed to it as pairs.

    Raises:
        UnicodeEncodeError: If the text holds a lone surrogate.
    """
    data = text.encode("utf-16-le")
    return "".join(
        chr(int.from_bytes(data[i:i + 2], "little")) for i in range(0, len(data), 2)
    )

def from_utf16_units(text: str) -> str:
    """Join surrogate pairs back into single characters

    Raises:
        UnicodeDecodeError: If the text holds a lone surrogate.
    """
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")

################################################################################
# Encode

def pack(
    sections: Sequence[Section],
    questions: Sequence[Question],
    student: StudentInput,
    config: Optional[ReportConfig] = None,
) -> str:
    """Build the uncompressed text record of an exam

    Raises:
        TypeError, ValueError: If a value cannot be written losslessly.
    """
    config = config or DEFAULT_CONFIG
    record_seps = TOP_SEP + RECORD_SEP
    field_seps = TOP_SEP + RECORD_SEP + FIELD_SEP

    categories = build_category_dictionary(questions)
    category_index = {label: i for i, label in enumerate(categories)}
    for label in categories:
        _check_value(label, "Category label", field_seps)

    section_records = []
    for section in sections:
        count = section.question_count
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(
                f"Question count of section '{section.name}' must be a "
                f"non-negative integer, got {count!r}"
            )
        section_records.append(FIELD_SEP.join([
            _check_value(section.name, "Section name", field_seps),
            str(count),
            str(config.color_index(section.color)),
        ]))

    question_records = []
    answers = []
    for question in questions:
        question_records.append(FIELD_SEP.join([
            str(category_index[question.category]),
            _check_value(question.correct_answer, "Correct answer", field_seps),
            format_points(question.points, config.default_points),
        ]))
        answers.append(
            _check_value(student.answer_for(question.id), "Answer", record_seps)
        )

    return TOP_SEP.join([
        _check_value(student.name, "Student name", TOP_SEP),
        RECORD_SEP.join(section_records),
        FIELD_SEP.join(categories),
        RECORD_SEP.join(question_records),
        RECORD_SEP.join(answers),
    ])

def encode(
    sections: Sequence[Section],
    questions: Sequence[Question],
    student: StudentInput,
    config: Optional[ReportConfig] = None,
) -> str:
    """Encode an exam and a submission into a share token

    Args:
        sections (Sequence[Section]): Exam sections.
        questions (Sequence[Question]): Question bank. Order is preserved.
        student (StudentInput): The student's submission.
        config (ReportConfig, optional): Palette and default point value.

    Returns:
        str: URL-fragment-safe token.

    Raises:
        LinkGenerationError: If the token could not be built.
    """
    try:
        packed = pack(sections, questions, student, config)
        token = LZString().compressToEncodedURIComponent(to_utf16_units(packed))
    except Exception as e:
        logger.error(f"Link generation failed: {e}")
        raise LinkGenerationError(f"Link generation failed: {e}") from e

    if not token:
        raise LinkGenerationError("Link generation failed: compressor returned no data")

    logger.debug(f"Packed {len(packed)} characters into a {len(token)} character token")
    return token

################################################################################
# Decode

def unpack(
    packed: str,
    config: Optional[ReportConfig] = None,
) -> Tuple[List[Section], List[Question], StudentInput]:
    """Rebuild an exam from its uncompressed text record

    Raises:
        LinkDecodeError: If the record is malformed.
    """
    config = config or DEFAULT_CONFIG

    fields = packed.split(TOP_SEP)
    if len(fields) != NUM_TOP_FIELDS:
        raise LinkDecodeError(
            f"Expected {NUM_TOP_FIELDS} top-level fields, got {len(fields)}"
        )
    name, sections_text, categories_text, questions_text, answers_text = fields

    sections = []
    for i, (section_name, count_text, color_text) in enumerate(
        _split_records(sections_text, "section")
    ):
        count = _parse_index(count_text, "question count")
        color = _parse_index(color_text, "color index", len(config.palette))
        sections.append(Section(
            id=section_id_for(i),
            name=section_name,
            question_count=count,
            color=config.palette[color],
        ))

    question_records = _split_records(questions_text, "question")
    if question_records:
        categories = categories_text.split(FIELD_SEP)
        answers = answers_text.split(RECORD_SEP)
    else:
        if categories_text or answers_text:
            raise LinkDecodeError("Categories or answers given without questions")
        categories = []
        answers = []

    if len(answers) != len(question_records):
        raise LinkDecodeError(
            f"Expected {len(question_records)} answers, got {len(answers)}"
        )

    owners = _assign_sections(sections, len(question_records))
    questions = []
    for i, (category_text, correct_answer, points_text) in enumerate(question_records):
        category = _parse_index(category_text, "category index", len(categories))
        questions.append(Question(
            id=question_id_for(i),
            section_id=owners[i],
            category=categories[category],
            correct_answer=correct_answer,
            points=parse_points(points_text, config.default_points),
        ))

    student = StudentInput(
        name=name,
        answers={q.id: answer for q, answer in zip(questions, answers) if answer},
    )
    return sections, questions, student

def _assign_sections(sections: Sequence[Section], num_questions: int) -> List[str]:
    """Owning section ID for each question position

    Questions fill sections in order according to their declared question
    count. Any overflow belongs to the last section.
    """
    owners = []
    for section in sections:
        owners.extend([section.id] * section.question_count)
    if sections and len(owners) < num_questions:
        owners.extend([sections[-1].id] * (num_questions - len(owners)))
    elif not sections:
        owners = [""] * num_questions
    return owners[:num_questions]

def decode(
    token: str,
    config: Optional[ReportConfig] = None,
) -> Tuple[List[Section], List[Question], StudentInput]:
    """Decode a share token

    Identifiers are regenerated from position (`section-1`, `q1`, ...); the
    original identifiers are not part of the token.

    Args:
        token (str): Token produced by `encode`.
        config (ReportConfig, optional): Must match the one used to encode.

    Returns:
        tuple: (sections, questions, student)

    Raises:
        LinkDecodeError: If the token is invalid or corrupted.
    """
    if not token:
        raise LinkDecodeError("Invalid or corrupted link: empty token")

    try:
        packed = LZString().decompressFromEncodedURIComponent(token)
    except Exception as e:
        logger.error(f"Failed to decompress token: {e}")
        raise LinkDecodeError(f"Invalid or corrupted link: {e}") from e
    if not packed:
        raise LinkDecodeError("Invalid or corrupted link: no data")

    try:
        packed = from_utf16_units(packed)
    except UnicodeError as e:
        logger.error(f"Token holds invalid text: {e}")
        raise LinkDecodeError(f"Invalid or corrupted link: {e}") from e

    try:
        result = unpack(packed, config)
    except LinkDecodeError as e:
        logger.error(f"Failed to decode token: {e}")
        raise LinkDecodeError(f"Invalid or corrupted link: {e}") from e

    logger.debug(
        f"Decoded token with {len(result[0])} sections and {len(result[1])} questions"
    )
    return result

################################################################################
# URLs

def build_share_url(base_url: str, token: str) -> str:
    """Place a token in the fragment of a URL, replacing any existing fragment"""
    return f"{base_url.split('#', 1)[0]}#{FRAGMENT_PARAM}={token}"

def extract_token(url_or_token: str) -> str:
    """Get the token from a share URL, or return a bare token unchanged

    Raises:
        LinkDecodeError: If a URL fragment has no token parameter.
    """
    text = url_or_token.strip()
    if "#" not in text:
        prefix = f"{FRAGMENT_PARAM}="
        return text[len(prefix):] if text.startswith(prefix) else text

    fragment = text.split("#", 1)[1]
    for part in fragment.split("&"):
        key, sep, value = part.partition("=")
        if sep and key == FRAGMENT_PARAM:
            return value
    raise LinkDecodeError(f"No '{FRAGMENT_PARAM}' parameter in link fragment")
