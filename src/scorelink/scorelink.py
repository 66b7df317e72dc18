"""Entry point for the ScoreLink command line tool

Grades an exam file, produces share links for it, and opens share links back
into a graded report. The report is written as plain text lines, either to
stdout or to an output file.
"""

import argparse
import logging
import pathlib
import sys
from typing import List, Optional, Sequence

from scorelink import __version__
from scorelink.config import DEFAULT_CONFIG, ReportConfig, load_config, load_exam
from scorelink.errors import ScoreLinkError
from scorelink.link_codec import build_share_url, decode, encode, extract_token
from scorelink.models import CategoryResult, EvaluationResult, Section
from scorelink.scoring import evaluate

# Settings
STRONG_THRESHOLD = 80
FAIR_THRESHOLD = 50

# Configure logging
logger = logging.getLogger(__package__)

################################################################################
# Module-level functions

def configure_logging(logger_level: int) -> None:
    """Configure logging for the tool

    Args:
        logger_level (int): Logging level to set
    """
    logging.basicConfig(
        level=logger_level,
        format="%(asctime)s %(name)s [%(levelname)s]: %(message)s",
        force=True,
        handlers=[logging.StreamHandler()],
    )
    logger.setLevel(logger_level)
    logger.debug(f"Logging configured at level: {logger_level}")

def performance_band(percentage: float) -> str:
    """Classify a category percentage as strong, fair or weak"""
    if percentage >= STRONG_THRESHOLD:
        return "strong"
    if percentage >= FAIR_THRESHOLD:
        return "fair"
    return "weak"

def _fmt(value: float, digits: int = 1) -> str:
    value = round(value, digits)
    return str(int(value)) if float(value).is_integer() else str(value)

def format_report(
    result: EvaluationResult,
    sections: Sequence[Section],
    config: Optional[ReportConfig] = None,
) -> List[str]:
    """Render an evaluation result as text lines

    Args:
        result (EvaluationResult): The graded result.
        sections (Sequence[Section]): Sections in display order.
        config (ReportConfig, optional): Supplies category descriptions.

    Returns:
        List[str]: Report lines.
    """
    config = config or DEFAULT_CONFIG
    lines = [
        f"Student: {result.student_name}",
        f"Total score: {_fmt(result.total_score, 2)} / {_fmt(result.grand_max_score, 2)}",
    ]

    for section in sections:
        entries = [r for r in result.category_results if r.section_name == section.name]
        lines.extend(_format_section(
            section.name,
            result.score_by_section.get(section.id, 0),
            result.max_score_by_section.get(section.id, 0),
            entries,
            config,
        ))

    # Questions whose section could not be resolved
    section_ids = {s.id for s in sections}
    section_names = {s.name for s in sections}
    unresolved_ids = [sid for sid in result.max_score_by_section if sid not in section_ids]
    orphans = [r for r in result.category_results if r.section_name not in section_names]
    if unresolved_ids or orphans:
        lines.extend(_format_section(
            config.fallback_section_name,
            sum(result.score_by_section.get(sid, 0) for sid in unresolved_ids),
            sum(result.max_score_by_section[sid] for sid in unresolved_ids),
            orphans,
            config,
        ))

    return lines

def _format_section(
    name: str,
    score: float,
    max_score: float,
    entries: List[CategoryResult],
    config: ReportConfig,
) -> List[str]:
    lines = [
        "",
        f"=== {name} ===",
        f"Section score: {_fmt(score)} / {_fmt(max_score)}",
    ]
    for entry in entries:
        lines.append(
            f"  {entry.category}: {entry.correct_count}/{entry.total_questions} "
            f"({round(entry.percentage)}%, {performance_band(entry.percentage)})"
        )
        description = config.descriptions.describe(entry.category, entry.section_name)
        if description:
            lines.append(f"    {description}")
    return lines

def write_report(lines: List[str], output_path: Optional[str]) -> None:
    """Write report lines to a file, or to stdout if no path is given"""
    if not output_path:
        for line in lines:
            print(line)
        return

    path = pathlib.Path(output_path).resolve()
    if not path.parent.exists():
        logger.debug(f"Creating output directory: {path.parent}")
        path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as output_file:
        for line in lines:
            output_file.write(f"{line}\n")
    logger.info(f"Report written to {path}")

################################################################################
# Commands

def cmd_grade(args: argparse.Namespace, config: ReportConfig) -> int:
    """Grade an exam file and write the report"""
    sections, questions, student = load_exam(args.exam, config)
    result = evaluate(sections, questions, student, config)
    logger.info(
        f"Graded '{result.student_name}': {result.total_score}/{result.grand_max_score}"
    )
    write_report(format_report(result, sections, config), args.output)
    return 0

def cmd_share(args: argparse.Namespace, config: ReportConfig) -> int:
    """Print a share link (or bare token) for an exam file"""
    sections, questions, student = load_exam(args.exam, config)
    token = encode(sections, questions, student, config)
    print(build_share_url(args.base_url, token) if args.base_url else token)
    return 0

def cmd_open(args: argparse.Namespace, config: ReportConfig) -> int:
    """Decode a share link and write the graded report"""
    token = extract_token(args.link)
    sections, questions, student = decode(token, config)
    result = evaluate(sections, questions, student, config)
    write_report(format_report(result, sections, config), args.output)
    return 0

################################################################################
# Main entry point

def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser"""
    parser = argparse.ArgumentParser(description="Exam scoring and shareable report links")
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to report configuration file (YAML format)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    grade_parser = subparsers.add_parser("grade", help="Grade an exam file")
    grade_parser.add_argument(
        "--exam",
        "-e",
        required=True,
        type=str,
        help="Path to exam file (YAML format)",
    )
    grade_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Path to output file for the report. Defaults to stdout. Any existing "
            "file will be overwritten.",
    )
    grade_parser.set_defaults(func=cmd_grade)

    share_parser = subparsers.add_parser("share", help="Create a share link for an exam file")
    share_parser.add_argument(
        "--exam",
        "-e",
        required=True,
        type=str,
        help="Path to exam file (YAML format)",
    )
    share_parser.add_argument(
        "--base-url",
        "-u",
        type=str,
        help="Report page URL. If omitted, only the token is printed.",
    )
    share_parser.set_defaults(func=cmd_share)

    open_parser = subparsers.add_parser("open", help="Open a share link as a report")
    open_parser.add_argument(
        "--link",
        "-l",
        required=True,
        type=str,
        help="Share URL or bare token",
    )
    open_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Path to output file for the report. Defaults to stdout.",
    )
    open_parser.set_defaults(func=cmd_open)

    return parser

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    # If debug mode is enabled, set logging to DEBUG level
    if args.debug:
        configure_logging(logging.DEBUG)
    else:
        configure_logging(logging.INFO)

    logger.debug(f"ScoreLink v{__version__}")

    try:
        config = load_config(args.config)
        return args.func(args, config)
    except ScoreLinkError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
