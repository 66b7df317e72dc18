"""ScoreLink: exam scoring and shareable report links."""

__version__ = "0.1.0"

from scorelink.config import ReportConfig, load_config, load_exam
from scorelink.errors import (
    ConfigError,
    LinkDecodeError,
    LinkGenerationError,
    ScoreLinkError,
)
from scorelink.link_codec import build_share_url, decode, encode, extract_token
from scorelink.models import (
    CategoryResult,
    EvaluationResult,
    Question,
    Section,
    StudentInput,
)
from scorelink.scoring import evaluate
