"""Knowledge: normalization, QA matching, brain storage and sampling."""

from duet.knowledge.base import KnowledgeBase, clean_lines
from duet.knowledge.matcher import find_answer, find_match
from duet.knowledge.models import AskBothResult, AskResult, QAPair, parse_qa_line
from duet.knowledge.normalizer import collapse_whitespace, has_alphanumeric, normalize
from duet.knowledge.sampler import NonRepeatingSampler

__all__ = [
    "AskBothResult",
    "AskResult",
    "KnowledgeBase",
    "NonRepeatingSampler",
    "QAPair",
    "clean_lines",
    "collapse_whitespace",
    "find_answer",
    "find_match",
    "has_alphanumeric",
    "normalize",
    "parse_qa_line",
]
