"""Scoring: per-job ranks, per-endpoint summaries, final ranking."""

from .ranking import rank_job, failure_sentinel
from .summary import score, build_ranking, summarize_endpoint

__all__ = [
    "build_ranking",
    "failure_sentinel",
    "rank_job",
    "score",
    "summarize_endpoint",
]
