"""Review-session orchestration: classify, locate comment, review files, publish."""

from prreview.review.session import ReviewResult, run_review

__all__ = ["ReviewResult", "run_review"]
