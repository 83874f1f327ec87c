"""Pipeline orchestration for fetching, parsing and shortlisting venues."""

from .models import ShortlistRunResult
from .runner import ShortlistPipeline, build_engine

__all__ = [
    "ShortlistPipeline",
    "ShortlistRunResult",
    "build_engine",
]
