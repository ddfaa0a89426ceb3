"""
Batch validity checking.

Each check reads only its own geometry, so many geometries can be checked
concurrently without coordination. check_many() fans the work out over a
thread pool and keeps results in input order.

The pool bounds concurrency, not CPU parallelism: the pure-Python predicates
hold the GIL, and only the GEOS calls made through shapely release it.

Usage:
    from geovalid.batch import check_many

    result = check_many(geometries, max_workers=8)
    for index, report in result.invalid_reports():
        ...
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterator, Sequence

from .config import Settings, get_settings
from .errors import GeoValidError
from .geometry import Geometry
from .logger import get_logger
from .problems import ProblemAtPosition
from .validity import explain_invalidity

logger = get_logger(__name__)


class BatchStatus(str, Enum):
    """Status of a batch check."""
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class BatchValidityResult:
    """Result of a batch check."""
    valid_count: int = 0
    invalid_count: int = 0
    total_count: int = 0
    reports: list[list[ProblemAtPosition] | None] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    status: BatchStatus = BatchStatus.COMPLETED
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def duration_seconds(self) -> float | None:
        """Calculate operation duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def invalid_reports(self) -> Iterator[tuple[int, list[ProblemAtPosition]]]:
        """Yield (input index, report) for every invalid geometry."""
        for index, report in enumerate(self.reports):
            if report:
                yield index, report

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain summary dictionary."""
        return {
            "valid_count": self.valid_count,
            "invalid_count": self.invalid_count,
            "total_count": self.total_count,
            "errors": self.errors[:100],  # Limit errors in summary
            "status": self.status.value,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
        }


def check_many(
    geometries: Sequence[Geometry],
    max_workers: int | None = None,
    settings: Settings | None = None,
) -> BatchValidityResult:
    """
    Explain the invalidity of many geometries concurrently.

    A geometry whose check raises a GeoValidError gets a None report and an
    entry in `errors`; the batch status becomes FAILED but the remaining
    results are kept.

    Args:
        geometries: Geometries to check
        max_workers: Worker threads (default: settings.batch_max_workers);
            a concurrency bound, not a CPU parallelism guarantee
        settings: Optional settings override

    Returns:
        BatchValidityResult with one report per input, in input order
    """
    settings = settings or get_settings()
    workers = max_workers or settings.batch_max_workers
    result = BatchValidityResult(
        total_count=len(geometries),
        started_at=datetime.now(timezone.utc),
    )

    def _check(geometry: Geometry):
        try:
            return explain_invalidity(geometry, settings), None
        except GeoValidError as e:
            return None, e

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(_check, geometries))

    for index, (report, error) in enumerate(outcomes):
        result.reports.append(report)
        if error is not None:
            result.errors.append(f"Geometry {index}: {error.message}")
            result.status = BatchStatus.FAILED
        elif report is None:
            result.valid_count += 1
        else:
            result.invalid_count += 1

    result.completed_at = datetime.now(timezone.utc)
    logger.debug(
        "Batch check completed",
        extra={
            "total": result.total_count,
            "invalid": result.invalid_count,
            "errors": len(result.errors),
        },
    )
    return result
