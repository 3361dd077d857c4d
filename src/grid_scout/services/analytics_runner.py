"""Match-level analytics runner.

Applies every registered extractor to a series, collects the non-null
results as tagged records and persists the bundle keyed by series id.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import ValidationError

from grid_scout.models.analytics import AnalyticResultBase, AnalyticsBundle
from grid_scout.models.series import Series
from grid_scout.repositories.analytics_repository import AnalyticsRepository
from grid_scout.services.extractors import LOL_EXTRACTORS
from grid_scout.services.reference_tables import ReferenceTables

logger = logging.getLogger(__name__)

Extractor = Callable[[Any, ReferenceTables], Optional[Any]]


class SeriesNotFoundError(LookupError):
    """No converted series document exists for the requested id."""


def analytic_name(result_type: type[AnalyticResultBase]) -> str:
    """Tag of a result type (the default of its ``name`` field)."""
    return result_type.model_fields["name"].default


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class AnalyticsRunner:
    """Runs a registry of extractors over one series at a time.

    Extractors are independent: one raising does not stop the others, its
    failure is logged and it simply contributes no result.
    """

    def __init__(
        self,
        repository: AnalyticsRepository,
        tables: ReferenceTables,
        extractors: Optional[list[tuple[type, Extractor]]] = None,
        bundle_type: type = AnalyticsBundle,
        parse_series: Callable[[dict], Any] = Series.from_dict,
    ):
        self._repository = repository
        self._tables = tables
        self._extractors = extractors if extractors is not None else LOL_EXTRACTORS
        self._bundle_type = bundle_type
        self._parse_series = parse_series

    @property
    def analytic_names(self) -> list[str]:
        return [analytic_name(result_type) for result_type, _ in self._extractors]

    def compute(self, series_id: str, series) -> Any:
        """Run every extractor and build the bundle without persisting it.

        Raises:
            TwoTeamInvariantError: If the series does not have exactly two teams.
        """
        series.require_two_teams()
        generated_at = utc_timestamp()

        results = []
        for result_type, extractor in self._extractors:
            name = analytic_name(result_type)
            try:
                data = extractor(series, self._tables)
            except Exception:
                logger.exception(f"Analytic {name} failed for series {series_id}")
                continue
            if data is None:
                logger.debug(f"Analytic {name} produced no result for series {series_id}")
                continue
            results.append(result_type(data=data, generated_at=generated_at))

        return self._bundle_type(
            series_id=series_id,
            generated_at=generated_at,
            results=results,
            analytics_run=self.analytic_names,
        )

    def run(self, series_id: str, series) -> Any:
        """Compute and persist the analytics bundle for a series."""
        bundle = self.compute(series_id, series)
        self._repository.put_analytics(series_id, bundle.to_json_dict())
        logger.info(f"Stored {len(bundle.results)} analytics for series {series_id}")
        return bundle

    def get(self, series_id: str) -> Optional[Any]:
        """Load a stored bundle, or None if missing or unreadable."""
        raw = self._repository.get_analytics(series_id)
        if raw is None:
            return None
        try:
            return self._bundle_type.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Stored analytics for series {series_id} are unreadable, recomputing: {e}")
            return None

    def exists(self, series_id: str) -> bool:
        return self._repository.get_analytics(series_id) is not None

    def is_current(self, bundle) -> bool:
        """True when the bundle was produced by every registered analytic."""
        return set(self.analytic_names) <= set(bundle.analytics_run)

    def ensure(self, series_id: str) -> tuple[Any, bool]:
        """Return the stored bundle, recomputing it when missing or stale.

        Returns:
            (bundle, cache_hit)

        Raises:
            SeriesNotFoundError: If the bundle must be computed and no converted
                series is stored.
        """
        existing = self.get(series_id)
        if existing is not None and self.is_current(existing):
            return existing, True

        raw = self._repository.get_converted(series_id)
        if raw is None:
            raise SeriesNotFoundError(f"Converted series {series_id} not found")
        return self.run(series_id, self._parse_series(raw)), False
