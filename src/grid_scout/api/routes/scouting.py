"""REST endpoints for League of Legends series analytics and scouting reports."""

import logging

from fastapi import APIRouter, HTTPException, Request

from grid_scout.models.analytics import AnalyticsBundle, CamelModel
from grid_scout.models.report import ScoutingReport
from grid_scout.models.series import Series, TwoTeamInvariantError
from grid_scout.repositories.analytics_repository import lol_repository
from grid_scout.services.analytics_runner import AnalyticsRunner, SeriesNotFoundError
from grid_scout.services.scouting_report_builder import ScoutingReportBuilder, SeriesAnalytics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["scouting"])


class AnalyzeSeriesRequest(CamelModel):
    """Request body for analysing one series."""

    series_id: str = ""


class AnalyzeSeriesResponse(CamelModel):
    success: bool
    series_id: str
    cache_hit: bool
    has_analytics: bool


class StoreSeriesResponse(CamelModel):
    series_id: str
    stored: bool


class ReportSeries(CamelModel):
    """One series to include in a scouting report."""

    series_id: str
    opponent: str = ""
    date: str = ""


class ScoutingReportRequest(CamelModel):
    team_id: str = ""
    team_name: str = ""
    series: list[ReportSeries] = []


def analyze(runner: AnalyticsRunner, series_id: str) -> AnalyzeSeriesResponse:
    """Ensure a series has current analytics, mapping failures to HTTP errors."""
    if not series_id:
        raise HTTPException(400, "seriesId is required")
    try:
        bundle, cache_hit = runner.ensure(series_id)
    except SeriesNotFoundError:
        raise HTTPException(404, f"Series not found: {series_id}")
    except TwoTeamInvariantError as e:
        raise HTTPException(422, f"Series {series_id} is malformed: {e}")
    return AnalyzeSeriesResponse(
        success=True,
        series_id=series_id,
        cache_hit=cache_hit,
        has_analytics=bool(bundle.results),
    )


def stored_bundles(runner: AnalyticsRunner, body: ScoutingReportRequest) -> list:
    """(series, bundle) for every requested series that has stored analytics."""
    found = []
    for item in body.series:
        bundle = runner.get(item.series_id)
        if bundle is None:
            logger.warning(f"No analytics stored for series {item.series_id}, skipping")
            continue
        found.append((item, bundle))
    return found


def _runner(request: Request) -> AnalyticsRunner:
    return AnalyticsRunner(lol_repository(request.app.state.store), request.app.state.tables)


@router.put("/series/{series_id}", response_model=StoreSeriesResponse)
def store_series(series_id: str, document: dict, request: Request):
    """Store a converted series document for later analysis."""
    try:
        Series.from_dict(document).require_two_teams()
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(422, f"Invalid series document: {e}")
    lol_repository(request.app.state.store).put_converted(series_id, document)
    return StoreSeriesResponse(series_id=series_id, stored=True)


@router.post("/scouting-report/analyze-series", response_model=AnalyzeSeriesResponse)
def analyze_series(body: AnalyzeSeriesRequest, request: Request):
    """Compute analytics for a series unless current ones are stored."""
    return analyze(_runner(request), body.series_id)


@router.get("/scouting-report/analytics/{series_id}", response_model=AnalyticsBundle)
def get_series_analytics(series_id: str, request: Request):
    bundle = _runner(request).get(series_id)
    if bundle is None:
        raise HTTPException(404, f"Analytics not found: {series_id}")
    return bundle


@router.post("/scouting-report", response_model=ScoutingReport)
def scouting_report(body: ScoutingReportRequest, request: Request):
    """Aggregate stored analytics of the requested series into one report."""
    if not body.team_id:
        raise HTTPException(400, "teamId is required")

    inputs = [
        SeriesAnalytics(series_id=item.series_id, bundle=bundle, opponent=item.opponent, date=item.date)
        for item, bundle in stored_bundles(_runner(request), body)
    ]
    return ScoutingReportBuilder.build(body.team_id, body.team_name, inputs)
