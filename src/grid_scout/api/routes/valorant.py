"""REST endpoints for Valorant series analytics and scouting reports."""

from fastapi import APIRouter, HTTPException, Request

from grid_scout.api.routes.scouting import (
    AnalyzeSeriesRequest,
    AnalyzeSeriesResponse,
    ScoutingReportRequest,
    StoreSeriesResponse,
    analyze,
    stored_bundles,
)
from grid_scout.models.valorant import ValorantSeries
from grid_scout.models.valorant_analytics import ValorantAnalyticsBundle
from grid_scout.models.valorant_report import ValorantScoutingReport
from grid_scout.repositories.analytics_repository import valorant_repository
from grid_scout.services.analytics_runner import AnalyticsRunner
from grid_scout.services.valorant import VALORANT_EXTRACTORS
from grid_scout.services.valorant.scouting_report_builder import (
    ValorantScoutingReportBuilder,
    ValorantSeriesAnalytics,
)

router = APIRouter(prefix="/api/val", tags=["valorant"])


def _runner(request: Request) -> AnalyticsRunner:
    return AnalyticsRunner(
        valorant_repository(request.app.state.store),
        request.app.state.tables,
        extractors=VALORANT_EXTRACTORS,
        bundle_type=ValorantAnalyticsBundle,
        parse_series=ValorantSeries.from_dict,
    )


@router.put("/series/{series_id}", response_model=StoreSeriesResponse)
def store_series(series_id: str, document: dict, request: Request):
    """Store a converted Valorant series document for later analysis."""
    try:
        ValorantSeries.from_dict(document).require_two_teams()
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(422, f"Invalid series document: {e}")
    valorant_repository(request.app.state.store).put_converted(series_id, document)
    return StoreSeriesResponse(series_id=series_id, stored=True)


@router.post("/scouting-report/analyze-series", response_model=AnalyzeSeriesResponse)
def analyze_series(body: AnalyzeSeriesRequest, request: Request):
    return analyze(_runner(request), body.series_id)


@router.post("/scouting-report", response_model=ValorantScoutingReport)
def scouting_report(body: ScoutingReportRequest, request: Request):
    if not body.team_id:
        raise HTTPException(400, "teamId is required")

    inputs = [
        ValorantSeriesAnalytics(
            series_id=item.series_id, bundle=bundle, opponent=item.opponent, date=item.date
        )
        for item, bundle in stored_bundles(_runner(request), body)
    ]
    return ValorantScoutingReportBuilder.build(body.team_id, body.team_name, inputs)
