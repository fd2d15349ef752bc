from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from hotcoffee.api.dependencies import aggregation_engine
from hotcoffee.application.dto.responses import PopularItemResponse, TotalSalesResponse
from hotcoffee.application.mappers.report_mapper import (
    to_popular_item_responses,
    to_total_sales_response,
)
from hotcoffee.application.use_cases.reports import DEFAULT_TOP_N, AggregationEngine

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/total-sales", response_model=TotalSalesResponse)
def total_sales(engine: AggregationEngine = Depends(aggregation_engine)) -> TotalSalesResponse:
    return to_total_sales_response(engine.total_sales())


@router.get("/popular-items", response_model=list[PopularItemResponse])
def popular_items(
    top_n: int = Query(default=DEFAULT_TOP_N),
    engine: AggregationEngine = Depends(aggregation_engine),
) -> list[PopularItemResponse]:
    return to_popular_item_responses(engine.popular_items(top_n=top_n))
