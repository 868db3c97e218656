"""POST /api/totals — live totals preview for the invoice form."""

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from api.base import success_response
from core.totals import compute_totals, format_currency, format_rate


class TotalsRequest(BaseModel):
    """Draft vehicle rows as typed so far. Prices may be blank or malformed."""

    vehicles: list[dict[str, Any]] = []


def create_totals_router() -> APIRouter:
    router = APIRouter()

    @router.post("/totals")
    async def preview_totals(request: Request, body: TotalsRequest):
        totals = compute_totals(body.vehicles)
        return success_response({
            "subtotal_cents": totals.subtotal_cents,
            "tax_cents": totals.tax_cents,
            "total_cents": totals.total_cents,
            "tax_rate_bps": totals.tax_rate_bps,
            "subtotal": format_currency(totals.subtotal_cents),
            "tax": format_currency(totals.tax_cents),
            "total": format_currency(totals.total_cents),
            "tax_label": f"GCT ({format_rate(totals.tax_rate_bps)})",
        }, request.state.request_id).model_dump(mode="json")

    return router
