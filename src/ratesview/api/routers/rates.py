"""Exchange rate API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ratesview.api.dependencies import get_client
from ratesview.core.exceptions import ProtocolError
from ratesview.graphql import EXCHANGE_RATES, GraphQLClient
from ratesview.models.base import QueryStatus
from ratesview.models.rates import RateRow, rate_rows

router = APIRouter()


class RatesResponse(BaseModel):
    """Rates as JSON."""

    rows: list[RateRow]
    from_cache: bool = False


@router.get("/rates", response_model=RatesResponse)
async def list_rates(client: GraphQLClient = Depends(get_client)) -> RatesResponse:
    """Exchange rates for USD."""
    state = await client.query(EXCHANGE_RATES)
    if state.status == QueryStatus.FAILED:
        raise HTTPException(status_code=502, detail=str(state.error))

    try:
        rows = rate_rows(state.data or {})
    except ProtocolError as e:
        raise HTTPException(status_code=502, detail=str(e)) from None

    return RatesResponse(rows=rows, from_cache=state.from_cache)
