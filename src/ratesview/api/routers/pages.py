"""HTML pages."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ratesview.api.dependencies import get_client
from ratesview.graphql import GraphQLClient
from ratesview.views.rates import RateView, render_page

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def rates_page(client: GraphQLClient = Depends(get_client)) -> HTMLResponse:
    """Render the exchange rate page."""
    view = RateView(client)
    view.mount()
    try:
        fragment = await view.settle()
    finally:
        view.unmount()

    status_code = 502 if view.error is not None else 200
    return HTMLResponse(render_page(fragment), status_code=status_code)
