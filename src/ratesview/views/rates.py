"""Exchange rate view: one fixed query rendered as HTML."""

import html
from collections.abc import Callable

from ratesview.core.exceptions import ProtocolError
from ratesview.core.logging import get_logger
from ratesview.graphql.client import GraphQLClient
from ratesview.graphql.handle import QueryHandle
from ratesview.graphql.queries import fetch_exchange_rates
from ratesview.models.base import QueryStatus
from ratesview.models.rates import RateRow, rate_rows
from ratesview.models.state import QueryState

LOADING_HTML = '<div class="loading">loading</div>'

logger = get_logger("rate_view")


def render_rates(state: QueryState) -> str:
    """Render a query state as an HTML fragment.

    Loading shows a placeholder, failure shows the error message, success
    shows one block per rate in response order. Rows sharing a currency are
    all rendered.
    """
    if state.status == QueryStatus.FAILED:
        return render_error(state.error)
    if state.status != QueryStatus.SUCCESS:
        return LOADING_HTML

    try:
        rows = rate_rows(state.data or {})
    except ProtocolError as e:
        return render_error(e)
    return "\n".join(render_row(row) for row in rows)


def render_row(row: RateRow) -> str:
    currency = html.escape(row.currency)
    return (
        f'<div class="rate" data-key="{currency}">'
        f"<p><span>{currency}: {html.escape(row.rate_text)}</span>"
        f"<br /><span>{html.escape(row.name)}</span></p>"
        f"</div>"
    )


def render_error(error: BaseException | None) -> str:
    return f'<div class="error">{html.escape(str(error))}</div>'


def render_page(fragment: str, title: str = "Exchange Rates") -> str:
    """Wrap a fragment in a complete HTML document."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)}</title>
</head>
<body>
    <h1>{html.escape(title)}</h1>
    <div id="rates">
{fragment}
    </div>
</body>
</html>"""


class RateView:
    """Binds the GetExchangeRates query to rendered output.

    ``mount`` issues the query once and re-renders on each state change;
    ``unmount`` drops the subscription, abandoning a request still in flight.
    """

    def __init__(
        self,
        client: GraphQLClient,
        on_render: Callable[[str], None] | None = None,
    ) -> None:
        self.client = client
        self.on_render = on_render
        self.state = QueryState.idle()
        self.html = render_rates(self.state)
        self._handle: QueryHandle | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    @property
    def rows(self) -> list[RateRow]:
        if self.error is not None or self.state.status != QueryStatus.SUCCESS:
            return []
        return rate_rows(self.state.data or {})

    @property
    def error(self) -> BaseException | None:
        """The failure shown by the view, including a payload of the wrong shape."""
        if self.state.status == QueryStatus.FAILED:
            return self.state.error
        if self.state.status == QueryStatus.SUCCESS:
            try:
                rate_rows(self.state.data or {})
            except ProtocolError as e:
                return e
        return None

    def mount(self) -> QueryHandle:
        if self._handle is not None:
            return self._handle
        self._handle = fetch_exchange_rates(self.client)
        self._unsubscribe = self._handle.subscribe(self._render)
        return self._handle

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = None
        self._handle = None

    async def settle(self) -> str:
        """Wait for the mounted query to finish and return the final output."""
        if self._handle is None:
            raise RuntimeError("RateView is not mounted")
        await self._handle
        return self.html

    def _render(self, state: QueryState) -> None:
        self.state = state
        if state.status == QueryStatus.SUCCESS:
            logger.debug("rates_received", data=state.data, from_cache=state.from_cache)
        self.html = render_rates(state)
        if self.on_render is not None:
            self.on_render(self.html)
