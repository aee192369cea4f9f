"""Tests for the rate view."""

import pytest

from ratesview.core.exceptions import NetworkError, ProtocolError
from ratesview.graphql import build_client
from ratesview.models.base import QueryStatus
from ratesview.models.state import QueryState
from ratesview.views.rates import LOADING_HTML, RateView, render_page, render_rates


class TestRenderRates:
    def test_loading(self):
        assert render_rates(QueryState.pending()) == LOADING_HTML

    def test_idle_renders_as_loading(self):
        assert render_rates(QueryState.idle()) == LOADING_HTML

    def test_error_only(self):
        html = render_rates(QueryState.failed(NetworkError("Connection refused")))
        assert html == '<div class="error">Connection refused</div>'

    def test_error_is_escaped(self):
        html = render_rates(QueryState.failed(NetworkError("<script>")))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_rows_in_order(self, rates_payload):
        html = render_rates(QueryState.succeeded(rates_payload["data"]))
        rows = html.split("\n")
        assert len(rows) == 2
        assert rows[0] == (
            '<div class="rate" data-key="USD">'
            "<p><span>USD: 1</span><br /><span>US Dollar</span></p></div>"
        )
        assert "<span>EUR: 0.9</span><br /><span>Euro</span>" in rows[1]

    def test_empty_rates_render_nothing(self):
        html = render_rates(QueryState.succeeded({"rates": []}))
        assert html == ""

    def test_duplicate_currencies_are_all_rendered(self):
        data = {
            "rates": [
                {"currency": "USD", "rate": 1, "name": "US Dollar"},
                {"currency": "USD", "rate": 1.01, "name": "US Dollar (alt)"},
            ]
        }
        html = render_rates(QueryState.succeeded(data))
        assert html.count('data-key="USD"') == 2
        assert html.index("US Dollar</span>") < html.index("US Dollar (alt)")

    def test_wrong_shape_renders_error(self):
        html = render_rates(QueryState.succeeded({"rates": "n/a"}))
        assert html.startswith('<div class="error">')
        assert "GetExchangeRates" in html

    def test_page_wraps_fragment(self):
        page = render_page("<div>x</div>")
        assert page.startswith("<!DOCTYPE html>")
        assert "<div>x</div>" in page
        assert "<title>Exchange Rates</title>" in page


class TestRateView:
    @pytest.mark.asyncio
    async def test_renders_loading_then_rows(self, client):
        renders = []
        view = RateView(client, on_render=renders.append)
        view.mount()
        await view.settle()

        assert renders[0] == LOADING_HTML
        assert len(renders) == 2
        assert [row.label for row in view.rows] == ["USD: 1 / US Dollar", "EUR: 0.9 / Euro"]
        assert view.error is None

    @pytest.mark.asyncio
    async def test_connection_refused_shows_only_error(self, refused_server, endpoint):
        async with build_client(endpoint, transport=refused_server.transport) as client:
            view = RateView(client)
            view.mount()
            html = await view.settle()

        assert html.startswith('<div class="error">')
        assert 'class="rate"' not in html
        assert isinstance(view.error, NetworkError)
        assert view.rows == []

    @pytest.mark.asyncio
    async def test_empty_rates(self, make_server, endpoint):
        server = make_server({"data": {"rates": []}})
        async with build_client(endpoint, transport=server.transport) as client:
            view = RateView(client)
            view.mount()
            html = await view.settle()

        assert html == ""
        assert view.state.status == QueryStatus.SUCCESS
        assert view.rows == []
        assert view.error is None

    @pytest.mark.asyncio
    async def test_wrong_shape_is_an_error(self, make_server, endpoint):
        server = make_server({"data": {"rates": [{"currency": "USD"}]}})
        async with build_client(endpoint, transport=server.transport) as client:
            view = RateView(client)
            view.mount()
            await view.settle()

        assert isinstance(view.error, ProtocolError)
        assert view.rows == []

    @pytest.mark.asyncio
    async def test_query_issued_once_per_mount(self, client, server):
        view = RateView(client)
        first = view.mount()
        assert view.mount() is first
        await view.settle()
        assert server.calls == 1

    @pytest.mark.asyncio
    async def test_remount_served_from_cache(self, client, server):
        view = RateView(client)
        view.mount()
        await view.settle()
        view.unmount()

        renders = []
        view.on_render = renders.append
        view.mount()

        assert view.state.from_cache
        assert len(renders) == 1
        assert server.calls == 1

    @pytest.mark.asyncio
    async def test_unmount_before_response(self, client):
        view = RateView(client)
        handle = view.mount()
        view.unmount()

        assert not view.mounted
        assert handle.cancelled
        assert view.state.loading

    @pytest.mark.asyncio
    async def test_settle_requires_mount(self, client):
        with pytest.raises(RuntimeError):
            await RateView(client).settle()
