"""Views rendering query state."""

from ratesview.views.rates import RateView, render_page, render_rates

__all__ = ["RateView", "render_page", "render_rates"]
