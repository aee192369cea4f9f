"""CLI output formatters."""

from ratesview.cli.formatters.table import format_rates
from ratesview.cli.formatters.json_fmt import format_json

__all__ = ["format_rates", "format_json"]
