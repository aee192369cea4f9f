"""JSON formatter for CLI output."""

import json
from typing import Any

from rich.console import Console

from ratesview.core.exceptions import ProtocolError
from ratesview.models.base import QueryStatus
from ratesview.models.rates import rate_rows
from ratesview.models.state import QueryState


def to_dict(state: QueryState) -> dict[str, Any]:
    """Convert a query state to a JSON-ready dictionary."""
    error = state.error
    result: dict[str, Any] = {"status": state.status.value}

    if state.status == QueryStatus.SUCCESS:
        try:
            rows = rate_rows(state.data or {})
        except ProtocolError as e:
            error = e
        else:
            result["rows"] = [row.model_dump(mode="json") for row in rows]
            result["from_cache"] = state.from_cache

    if error is not None:
        result["error"] = str(error)
        result["error_type"] = type(error).__name__
    return result


def format_json(console: Console, state: QueryState) -> None:
    """Display a query state as JSON."""
    console.print_json(json.dumps(to_dict(state)))
