"""Query definition and operation models."""

import hashlib
import json
import re
from typing import Any

from pydantic import ConfigDict, Field

from ratesview.models.base import BaseSchema

_OPERATION_RE = re.compile(r"^\s*(query|mutation|subscription)\s+(\w+)", re.MULTILINE)
_WHITESPACE_RE = re.compile(r"\s+")
_STRING_RE = re.compile(r'("""(?:\\"""|(?!""")[\s\S])*"""|"(?:\\.|[^"\\\n])*")')
_DIRECTIVE_RE = re.compile(r"@\w+")
_SPREAD_RE = re.compile(r"\.\.\.\s*(?:on\s+)?\w+")
_FIELD_RE = re.compile(r"(?:(\w+)\s*:\s*)?(\w+)")


class QueryDefinition(BaseSchema):
    """Immutable description of a GraphQL query document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    document: str = Field(min_length=1)
    operation_name: str | None = None
    root_fields: tuple[str, ...] = ()

    @property
    def normalized(self) -> str:
        """Document with whitespace runs collapsed outside string literals."""
        parts = _STRING_RE.split(self.document)
        # Odd indexes are the captured string literals.
        parts[::2] = [_WHITESPACE_RE.sub(" ", part) for part in parts[::2]]
        return "".join(parts).strip()


def gql(document: str) -> QueryDefinition:
    """Build a QueryDefinition from query text.

    Picks up the operation name and the top-level selections so callers can
    tell what a query asks for without parsing it again.
    """
    match = _OPERATION_RE.search(document)
    return QueryDefinition(
        document=document,
        operation_name=match.group(2) if match else None,
        root_fields=tuple(_root_fields(document)),
    )


def _root_fields(document: str) -> list[str]:
    """Names of the top-level selections, aliases resolved, arguments dropped."""
    start = document.find("{")
    if start == -1:
        return []
    depth = 0
    parens = 0
    top: list[str] = []
    for char in document[start:]:
        if char == "(":
            parens += 1
        elif char == ")":
            parens -= 1
        elif parens:
            continue
        elif char == "{":
            depth += 1
            top.append(" ")
        elif char == "}":
            depth -= 1
            if depth == 0:
                break
        elif depth == 1:
            top.append(char)
    text = _SPREAD_RE.sub(" ", _DIRECTIVE_RE.sub(" ", "".join(top)))
    return [field for _alias, field in _FIELD_RE.findall(text)]


def query_signature(query: QueryDefinition, variables: dict[str, Any] | None = None) -> str:
    """Deterministic cache key for a query and its resolved variables."""
    payload = json.dumps(
        {"query": query.normalized, "variables": variables or {}},
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class Operation(BaseSchema):
    """A query bound to variables, as it travels through the link chain."""

    query: QueryDefinition
    variables: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def signature(self) -> str:
        return query_signature(self.query, self.variables)

    def to_request_body(self) -> dict[str, Any]:
        """JSON body for a GraphQL-over-HTTP POST."""
        body: dict[str, Any] = {
            "query": self.query.document,
            "variables": self.variables,
        }
        if self.query.operation_name:
            body["operationName"] = self.query.operation_name
        return body
