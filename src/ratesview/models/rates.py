"""Exchange rate models."""

from typing import Any

from pydantic import ConfigDict, Field, ValidationError

from ratesview.core.exceptions import ProtocolError
from ratesview.models.base import BaseSchema


class RateRow(BaseSchema):
    """One displayed exchange rate, values kept exactly as received."""

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=False)

    currency: str
    rate: float
    name: str = ""

    @property
    def rate_text(self) -> str:
        """Rate without a trailing ``.0`` for whole numbers."""
        if self.rate.is_integer():
            return str(int(self.rate))
        return repr(self.rate)

    @property
    def label(self) -> str:
        return f"{self.currency}: {self.rate_text} / {self.name}"


class RatesPayload(BaseSchema):
    """The ``data`` object returned for GetExchangeRates."""

    model_config = ConfigDict(extra="ignore")

    rates: list[RateRow] = Field(default_factory=list)


def rate_rows(data: dict[str, Any]) -> list[RateRow]:
    """Project a GetExchangeRates payload into display rows, in response order.

    Raises ProtocolError when the payload does not have the queried shape.
    """
    try:
        return RatesPayload.model_validate(data).rates
    except ValidationError as e:
        raise ProtocolError(
            "Response does not match GetExchangeRates",
            details={"errors": e.errors(include_url=False)},
        ) from e
