"""Query execution state."""

from typing import Any

from pydantic import ConfigDict, Field, model_validator

from ratesview.models.base import BaseSchema, QueryStatus


class QueryState(BaseSchema):
    """Snapshot of one query execution.

    Exactly one of loading, error or data is set unless the query is idle.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    status: QueryStatus = QueryStatus.IDLE
    error: BaseException | None = None
    data: dict[str, Any] | None = None
    from_cache: bool = Field(default=False)

    @model_validator(mode="after")
    def _check_consistency(self) -> "QueryState":
        if self.status == QueryStatus.SUCCESS:
            if self.data is None or self.error is not None:
                raise ValueError("success state requires data and no error")
        elif self.status == QueryStatus.FAILED:
            if self.error is None or self.data is not None:
                raise ValueError("failed state requires an error and no data")
        elif self.error is not None or self.data is not None:
            raise ValueError(f"{self.status.value} state carries neither data nor error")
        return self

    @property
    def loading(self) -> bool:
        return self.status == QueryStatus.LOADING

    @property
    def done(self) -> bool:
        return self.status.is_terminal

    @classmethod
    def idle(cls) -> "QueryState":
        return cls()

    @classmethod
    def pending(cls) -> "QueryState":
        return cls(status=QueryStatus.LOADING)

    @classmethod
    def succeeded(cls, data: dict[str, Any], from_cache: bool = False) -> "QueryState":
        return cls(status=QueryStatus.SUCCESS, data=data, from_cache=from_cache)

    @classmethod
    def failed(cls, error: BaseException) -> "QueryState":
        return cls(status=QueryStatus.FAILED, error=error)
