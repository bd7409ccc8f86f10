from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

from embedly_webhooks.schemas.keys import fold_keys

T = TypeVar("T")


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


class WebhookEnvelope(BaseModel):
    """
    A verified webhook delivery. Built once by the parser, never mutated.

    Top-level keys are matched ignoring case. ``data`` and ``metadata`` are
    stored read-only: objects become mapping proxies and arrays become tuples.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Provider event ID")
    event_type: str = Field(..., alias="event", description="Event type / name")
    timestamp: Optional[datetime] = None
    data: Any = None
    metadata: Optional[Mapping[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, values: Any) -> Any:
        return fold_keys(values, cls.model_fields)

    @field_validator("data", "metadata")
    @classmethod
    def _read_only(cls, value: Any) -> Any:
        return _freeze(value)

    @field_serializer("data", "metadata")
    def _plain(self, value: Any) -> Any:
        return _thaw(value)

    def get_data(self, shape: type[T]) -> Optional[T]:
        """
        Decode ``data`` as ``shape``, or return None if it does not fit.

        ``shape`` can be anything pydantic validates: a model, a dataclass or
        a TypedDict. Several shapes can be tried in turn on the same event.

        A data mismatch returns None, but a ``shape`` pydantic cannot build a
        schema for (a plain class, say) is a programming error and raises
        ``pydantic.PydanticSchemaGenerationError``.
        """
        if self.data is None:
            return None
        try:
            return TypeAdapter(shape).validate_python(_thaw(self.data))
        except ValidationError:
            return None


class WebhookProcessResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    event_id: Optional[str] = None
    event_type: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_outcome(self) -> "WebhookProcessResult":
        if self.success:
            if self.error is not None:
                raise ValueError("successful result cannot carry an error")
            if self.event_id is None or self.event_type is None:
                raise ValueError("successful result needs event_id and event_type")
        else:
            if not self.error:
                raise ValueError("failed result needs an error message")
            if self.event_id is not None or self.event_type is not None:
                raise ValueError("failed result cannot carry event details")
        return self

    @classmethod
    def succeeded(cls, event_id: str, event_type: str) -> "WebhookProcessResult":
        return cls(success=True, event_id=event_id, event_type=event_type)

    @classmethod
    def failed(cls, error: str) -> "WebhookProcessResult":
        return cls(success=False, error=error)
