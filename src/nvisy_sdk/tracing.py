"""Optional structured tracing of request execution.

The executor emits a :class:`TraceEvent` when a request is prepared, after
every attempt and when the call reaches its terminal state. Events go to the
:class:`TraceSink` attached to the config; the default sink drops them.
Credential values are scrubbed by the executor before an event is emitted.

Example:
    ```python
    from nvisy_sdk import NvisyConfig
    from nvisy_sdk.tracing import LoggingTraceSink

    client = (
        NvisyConfig.builder()
        .with_api_key("your-api-key")
        .with_tracing(True)
        .with_trace_sink(LoggingTraceSink(level=logging.INFO))
        .build_client()
    )
    ```
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

TRACE_LOGGER_NAME = "nvisy_sdk.trace"

# Event names
PREPARE = "request.prepare"
ATTEMPT = "request.attempt"
SUCCESS = "request.success"
FAILURE = "request.failure"


@dataclass(frozen=True)
class TraceEvent:
    name: str
    fields: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class TraceSink(Protocol):
    def emit(self, event: TraceEvent) -> None: ...


class NullTraceSink:
    """Sink that discards every event."""

    def emit(self, event: TraceEvent) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NullTraceSink)

    def __hash__(self) -> int:
        return hash(NullTraceSink)


class LoggingTraceSink:
    """Sink that writes events to the ``nvisy_sdk.trace`` logger."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG):
        self._logger = logger or logging.getLogger(TRACE_LOGGER_NAME)
        self._level = level

    def emit(self, event: TraceEvent) -> None:
        if not self._logger.isEnabledFor(self._level):
            return
        rendered = " ".join(f"{key}={value}" for key, value in event.fields.items())
        self._logger.log(self._level, f"{event.name} {rendered}".rstrip(), extra={"trace_event": event.name})


NULL_SINK = NullTraceSink()
