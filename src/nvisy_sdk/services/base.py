"""Shared plumbing for resource services."""

from typing import Any
from urllib.parse import quote

from nvisy_sdk.models import Model, Page
from nvisy_sdk.result import Result
from nvisy_sdk.transport.executor import RequestExecutor, RequestSpec, decode_json


def page_decoder(item_model: type[Model]):
    return decode_json(lambda data: Page.from_dict(data, item_model))


def quote_id(value: Any) -> str:
    """Percent-encode a resource ID for use as a single path segment.

    ``/``, ``?`` and ``#`` are encoded, and IDs made only of dots are encoded
    too so URL normalization cannot turn them into ``..`` segments.

    Raises:
        ValueError: If the ID is empty.
    """
    text = str(value)
    if not text:
        raise ValueError("resource ID must not be empty")
    if text.strip(".") == "":
        return text.replace(".", "%2E")
    return quote(text, safe="")


class Service:
    """Base class for resource services.

    Services only shape requests and name response types; retries, auth and
    error classification happen in the executor.
    """

    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def _execute(self, spec: RequestSpec) -> Result[Any]:
        return await self._executor.execute(spec)
