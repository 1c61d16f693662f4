"""Testing utilities for code built on the Nvisy SDK.

Provides in-memory replacements for the transport, the retry sleep and the
trace sink, so request execution can be tested without a network.

Example:
    ```python
    from nvisy_sdk import NvisyConfig, NvisyClient
    from nvisy_sdk.testing import RecordingSleep, StubTransport, json_response


    async def test_handles_404():
        config = NvisyConfig.builder().with_api_key("test-key").build()
        transport = StubTransport([json_response(404, {"title": "Not Found"})])
        client = NvisyClient(config, transport=transport, sleep=RecordingSleep())

        result = await client.workspaces.get("missing")

        assert not result.is_success
    ```
"""

from nvisy_sdk.testing.stubs import (
    RecordingSleep,
    RecordingTraceSink,
    StubTransport,
    json_response,
    network_error,
)

__all__ = [
    "RecordingSleep",
    "RecordingTraceSink",
    "StubTransport",
    "json_response",
    "network_error",
]
