"""Health API service."""

from nvisy_sdk.models import CheckHealth, MonitorStatus
from nvisy_sdk.result import Result
from nvisy_sdk.services.base import Service
from nvisy_sdk.transport.executor import RequestSpec, decode_json


class HealthService(Service):
    async def check(self, options: CheckHealth | None = None) -> Result[MonitorStatus]:
        """Get the current system health status.

        Without options this is a plain ``GET /health/``; with options the
        check parameters are posted to the same path.
        """
        if options is None:
            spec = RequestSpec("GET", "/health/", decoder=decode_json(MonitorStatus))
        else:
            spec = RequestSpec("POST", "/health/", json=options, decoder=decode_json(MonitorStatus))
        return await self._execute(spec)
