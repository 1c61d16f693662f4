"""RFC 7807 problem documents returned by the Nvisy API."""

from dataclasses import dataclass
from typing import Any

from nvisy_sdk.transport.base import RawResponse

PROBLEM_JSON = "application/problem+json"
STANDARD_FIELDS = ("type", "title", "status", "detail", "instance")


@dataclass
class ProblemDetail:
    """Error body in the RFC 7807 format.

    Members outside the five standard ones (for example ``workspaceId``) are
    kept in ``extensions``.

    See: https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str | None = None
    title: str | None = None
    status: int | None = None
    detail: str | None = None
    instance: str | None = None
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_response(cls, response: RawResponse) -> "ProblemDetail | None":
        """Parse the body of ``response``, or return None if it is not a problem document.

        Bodies served as ``application/problem+json`` always qualify. Other
        JSON objects qualify when they carry at least one standard member.
        """
        try:
            data = response.json()
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None

        declared = PROBLEM_JSON in (response.header("content-type") or "")
        if not declared and data.keys().isdisjoint(STANDARD_FIELDS):
            return None
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProblemDetail":
        standard = {name: data.get(name) for name in STANDARD_FIELDS}
        extensions = {key: value for key, value in data.items() if key not in STANDARD_FIELDS}
        return cls(**standard, extensions=extensions or None)

    def to_exception_message(self) -> str:
        """Render a multi-line message: summary, type, instance, then extensions."""
        lines = [part for part in dict.fromkeys((self.title, self.detail)) if part]
        if self.type:
            lines.append(f"Problem Type: {self.type}")
        if self.instance:
            lines.append(f"Instance: {self.instance}")
        if self.extensions:
            lines.append("Extension fields:")
            lines.extend(f"  - {key}: {value}" for key, value in self.extensions.items())
        return "\n".join(lines) or "Unknown API error"
