from __future__ import annotations

from typing import Any, Sequence


class EcosystemError(Exception):
    """Base class for errors raised by the simulation."""


class UnsupportedVariant(EcosystemError, ValueError):
    def __init__(self, kind: Any, medium: Any, detail: str | None = None) -> None:
        self.kind = kind
        self.medium = medium
        message = detail or f"Unsupported agent variant: kind={kind!r}, medium={medium!r}"
        super().__init__(message)


class NoConvergence(EcosystemError, RuntimeError):
    """Raised when the disaster loop stops before every agent is safe.

    Agent positions keep whatever progress was made up to that point.
    """

    def __init__(self, passes: int, unsafe_ids: Sequence[int], reason: str = "max_passes") -> None:
        self.passes = passes
        self.unsafe_ids = tuple(unsafe_ids)
        self.reason = reason
        super().__init__(
            f"{len(self.unsafe_ids)} agent(s) still unsafe after {passes} pass(es) ({reason}): "
            f"{list(self.unsafe_ids)}"
        )
