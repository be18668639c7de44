from __future__ import annotations

import pathlib


class PortfolioError(Exception):
    """Base class for every fatal build error."""


class MalformedMetadata(PortfolioError):
    def __init__(self, path: pathlib.Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class DuplicateProjectId(PortfolioError):
    def __init__(
        self,
        project_id: str,
        first: pathlib.Path,
        second: pathlib.Path,
    ) -> None:
        self.project_id = project_id
        self.first = first
        self.second = second
        super().__init__(
            f"duplicate project id {project_id!r}: {first.name} and {second.name}"
        )
