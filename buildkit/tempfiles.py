"""Tracking of temporary files that are removed at the end of a run."""

from __future__ import annotations

import os
import tempfile
from types import TracebackType

_PREFIX = "buildifier-tmp-"


class TempFiles:
    """Creates temporary files and removes them all on clean()."""

    def __init__(self) -> None:
        self.filenames: list[str] = []

    def write_temp(self, data: bytes) -> str:
        """Write data to a new temporary file and return its name."""
        fd, name = tempfile.mkstemp(prefix=_PREFIX)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
        except OSError:
            os.remove(name)
            raise
        self.filenames.append(name)
        return name

    def clean(self) -> None:
        """Remove every file created so far; raise OSError on failure."""
        while self.filenames:
            os.remove(self.filenames[0])
            self.filenames.pop(0)

    def __enter__(self) -> TempFiles:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.clean()