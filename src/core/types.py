"""Shared type aliases used across the pipeline modules."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from pydantic import StringConstraints

NonEmptyText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

FragmentStream = AsyncIterator[str]
