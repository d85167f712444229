"""Exposure report schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from .common import CamelModel

# Counts are stored in a 32-bit integer column.
MAX_EXPOSED_COUNT = 2**31 - 1

ExposedCount = Annotated[int, Field(le=MAX_EXPOSED_COUNT)]


class ExposureReportRequest(CamelModel):
    """Exposed-credential counts submitted by a reporting client.

    ``org`` maps organization ids to the number of exposed credentials the
    client found in that organization's vault; ``me`` is the count for the
    user's personal vault.
    """
    user_id: str
    org: dict[str, ExposedCount] = Field(default_factory=dict)
    me: ExposedCount = 0
