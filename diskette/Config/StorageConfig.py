from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class DiskConfig(BaseModel):
    """Validated configuration of a single storage disk."""

    model_config = ConfigDict(extra='allow')

    driver: str = Field('local', description="Filesystem driver name")
    root: str = Field('storage/app', description="Root directory for the local driver")
    prefix: str = Field('', description="Prefix placed before every filename")
    scheme: Optional[str] = Field(None, description="URI scheme of generated paths")
    atomic_writes: bool = Field(False, description="Write through a temporary file and rename")
    rollback_failure: Literal['raise', 'suppress'] = Field(
        'raise', description="What to do when a write rollback fails"
    )
    log_channel: Optional[str] = Field(None, description="Log channel for the disk")
