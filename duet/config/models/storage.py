"""Storage backend configuration."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["file", "inmemory"]


class StorageConfig(BaseModel):
    """Where brain stores and audit streams live."""

    backend: BackendType = Field(
        default="file",
        description="Append-log backend",
    )
    base_dir: str = Field(
        default="data",
        description="Root directory for the file backend",
    )
    interactions_key: str = Field(
        default="logs/interactions.log",
        description="Generic interaction audit stream",
    )
    learning_key: str = Field(
        default="logs/learning.log",
        description="Learning audit stream with skip reasons",
    )
