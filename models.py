"""Data models for GIF Finder."""
from pydantic import BaseModel, ConfigDict, Field


class GifFile(BaseModel):
    """A GIF file captured when the index was built."""
    model_config = ConfigDict(frozen=True)

    filename: str = Field(description="Bare filename, no directory")
    size: int = Field(default=0, ge=0, description="Size in bytes at index time")

    @property
    def size_kb(self) -> int:
        return self.size // 1024
