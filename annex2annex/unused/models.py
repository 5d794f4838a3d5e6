"""Unused cache data models for annex2annex.

Contains Pydantic models for the persisted `git annex unused` report:
- UnusedParams: The arguments a report was produced with
- UnusedEntry: One unused key
- UnusedCache: A timestamped report for one repository
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class UnusedParams(BaseModel):
    """Arguments passed to `git annex unused`."""

    from_remote: Optional[str] = None  # --from
    used_refspec: Optional[str] = None  # --used-refspec


class UnusedEntry(BaseModel):
    """One line of `git annex unused` output."""

    number: int = Field(gt=0)  # what `git annex dropunused` takes
    key: str
    bad: bool = False  # preserved by fsck
    tmp: bool = False  # partially transferred
    # `git log --stat -S` output, filled in on demand
    log_lines: Optional[list[str]] = None

    @model_validator(mode="after")
    def _bad_or_tmp(self) -> "UnusedEntry":
        if self.bad and self.tmp:
            raise ValueError("an unused entry cannot be both bad and tmp")
        return self


class UnusedCache(BaseModel):
    """Cached result of `git annex unused` for one repository."""

    timestamp: float  # time.time() when last written
    params: UnusedParams
    entries: list[UnusedEntry] = Field(default_factory=list)
