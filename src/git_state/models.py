"""Data models for git-state."""

import math
import os
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# 1 MiB, the usual default cap on captured child-process output.
DEFAULT_MAX_OUTPUT_SIZE = 1024 * 1024

NAN = float("nan")

# A commit count, or NaN when it could not be determined.
Count = Union[int, float]


def is_indeterminate(value: Count) -> bool:
    """True for the NaN sentinel returned by ahead/behind."""
    return isinstance(value, float) and math.isnan(value)


# ── Configuration ─────────────────────────────────────────────────────────

class InspectorConfig(BaseModel):
    """Options shared by every query."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_output_size: Optional[int] = Field(default=DEFAULT_MAX_OUTPUT_SIZE, gt=0)
    """Largest stdout/stderr (in bytes) a git command may produce. None disables the cap."""

    @classmethod
    def from_env(cls) -> "InspectorConfig":
        """Build a config from ``GIT_STATE_MAX_OUTPUT_SIZE`` (``0``/``none`` = no cap)."""
        raw = os.environ.get("GIT_STATE_MAX_OUTPUT_SIZE", "").strip()
        if not raw:
            return cls()
        if raw.lower() in ("0", "none"):
            return cls(max_output_size=None)
        return cls.model_validate({"max_output_size": raw})

    @classmethod
    def coerce(
        cls, config: Union["InspectorConfig", Mapping[str, Any], None]
    ) -> "InspectorConfig":
        """Accept None, a mapping of options, or an existing config."""
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        return cls.model_validate(dict(config))


ConfigLike = Union[InspectorConfig, Mapping[str, Any], None]


# ── Query results ─────────────────────────────────────────────────────────

class StatusCounts(BaseModel):
    """Working-tree counts parsed from one ``git status -s`` call."""

    dirty: int = Field(default=0, ge=0)
    untracked: int = Field(default=0, ge=0)


class RepositoryReport(BaseModel):
    """Everything ``check`` gathers about a repository."""

    branch: Optional[str] = None
    remote_branch: Optional[str] = None
    ahead: Count = NAN
    behind: Count = NAN
    dirty: int = Field(default=0, ge=0)
    untracked: int = Field(default=0, ge=0)
    stashes: int = Field(default=0, ge=0)

    @property
    def ahead_known(self) -> bool:
        return not is_indeterminate(self.ahead)

    @property
    def behind_known(self) -> bool:
        return not is_indeterminate(self.behind)

    def to_display_dict(self) -> dict[str, Any]:
        """Plain dict with indeterminate counts as None (JSON has no NaN)."""
        data = self.model_dump()
        for key in ("ahead", "behind"):
            if is_indeterminate(data[key]):
                data[key] = None
        return data
