"""Schemas for repository statistics fetched from GitHub."""

from pydantic import BaseModel, ConfigDict, Field


class GitHubStats(BaseModel):
    """Snapshot of a repository's activity and size."""

    commits: int = Field(..., description="Commit count on the default branch")
    lines_of_code: int = Field(..., description="Approximate lines in the tracked language")
    # Serialized under the name the comment widget reads.
    directory_count: int = Field(
        ...,
        serialization_alias="crate_count",
        description="Package directories plus configured extras",
    )
    stars: int
    forks: int
    open_issues: int
    last_push: str

    model_config = ConfigDict(frozen=True)
