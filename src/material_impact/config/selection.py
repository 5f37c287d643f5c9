"""Selection / filter inputs."""

from pydantic import BaseModel, Field


class SelectionConfig(BaseModel):
    """Which materials are visible in a comparison."""

    selected_names: list[str] | None = Field(
        default=None,
        description="Names of selected materials. None = every material is selected.",
    )
    search_query: str = Field(default="", description="Case-insensitive substring filter on name")
