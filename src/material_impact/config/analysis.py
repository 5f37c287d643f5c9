"""Top-level analysis — bundles the material table with per-call parameters."""

from pydantic import BaseModel, Field

from material_impact.config.display import DisplayParameters
from material_impact.config.material import MaterialRecord
from material_impact.config.samples import sample_materials
from material_impact.config.selection import SelectionConfig


class AnalysisConfig(BaseModel):
    """Complete input bundle for one comparison run."""

    materials: list[MaterialRecord] = Field(default_factory=sample_materials)
    display: DisplayParameters = Field(default_factory=DisplayParameters)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
