"""Domain models for project generation."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Version of the sword runtime that generated projects depend on.
SWORD_VERSION = "0.1.0"

DEFAULT_PORT = 3000

PROJECT_NAME_TOKEN = "{{PROJECT_NAME}}"
APP_PORT_TOKEN = "{{APP_PORT}}"
SWORD_VERSION_TOKEN = "{{SWORD_VERSION}}"


class GenerationRequest(BaseModel):
    """Everything needed to stamp out one project."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Project name")
    output_dir: Path = Field(..., description="Directory the project is created in")
    init_in_place: bool = Field(
        default=False, description="Generate into output_dir instead of a subdirectory"
    )
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535, description="Application port")
    library_version: str = Field(
        default=SWORD_VERSION, description="sword version pinned by the project"
    )

    @property
    def target_path(self) -> Path:
        if self.init_in_place:
            return self.output_dir
        return self.output_dir / self.project_name

    def replacements(self) -> dict[str, str]:
        return {
            PROJECT_NAME_TOKEN: self.project_name,
            APP_PORT_TOKEN: str(self.port),
            SWORD_VERSION_TOKEN: self.library_version,
        }
