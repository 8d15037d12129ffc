"""Deploy API schemas."""

from pydantic import BaseModel, Field

from deployboard.models.deploy import DeployRecord


class DeploysView(BaseModel):
    """Deploys of a project grouped per application, ready for display."""

    environments: list[str] = Field(
        default_factory=list,
        description="Recognized environments in display order",
    )
    refresh_secs: int | None = Field(default=None, description="Dashboard refresh interval")
    multi_env: bool = Field(default=False, description="Whether configurations deploy to several environments")
    custom_key: str = Field(default="", description="Name of the custom parameter shown per deploy")
    apps: dict[str, list[DeployRecord]] = Field(
        default_factory=dict,
        description="Deploys per application, latest versions marked",
    )
    running: int = Field(default=0, description="Number of deploys still in progress")
