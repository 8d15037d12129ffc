"""Deploy domain models."""

from datetime import datetime
from typing import NamedTuple

from pydantic import BaseModel, Field

RUNNING_STATUS = "RUNNING"


class DeployIdentity(NamedTuple):
    """The (application, version, environment) of one logical deployment."""

    name: str
    version: str
    environment: str

    @classmethod
    def from_parameters(
        cls,
        parameters: dict[str, str],
        project_key: str,
        version_key: str,
        env_key: str,
    ) -> "DeployIdentity":
        """Extract identity from build parameters, missing keys become empty strings."""
        return cls(
            name=parameters.get(project_key, ""),
            version=parameters.get(version_key, ""),
            environment=parameters.get(env_key, ""),
        )


class DeployRecord(BaseModel):
    """A resolved deployment of an application to an environment."""

    name: str = Field(..., description="Application name")
    version: str = Field(..., description="Deployed version")
    environment: str = Field(..., description="Target environment")
    status: str = Field(..., description="RUNNING or the finished build status")
    time: datetime = Field(..., description="Start time if running, else finish time")
    link: str = Field(default="", description="Build results link")
    custom: str = Field(default="", description="Value of the configured custom parameter")
    latest: bool = Field(default=False, description="Whether this is the newest version of the app")

    @property
    def identity(self) -> DeployIdentity:
        return DeployIdentity(self.name, self.version, self.environment)

    @property
    def is_running(self) -> bool:
        return self.status == RUNNING_STATUS
