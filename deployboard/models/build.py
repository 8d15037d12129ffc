"""Build domain models as exposed by the build server."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class BuildConfigurationType(str, Enum):
    """Build configuration type enumeration."""

    REGULAR = "REGULAR"
    DEPLOYMENT = "DEPLOYMENT"
    COMPOSITE = "COMPOSITE"


class BuildStatus(str, Enum):
    """Result status of a finished build."""

    NORMAL = "NORMAL"
    FAILURE = "FAILURE"
    ERROR = "ERROR"
    UNKNOWN = "UNKNOWN"


class BuildType(BaseModel):
    """A build configuration (pipeline/job definition)."""

    id: str = Field(..., description="Build configuration identifier")
    name: str = Field(default="", description="Build configuration name")
    project_id: str = Field(default="", description="Owning project identifier")
    project_name: str = Field(default="", description="Owning project name")
    configuration_type: BuildConfigurationType = Field(
        default=BuildConfigurationType.REGULAR,
        description="Build configuration type",
    )

    @property
    def is_deployment(self) -> bool:
        """Check if the configuration represents a deployment."""
        return self.configuration_type == BuildConfigurationType.DEPLOYMENT


class Build(BaseModel):
    """Fields shared by running and finished builds."""

    id: str = Field(..., description="Build identifier")
    build_type_id: str = Field(default="", description="Build configuration identifier")
    number: str = Field(default="", description="Build number")
    parameters: dict[str, str] = Field(
        default_factory=dict,
        description="Parameters defined directly on this build",
    )
    web_url: str = Field(default="", description="Build results page URL")


class RunningBuild(Build):
    """A build currently in progress."""

    start_date: datetime = Field(..., description="Build start time")


class FinishedBuild(Build):
    """A build that has completed."""

    status: BuildStatus = Field(default=BuildStatus.UNKNOWN, description="Build result")
    finish_date: datetime = Field(..., description="Build finish time")
