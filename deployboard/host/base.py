"""Abstract interfaces onto the build server."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from deployboard.models.build import Build, BuildType, FinishedBuild, RunningBuild


class BuildHistory(ABC):
    """Access to the finished builds of a build configuration."""

    @abstractmethod
    def finished_builds(self, build_type: BuildType) -> Iterable[FinishedBuild]:
        """Return finished builds of a build configuration, in any order."""
        pass


class BuildHost(BuildHistory):
    """Read-only view of the build server used by the deploy finder."""

    @abstractmethod
    def build_types(self, project_id: str) -> list[BuildType]:
        """Return the build configurations of a project, including subprojects."""
        pass

    @abstractmethod
    def running_builds(self, build_type: BuildType) -> list[RunningBuild]:
        """Return builds of a build configuration currently in progress."""
        pass

    @abstractmethod
    def view_results_url(self, build: Build) -> str:
        """Return a link to the results page of a build."""
        pass

    @abstractmethod
    def project_config(self, project_id: str) -> dict[str, str]:
        """Return the raw deploy dashboard settings of a project."""
        pass

    def close(self) -> None:
        """Clean up resources. Override if needed."""
        pass
