"""Selection of the finished build that represents a configuration's state."""

from abc import ABC, abstractmethod

from deployboard.core.logging import get_logger
from deployboard.host.base import BuildHistory
from deployboard.models.build import BuildType, FinishedBuild, RunningBuild
from deployboard.models.config import DeployConfig

logger = get_logger(__name__)


class BuildFinder(ABC):
    """Finds the relevant finished build(s) of a build configuration."""

    @abstractmethod
    def find(self, build_type: BuildType) -> FinishedBuild | None:
        """Return the representative finished build, or None without history."""
        pass

    def find_all(self, build_type: BuildType) -> list[FinishedBuild]:
        """Return every finished build that should be reported.

        Single-environment configurations report at most one build.
        """
        build = self.find(build_type)
        return [build] if build is not None else []

    def find_alongside(
        self, build_type: BuildType, running: list[RunningBuild]
    ) -> list[FinishedBuild]:
        """Return finished builds still worth reporting while builds are running.

        A running build supersedes the history of a single-environment
        configuration, so nothing is returned by default.
        """
        return []


class LastBuildFinder(BuildFinder):
    """Picks the most recently finished build."""

    def __init__(self, history: BuildHistory):
        self._history = history

    def find(self, build_type: BuildType) -> FinishedBuild | None:
        return max(
            self._history.finished_builds(build_type),
            key=lambda build: build.finish_date,
            default=None,
        )


class LastPerEnvironmentBuildFinder(LastBuildFinder):
    """Picks the most recently finished build for each environment.

    Used when a single build configuration deploys to several environments,
    with the environment chosen by a build parameter.
    """

    def __init__(self, history: BuildHistory, env_key: str, environments: list[str] | None = None):
        """Initialize finder.

        Args:
            history: Finished build history
            env_key: Build parameter holding the environment
            environments: Recognized environments, in display order. When
                empty, every environment seen in the history is reported.
        """
        super().__init__(history)
        self._env_key = env_key
        self._environments = environments or []

    def find_alongside(
        self, build_type: BuildType, running: list[RunningBuild]
    ) -> list[FinishedBuild]:
        """Return the latest builds of environments no running build targets."""
        busy = {build.parameters.get(self._env_key, "") for build in running}
        return [
            build
            for build in self.find_all(build_type)
            if build.parameters.get(self._env_key, "") not in busy
        ]

    def find_all(self, build_type: BuildType) -> list[FinishedBuild]:
        latest: dict[str, FinishedBuild] = {}
        for build in self._history.finished_builds(build_type):
            env = build.parameters.get(self._env_key, "")
            current = latest.get(env)
            if current is None or build.finish_date > current.finish_date:
                latest[env] = build

        if not self._environments:
            return list(latest.values())

        unknown = [env for env in latest if env not in self._environments]
        if unknown:
            logger.debug(
                "Ignoring unrecognized environments",
                build_type_id=build_type.id,
                environments=unknown,
            )
        return [latest[env] for env in self._environments if env in latest]


def build_finder_for(config: DeployConfig, history: BuildHistory) -> BuildFinder:
    """Create the build finder matching the configured environment mode."""
    if config.is_multi_env_config():
        return LastPerEnvironmentBuildFinder(
            history,
            env_key=config.environment_key,
            environments=config.environments_as_list(),
        )
    return LastBuildFinder(history)
