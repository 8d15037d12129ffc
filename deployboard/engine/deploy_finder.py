"""Deploy resolution across the build configurations of a project."""

import time
from dataclasses import dataclass
from datetime import datetime

from deployboard.core.logging import get_logger
from deployboard.engine.build_finder import BuildFinder, build_finder_for
from deployboard.host.base import BuildHost
from deployboard.models.build import Build, BuildType
from deployboard.models.config import DeployConfig
from deployboard.models.deploy import RUNNING_STATUS, DeployIdentity, DeployRecord
from deployboard.observability.metrics import (
    CANDIDATES_FOUND,
    DUPLICATES_DROPPED,
    SEARCHES,
    SEARCH_LATENCY,
)

logger = get_logger(__name__)


@dataclass
class Candidate:
    """A running or finished build considered for the result."""

    build: Build
    status: str
    time: datetime


class DeployFinder:
    """Finds the current deploys of a project.

    Each deployment build configuration contributes its running builds, or
    failing that, what the build finder picks from its history. The same
    deploy can be visible through several configurations (running in one,
    finished in another), so results are reduced to the most recently dated
    record per application, version and environment.
    """

    def __init__(
        self,
        host: BuildHost,
        project_key: str,
        version_key: str,
        env_key: str,
        build_finder: BuildFinder,
        custom_key: str = "",
    ):
        """Initialize finder.

        Args:
            host: Build server access
            project_key: Build parameter holding the application name
            version_key: Build parameter holding the version
            env_key: Build parameter holding the environment
            build_finder: Picks finished builds from history
            custom_key: Optional build parameter copied to each record
        """
        self._host = host
        self._project_key = project_key
        self._version_key = version_key
        self._env_key = env_key
        self._build_finder = build_finder
        self._custom_key = custom_key

    @classmethod
    def from_config(cls, config: DeployConfig, host: BuildHost) -> "DeployFinder":
        """Create a finder using the parameter keys of a dashboard config."""
        return cls(
            host,
            project_key=config.project_key,
            version_key=config.version_key,
            env_key=config.environment_key,
            build_finder=build_finder_for(config, host),
            custom_key=config.custom_key,
        )

    def search(self, project_id: str) -> list[DeployRecord]:
        """Return the current deploys of a project, one per deploy identity.

        Records keep the order in which their identity was first seen.
        """
        start_time = time.perf_counter()
        SEARCHES.labels(project_id=project_id).inc()

        build_types = [bt for bt in self._host.build_types(project_id) if bt.is_deployment]

        deploys: dict[DeployIdentity, DeployRecord] = {}
        for build_type in build_types:
            for candidate in self._candidates(build_type):
                record = self._to_record(candidate)
                existing = deploys.get(record.identity)
                if existing is None:
                    deploys[record.identity] = record
                    continue

                DUPLICATES_DROPPED.inc()
                if record.time > existing.time:
                    deploys[record.identity] = record

        SEARCH_LATENCY.labels(project_id=project_id).observe(time.perf_counter() - start_time)
        logger.info(
            "Deploy search complete",
            project_id=project_id,
            build_types=len(build_types),
            deploys=len(deploys),
        )
        return list(deploys.values())

    def _candidates(self, build_type: BuildType) -> list[Candidate]:
        running = self._host.running_builds(build_type)
        if running:
            finished = self._build_finder.find_alongside(build_type, running)
        else:
            finished = self._build_finder.find_all(build_type)

        if not running and not finished:
            logger.debug("No deploys found", build_type_id=build_type.id)
            return []

        CANDIDATES_FOUND.labels(state="running").inc(len(running))
        CANDIDATES_FOUND.labels(state="finished").inc(len(finished))
        return [
            Candidate(build=build, status=RUNNING_STATUS, time=build.start_date)
            for build in running
        ] + [
            Candidate(build=build, status=build.status.value, time=build.finish_date)
            for build in finished
        ]

    def _to_record(self, candidate: Candidate) -> DeployRecord:
        parameters = candidate.build.parameters
        identity = DeployIdentity.from_parameters(
            parameters,
            self._project_key,
            self._version_key,
            self._env_key,
        )
        return DeployRecord(
            name=identity.name,
            version=identity.version,
            environment=identity.environment,
            status=candidate.status,
            time=candidate.time,
            link=self._host.view_results_url(candidate.build),
            custom=parameters.get(self._custom_key, "") if self._custom_key else "",
        )
