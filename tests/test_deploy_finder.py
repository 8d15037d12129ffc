"""Tests for deploy resolution across build configurations."""

from deployboard.engine.build_finder import BuildFinder, LastBuildFinder
from deployboard.engine.deploy_finder import DeployFinder
from deployboard.models.build import BuildStatus
from deployboard.models.config import DeployConfig
from tests.builds import (
    ENV_KEY,
    PROJECT_KEY,
    VERSION_KEY,
    FakeBuildHost,
    SimulatedBuildHistory,
    at,
    deployment_type,
    finished,
    params,
    regular_type,
    running,
)


def make_finder(
    host: FakeBuildHost,
    build_finder: BuildFinder | None = None,
    custom_key: str = "",
) -> DeployFinder:
    return DeployFinder(
        host,
        project_key=PROJECT_KEY,
        version_key=VERSION_KEY,
        env_key=ENV_KEY,
        build_finder=build_finder or LastBuildFinder(host),
        custom_key=custom_key,
    )


def test_search_empty_project_returns_no_deploys() -> None:
    assert make_finder(FakeBuildHost()).search("Project") == []


def test_search_ignores_regular_build_types() -> None:
    host = FakeBuildHost(
        build_types=[regular_type("build")],
        running_builds={"build": [running("1", params("Vega", "1.0", "DEV"))]},
        finished_builds={"build": [finished("2", params("Vega", "0.9", "DEV"))]},
    )

    assert make_finder(host).search("Project") == []


def test_search_skips_deployment_without_history() -> None:
    host = FakeBuildHost(
        build_types=[deployment_type("never-deployed"), deployment_type("deployed")],
        finished_builds={"deployed": [finished("1", params("Vega", "1.0", "DEV"))]},
    )

    results = make_finder(host).search("Project")

    assert [(r.name, r.version, r.environment) for r in results] == [("Vega", "1.0", "DEV")]


def test_search_reports_finished_build() -> None:
    host = FakeBuildHost(
        build_types=[deployment_type()],
        finished_builds={
            "deploy": [
                finished(
                    "42",
                    params("Vega", "1.0", "PRD"),
                    finish="2019-07-01T10:00:00Z",
                    status=BuildStatus.FAILURE,
                )
            ]
        },
    )

    [record] = make_finder(host).search("Project")

    assert record.name == "Vega"
    assert record.version == "1.0"
    assert record.environment == "PRD"
    assert record.status == "FAILURE"
    assert record.time == at("2019-07-01T10:00:00Z")
    assert record.link == "http://link/42"
    assert record.latest is False


def test_search_prefers_running_builds_over_history() -> None:
    host = FakeBuildHost(
        build_types=[deployment_type()],
        running_builds={
            "deploy": [
                running("2", params("Vega", "1.1", "DEV"), start="2019-07-01T10:00:00Z"),
                running("3", params("Vega", "1.1", "UAT"), start="2019-07-01T10:05:00Z"),
            ]
        },
        finished_builds={"deploy": [finished("1", params("Vega", "1.0", "DEV"))]},
    )

    results = make_finder(host).search("Project")

    assert [(r.environment, r.status) for r in results] == [("DEV", "RUNNING"), ("UAT", "RUNNING")]
    assert results[1].time == at("2019-07-01T10:05:00Z")
    assert all(r.is_running for r in results)


def test_search_keeps_deploy_with_missing_parameters() -> None:
    host = FakeBuildHost(
        build_types=[deployment_type()],
        finished_builds={"deploy": [finished("1", params(name="Vega"))]},
    )

    [record] = make_finder(host).search("Project")

    assert (record.name, record.version, record.environment) == ("Vega", "", "")


def test_search_copies_custom_parameter() -> None:
    host = FakeBuildHost(
        build_types=[deployment_type("a"), deployment_type("b")],
        finished_builds={
            "a": [finished("1", params("Vega", "1.0", "DEV", BRANCH="main"))],
            "b": [finished("2", params("Orion", "2.0", "DEV"))],
        },
    )

    results = make_finder(host, custom_key="BRANCH").search("Project")

    assert [r.custom for r in results] == ["main", ""]


def test_search_without_custom_key_leaves_custom_empty() -> None:
    host = FakeBuildHost(
        build_types=[deployment_type()],
        finished_builds={"deploy": [finished("1", params("Vega", "1.0", "DEV", BRANCH="main"))]},
    )

    [record] = make_finder(host).search("Project")

    assert record.custom == ""


def test_search_reports_each_environment_for_multi_env_configuration(dashboard_config) -> None:
    config = DeployConfig.from_map({**dashboard_config, "multiEnvConfig": "true"})
    host = FakeBuildHost(
        build_types=[deployment_type()],
        finished_builds={
            "deploy": [
                finished("1", params("Vega", "1.0", "PRD"), finish="2019-07-01T08:00:00Z"),
                finished("2", params("Vega", "1.1", "DEV"), finish="2019-07-01T09:00:00Z"),
                finished("3", params("Vega", "1.1", "UAT"), finish="2019-07-01T10:00:00Z"),
            ]
        },
    )

    results = DeployFinder.from_config(config, host).search("Project")

    assert [(r.environment, r.version) for r in results] == [
        ("DEV", "1.1"),
        ("UAT", "1.1"),
        ("PRD", "1.0"),
    ]


def test_search_single_env_configuration_reports_only_last_build(dashboard_config) -> None:
    config = DeployConfig.from_map(dashboard_config)
    host = FakeBuildHost(
        build_types=[deployment_type()],
        finished_builds={
            "deploy": [
                finished("1", params("Vega", "1.0", "PRD"), finish="2019-07-01T08:00:00Z"),
                finished("2", params("Vega", "1.1", "DEV"), finish="2019-07-01T09:00:00Z"),
            ]
        },
    )

    results = DeployFinder.from_config(config, host).search("Project")

    assert [(r.environment, r.version) for r in results] == [("DEV", "1.1")]


def test_search_uses_injected_build_finder() -> None:
    host = FakeBuildHost(build_types=[deployment_type()])
    history = SimulatedBuildHistory(finished("9", params("Vega", "3.0", "DEV")))

    [record] = make_finder(host, build_finder=LastBuildFinder(history)).search("Project")

    assert record.version == "3.0"


def test_search_multi_env_running_build_keeps_other_environments(dashboard_config) -> None:
    config = DeployConfig.from_map({**dashboard_config, "multiEnvConfig": "true"})
    host = FakeBuildHost(
        build_types=[deployment_type()],
        running_builds={
            "deploy": [running("4", params("Vega", "2.0", "DEV"), start="2019-07-01T11:00:00Z")],
        },
        finished_builds={
            "deploy": [
                finished("1", params("Vega", "1.0", "PRD"), finish="2019-07-01T08:00:00Z"),
                finished("2", params("Vega", "1.5", "UAT"), finish="2019-07-01T09:00:00Z"),
                finished("3", params("Vega", "1.9", "DEV"), finish="2019-07-01T10:00:00Z"),
            ]
        },
    )

    results = DeployFinder.from_config(config, host).search("Project")

    assert [(r.version, r.environment, r.status) for r in results] == [
        ("2.0", "DEV", "RUNNING"),
        ("1.5", "UAT", "NORMAL"),
        ("1.0", "PRD", "NORMAL"),
    ]
