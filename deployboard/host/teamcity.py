"""TeamCity REST API access."""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

import httpx

from deployboard.core.config import Settings, get_settings
from deployboard.core.logging import get_logger
from deployboard.host.base import BuildHost
from deployboard.models.build import (
    Build,
    BuildConfigurationType,
    BuildStatus,
    BuildType,
    FinishedBuild,
    RunningBuild,
)

logger = get_logger(__name__)

DASHBOARD_FEATURE_TYPE = "deploy-dashboard"

_BUILD_FIELDS = (
    "build(id,number,buildTypeId,status,state,startDate,finishDate,webUrl,"
    "properties(property(name,value)))"
)
_BUILD_TYPE_FIELDS = "buildType(id,name,projectId,projectName,settings(property(name,value)))"
_FEATURE_FIELDS = "projectFeature(id,type,properties(property(name,value)))"

# TeamCity reports SUCCESS where the server API says NORMAL
_STATUSES = {
    "SUCCESS": BuildStatus.NORMAL,
    "NORMAL": BuildStatus.NORMAL,
    "FAILURE": BuildStatus.FAILURE,
    "ERROR": BuildStatus.ERROR,
}


class TeamCityError(RuntimeError):
    """Raised when the TeamCity API cannot be queried."""


def teamcity_rest_base(base: str) -> str:
    """Normalize a TeamCity URL to its REST root.

    Accepts:
      - https://teamcity.example.com
      - https://teamcity.example.com/app/rest
      - https://teamcity.example.com/httpAuth/app/rest (legacy)
    Returns: https://teamcity.example.com/app/rest
    """
    b = (base or "").strip().rstrip("/")
    if not b:
        return ""
    b = b.replace("/httpAuth", "")
    if "/app/rest" in b:
        i = b.find("/app/rest")
        return b[: i + len("/app/rest")]
    return b + "/app/rest"


def parse_teamcity_date(value: str) -> datetime:
    """Parse a TeamCity timestamp such as ``20251204T141343+0000`` to UTC."""
    return datetime.strptime(value, "%Y%m%dT%H%M%S%z").astimezone(timezone.utc)


def _properties(payload: dict[str, Any] | None) -> dict[str, str]:
    if not payload:
        return {}
    return {
        prop["name"]: str(prop.get("value", ""))
        for prop in payload.get("property") or []
        if "name" in prop
    }


class TeamCityRestHost(BuildHost):
    """Build host backed by the TeamCity REST API."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize HTTP client.

        Args:
            settings: Application settings, defaults to the cached settings
            transport: Optional httpx transport, used by tests
        """
        settings = settings or get_settings()
        self._rest_base = teamcity_rest_base(settings.teamcity_url)
        self._server_url = self._rest_base[: -len("/app/rest")] if self._rest_base else ""
        self._history_count = settings.teamcity_history_count

        headers = {"Accept": "application/json"}
        if settings.teamcity_token:
            headers["Authorization"] = f"Bearer {settings.teamcity_token}"

        self._client = httpx.Client(
            base_url=self._rest_base,
            headers=headers,
            timeout=settings.teamcity_timeout,
            transport=transport,
        )

    def build_types(self, project_id: str) -> list[BuildType]:
        data = self._get(
            "/buildTypes",
            locator=f"affectedProject:(id:{project_id})",
            fields=_BUILD_TYPE_FIELDS,
        )
        return [self._to_build_type(item) for item in data.get("buildType") or []]

    def running_builds(self, build_type: BuildType) -> list[RunningBuild]:
        data = self._get(
            "/builds",
            locator=f"buildType:(id:{build_type.id}),running:true,branch:(default:any)",
            fields=_BUILD_FIELDS,
        )
        return [
            RunningBuild(**self._build_fields(item), start_date=parse_teamcity_date(item["startDate"]))
            for item in data.get("build") or []
        ]

    def finished_builds(self, build_type: BuildType) -> Iterable[FinishedBuild]:
        data = self._get(
            "/builds",
            locator=(
                f"buildType:(id:{build_type.id}),state:finished,"
                f"branch:(default:any),count:{self._history_count}"
            ),
            fields=_BUILD_FIELDS,
        )
        return [
            FinishedBuild(
                **self._build_fields(item),
                status=_STATUSES.get(item.get("status", ""), BuildStatus.UNKNOWN),
                finish_date=parse_teamcity_date(item["finishDate"]),
            )
            for item in data.get("build") or []
        ]

    def view_results_url(self, build: Build) -> str:
        if build.web_url:
            return build.web_url
        return f"{self._server_url}/viewLog.html?buildId={build.id}"

    def project_config(self, project_id: str) -> dict[str, str]:
        data = self._get(
            f"/projects/id:{project_id}/projectFeatures",
            locator=f"type:{DASHBOARD_FEATURE_TYPE}",
            fields=_FEATURE_FIELDS,
        )
        features = data.get("projectFeature") or []
        if not features:
            logger.debug("No deploy dashboard settings", project_id=project_id)
            return {}
        return _properties(features[0].get("properties"))

    def close(self) -> None:
        """Close HTTP client."""
        self._client.close()

    def _get(self, path: str, **params: str) -> dict[str, Any]:
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "TeamCity request failed",
                path=path,
                status=e.response.status_code,
            )
            raise TeamCityError(
                f"TeamCity returned {e.response.status_code} for {path}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("TeamCity request error", path=path, error=str(e))
            raise TeamCityError(f"TeamCity request to {path} failed: {e}") from e
        return response.json() or {}

    @staticmethod
    def _to_build_type(item: dict[str, Any]) -> BuildType:
        settings = _properties(item.get("settings"))
        raw_type = settings.get("buildConfigurationType", BuildConfigurationType.REGULAR.value)
        try:
            configuration_type = BuildConfigurationType(raw_type.upper())
        except ValueError:
            configuration_type = BuildConfigurationType.REGULAR
        return BuildType(
            id=item["id"],
            name=item.get("name", ""),
            project_id=item.get("projectId", ""),
            project_name=item.get("projectName", ""),
            configuration_type=configuration_type,
        )

    @staticmethod
    def _build_fields(item: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": str(item["id"]),
            "build_type_id": item.get("buildTypeId", ""),
            "number": str(item.get("number", "")),
            "parameters": _properties(item.get("properties")),
            "web_url": item.get("webUrl", ""),
        }
