"""Deploy dashboard configuration.

The dashboard is configured per project with a flat map of string values,
as stored by the build server. ``DeployConfig`` is a typed view over that map.
Values stay strings so the map round-trips unchanged; helper methods
interpret them.
"""

from pydantic import BaseModel, ConfigDict, Field


class DeployConfigKeys:
    """Keys of the raw configuration map."""

    DASHBOARD_ENABLED = "dashboardEnabled"
    PROJECT_KEY = "projectKey"
    VERSION_KEY = "versionKey"
    ENVIRONMENT_KEY = "environmentKey"
    ENVIRONMENTS = "environments"
    CUSTOM_KEY = "customKey"
    REFRESH_SECS = "refreshSecs"
    MULTI_ENV_CONFIG = "multiEnvConfig"


class DeployConfig(BaseModel):
    """Deploy dashboard configuration for a project."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dashboard_enabled: str = Field(default="false", alias=DeployConfigKeys.DASHBOARD_ENABLED)
    project_key: str = Field(
        default="",
        alias=DeployConfigKeys.PROJECT_KEY,
        description="Build parameter holding the application name",
    )
    version_key: str = Field(
        default="",
        alias=DeployConfigKeys.VERSION_KEY,
        description="Build parameter holding the version",
    )
    environment_key: str = Field(
        default="",
        alias=DeployConfigKeys.ENVIRONMENT_KEY,
        description="Build parameter holding the environment",
    )
    environments: str = Field(
        default="",
        alias=DeployConfigKeys.ENVIRONMENTS,
        description="Comma-separated environments in display order",
    )
    custom_key: str = Field(
        default="",
        alias=DeployConfigKeys.CUSTOM_KEY,
        description="Optional extra build parameter to display",
    )
    refresh_secs: str = Field(default="", alias=DeployConfigKeys.REFRESH_SECS)
    multi_env_config: str = Field(default="false", alias=DeployConfigKeys.MULTI_ENV_CONFIG)

    @classmethod
    def from_map(cls, values: dict[str, str]) -> "DeployConfig":
        """Create a config from the raw map, ignoring unknown keys."""
        known = {k: v for k, v in values.items() if k in _ALIASES}
        return cls.model_validate(known)

    @classmethod
    def disabled(cls) -> "DeployConfig":
        """Config used when a project has no dashboard settings."""
        return cls()

    def to_map(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)

    def is_enabled(self) -> bool:
        return _is_true(self.dashboard_enabled)

    def is_multi_env_config(self) -> bool:
        return _is_true(self.multi_env_config)

    def environments_as_list(self) -> list[str]:
        """Environments in configured order, trimmed, blanks dropped."""
        return [env.strip() for env in self.environments.split(",") if env.strip()]

    def refresh_seconds(self) -> int | None:
        """Refresh interval as an integer, or None if unset or invalid."""
        try:
            return int(self.refresh_secs.strip())
        except ValueError:
            return None


_ALIASES = {field.alias for field in DeployConfig.model_fields.values()}


def _is_true(value: str) -> bool:
    return value.strip().lower() == "true"
