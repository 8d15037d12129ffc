"""Deploy dashboard API routes."""

from fastapi import APIRouter, HTTPException

from deployboard.api.deps import BuildHostDep
from deployboard.core.logging import get_logger
from deployboard.engine.deploy_finder import DeployFinder
from deployboard.engine.releases import group_per_app
from deployboard.models.config import DeployConfig
from deployboard.observability.tracing import TraceContext
from deployboard.schemas.common import APIResponse
from deployboard.schemas.deploy import DeploysView

logger = get_logger(__name__)

router = APIRouter(prefix="/projects", tags=["deploys"])


@router.get("/{project_id}/config", response_model=APIResponse[dict[str, str]])
def get_config(project_id: str, host: BuildHostDep) -> APIResponse[dict[str, str]]:
    """Get the deploy dashboard settings of a project."""
    config = DeployConfig.from_map(host.project_config(project_id))
    return APIResponse(data=config.to_map())


@router.get("/{project_id}/deploys", response_model=APIResponse[DeploysView])
def get_deploys(project_id: str, host: BuildHostDep) -> APIResponse[DeploysView]:
    """Get the current deploys of a project, grouped per application.

    Each application lists one deploy per version and environment, with the
    newest version marked as latest.
    """
    with TraceContext(project_id=project_id):
        config = DeployConfig.from_map(host.project_config(project_id))
        if not config.is_enabled():
            raise HTTPException(
                status_code=404,
                detail=f"Deploy dashboard not enabled for project {project_id}",
            )

        records = DeployFinder.from_config(config, host).search(project_id)
        apps = group_per_app(records)
        logger.debug("Deploys grouped", apps=len(apps))

        return APIResponse(
            data=DeploysView(
                environments=config.environments_as_list(),
                refresh_secs=config.refresh_seconds(),
                multi_env=config.is_multi_env_config(),
                custom_key=config.custom_key,
                apps=apps,
                running=sum(record.is_running for record in records),
            )
        )
