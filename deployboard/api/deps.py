"""API dependency injection."""

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends

from deployboard.host.base import BuildHost
from deployboard.host.teamcity import TeamCityRestHost


def get_build_host() -> Iterator[BuildHost]:
    """Get build host for the duration of a request."""
    host = TeamCityRestHost()
    try:
        yield host
    finally:
        host.close()


# Type aliases for dependency injection
BuildHostDep = Annotated[BuildHost, Depends(get_build_host)]
