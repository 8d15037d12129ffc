#!/usr/bin/env python3
"""Print the deploy dashboard of a project from a running deployboard API.

Useful to check the dashboard settings of a project end to end.
"""

import sys

import httpx


def print_deploys(api_url: str, project_id: str) -> None:
    """Fetch and print the deploys of a project.

    Args:
        api_url: deployboard API base URL
        project_id: TeamCity project ID
    """
    response = httpx.get(f"{api_url}/api/v1/projects/{project_id}/deploys", timeout=30.0)
    payload = response.json()
    if response.status_code != 200:
        print(f"✗ {payload.get('message', response.status_code)}")
        return

    data = payload["data"]
    environments = data["environments"]
    print(f"Project: {project_id}")
    print(f"Environments: {', '.join(environments) or '-'}")
    print("=" * 60)

    for app, deploys in data["apps"].items():
        print(app)
        by_env = {deploy["environment"]: deploy for deploy in deploys}
        ordered = [by_env[env] for env in environments if env in by_env]
        ordered += [d for d in deploys if d["environment"] not in environments]
        for deploy in ordered:
            marker = "*" if deploy["latest"] else " "
            custom = f"  [{deploy['custom']}]" if deploy["custom"] else ""
            print(
                f"  {marker} {deploy['environment'] or '?':<8} {deploy['version'] or '?':<12} "
                f"{deploy['status']:<8} {deploy['time']}{custom}"
            )
        print()


def main():
    """Entry point."""
    api_url = "http://localhost:8000"

    if len(sys.argv) < 2 or sys.argv[1] in ["-h", "--help"]:
        print("Usage:")
        print(f"  {sys.argv[0]} PROJECT_ID [API_URL]")
        print()
        print("Example:")
        print(f"  {sys.argv[0]} Vega http://localhost:8000")
        return

    project_id = sys.argv[1]
    if len(sys.argv) > 2:
        api_url = sys.argv[2].rstrip("/")

    print_deploys(api_url, project_id)


if __name__ == "__main__":
    main()
