"""Configuration loading for pipelight.

Secrets come from the environment; the multi-project layout comes from a
``projects.yml`` file such as::

    - name: company/backend
      branch: develop
      leds: {red: 9, green: 10, yellow: 11}
    - name: company/ios-app
      branch: master
      leds: {red: 6, green: 7, yellow: 8, buzzer: 5}
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pipelight.fetcher import BASE_URL
from pipelight.indicator import DEFAULT_BUZZER_PIN, OutputSet

TOKEN_ENV = "GITLAB_API_PRIVATE_TOKEN"
PROJECT_ID_ENV = "GITLAB_PROJECT_ID"
BASE_URL_ENV = "GITLAB_BASE_URL"

DEFAULT_BRANCH = "develop"
DEFAULT_PROJECTS_FILE = "projects.yml"
SINGLE_PROJECT_INTERVAL = 120
MULTI_PROJECT_INTERVAL = 60


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class ProjectConfig:
    """One tracked project: GitLab project, branch and assigned outputs."""

    project_id: str
    branch: str = DEFAULT_BRANCH
    outputs: OutputSet = field(default_factory=OutputSet)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectConfig:
        """Create a project entry from one ``projects.yml`` item.

        Raises:
            ConfigError: If the entry has no name or malformed LED pins.
        """
        if not isinstance(data, Mapping):
            raise ConfigError(f"Project entry must be a mapping, got {type(data).__name__}")
        if not data.get("name"):
            raise ConfigError(f"Project entry is missing 'name': {dict(data)}")

        leds = data.get("leds")
        if leds is None:
            outputs = OutputSet()
        elif isinstance(leds, Mapping):
            missing = [c for c in ("red", "green", "yellow") if c not in leds]
            if missing:
                raise ConfigError(f"Project {data['name']} is missing LED pins: {', '.join(missing)}")
            try:
                outputs = OutputSet(
                    red=int(leds["red"]),
                    green=int(leds["green"]),
                    yellow=int(leds["yellow"]),
                    buzzer=int(leds.get("buzzer", DEFAULT_BUZZER_PIN)),
                )
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Project {data['name']} has invalid LED pins: {e}") from e
        else:
            raise ConfigError(f"Project {data['name']}: 'leds' must be a mapping")

        return cls(
            project_id=str(data["name"]),
            branch=str(data.get("branch") or DEFAULT_BRANCH),
            outputs=outputs,
        )


@dataclass
class MonitorConfig:
    """Everything needed to start a monitor."""

    api_token: str
    projects: list[ProjectConfig]
    interval: int = SINGLE_PROJECT_INTERVAL
    only_red_green: bool = False
    concurrent: bool = False
    base_url: str = BASE_URL

    @classmethod
    def single(
        cls,
        project_id: str | None = None,
        branch: str = DEFAULT_BRANCH,
        interval: int = SINGLE_PROJECT_INTERVAL,
        only_red_green: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> MonitorConfig:
        """Build a single-project config, falling back to the environment.

        Raises:
            ConfigError: If the token or project id is missing.
        """
        env = os.environ if env is None else env
        project_id = project_id or env.get(PROJECT_ID_ENV)
        if not project_id:
            raise ConfigError(f"No project given and {PROJECT_ID_ENV} is not set")

        return cls(
            api_token=_require_token(env),
            projects=[ProjectConfig(project_id=project_id, branch=branch)],
            interval=interval,
            only_red_green=only_red_green,
            base_url=env.get(BASE_URL_ENV) or BASE_URL,
        )

    @classmethod
    def multi(
        cls,
        projects_file: str | Path = DEFAULT_PROJECTS_FILE,
        interval: int = MULTI_PROJECT_INTERVAL,
        only_red_green: bool = False,
        concurrent: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> MonitorConfig:
        """Build a multi-project config from a projects file and the environment.

        Raises:
            ConfigError: If the token is missing or the file is invalid.
        """
        env = os.environ if env is None else env
        return cls(
            api_token=_require_token(env),
            projects=load_projects(projects_file),
            interval=interval,
            only_red_green=only_red_green,
            concurrent=concurrent,
            base_url=env.get(BASE_URL_ENV) or BASE_URL,
        )


def _require_token(env: Mapping[str, str]) -> str:
    token = env.get(TOKEN_ENV)
    if not token:
        raise ConfigError(f"{TOKEN_ENV} is not set")
    return token


def load_projects(path: str | Path) -> list[ProjectConfig]:
    """Load the ordered project list from a YAML file.

    Args:
        path: Path to projects.yml.

    Returns:
        Project entries in file order.

    Raises:
        ConfigError: If the file is missing, unparsable or not a list.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Projects file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, list) or not data:
        raise ConfigError(f"{path} must contain a non-empty list of projects")

    return [ProjectConfig.from_dict(item) for item in data]
