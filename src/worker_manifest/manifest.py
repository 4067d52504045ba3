"""Manifest facade: worker names, targets and deploy configs per environment."""

import logging
from typing import Callable, Optional, assert_never

from .deploy import DeployConfig, Zoned, Zoneless, build_deploy_config
from .errors import EnvironmentLookupError, EnvironmentRouteRequiredError, InvalidWorkerNameError
from .inheritance import Target, get_environment, resolve_target
from .models import Environment, ManifestDocument
from .naming import check_for_duplicate_names, environment_worker_name, is_valid_worker_name

logger = logging.getLogger(__name__)

NameValidator = Callable[[str], bool]


class Manifest:
    """Validated manifest answering per-environment queries.

    Construction checks name uniqueness once; queries are pure and recompute
    their result on every call.
    """

    def __init__(
        self,
        document: ManifestDocument,
        *,
        name_validator: NameValidator = is_valid_worker_name,
    ) -> None:
        check_for_duplicate_names(document)
        self._document = document
        self._name_validator = name_validator

    @property
    def document(self) -> ManifestDocument:
        return self._document

    @property
    def name(self) -> str:
        return self._document.name

    def environment_names(self) -> list[str]:
        return sorted(self._document.environments)

    def get_environment(self, environment_name: Optional[str]) -> Optional[Environment]:
        return get_environment(self._document, environment_name)

    def worker_name(self, environment_name: Optional[str] = None) -> str:
        """Effective worker name; falls back to the top-level name on lookup errors."""
        try:
            environment = self.get_environment(environment_name)
        except EnvironmentLookupError:
            return self._document.name
        return environment_worker_name(self._document.name, environment_name, environment)

    def get_target(self, environment_name: Optional[str] = None) -> Target:
        return resolve_target(self._document, environment_name)

    def deploy_config(
        self, environment_name: Optional[str] = None, *, allow_unrouted: bool = False
    ) -> DeployConfig:
        """Resolve where the worker for `environment_name` is deployed.

        Routing declared by the environment replaces the top-level routing
        outright. An environment without routing falls back to the top level,
        which is only accepted when the top level is zoneless.

        Raises:
            InvalidWorkerNameError: The effective worker name is not valid.
            EnvironmentLookupError: The environment cannot be selected.
            RouteError: Routing does not resolve to a single target.
        """
        script_name = self.worker_name(environment_name)
        if not self._name_validator(script_name):
            raise InvalidWorkerNameError(script_name)

        document = self._document
        environment = self.get_environment(environment_name)
        if environment is None:
            return build_deploy_config(
                script_name, document.route_config(), allow_unrouted=allow_unrouted
            )

        env_route_config = environment.route_config(document.account_id, document.zone_id)
        if env_route_config is not None:
            logger.debug("Using routing declared by environment %r", environment_name)
            return build_deploy_config(script_name, env_route_config, allow_unrouted=allow_unrouted)

        top_level_config = build_deploy_config(
            script_name, document.route_config(), allow_unrouted=allow_unrouted
        )
        if isinstance(top_level_config, Zoned):
            raise EnvironmentRouteRequiredError(environment_name)
        if isinstance(top_level_config, Zoneless):
            logger.debug("Environment %r inherits zoneless top-level routing", environment_name)
            return top_level_config
        assert_never(top_level_config)

