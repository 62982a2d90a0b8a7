"""Periodic detection of the capabilities of the cluster the operator runs in."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any, Protocol

from .settings import Settings
from .types import (
    FLAG_PLATFORM_AUTO_DETECT,
    FLAG_PLATFORM_KUBERNETES,
    FLAG_PLATFORM_OPENSHIFT,
    FLAG_PROVISION_ELASTICSEARCH_AUTO,
    FLAG_PROVISION_ELASTICSEARCH_FALSE,
    FLAG_PROVISION_ELASTICSEARCH_TRUE,
)

_log = logging.getLogger(__name__)

DEFAULT_INTERVAL = 5.0

OPENSHIFT_ROUTE_GROUP = "route.openshift.io"
ELASTICSEARCH_OPERATOR_GROUP = "logging.openshift.io"


class Client(Protocol):
    """Creates objects in the cluster; raises when the request is refused."""

    def create(self, obj: dict[str, Any]) -> Any: ...


class DiscoveryClient(Protocol):
    """Lists the API group names served by the cluster."""

    def server_groups(self) -> Iterable[str]: ...


def is_openshift(api_groups: Iterable[str]) -> bool:
    """Whether the API groups include the OpenShift route group."""
    return OPENSHIFT_ROUTE_GROUP in api_groups


def is_elasticsearch_operator_available(api_groups: Iterable[str]) -> bool:
    """Whether the API groups include the Elasticsearch operator's group."""
    return ELASTICSEARCH_OPERATOR_GROUP in api_groups


class Background:
    """Runs capability detection once at start, then again at a fixed interval."""

    def __init__(
        self,
        client: Client,
        discovery: DiscoveryClient,
        settings: Settings,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.client = client
        self.discovery = discovery
        self.settings = settings
        self.interval = interval
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Begin auto-detection in a background thread."""
        self._stopped.clear()
        self._thread = threading.Thread(
            target=self._run, name="jaegerop-autodetect", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the periodic auto-detection."""
        self._stopped.set()

    def _run(self) -> None:
        self.auto_detect_capabilities()
        _log.debug("finished the first auto-detection")
        while not self._stopped.wait(self.interval):
            self.auto_detect_capabilities()

    def auto_detect_capabilities(self) -> None:
        try:
            api_groups = list(self.discovery.server_groups())
        except Exception as exc:  # any discovery failure falls back to defaults
            _log.info(
                "Failed to determine the platform capabilities. Auto-detected properties "
                "will fallback to their default values. (%s)",
                exc,
            )
            self.settings.set("platform", FLAG_PLATFORM_KUBERNETES)
            self.settings.set("es-provision", FLAG_PROVISION_ELASTICSEARCH_FALSE)
        else:
            self.detect_platform(api_groups)
            self.detect_elasticsearch(api_groups)

        self.detect_cluster_roles()

    def detect_platform(self, api_groups: Iterable[str]) -> None:
        if self.settings.get_str("platform").lower() == FLAG_PLATFORM_AUTO_DETECT:
            _log.debug("Attempting to auto-detect the platform")
            platform = FLAG_PLATFORM_OPENSHIFT if is_openshift(api_groups) else FLAG_PLATFORM_KUBERNETES
            self.settings.set("platform", platform)
            _log.info("Auto-detected the platform: %s", platform)
        else:
            _log.debug(
                "The 'platform' option is explicitly set: %s", self.settings.get_str("platform")
            )

    def detect_elasticsearch(self, api_groups: Iterable[str]) -> None:
        if self.settings.get_str("es-provision").lower() == FLAG_PROVISION_ELASTICSEARCH_AUTO:
            _log.debug("Determining whether we should enable the Elasticsearch Operator integration")
            value = (
                FLAG_PROVISION_ELASTICSEARCH_TRUE
                if is_elasticsearch_operator_available(api_groups)
                else FLAG_PROVISION_ELASTICSEARCH_FALSE
            )
            self.settings.set("es-provision", value)
            _log.info("Automatically adjusted the 'es-provision' flag: %s", value)
        else:
            _log.debug(
                "The 'es-provision' option is explicitly set: %s",
                self.settings.get_str("es-provision"),
            )

    def detect_cluster_roles(self) -> None:
        """Check whether token reviews can be created, i.e. 'system:auth-delegator' is granted."""
        token_review = {
            "apiVersion": "authentication.k8s.io/v1",
            "kind": "TokenReview",
            "spec": {"token": "TEST"},
        }
        previously_set = self.settings.is_set("auth-delegator-available")
        previous = self.settings.get_bool("auth-delegator-available")
        try:
            self.client.create(token_review)
        except Exception:
            if not previously_set or previous:
                _log.info(
                    "The service account running this operator does not have the role "
                    "'system:auth-delegator', consider granting it for additional capabilities"
                )
            self.settings.set("auth-delegator-available", False)
        else:
            if not previously_set or not previous:
                _log.info(
                    "The service account running this operator has the role "
                    "'system:auth-delegator', enabling OAuth Proxy's 'delegate-urls' option"
                )
            self.settings.set("auth-delegator-available", True)