"""The Jaeger custom resource (group jaegertracing.io, version v1) and its parts."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .freeform import FreeForm
from .options import Options

if TYPE_CHECKING:
    from .settings import Settings

GROUP = "jaegertracing.io"
VERSION = "v1"
API_VERSION = f"{GROUP}/{VERSION}"

LABEL_OPERATED_BY = "jaegertracing.io/operated-by"
CONFIG_IDENTITY = "identity"

FLAG_PLATFORM_KUBERNETES = "kubernetes"
FLAG_PLATFORM_OPENSHIFT = "openshift"
FLAG_PLATFORM_AUTO_DETECT = "auto-detect"

FLAG_PROVISION_ELASTICSEARCH_AUTO = "auto"
FLAG_PROVISION_ELASTICSEARCH_TRUE = "true"
FLAG_PROVISION_ELASTICSEARCH_FALSE = "false"

_log = logging.getLogger("jaegerop")
_DNS_INVALID = re.compile(r"[^a-z0-9-]")


class IngressSecurityType(str, Enum):
    NONE = ""
    NONE_EXPLICIT = "none"
    OAUTH_PROXY = "oauth-proxy"


@dataclass
class JaegerCommonSpec:
    volumes: list[dict[str, Any]] = field(default_factory=list)
    volume_mounts: list[dict[str, Any]] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    resources: dict[str, Any] = field(default_factory=dict)
    affinity: dict[str, Any] | None = None
    tolerations: list[dict[str, Any]] = field(default_factory=list)
    security_context: dict[str, Any] | None = None
    service_account: str = ""


@dataclass
class JaegerQuerySpec(JaegerCommonSpec):
    size: int = 0
    replicas: int | None = None
    image: str = ""
    options: Options = field(default_factory=Options)


@dataclass
class JaegerUISpec:
    options: FreeForm = field(default_factory=FreeForm)


@dataclass
class JaegerSamplingSpec:
    options: FreeForm = field(default_factory=FreeForm)


@dataclass
class JaegerIngressOpenShiftSpec:
    sar: str = ""
    delegate_urls: str = ""
    htpasswd_file: str = ""


@dataclass
class JaegerIngressSpec(JaegerCommonSpec):
    enabled: bool | None = None
    security: IngressSecurityType = IngressSecurityType.NONE
    openshift: JaegerIngressOpenShiftSpec = field(default_factory=JaegerIngressOpenShiftSpec)


@dataclass
class JaegerAllInOneSpec(JaegerCommonSpec):
    image: str = ""
    options: Options = field(default_factory=Options)


@dataclass
class JaegerCollectorSpec(JaegerCommonSpec):
    size: int = 0
    replicas: int | None = None
    image: str = ""
    options: Options = field(default_factory=Options)


@dataclass
class JaegerIngesterSpec(JaegerCommonSpec):
    size: int = 0
    replicas: int | None = None
    image: str = ""
    options: Options = field(default_factory=Options)


@dataclass
class JaegerAgentSpec(JaegerCommonSpec):
    strategy: str = ""
    image: str = ""
    options: Options = field(default_factory=Options)


@dataclass
class ElasticsearchSpec:
    image: str = ""
    resources: dict[str, Any] | None = None
    node_count: int = 0
    node_selector: dict[str, str] = field(default_factory=dict)
    storage: dict[str, Any] = field(default_factory=dict)
    redundancy_policy: str = ""


@dataclass
class JaegerCassandraCreateSchemaSpec:
    enabled: bool | None = None
    image: str = ""
    datacenter: str = ""
    mode: str = ""
    ttl_seconds_after_finished: int | None = None


@dataclass
class JaegerDependenciesSpec(JaegerCommonSpec):
    enabled: bool | None = None
    spark_master: str = ""
    schedule: str = ""
    successful_jobs_history_limit: int | None = None
    image: str = ""
    java_opts: str = ""
    cassandra_client_auth_enabled: bool = False
    elasticsearch_client_node_only: bool = False
    elasticsearch_nodes_wan_only: bool = False
    ttl_seconds_after_finished: int | None = None


@dataclass
class JaegerEsIndexCleanerSpec(JaegerCommonSpec):
    enabled: bool | None = None
    number_of_days: int | None = None
    schedule: str = ""
    successful_jobs_history_limit: int | None = None
    image: str = ""
    ttl_seconds_after_finished: int | None = None


@dataclass
class JaegerEsRolloverSpec(JaegerCommonSpec):
    image: str = ""
    schedule: str = ""
    successful_jobs_history_limit: int | None = None
    conditions: str = ""
    ttl_seconds_after_finished: int | None = None
    read_ttl: str = ""


@dataclass
class JaegerStorageSpec:
    type: str = ""
    secret_name: str = ""
    options: Options = field(default_factory=Options)
    cassandra_create_schema: JaegerCassandraCreateSchemaSpec = field(
        default_factory=JaegerCassandraCreateSchemaSpec
    )
    dependencies: JaegerDependenciesSpec = field(default_factory=JaegerDependenciesSpec)
    es_index_cleaner: JaegerEsIndexCleanerSpec = field(default_factory=JaegerEsIndexCleanerSpec)
    es_rollover: JaegerEsRolloverSpec = field(default_factory=JaegerEsRolloverSpec)
    elasticsearch: ElasticsearchSpec = field(default_factory=ElasticsearchSpec)


@dataclass
class JaegerSpec(JaegerCommonSpec):
    strategy: str = ""
    all_in_one: JaegerAllInOneSpec = field(default_factory=JaegerAllInOneSpec)
    query: JaegerQuerySpec = field(default_factory=JaegerQuerySpec)
    collector: JaegerCollectorSpec = field(default_factory=JaegerCollectorSpec)
    ingester: JaegerIngesterSpec = field(default_factory=JaegerIngesterSpec)
    agent: JaegerAgentSpec = field(default_factory=JaegerAgentSpec)
    ui: JaegerUISpec = field(default_factory=JaegerUISpec)
    sampling: JaegerSamplingSpec = field(default_factory=JaegerSamplingSpec)
    storage: JaegerStorageSpec = field(default_factory=JaegerStorageSpec)
    ingress: JaegerIngressSpec = field(default_factory=JaegerIngressSpec)


@dataclass
class JaegerStatus:
    version: str = ""


@dataclass
class Jaeger:
    """A Jaeger instance: object metadata plus its desired and observed state."""

    name: str = ""
    namespace: str = ""
    api_version: str = ""
    kind: str = ""
    uid: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    spec: JaegerSpec = field(default_factory=JaegerSpec)
    status: JaegerStatus = field(default_factory=JaegerStatus)

    def logger(self) -> logging.LoggerAdapter:
        """A logger carrying this instance's name and namespace."""
        return logging.LoggerAdapter(_log, {"instance": self.name, "namespace": self.namespace})

    def owner_reference(self) -> dict[str, Any]:
        """An owner reference marking this instance as the controller of an object."""
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "name": self.name,
            "uid": self.uid,
            "controller": True,
        }


@dataclass
class JaegerList:
    items: list[Jaeger] = field(default_factory=list)


def new_jaeger(name: str, namespace: str = "", settings: "Settings | None" = None) -> Jaeger:
    """Create a Jaeger instance labelled with the operator identity from ``settings``."""
    identity = settings.get_str(CONFIG_IDENTITY) if settings is not None else ""
    return Jaeger(name=name, namespace=namespace, labels={LABEL_OPERATED_BY: identity})


def dns_name(name: str) -> str:
    """Lower-case ``name`` and replace characters not allowed in a DNS label."""
    return _DNS_INVALID.sub("-", name.lower()).strip("-")