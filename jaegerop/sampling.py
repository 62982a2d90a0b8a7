"""The sampling strategies config map of a Jaeger instance."""

from __future__ import annotations

from typing import Any

from .types import Jaeger, JaegerCommonSpec, dns_name

DEFAULT_SAMPLING_STRATEGY = '{"default_strategy":{"param":1,"type":"probabilistic"}}'


def _config_map_name(jaeger: Jaeger) -> str:
    return f"{jaeger.name}-sampling-configuration"


def _volume_name(jaeger: Jaeger) -> str:
    return dns_name(f"{jaeger.name}-sampling-configuration-volume")


class SamplingConfig:
    """Builds the sampling config map for one instance."""

    def __init__(self, jaeger: Jaeger) -> None:
        self.jaeger = jaeger

    def get(self) -> dict[str, Any]:
        """The config map; the default strategy is used when no options are given."""
        options = self.jaeger.spec.sampling.options
        strategy = DEFAULT_SAMPLING_STRATEGY if options.is_empty() else options.to_json()

        self.jaeger.logger().debug("Assembling the Sampling configmap")
        name = _config_map_name(self.jaeger)
        return {
            "apiVersion": "v1",
            "kind": "ConfigMap",
            "metadata": {
                "name": name,
                "namespace": self.jaeger.namespace,
                "labels": {
                    "app": "jaeger",
                    "app.kubernetes.io/name": name,
                    "app.kubernetes.io/instance": self.jaeger.name,
                    "app.kubernetes.io/component": "sampling-configuration",
                    "app.kubernetes.io/part-of": "jaeger",
                    "app.kubernetes.io/managed-by": "jaeger-operator",
                },
                "ownerReferences": [self.jaeger.owner_reference()],
            },
            "data": {"sampling": strategy},
        }


def update_sampling(jaeger: Jaeger, common_spec: JaegerCommonSpec, options: list[str]) -> None:
    """Add the sampling volume, its mount and the strategies-file argument, in place."""
    volume_name = _volume_name(jaeger)
    common_spec.volumes.append(
        {
            "name": volume_name,
            "configMap": {
                "name": _config_map_name(jaeger),
                "items": [{"key": "sampling", "path": "sampling.json"}],
            },
        }
    )
    common_spec.volume_mounts.append(
        {"name": volume_name, "mountPath": "/etc/jaeger/sampling", "readOnly": True}
    )
    options.append("--sampling.strategies-file=/etc/jaeger/sampling/sampling.json")