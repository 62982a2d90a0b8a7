"""The UI configuration config map of a Jaeger instance."""

from __future__ import annotations

from typing import Any

from .types import Jaeger, JaegerCommonSpec, dns_name


def _config_map_name(jaeger: Jaeger) -> str:
    return f"{jaeger.name}-ui-configuration"


def _volume_name(jaeger: Jaeger) -> str:
    return dns_name(f"{jaeger.name}-ui-configuration-volume")


class UIConfig:
    """Builds the UI config map for one instance."""

    def __init__(self, jaeger: Jaeger) -> None:
        self.jaeger = jaeger

    def get(self) -> dict[str, Any] | None:
        """The config map, or None when no UI options are given."""
        options = self.jaeger.spec.ui.options
        if options.is_empty():
            return None

        self.jaeger.logger().debug("Assembling the UI configmap")
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
                    "app.kubernetes.io/component": "ui-configuration",
                    "app.kubernetes.io/part-of": "jaeger",
                    "app.kubernetes.io/managed-by": "jaeger-operator",
                },
                "ownerReferences": [self.jaeger.owner_reference()],
            },
            "data": {"ui": options.to_json()},
        }


def update_ui(jaeger: Jaeger, common_spec: JaegerCommonSpec, options: list[str]) -> None:
    """Add the UI config volume, its mount and argument in place, if there are UI options."""
    if jaeger.spec.ui.options.is_empty():
        return

    volume_name = _volume_name(jaeger)
    common_spec.volumes.append(
        {
            "name": volume_name,
            "configMap": {
                "name": _config_map_name(jaeger),
                "items": [{"key": "ui", "path": "ui.json"}],
            },
        }
    )
    common_spec.volume_mounts.append(
        {"name": volume_name, "mountPath": "/etc/config", "readOnly": True}
    )
    options.append("--query.ui-config=/etc/config/ui.json")