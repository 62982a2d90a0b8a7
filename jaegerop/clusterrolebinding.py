"""Cluster role bindings required by a Jaeger instance."""

from __future__ import annotations

from typing import Any

from .account import oauth_proxy_account_name_for
from .settings import Settings
from .types import IngressSecurityType, Jaeger, dns_name


def _oauth_proxy_auth_delegator(jaeger: Jaeger) -> dict[str, Any]:
    name = dns_name(f"{jaeger.namespace}-{jaeger.name}-oauth-proxy-auth-delegator")
    return {
        "metadata": {
            "name": name,
            "labels": {
                "app": "jaeger",
                "app.kubernetes.io/name": name,
                "app.kubernetes.io/instance": jaeger.name,
                "app.kubernetes.io/component": "service-account",
                "app.kubernetes.io/part-of": "jaeger",
                "app.kubernetes.io/managed-by": "jaeger-operator",
            },
            "ownerReferences": [jaeger.owner_reference()],
        },
        "subjects": [
            {
                "kind": "ServiceAccount",
                "name": oauth_proxy_account_name_for(jaeger),
                "namespace": jaeger.namespace,
            }
        ],
        "roleRef": {"kind": "ClusterRole", "name": "system:auth-delegator"},
    }


def get_cluster_role_bindings(jaeger: Jaeger, settings: Settings) -> list[dict[str, Any]]:
    """Cluster role bindings to create for this instance, possibly none."""
    ingress = jaeger.spec.ingress
    if ingress.security == IngressSecurityType.OAUTH_PROXY and ingress.openshift.delegate_urls:
        if settings.get_bool("auth-delegator-available"):
            return [_oauth_proxy_auth_delegator(jaeger)]
        jaeger.logger().warning(
            "the requested instance specifies the delegate-urls option for the OAuth Proxy, "
            "but this operator cannot assign the proper cluster role to it "
            "(system:auth-delegator). Create a cluster role binding between the operator's "
            "service account and the cluster role 'system:auth-delegator' in order to allow "
            "instances to use 'delegate-urls'"
        )
    return []