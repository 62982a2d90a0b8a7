"""Service accounts created for a Jaeger instance."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from .types import IngressSecurityType, Jaeger, JaegerCommonSpec


class Component(str, Enum):
    """The kinds of Jaeger components the operator deploys."""

    COLLECTOR = "collector"
    QUERY = "query"
    INGESTER = "ingester"
    ALL_IN_ONE = "all-in-one"
    AGENT = "agent"
    DEPENDENCIES = "dependencies"
    ES_INDEX_CLEANER = "es-index-cleaner"
    ES_ROLLOVER = "es-rollover"
    CASSANDRA_CREATE_SCHEMA = "cassandra-create-schema"


def _merged_service_account(*specs: JaegerCommonSpec) -> str:
    """The first non-empty service account, most specific spec first."""
    return next((spec.service_account for spec in specs if spec.service_account), "")


def _labels(name: str, instance: str, component: str) -> dict[str, str]:
    return {
        "app": "jaeger",
        "app.kubernetes.io/name": name,
        "app.kubernetes.io/instance": instance,
        "app.kubernetes.io/component": component,
        "app.kubernetes.io/part-of": "jaeger",
        "app.kubernetes.io/managed-by": "jaeger-operator",
    }


def _component_spec(jaeger: Jaeger, component: Component | str | None) -> JaegerCommonSpec | None:
    if not component:
        return None
    try:
        component = Component(component)
    except ValueError:
        return None
    spec = jaeger.spec
    by_component = {
        Component.COLLECTOR: spec.collector,
        Component.QUERY: spec.query,
        Component.INGESTER: spec.ingester,
        Component.ALL_IN_ONE: spec.all_in_one,
        Component.AGENT: spec.agent,
    }
    return by_component.get(component)


def jaeger_service_account_for(jaeger: Jaeger, component: Component | str | None = None) -> str:
    """The service account a component runs as; defaults to the instance name."""
    spec = _component_spec(jaeger, component)
    account = _merged_service_account(spec, jaeger.spec) if spec is not None else ""
    return account or jaeger.name


def _main_service_account(jaeger: Jaeger) -> dict[str, Any]:
    name = jaeger_service_account_for(jaeger)
    return {
        "metadata": {
            "name": name,
            "namespace": jaeger.namespace,
            "labels": _labels(name, jaeger.name, "service-account"),
            "ownerReferences": [jaeger.owner_reference()],
        }
    }


def get_service_accounts(jaeger: Jaeger) -> list[dict[str, Any]]:
    """All service accounts to be created for this Jaeger instance."""
    accounts: list[dict[str, Any]] = []
    if jaeger.spec.ingress.security == IngressSecurityType.OAUTH_PROXY:
        # a custom query service account replaces the dedicated OAuth Proxy one
        if not _merged_service_account(jaeger.spec.query, jaeger.spec):
            accounts.append(oauth_proxy_service_account(jaeger))
    accounts.append(_main_service_account(jaeger))
    return accounts


def oauth_proxy_account_name_for(jaeger: Jaeger) -> str:
    """The service account name used by the OAuth Proxy of this instance."""
    account = _merged_service_account(jaeger.spec.query, jaeger.spec)
    return account or f"{jaeger.name}-ui-proxy"


def oauth_redirect_reference(jaeger: Jaeger) -> str:
    """The OAuth redirect reference pointing at the instance's route."""
    return json.dumps(
        {
            "kind": "OAuthRedirectReference",
            "apiVersion": "v1",
            "reference": {"kind": "Route", "name": jaeger.name},
        },
        separators=(",", ":"),
    )


def oauth_proxy_service_account(jaeger: Jaeger) -> dict[str, Any]:
    """A service account representing a client of the OAuth Proxy."""
    name = oauth_proxy_account_name_for(jaeger)
    return {
        "apiVersion": "v1",
        "kind": "ServiceAccount",
        "metadata": {
            "name": name,
            "namespace": jaeger.namespace,
            "labels": _labels(name, jaeger.name, "service-account-oauth-proxy"),
            "annotations": {
                "serviceaccounts.openshift.io/oauth-redirectreference.primary": oauth_redirect_reference(jaeger),
            },
            "ownerReferences": [jaeger.owner_reference()],
        },
    }