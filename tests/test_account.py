import json

from jaegerop.account import (
    Component,
    get_service_accounts,
    jaeger_service_account_for,
    oauth_proxy_account_name_for,
    oauth_proxy_service_account,
    oauth_redirect_reference,
)
from jaegerop.types import IngressSecurityType, new_jaeger


def test_with_security_nil():
    jaeger = new_jaeger("TestWithOAuthProxyNil")
    assert jaeger.spec.ingress.security == IngressSecurityType.NONE
    accounts = get_service_accounts(jaeger)
    assert len(accounts) == 1
    assert accounts[0]["metadata"]["name"] == "TestWithOAuthProxyNil"
    assert accounts[0]["metadata"]["labels"]["app.kubernetes.io/component"] == "service-account"


def test_with_security_none():
    jaeger = new_jaeger("TestWithOAuthProxyFalse")
    jaeger.spec.ingress.security = IngressSecurityType.NONE
    accounts = get_service_accounts(jaeger)
    assert len(accounts) == 1
    assert accounts[0]["metadata"]["name"] == "TestWithOAuthProxyFalse"


def test_with_security_oauth_proxy():
    jaeger = new_jaeger("TestWithOAuthProxyTrue")
    jaeger.spec.ingress.security = IngressSecurityType.OAUTH_PROXY
    accounts = get_service_accounts(jaeger)
    assert len(accounts) == 2
    assert accounts[0]["metadata"]["name"] == "TestWithOAuthProxyTrue-ui-proxy"
    assert accounts[1]["metadata"]["name"] == "TestWithOAuthProxyTrue"


def test_oauth_proxy_with_custom_query_account_only_main():
    jaeger = new_jaeger("custom")
    jaeger.spec.ingress.security = IngressSecurityType.OAUTH_PROXY
    jaeger.spec.query.service_account = "query-sa"
    assert len(get_service_accounts(jaeger)) == 1


def test_jaeger_name():
    jaeger = new_jaeger("foo")
    jaeger.spec.service_account = "bar"
    jaeger.spec.collector.service_account = "col-sa"
    jaeger.spec.query.service_account = "query-sa"
    jaeger.spec.agent.service_account = "agent-sa"
    jaeger.spec.all_in_one.service_account = "aio-sa"

    assert jaeger_service_account_for(jaeger, "") == "foo"
    assert jaeger_service_account_for(jaeger, Component.COLLECTOR) == "col-sa"
    assert jaeger_service_account_for(jaeger, Component.QUERY) == "query-sa"
    assert jaeger_service_account_for(jaeger, Component.ALL_IN_ONE) == "aio-sa"
    assert jaeger_service_account_for(jaeger, Component.AGENT) == "agent-sa"
    assert jaeger_service_account_for(jaeger, Component.INGESTER) == "bar"


def test_component_given_as_plain_string():
    jaeger = new_jaeger("foo")
    jaeger.spec.collector.service_account = "col-sa"
    assert jaeger_service_account_for(jaeger, "collector") == "col-sa"


def test_oauth_redirect_reference():
    jaeger = new_jaeger("TestOAuthRedirectReference")
    jaeger.spec.ingress.security = IngressSecurityType.OAUTH_PROXY
    reference = oauth_redirect_reference(jaeger)
    assert jaeger.name in reference
    assert json.loads(reference)["reference"] == {"kind": "Route", "name": jaeger.name}


def test_oauth_proxy():
    jaeger = new_jaeger("TestOAuthProxy")
    jaeger.spec.ingress.security = IngressSecurityType.OAUTH_PROXY
    account = oauth_proxy_service_account(jaeger)
    assert account["metadata"]["name"] == f"{jaeger.name}-ui-proxy"
    assert account["kind"] == "ServiceAccount"


def test_oauth_override_service_account_for_query():
    jaeger = new_jaeger("TestOAuthOverrideServiceAccountForQuery")
    jaeger.spec.ingress.security = IngressSecurityType.OAUTH_PROXY
    jaeger.spec.query.service_account = "my-own-sa"
    assert oauth_proxy_service_account(jaeger)["metadata"]["name"] == "my-own-sa"


def test_oauth_override_service_account_for_all_components():
    jaeger = new_jaeger("TestOAuthOverrideServiceAccountForAllComponents")
    jaeger.spec.ingress.security = IngressSecurityType.OAUTH_PROXY
    jaeger.spec.service_account = "my-own-sa"
    assert oauth_proxy_account_name_for(jaeger) == "my-own-sa"
    assert oauth_proxy_service_account(jaeger)["metadata"]["name"] == "my-own-sa"