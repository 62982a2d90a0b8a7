import time

import pytest

from jaegerop.autodetect import (
    Background,
    is_elasticsearch_operator_available,
    is_openshift,
)
from jaegerop.settings import Settings
from jaegerop.types import (
    FLAG_PLATFORM_AUTO_DETECT,
    FLAG_PLATFORM_KUBERNETES,
    FLAG_PLATFORM_OPENSHIFT,
    FLAG_PROVISION_ELASTICSEARCH_AUTO,
)


class FakeClient:
    def __init__(self, fail=False):
        self.fail = fail
        self.created = []

    def create(self, obj):
        if self.fail:
            raise RuntimeError("faked error")
        self.created.append(obj)
        return obj


class FakeDiscovery:
    def __init__(self, groups=None, fail=False):
        self.groups = groups or []
        self.fail = fail

    def server_groups(self):
        if self.fail:
            raise RuntimeError("faked error")
        return list(self.groups)


def wait_until(predicate, timeout):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


@pytest.fixture
def settings():
    return Settings()


def test_start(settings):
    assert not settings.is_set("auth-delegator-available")
    b = Background(FakeClient(), FakeDiscovery(), settings)
    b.start()
    try:
        assert wait_until(lambda: settings.is_set("auth-delegator-available"), 1.0)
        assert settings.get_bool("auth-delegator-available") is True
    finally:
        b.stop()


def test_start_continues_in_background(settings):
    client = FakeClient(fail=True)
    b = Background(client, FakeDiscovery(), settings, interval=0.05)
    b.start()
    try:
        assert wait_until(lambda: settings.is_set("auth-delegator-available"), 1.0)
        assert settings.get_bool("auth-delegator-available") is False

        client.fail = False
        assert wait_until(lambda: settings.get_bool("auth-delegator-available"), 2.0)
        assert settings.get_bool("auth-delegator-available") is True
    finally:
        b.stop()


def test_auto_detect_fallback(settings):
    b = Background(FakeClient(), FakeDiscovery(fail=True), settings)
    assert not settings.is_set("platform")
    assert not settings.is_set("es-provision")

    b.auto_detect_capabilities()

    assert settings.get_str("platform") == FLAG_PLATFORM_KUBERNETES
    assert settings.get_bool("es-provision") is False


def test_auto_detect_openshift(settings):
    settings.set("platform", FLAG_PLATFORM_AUTO_DETECT)
    b = Background(FakeClient(), FakeDiscovery(["route.openshift.io"]), settings)
    b.auto_detect_capabilities()
    assert settings.get_str("platform") == FLAG_PLATFORM_OPENSHIFT


def test_auto_detect_kubernetes(settings):
    settings.set("platform", FLAG_PLATFORM_AUTO_DETECT)
    b = Background(FakeClient(), FakeDiscovery(), settings)
    b.auto_detect_capabilities()
    assert settings.get_str("platform") == FLAG_PLATFORM_KUBERNETES


def test_auto_detect_is_case_insensitive(settings):
    settings.set("platform", "Auto-Detect")
    b = Background(FakeClient(), FakeDiscovery(["route.openshift.io"]), settings)
    b.auto_detect_capabilities()
    assert settings.get_str("platform") == FLAG_PLATFORM_OPENSHIFT


def test_explicit_platform(settings):
    settings.set("platform", FLAG_PLATFORM_OPENSHIFT)
    b = Background(FakeClient(), FakeDiscovery(), settings)
    b.auto_detect_capabilities()
    assert settings.get_str("platform") == FLAG_PLATFORM_OPENSHIFT


def test_auto_detect_es_provision_no_es_operator(settings):
    settings.set("es-provision", FLAG_PROVISION_ELASTICSEARCH_AUTO)
    b = Background(FakeClient(), FakeDiscovery(), settings)
    b.auto_detect_capabilities()
    assert settings.get_bool("es-provision") is False


def test_auto_detect_es_provision_with_es_operator(settings):
    settings.set("es-provision", FLAG_PROVISION_ELASTICSEARCH_AUTO)
    b = Background(FakeClient(), FakeDiscovery(["logging.openshift.io"]), settings)
    b.auto_detect_capabilities()
    assert settings.get_bool("es-provision") is True


def test_explicit_es_provision_kept(settings):
    settings.set("es-provision", "true")
    b = Background(FakeClient(), FakeDiscovery(), settings)
    b.auto_detect_capabilities()
    assert settings.get_str("es-provision") == "true"


def test_no_auth_delegator_available(settings):
    b = Background(FakeClient(fail=True), FakeDiscovery(), settings)
    b.detect_cluster_roles()
    assert settings.get_bool("auth-delegator-available") is False
    assert settings.is_set("auth-delegator-available")


def test_auth_delegator_becomes_available(settings):
    client = FakeClient(fail=True)
    b = Background(client, FakeDiscovery(), settings)
    b.detect_cluster_roles()
    assert settings.get_bool("auth-delegator-available") is False

    client.fail = False
    b.detect_cluster_roles()
    assert settings.get_bool("auth-delegator-available") is True


def test_auth_delegator_becomes_unavailable(settings):
    client = FakeClient()
    b = Background(client, FakeDiscovery(), settings)
    b.detect_cluster_roles()
    assert settings.get_bool("auth-delegator-available") is True

    client.fail = True
    b.detect_cluster_roles()
    assert settings.get_bool("auth-delegator-available") is False


def test_cluster_roles_creates_token_review(settings):
    client = FakeClient()
    Background(client, FakeDiscovery(), settings).detect_cluster_roles()
    assert len(client.created) == 1
    assert client.created[0]["kind"] == "TokenReview"
    assert client.created[0]["spec"] == {"token": "TEST"}


@pytest.mark.parametrize(
    "groups, expected",
    [
        (["route.openshift.io"], True),
        (["apps", "route.openshift.io"], True),
        (["apps"], False),
        ([], False),
    ],
)
def test_is_openshift(groups, expected):
    assert is_openshift(groups) is expected


@pytest.mark.parametrize(
    "groups, expected",
    [
        (["logging.openshift.io"], True),
        (["route.openshift.io"], False),
        ([], False),
    ],
)
def test_is_elasticsearch_operator_available(groups, expected):
    assert is_elasticsearch_operator_available(groups) is expected