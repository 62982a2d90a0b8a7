# jaegerop

`jaegerop` describes Jaeger tracing instances as Python dataclasses and
builds, as plain dictionaries, the Kubernetes resources that belong to them:
service accounts, a cluster role binding for the OAuth proxy, and the
configmaps for sampling strategies and UI settings. It also holds the
operator's runtime settings and a background routine that detects what the
cluster offers (OpenShift routes, the Elasticsearch operator, the
`system:auth-delegator` role).

## Describing an instance

```python
from jaegerop.settings import Settings
from jaegerop.types import IngressSecurityType, new_jaeger

settings = Settings()
jaeger = new_jaeger("my-jaeger", "observability", settings)
jaeger.spec.ingress.security = IngressSecurityType.OAUTH_PROXY
```

`new_jaeger` labels the instance with `jaegertracing.io/operated-by`, set to
the `identity` value held in the settings (empty when there is none).
`Jaeger` holds the metadata (`name`, `namespace`, `api_version`, `kind`,
`uid`, `labels`, `annotations`), a `JaegerSpec` and a `JaegerStatus`.
`Jaeger.logger()` returns a logger adapter carrying the instance name and
namespace, and `Jaeger.owner_reference()` the owner reference put on every
generated resource. `dns_name(name)` lower-cases a name and replaces
characters not allowed in a DNS label with `-`.

## Options

Component options are flattened into dotted keys and turned into container
arguments:

```python
from jaegerop.options import Options

opts = Options.from_json('{"log-level": "debug", "memory": {"max-traces": 10000}}')
sorted(opts.to_args())
# ['--log-level=debug', '--memory.max-traces=10000']

opts.filter("memory").as_map()
# {'memory.max-traces': '10000'}
```

`filter(prefix)` keeps the entries under `prefix.` as well as those under
`prefix-archive.`. Numbers read by `from_json` keep the text they were
written with; `to_json()` returns that text unchanged, or compact JSON with
sorted keys for options built from a dictionary. Invalid JSON or a document
that is not an object raises `ValueError`.

Free-form settings, such as the UI configuration or sampling strategies, keep
their nested structure:

```python
from jaegerop.freeform import FreeForm

ui = FreeForm({"tracking": {"gaID": "UA-000000-2"}})
ui.to_json()      # '{"tracking":{"gaID":"UA-000000-2"}}'
ui.is_empty()     # False
ui.get_map()      # {'tracking': {'gaID': 'UA-000000-2'}}
```

`FreeForm.get_map()` raises `ValueError` when the form holds no document.

## Generated resources

- `jaegerop.account.get_service_accounts(jaeger)` returns the service
  accounts for an instance; an extra one for the OAuth proxy
  (`oauth_proxy_service_account`) comes first when the ingress is secured by
  it and no query or instance-wide service account is given.
  `jaeger_service_account_for(jaeger, component)` names the account a
  `Component` runs under, falling back to the instance name, and
  `oauth_proxy_account_name_for(jaeger)` the one the OAuth proxy uses
  (`<name>-ui-proxy` by default).
- `jaegerop.clusterrolebinding.get_cluster_role_bindings(jaeger, settings)`
  binds the OAuth proxy account to `system:auth-delegator` when the ingress
  uses the OAuth proxy with `delegate_urls` and the setting
  `auth-delegator-available` is true; otherwise it returns an empty list,
  logging a warning when the role cannot be granted.
- `jaegerop.sampling.SamplingConfig(jaeger).get()` produces the sampling
  configmap, with a probabilistic strategy at rate 1 when no sampling options
  are given; `update_sampling(jaeger, common_spec, options)` adds the volume,
  its mount at `/etc/jaeger/sampling` and the `--sampling.strategies-file`
  argument.
- `jaegerop.ui.UIConfig(jaeger).get()` produces the UI configmap, or `None`
  when there are no UI options; `update_ui` adds the volume, its mount at
  `/etc/config` and the `--query.ui-config` argument, only when UI options
  are present.

## Settings and detection

`jaegerop.settings.Settings` is a thread-safe key/value store with
case-insensitive keys for operator settings such as `platform`,
`es-provision` and `auth-delegator-available`. Values set with `set` win;
then, when `automatic_env` is on, an environment variable named by the
upper-cased key; then the loaded configuration file, whose nested keys are
reachable with dots. `init_config(settings, config_file)` turns on
environment lookups and reads the given YAML/JSON file, or else the first of
`~/.jaeger-operator.yaml`, `.yml` or `.json` that exists, and returns its
path.

`jaegerop.autodetect.Background(client, discovery, settings, interval=5.0)`
runs `auto_detect_capabilities()` once in a daemon thread when `start()` is
called and again every `interval` seconds until `stop()`. The `client` needs
a `create(obj)` method that raises when the request is refused, and
`discovery` a `server_groups()` method that returns API group names. A
`platform` of `auto-detect` becomes `openshift` or `kubernetes`, an
`es-provision` of `auto` becomes `true` or `false`, and a failing discovery
call sets them to `kubernetes` and `false`. `is_openshift` and
`is_elasticsearch_operator_available` answer the same questions for a given
list of API groups.

## What it does not do

The package has no command-line program and does not talk to a cluster by
itself: clients are supplied by the caller, and generated resources are
returned as dictionaries for the caller to apply. It does not watch or
reconcile Jaeger instances, and it does not build the deployments, services,
ingresses or jobs for the Jaeger components.