# groveop

`groveop` models the resources and the operator configuration of Grove, a
Kubernetes operator that places and scales *gangs* of pods together. It gives
you:

- typed objects for `PodGangSet`, `PodClique` and `PodCliqueScalingGroup`
  (group `grove.io`, version `v1alpha1`), each able to turn itself into a plain
  dictionary with the API's field names (`to_dict`) and back again
  (`from_dict`);
- the naming rules the operator uses for the objects it creates;
- the operator configuration (`operator.config.grove.io/v1alpha1`,
  kind `OperatorConfiguration`), its defaults and its validation;
- a small scheme that maps `apiVersion`/`kind` pairs to these types and decodes
  documents into them.

It uses PyYAML to read configuration files and documents.

## Modules

| Module | Contents |
| --- | --- |
| `groveop.meta` | `GroupVersion`, `GroupVersionKind`, `GroupVersionResource`, `GroupKind`, `GroupResource`; `ObjectMeta`, `OwnerReference`, `Condition`; `kind()` and `resource()` for `grove.io`; `parse_duration`/`format_duration` (`"1h30m"`, `"500ms"`) and `parse_time`/`format_time` (RFC 3339, UTC) |
| `groveop.constants` | label keys, finalizers and event reasons |
| `groveop.namegen` | names of derived objects |
| `groveop.config` | `OperatorConfiguration` and its parts, `LogLevel`, `LogFormat`, the `set_defaults_*` functions and `apply_defaults` |
| `groveop.validation` | `validate_operator_configuration`, `FieldError`, `ValidationError` |
| `groveop.options` | `decode_operator_configuration`, `build_parser`, `CLIOptions`, `ConfigError` |
| `groveop.status` | `PodGangPhase`, `LastOperation`, `LastError`, `PodGangStatus` and their enums |
| `groveop.podclique` | `PodClique`, `PodCliqueList`, `PodCliqueSpec`, `PodCliqueStatus`, `AutoScalingConfig` |
| `groveop.scalinggroup` | `PodCliqueScalingGroup` with its spec and status |
| `groveop.podgangset` | `PodGangSet`, `PodGangSetList`, their spec and status, the template types, `CliqueStartupType`, `NetworkPackStrategy`, rolling-update settings |
| `groveop.scheme` | `Scheme`, `build_scheme`, `UnknownKindError` |

## Names of generated objects

```python
from groveop.meta import ObjectMeta
from groveop.namegen import (
    generate_pod_clique_name,
    generate_pod_gang_name,
    generate_pod_name,
    generate_pod_role_name,
    generate_pod_service_account_name,
)

generate_pod_gang_name("simple", 1)                        # "simple-1"
generate_pod_clique_name("simple", 0, "worker")            # "simple-0-worker"
generate_pod_name("simple-0-worker", 2)                    # "simple-0-worker-2"
generate_pod_role_name(ObjectMeta(name="simple"))          # "grove.io:pgs:simple"
generate_pod_service_account_name(ObjectMeta(name="simple"))  # "simple"
```

`generate_pod_role_binding_name` gives the same name as the role.

## Operator configuration

A configuration file looks like this:

```yaml
apiVersion: operator.config.grove.io/v1alpha1
kind: OperatorConfiguration
runtimeClientConnection:
  qps: 100
  burst: 120
server:
  webhooks:
    port: 2750
controllers:
  podGangSet:
    concurrentSyncs: 3
logLevel: info
logFormat: json
```

`decode_operator_configuration` accepts YAML or JSON text (or bytes). The
document must carry `apiVersion: operator.config.grove.io/v1alpha1` and
`kind: OperatorConfiguration`; otherwise, or if it cannot be parsed, it raises
`ConfigError`. Decoding fills in the defaults: client QPS 100 and burst 120;
leader election lease 15s, renew deadline 10s, retry period 2s, resource lock
`leases` named `grove-operator-leader-election`; webhook port 2750 and
certificate directory `/etc/grove-operator/webhook-certs`; health-probe port
2751; metrics port 2752; one concurrent sync per controller; `info` level and
`json` format.

```python
from groveop.options import decode_operator_configuration
from groveop.validation import ValidationError, validate_operator_configuration

with open("operator.yaml", "rb") as fh:
    config = decode_operator_configuration(fh.read())

errors = validate_operator_configuration(config)
if errors:
    raise ValidationError(errors)
```

`validate_operator_configuration` returns a list of `FieldError`s, empty when
the configuration is valid. It checks that a non-blank log level is one of
`debug`, `info`, `error`, that a non-blank log format is `json` or `text`, and
that `controllers.podGangSet.concurrentSyncs` is set and greater than zero.
Each `FieldError` names the field path, e.g.
`controllers.podGangSet.concurrentSyncs`, and prints in the form
`controllers.podGangSet.concurrentSyncs: Invalid value: 0: must be greater than 0`.

Defaults can also be applied to a configuration built in code with
`groveop.config.apply_defaults`, or piece by piece with the `set_defaults_*`
functions in the same module. `OperatorConfiguration.to_dict()` and
`OperatorConfiguration.from_dict()` convert to and from the file's layout.

### Reading the configuration from command-line arguments

`build_parser()` returns an `argparse` parser with a `--config` option.
`CLIOptions` reads and checks the file it names:

```python
from groveop.options import CLIOptions, build_parser

namespace = build_parser().parse_args(["--config", "operator.yaml"])
options = CLIOptions.from_namespace(namespace)
options.complete()   # reads and decodes the file; raises ConfigError on failure
options.validate()   # raises ValidationError if the configuration is invalid
```

`complete()` raises `ConfigError` when no file was given, when the file cannot
be read, or when it cannot be decoded; it returns the decoded configuration and
keeps it in `options.config`. `validate()` raises `ConfigError` if
`complete()` has not loaded a configuration yet.

## Resources

```python
from groveop.scheme import build_scheme

scheme = build_scheme()
pgs = scheme.decode({
    "apiVersion": "grove.io/v1alpha1",
    "kind": "PodGangSet",
    "metadata": {"name": "simple", "namespace": "default"},
    "spec": {
        "replicas": 1,
        "templateSpec": {
            "cliques": [
                {"name": "worker", "spec": {"replicas": 2, "podSpec": {}}},
            ],
        },
    },
})

pgs.to_dict()   # back to a plain dictionary with the API's field names
```

`Scheme.decode` takes a mapping or YAML/JSON text. The scheme from
`build_scheme()` knows `OperatorConfiguration` (decoded with its defaults
applied) and `PodGangSet`, `PodGangSetList`, `PodClique` and `PodCliqueList`
under `grove.io/v1alpha1`. `PodCliqueScalingGroup` is not registered with it;
build it with `PodCliqueScalingGroup.from_dict` directly, or register it with
`scheme.add_known_types`.

`scheme.object_kind(obj)` tells you the group, version and kind of an object,
and `scheme.new(gvk)` creates an empty object of a registered kind. Asking for
a kind the scheme does not know raises `UnknownKindError`.

Pod specs, autoscaler metrics and topology spread constraints are kept as plain
dictionaries and are not checked.

## What this package does not do

It has no command and runs no controllers: it does not connect to a Kubernetes
API server, watch or reconcile resources, serve webhooks, health probes or
metrics, or take part in leader election. It only describes, names, defaults,
validates and converts the objects and the configuration such an operator
works with.

## Running the tests

Install the `test` extra and run pytest from the project directory.