import pytest

from groveop.config import LogLevel, OperatorConfiguration
from groveop.meta import GroupVersion, GroupVersionKind
from groveop.podclique import PodClique, PodCliqueList
from groveop.podgangset import PodGangSet, PodGangSetList
from groveop.scalinggroup import PodCliqueScalingGroup
from groveop.scheme import Scheme, UnknownKindError, build_scheme


@pytest.mark.parametrize(
    "cls, kind",
    [
        (PodGangSet, "PodGangSet"),
        (PodGangSetList, "PodGangSetList"),
        (PodClique, "PodClique"),
        (PodCliqueList, "PodCliqueList"),
    ],
)
def test_core_kinds_registered(cls, kind):
    scheme = build_scheme()
    assert scheme.object_kind(cls()) == GroupVersionKind("grove.io", "v1alpha1", kind)


def test_config_kind_registered():
    scheme = build_scheme()
    gvk = scheme.object_kind(OperatorConfiguration())
    assert gvk == GroupVersionKind(
        "operator.config.grove.io", "v1alpha1", "OperatorConfiguration"
    )


def test_unregistered_type_raises():
    with pytest.raises(UnknownKindError):
        build_scheme().object_kind(PodCliqueScalingGroup())


def test_new_creates_instance_of_registered_class():
    scheme = build_scheme()
    gvk = scheme.object_kind(PodGangSet())
    obj = scheme.new(gvk)
    assert isinstance(obj, PodGangSet)
    assert scheme.object_kind(obj) == gvk


def test_new_unknown_kind_raises():
    with pytest.raises(UnknownKindError):
        build_scheme().new(GroupVersionKind("grove.io", "v1alpha1", "PodCliqueScalingGroup"))


def test_decode_pod_gang_set_yaml():
    text = (
        "apiVersion: grove.io/v1alpha1\n"
        "kind: PodGangSet\n"
        "metadata:\n"
        "  name: simple1\n"
        "  namespace: test\n"
        "spec:\n"
        "  replicas: 2\n"
        "  templateSpec:\n"
        "    cliques:\n"
        "    - name: a\n"
        "      spec:\n"
        "        replicas: 1\n"
        "        podSpec: {}\n"
    )
    obj = build_scheme().decode(text)
    assert isinstance(obj, PodGangSet)
    assert obj.metadata.name == "simple1"
    assert obj.spec.replicas == 2
    assert obj.kind == "PodGangSet"
    assert obj.api_version == "grove.io/v1alpha1"
    assert [c.name for c in obj.spec.template_spec.cliques] == ["a"]


def test_decode_round_trip_with_to_dict():
    original = PodClique(kind="PodClique", api_version="grove.io/v1alpha1")
    original.metadata.name = "p-0-a"
    decoded = build_scheme().decode(original.to_dict())
    assert decoded == original


def test_decode_operator_configuration_applies_defaults():
    text = (
        b"apiVersion: operator.config.grove.io/v1alpha1\n"
        b"kind: OperatorConfiguration\n"
    )
    config = build_scheme().decode(text)
    assert isinstance(config, OperatorConfiguration)
    assert config.log_level is LogLevel.INFO
    assert config.server.webhooks.port == 2750
    assert config.controllers.pod_gang_set.concurrent_syncs == 1


def test_decode_missing_kind_raises():
    with pytest.raises(UnknownKindError):
        build_scheme().decode({"apiVersion": "grove.io/v1alpha1"})


def test_decode_unknown_version_raises():
    with pytest.raises(UnknownKindError):
        build_scheme().decode({"apiVersion": "grove.io/v2", "kind": "PodGangSet"})


def test_decode_non_object_raises():
    with pytest.raises(ValueError):
        build_scheme().decode("- a\n- b\n")


def test_add_known_types_conflict_raises():
    scheme = Scheme()
    gv = GroupVersion("grove.io", "v1alpha1")
    scheme.add_known_types(gv, PodGangSet)

    class PodGangSet2:
        pass

    PodGangSet2.__name__ = "PodGangSet"
    with pytest.raises(ValueError):
        scheme.add_known_types(gv, PodGangSet2)


def test_add_known_types_accepts_instances():
    scheme = Scheme()
    gv = GroupVersion("grove.io", "v1alpha1")
    scheme.add_known_types(gv, PodClique())
    assert scheme.object_kind(PodClique()) == GroupVersionKind(
        "grove.io", "v1alpha1", "PodClique"
    )
    created = scheme.new(gv.with_kind("PodClique"))
    assert created == PodClique()
    with pytest.raises(UnknownKindError):
        scheme.object_kind(PodGangSet())