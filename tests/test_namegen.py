import pytest

from groveop.meta import GROUP_NAME, ObjectMeta
from groveop.namegen import (
    generate_pod_clique_name,
    generate_pod_gang_name,
    generate_pod_name,
    generate_pod_role_binding_name,
    generate_pod_role_name,
    generate_pod_service_account_name,
)


def test_pod_gang_name():
    assert generate_pod_gang_name("pgs", 0) == "pgs-0"


def test_pod_clique_name():
    assert generate_pod_clique_name("pgs", 0, "worker") == "pgs-0-worker"


def test_pod_role_name():
    assert generate_pod_role_name(ObjectMeta(name="pgs")) == "grove.io:pgs:pgs"


@pytest.mark.parametrize("name", ["simple", "a-b-c", "x"])
def test_role_and_binding_names_match(name):
    meta = ObjectMeta(name=name, namespace="default")
    role = generate_pod_role_name(meta)
    assert role == generate_pod_role_binding_name(meta)
    assert role.startswith(GROUP_NAME)
    assert role.endswith(name)


def test_service_account_name_is_pgs_name():
    meta = ObjectMeta(name="simple", namespace="default")
    assert generate_pod_service_account_name(meta) == meta.name


@pytest.mark.parametrize("index", [0, 1, 7, 42])
def test_pod_clique_name_extends_pod_gang_name(index):
    gang = generate_pod_gang_name("simple", index)
    clique = generate_pod_clique_name("simple", index, "leader")
    assert clique.startswith(gang + "-")
    assert clique[len(gang) + 1 :] == "leader"


@pytest.mark.parametrize("index", [0, 3, 15])
def test_pod_name_appends_replica_index(index):
    clique = generate_pod_clique_name("simple", 0, "worker")
    pod = generate_pod_name(clique, index)
    prefix, _, suffix = pod.rpartition("-")
    assert prefix == clique
    assert int(suffix) == index


def test_distinct_indices_give_distinct_names():
    names = {generate_pod_gang_name("simple", i) for i in range(10)}
    assert len(names) == 10