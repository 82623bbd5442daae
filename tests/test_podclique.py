from datetime import datetime, timezone

import pytest

from groveop.constants import LABEL_APP_NAME_KEY, LABEL_POD_GANG_NAME_KEY
from groveop.meta import (
    POD_GANG_SET_KIND,
    SCHEME_GROUP_VERSION,
    Condition,
    ObjectMeta,
    OwnerReference,
)
from groveop.namegen import generate_pod_clique_name
from groveop.podclique import (
    AutoScalingConfig,
    PodClique,
    PodCliqueList,
    PodCliqueSpec,
    PodCliqueStatus,
)
from groveop.status import LastError, LastOperation, LastOperationState, LastOperationType

PGS_NAME = "test-pgs"
PGS_UID = "2f1c7e0a-0000-4000-8000-000000000001"
NAMESPACE = "test-ns"


def default_pod_spec():
    return {
        "containers": [
            {
                "name": "test-container",
                "image": "alpine:3.21",
                "command": ["/bin/sh", "-c", "sleep 2m"],
            }
        ],
        "restartPolicy": "Always",
    }


def build_pclq(template_name, replica_index=0, starts_after=None, limits=None, replicas=1):
    name = generate_pod_clique_name(PGS_NAME, replica_index, template_name)
    spec = PodCliqueSpec(pod_spec=default_pod_spec(), replicas=replicas)
    if starts_after:
        spec.starts_after = [
            generate_pod_clique_name(PGS_NAME, replica_index, dep) for dep in starts_after
        ]
    if limits:
        spec.scale_config = AutoScalingConfig(min_replicas=limits[0], max_replicas=limits[1])
    meta = ObjectMeta(
        name=name,
        namespace=NAMESPACE,
        labels={LABEL_APP_NAME_KEY: name, LABEL_POD_GANG_NAME_KEY: PGS_NAME},
        owner_references=[
            OwnerReference(
                api_version=str(SCHEME_GROUP_VERSION),
                kind=POD_GANG_SET_KIND,
                name=PGS_NAME,
                uid=PGS_UID,
                controller=True,
                block_owner_deletion=True,
            )
        ],
    )
    return PodClique(metadata=meta, spec=spec)


def test_default_pclq_wire_form():
    data = build_pclq("worker").to_dict()
    assert data["metadata"]["name"] == "test-pgs-0-worker"
    assert data["spec"]["replicas"] == 1
    assert data["spec"]["podSpec"] == default_pod_spec()
    ref = data["metadata"]["ownerReferences"][0]
    assert ref["apiVersion"] == "grove.io/v1alpha1"
    assert ref["kind"] == "PodGangSet"
    assert ref["controller"] is True
    assert ref["blockOwnerDeletion"] is True
    assert data["status"] == {}
    assert "startsAfter" not in data["spec"]
    assert "autoScalingConfig" not in data["spec"]


def test_starts_after_uses_generated_names():
    pclq = build_pclq("worker", replica_index=2, starts_after=["leader", "router"])
    assert pclq.to_dict()["spec"]["startsAfter"] == [
        "test-pgs-2-leader",
        "test-pgs-2-router",
    ]


def test_auto_scale_limits():
    pclq = build_pclq("worker", limits=(2, 5))
    assert pclq.to_dict()["spec"]["autoScalingConfig"] == {"minReplicas": 2, "maxReplicas": 5}


def test_pclq_round_trip():
    pclq = build_pclq("worker", starts_after=["leader"], limits=(1, 3), replicas=4)
    pclq.api_version = "grove.io/v1alpha1"
    pclq.kind = "PodClique"
    assert PodClique.from_dict(pclq.to_dict()) == pclq


def test_status_round_trip():
    when = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    status = PodCliqueStatus(
        observed_generation=3,
        last_operation=LastOperation(
            type=LastOperationType.RECONCILE,
            state=LastOperationState.SUCCEEDED,
            description="done",
            last_update_time=when,
        ),
        last_errors=[LastError(code="ERR_X", description="boom", observed_at=when)],
        replicas=3,
        ready_replicas=2,
        updated_replicas=1,
        selector="app=x",
        conditions=[Condition(type="Ready", status="True", last_transition_time=when)],
    )
    data = status.to_dict()
    assert data["hpaPodSelector"] == "app=x"
    assert data["readyReplicas"] == 2
    assert PodCliqueStatus.from_dict(data) == status


def test_status_omits_zero_counts():
    data = PodCliqueStatus(replicas=0, ready_replicas=2).to_dict()
    assert data == {"readyReplicas": 2}


def test_auto_scaling_config_without_min():
    config = AutoScalingConfig.from_dict({"maxReplicas": 7})
    assert config.min_replicas is None
    assert config.to_dict() == {"maxReplicas": 7}


def test_auto_scaling_metrics_preserved():
    metrics = [{"type": "Resource", "resource": {"name": "cpu"}}]
    config = AutoScalingConfig(max_replicas=4, metrics=metrics)
    assert AutoScalingConfig.from_dict(config.to_dict()).metrics == metrics


def test_list_round_trip():
    items = [build_pclq("a"), build_pclq("b")]
    pclq_list = PodCliqueList(items=items, metadata={"resourceVersion": "10"})
    data = pclq_list.to_dict()
    assert [item["metadata"]["name"] for item in data["items"]] == [
        "test-pgs-0-a",
        "test-pgs-0-b",
    ]
    assert PodCliqueList.from_dict(data) == pclq_list


def test_invalid_replicas_rejected():
    with pytest.raises(ValueError):
        PodCliqueSpec.from_dict({"replicas": "many"})