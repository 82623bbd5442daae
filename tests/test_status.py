from datetime import datetime, timezone

import pytest

from groveop.meta import Condition
from groveop.status import (
    LastError,
    LastOperation,
    LastOperationState,
    LastOperationType,
    PodGangPhase,
    PodGangStatus,
)

WHEN = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value", ["Pending", "Starting", "Running", "Failed", "Succeeded"]
)
def test_phase_values(value):
    restored = PodGangStatus.from_dict({"name": "pgs-0", "phase": value})
    assert restored.phase == value
    assert restored.to_dict()["phase"] == value


def test_last_operation_wire_form():
    op = LastOperation(
        LastOperationType.RECONCILE, LastOperationState.PROCESSING, "working", WHEN
    )
    data = op.to_dict()
    assert data["type"] == "Reconcile"
    assert data["state"] == "Processing"
    assert data["lastTransitionTime"] == "2025-01-02T03:04:05Z"
    assert LastOperation.from_dict(data) == op


def test_last_operation_without_time():
    op = LastOperation(LastOperationType.DELETE, LastOperationState.ERROR)
    data = op.to_dict()
    assert data["lastTransitionTime"] is None
    restored = LastOperation.from_dict(data)
    assert restored.type is LastOperationType.DELETE
    assert restored.last_update_time is None


def test_unknown_operation_type_is_kept():
    restored = LastOperation.from_dict({"type": "Custom", "state": "Succeeded"})
    assert restored.type == "Custom"
    assert restored.state is LastOperationState.SUCCEEDED


def test_last_error_round_trip():
    err = LastError("ERR_SYNC", "sync failed", WHEN)
    data = err.to_dict()
    assert set(data) == {"code", "description", "observedAt"}
    assert LastError.from_dict(data) == err


@pytest.mark.parametrize("phase", list(PodGangPhase))
def test_pod_gang_status_round_trip(phase):
    status = PodGangStatus(
        "pgs-0", phase, [Condition("Ready", "True", "AllUp", "ok", 1, WHEN)]
    )
    data = status.to_dict()
    assert data["phase"] == phase.value
    assert PodGangStatus.from_dict(data) == status


def test_pod_gang_status_omits_empty_conditions():
    data = PodGangStatus("pgs-0", PodGangPhase.PENDING).to_dict()
    assert "conditions" not in data
    assert PodGangStatus.from_dict(data).conditions == []