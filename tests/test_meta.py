from datetime import datetime, timedelta, timezone

import pytest

from groveop.meta import (
    GROUP_NAME,
    POD_GANG_SET_KIND,
    SCHEME_GROUP_VERSION,
    Condition,
    GroupKind,
    GroupResource,
    GroupVersion,
    ObjectMeta,
    OwnerReference,
    format_duration,
    format_time,
    kind,
    parse_duration,
    parse_time,
    resource,
)


def test_scheme_group_version_string():
    gv = GroupVersion(GROUP_NAME, "v1alpha1")
    assert str(gv) == "grove.io/v1alpha1"
    assert gv == SCHEME_GROUP_VERSION


def test_group_version_without_group_renders_version_only():
    gv = GroupVersion("", "v1")
    assert str(gv) == gv.version


def test_kind_qualifies_with_group():
    assert kind("PodClique") == GroupKind(GROUP_NAME, "PodClique")


def test_resource_qualifies_with_group():
    assert resource("podcliques") == GroupResource(GROUP_NAME, "podcliques")


def test_with_kind_and_group_kind_round_trip():
    gvk = SCHEME_GROUP_VERSION.with_kind(POD_GANG_SET_KIND)
    assert gvk.version == SCHEME_GROUP_VERSION.version
    assert gvk.group_kind() == kind(POD_GANG_SET_KIND)


def test_with_resource_and_group_resource():
    gvr = SCHEME_GROUP_VERSION.with_resource("podgangsets")
    assert gvr.group_resource() == resource("podgangsets")
    assert gvr.group == GROUP_NAME


def test_parse_duration_simple_units():
    assert parse_duration("15s") == timedelta(seconds=15)
    assert parse_duration("500ms") == timedelta(milliseconds=500)
    assert parse_duration("1h30m") == timedelta(hours=1, minutes=30)
    assert parse_duration("0") == timedelta(0)
    assert parse_duration("-2s") == -timedelta(seconds=2)
    assert parse_duration("1.5h") == timedelta(hours=1, minutes=30)


@pytest.mark.parametrize("text", ["", "abc", "10", "5x", "1h-", "-", "s"])
def test_parse_duration_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_format_duration_pinned_values():
    assert format_duration(timedelta(hours=1, minutes=30)) == "1h30m0s"
    assert format_duration(timedelta(0)) == "0s"


@pytest.mark.parametrize(
    "value",
    [
        timedelta(seconds=15),
        timedelta(seconds=10),
        timedelta(seconds=2),
        timedelta(minutes=1, seconds=30),
        timedelta(hours=25, seconds=1),
        timedelta(milliseconds=250),
        timedelta(microseconds=7),
        timedelta(seconds=1, microseconds=500000),
        -timedelta(minutes=3),
    ],
)
def test_duration_round_trip(value):
    assert parse_duration(format_duration(value)) == value


def test_format_time_pinned():
    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert format_time(moment) == "2024-01-02T03:04:05Z"


def test_time_round_trip_and_offset_normalised():
    moment = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert parse_time(format_time(moment)) == moment
    shifted = parse_time("2025-06-01T14:00:00+02:00")
    assert shifted == moment
    assert shifted.utcoffset() == timedelta(0)


def test_time_none_and_invalid():
    assert parse_time(None) is None
    assert format_time(None) is None
    with pytest.raises(ValueError):
        parse_time("not a time")
    with pytest.raises(ValueError):
        parse_time("2025-06-01T12:00:00")


def test_owner_reference_round_trip():
    ref = OwnerReference(
        api_version=str(SCHEME_GROUP_VERSION),
        kind=POD_GANG_SET_KIND,
        name="simple",
        uid="uid-1",
        controller=True,
        block_owner_deletion=True,
    )
    data = ref.to_dict()
    assert data["apiVersion"] == str(SCHEME_GROUP_VERSION)
    assert data["blockOwnerDeletion"] is True
    assert OwnerReference.from_dict(data) == ref


def test_owner_reference_omits_unset_flags():
    data = OwnerReference("v1", "Pod", "p", "u").to_dict()
    assert "controller" not in data
    assert "blockOwnerDeletion" not in data


def test_object_meta_round_trip():
    meta = ObjectMeta(
        name="simple",
        namespace="default",
        uid="uid-1",
        generation=3,
        creation_timestamp=datetime(2025, 1, 1, tzinfo=timezone.utc),
        labels={"a": "b"},
        annotations={"c": "d"},
        owner_references=[OwnerReference("v1", "Pod", "p", "u", controller=True)],
        finalizers=["f"],
    )
    assert ObjectMeta.from_dict(meta.to_dict()) == meta


def test_object_meta_empty_fields_omitted():
    data = ObjectMeta(name="x").to_dict()
    assert data == {"name": "x"}
    assert ObjectMeta.from_dict(None) == ObjectMeta()


def test_condition_round_trip():
    cond = Condition(
        type="Ready",
        status="True",
        reason="AllGood",
        message="ok",
        observed_generation=2,
        last_transition_time=datetime(2025, 2, 3, 4, 5, 6, tzinfo=timezone.utc),
    )
    data = cond.to_dict()
    assert data["observedGeneration"] == 2
    assert Condition.from_dict(data) == cond


def test_condition_zero_generation_omitted():
    data = Condition(type="Ready", status="False").to_dict()
    assert "observedGeneration" not in data
    assert data["lastTransitionTime"] is None