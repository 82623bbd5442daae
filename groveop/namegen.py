"""Deterministic names for the resources derived from a PodGangSet."""

from __future__ import annotations

from .meta import SCHEME_GROUP_VERSION, ObjectMeta


def generate_pod_gang_name(pgs_name: str, pgs_replica_index: int) -> str:
    """Name of the PodGang for one replica of a PodGangSet."""
    return f"{pgs_name}-{pgs_replica_index}"


def generate_pod_role_name(pgs_meta: ObjectMeta) -> str:
    """Name of the role shared by all Pods of a PodGangSet."""
    return f"{SCHEME_GROUP_VERSION.group}:pgs:{pgs_meta.name}"


def generate_pod_role_binding_name(pgs_meta: ObjectMeta) -> str:
    """Name of the role binding shared by all Pods of a PodGangSet."""
    return f"{SCHEME_GROUP_VERSION.group}:pgs:{pgs_meta.name}"


def generate_pod_service_account_name(pgs_meta: ObjectMeta) -> str:
    """Name of the service account used by all Pods of a PodGangSet."""
    return pgs_meta.name


def generate_pod_clique_name(
    pgs_name: str, pgs_replica_index: int, pclq_template_name: str
) -> str:
    """Name of a PodClique from its PodGangSet, replica index and template name."""
    return f"{pgs_name}-{pgs_replica_index}-{pclq_template_name}"


def generate_pod_name(pclq_name: str, pclq_replica_index: int) -> str:
    """Name of a Pod from its PodClique and replica index."""
    return f"{pclq_name}-{pclq_replica_index}"