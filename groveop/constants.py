"""Label keys, finalizers and event reasons used on resources managed by the operator."""

# Common label keys placed on all managed resources.
LABEL_APP_NAME_KEY = "app.kubernetes.io/name"
LABEL_MANAGED_BY_KEY = "app.kubernetes.io/managed-by"
LABEL_PART_OF_KEY = "app.kubernetes.io/part-of"
LABEL_MANAGED_BY_VALUE = "grove-operator"
LABEL_COMPONENT_KEY = "app.kubernetes.io/component"
LABEL_POD_GANG_NAME_KEY = "grove.io/podgang-name"

# Finalizers added to ``metadata.finalizers`` during reconciliation.
FINALIZER_POD_GANG_SET = "grove.io/podgangset.grove.io"
FINALIZER_POD_CLIQUE = "grove.io/podclique.grove.io"

# Event reasons emitted while reconciling and deleting.
EVENT_RECONCILING = "Reconciling"
EVENT_RECONCILED = "Reconciled"
EVENT_RECONCILE_ERROR = "ReconcileError"
EVENT_DELETING = "Deleting"
EVENT_DELETED = "Deleted"
EVENT_DELETE_ERROR = "DeleteError"