from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
from typing import Any, Callable, Mapping, TypeVar

from kubernetes import client, config
from kubernetes.client import ApiException

VELERO_API_GROUP = "velero.io"
VELERO_API_VERSION = "v1"
PODVOLUMEBACKUP_PLURAL = "podvolumebackups"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 20
T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KubernetesClients:
    api_client: client.ApiClient
    custom_objects_api: client.CustomObjectsApi


class KubernetesDiscoveryError(RuntimeError):
    """Raised when PodVolumeBackup resources cannot be listed."""


class KubernetesAuthenticationError(RuntimeError):
    """Raised when Kubernetes authentication configuration fails."""


def load_kubernetes_clients(
    *,
    kubeconfig_path: str | None = None,
    context: str | None = None,
    in_cluster: bool = False,
) -> KubernetesClients:
    expanded = resolve_kubeconfig_path(kubeconfig_path)
    try:
        if in_cluster:
            config.load_incluster_config()
        else:
            config.load_kube_config(config_file=expanded, context=context)
    except Exception as error:  # pylint: disable=broad-except
        raise KubernetesAuthenticationError(
            _format_authentication_error(
                in_cluster=in_cluster,
                kubeconfig_path=expanded,
                context=context,
                error=error,
            )
        ) from error

    api_client = client.ApiClient()
    return KubernetesClients(
        api_client=api_client,
        custom_objects_api=client.CustomObjectsApi(api_client),
    )


def list_pod_volume_backups(
    clients: KubernetesClients,
    *,
    namespace: str,
    request_timeout_seconds: int = DEFAULT_REQUEST_TIMEOUT_SECONDS,
) -> list[Mapping[str, Any]]:
    if request_timeout_seconds <= 0:
        raise ValueError("request_timeout_seconds must be positive")

    response = _safe_kubernetes_discovery_call(
        operation=f"list PodVolumeBackups in namespace '{namespace}'",
        hint=(
            "Check that Velero is installed, the namespace is correct, and RBAC allows "
            "list on podvolumebackups.velero.io."
        ),
        func=lambda: clients.custom_objects_api.list_namespaced_custom_object(
            group=VELERO_API_GROUP,
            version=VELERO_API_VERSION,
            namespace=namespace,
            plural=PODVOLUMEBACKUP_PLURAL,
            _request_timeout=request_timeout_seconds,
        ),
    )

    items = response.get("items") if isinstance(response, Mapping) else None
    records = [item for item in items or [] if isinstance(item, Mapping)]
    logger.debug("fetched %d podvolumebackup records from namespace %s", len(records), namespace)
    return records


def resolve_kubeconfig_path(kubeconfig_path: str | None) -> str | None:
    # None lets the client apply KUBECONFIG and ~/.kube/config itself
    if kubeconfig_path is None:
        return None
    stripped = kubeconfig_path.strip()
    if not stripped:
        return None
    return str(Path(stripped).expanduser())


def _safe_kubernetes_discovery_call(*, operation: str, hint: str, func: Callable[[], T]) -> T:
    try:
        return func()
    except ApiException as error:
        raise KubernetesDiscoveryError(
            _format_api_exception_message(
                operation=operation,
                hint=hint,
                error=error,
            )
        ) from error
    except Exception as error:
        raise KubernetesDiscoveryError(
            f"Failed to {operation}: {error}. {hint}"
        ) from error


def _format_api_exception_message(*, operation: str, hint: str, error: ApiException) -> str:
    status = error.status if error.status is not None else "unknown"
    reason = error.reason or "no reason provided"
    return f"Failed to {operation}: API status {status} ({reason}). {hint}"


def _format_authentication_error(
    *,
    in_cluster: bool,
    kubeconfig_path: str | None,
    context: str | None,
    error: Exception,
) -> str:
    reason = str(error).strip() or error.__class__.__name__
    if in_cluster:
        return (
            "Failed to load in-cluster service account credentials: "
            f"{reason}. Ensure the pod has a mounted service account token and Kubernetes service host "
            "environment variables."
        )

    kubeconfig_source = kubeconfig_path or "default kubeconfig search path"
    context_message = f" with context '{context}'" if context else ""
    return (
        f"Failed to get kubeconfig from '{kubeconfig_source}'{context_message}: {reason}. "
        "Verify the kubeconfig path and context are valid."
    )
