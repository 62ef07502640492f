from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .config import (
    COLOR_MODES,
    OUTPUT_MODES,
    AppConfig,
    ConfigurationError,
    validate_color_mode,
    validate_output_mode,
)
from .filters import RowFilter
from .k8s import (
    KubernetesAuthenticationError,
    KubernetesDiscoveryError,
    list_pod_volume_backups,
    load_kubernetes_clients,
)
from .models import NameSelector
from .pipeline import build_rows
from .render import RenderError, render
from .theme import detect_color

PROG = "kubectl podvolumebackup-list"
LOG_FORMAT = "%(levelname)s: %(message)s"

_EPILOG = """\
Notes:
  --pod            substring match (case-insensitive), ANY of comma-separated values
  --pod-namespace  exact match, ANY of comma-separated values
  --volume         exact match, ANY of comma-separated values

Examples:
  kubectl podvolumebackup-list --all --pod=nginx,redis --pod-namespace=dev,prod --volume=data,cache -o pretty
  kubectl podvolumebackup-list nightly- --pod=nginx --pod-namespace=prod --volume=myvol -o json
"""

logger = logging.getLogger(__name__)


def build_parser(app_config: AppConfig | None = None) -> argparse.ArgumentParser:
    app_config = app_config or AppConfig()
    p = argparse.ArgumentParser(
        PROG,
        description="List Velero PodVolumeBackups with the pod, volume, size and creation time of each.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("prefix", nargs="?", help="Only include PodVolumeBackups whose name starts with this prefix")
    p.add_argument("--all", action="store_true", help="List all podvolumebackups instead of filtering by backup name prefix")
    p.add_argument("--velero-namespace", default=app_config.velero_namespace, help="Namespace where PodVolumeBackup CRs are (env: PVBL_VELERO_NAMESPACE)")
    p.add_argument("--pod", default="", help="Comma-separated list. Include items where pod name contains ANY of these substrings (case-insensitive)")
    p.add_argument("--pod-namespace", default="", help="Comma-separated list. Include items where pod namespace equals ANY of these (exact match)")
    p.add_argument("--volume", default="", help="Comma-separated list. Include items where volume equals ANY of these (exact match)")
    p.add_argument("-o", "--output", default=app_config.output_mode, help=f"Output format: {'|'.join(OUTPUT_MODES)} (env: PVBL_OUTPUT)")
    p.add_argument("--color", default=app_config.color_mode, help=f"Color mode for pretty output: {'|'.join(COLOR_MODES)} (env: PVBL_COLOR)")
    p.add_argument("--kubeconfig", default=None, help="Path to kubeconfig (defaults to KUBECONFIG, then ~/.kube/config)")
    p.add_argument("--context", default=None, help="Kubecontext override")
    p.add_argument("--in-cluster", action="store_true", help="Use the in-cluster service account instead of a kubeconfig")
    p.add_argument("--request-timeout", type=int, default=app_config.request_timeout_seconds, help="API request timeout in seconds (env: PVBL_REQUEST_TIMEOUT_SECONDS)")
    p.add_argument("--debug", action="store_true", help="Print debug info to stderr")
    return p


def configure_logging(level_name: str, *, debug: bool = False) -> None:
    level = logging.DEBUG if debug else getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def main(argv: Sequence[str] | None = None) -> None:
    app_config = AppConfig()
    parser = build_parser(app_config)
    args = parser.parse_args(argv)
    configure_logging(app_config.log_level, debug=args.debug)

    if args.all:
        name_selector = NameSelector.everything()
    elif args.prefix is None:
        parser.print_help(sys.stderr)
        sys.exit(1)
    else:
        name_selector = NameSelector.with_prefix(args.prefix)

    try:
        output_mode = validate_output_mode(args.output)
        color_enabled = detect_color(validate_color_mode(args.color), stream=sys.stdout)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    logger.debug("output=%s color=%s", output_mode, color_enabled)

    row_filter = RowFilter.from_csv(
        pods=args.pod,
        namespaces=args.pod_namespace,
        volumes=args.volume,
    )

    try:
        clients = load_kubernetes_clients(
            kubeconfig_path=args.kubeconfig,
            context=args.context,
            in_cluster=args.in_cluster,
        )
        records = list_pod_volume_backups(
            clients,
            namespace=args.velero_namespace,
            request_timeout_seconds=args.request_timeout,
        )
    except (KubernetesAuthenticationError, KubernetesDiscoveryError, ValueError) as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    rows = build_rows(records, name_selector, row_filter)

    try:
        output = render(rows, output_mode, color_enabled)
    except RenderError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    sys.stdout.write(output)
    sys.stdout.flush()


if __name__ == "__main__":  # pragma: no cover
    main()
