"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import structlog
import typer
from rich.console import Console
from rich.table import Table

from kube_console import __version__
from kube_console.integrations.kubernetes.client import KubernetesClient
from kube_console.integrations.kubernetes.config import KubernetesConsoleConfig
from kube_console.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesTimeoutError,
)
from kube_console.logging.config import configure_logging

app = typer.Typer(
    name="kcon",
    help="Terminal console for browsing and operating Kubernetes workloads.",
    add_completion=True,
)

console = Console(stderr=True)
logger = structlog.get_logger()

ContextOption = Annotated[
    str | None,
    typer.Option("--context", "-c", help="Kubeconfig context (defaults to config or current)"),
]

NamespaceOption = Annotated[
    str | None,
    typer.Option(
        "--namespace",
        "-n",
        help="Namespace to browse, or 'all' (defaults to config or 'default')",
    ),
]

KindOption = Annotated[
    str | None,
    typer.Option("--kind", "-k", help="Resource kind shown first, e.g. ReplicaSet, rs, pods"),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to config file (defaults to ~/.config/kcon/config.yaml)"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"kcon version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging.",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        envvar="KCON_LOG_FILE",
        help="Write logs here instead of ~/.local/state/kcon/kcon.log.",
    ),
) -> None:
    """kcon - browse Kubernetes workloads from the terminal."""
    configure_logging(verbose=verbose, debug=debug, log_file=log_file)


def handle_k8s_error(error: KubernetesError) -> None:
    """Print a Kubernetes error with a hint and exit 1.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    if isinstance(error, KubernetesConnectionError):
        console.print("[red]Error:[/red] Cannot connect to Kubernetes cluster")
        console.print(f"  {error.message}")
        if error.original_error:
            console.print(f"  Cause: {error.original_error}")
        console.print(
            "\n[dim]Hint: Check that your kubeconfig is valid and the cluster is reachable.[/dim]"
        )
    elif isinstance(error, KubernetesAuthError):
        console.print("[red]Error:[/red] Authentication/authorization failed")
        console.print(f"  {error.message}")
        console.print("\n[dim]Hint: Check your credentials, token, or RBAC permissions.[/dim]")
    elif isinstance(error, KubernetesTimeoutError):
        console.print("[red]Error:[/red] Request timed out")
        console.print(f"  {error.message}")
    else:
        console.print(f"[red]Error:[/red] {error.message}")
    raise typer.Exit(1)


def load_config(
    config_path: Path | None,
    context: str | None,
    namespace: str | None,
    kind: str | None,
) -> KubernetesConsoleConfig:
    """Build the configuration: file, then environment, then command line flags."""
    config = KubernetesConsoleConfig.from_file(config_path)
    if context:
        config.active_cluster = context
    if namespace:
        config.apply_namespace(namespace)
    if kind:
        config.ui.start_kind = kind
    return config


@app.command()
def browse(
    context: ContextOption = None,
    namespace: NamespaceOption = None,
    kind: KindOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Open the interactive resource browser.

    Examples:
        kcon browse
        kcon browse --kind deployments --namespace all
        kcon browse --context staging -n web
    """
    from kube_console.tui.apps.kubernetes import KubernetesApp

    try:
        config = load_config(config_path, context, namespace, kind)
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        raise typer.Exit(1) from None

    try:
        client = KubernetesClient(config)
        version = client.check_connection()
    except KubernetesError as e:
        handle_k8s_error(e)
        return

    logger.info(
        "browser_starting",
        context=client.get_current_context(),
        namespace=config.get_active_namespace(),
        cluster_version=version,
    )

    try:
        tui = KubernetesApp(client, config, namespace=config.get_active_namespace())
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        client.close()
        raise typer.Exit(1) from None

    with client:
        tui.run()


@app.command()
def contexts(config_path: ConfigOption = None) -> None:
    """List the contexts of the configured kubeconfig.

    Examples:
        kcon contexts
        kcon contexts --config ./kcon.yaml
    """
    try:
        config = load_config(config_path, None, None, None)
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        raise typer.Exit(1) from None

    try:
        with KubernetesClient(config) as client:
            entries = client.list_contexts()
    except KubernetesError as e:
        handle_k8s_error(e)
        return

    table = Table(title="Kubernetes Contexts")
    table.add_column("", style="green", width=2)
    table.add_column("Name", style="cyan")
    table.add_column("Cluster")
    table.add_column("Namespace")
    for entry in entries:
        table.add_row("*" if entry.active else "", entry.name, entry.cluster, entry.namespace)
    Console().print(table)


if __name__ == "__main__":
    app()
