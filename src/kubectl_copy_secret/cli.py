#!/usr/bin/env python
"""Command-line interface for kubectl-copy-secret.

This module provides the `kubectl copy-secret` plugin entry point: it parses
the flags, builds the copy request, runs the SecretCopier and renders each
event as the copy progresses.
"""

import re
import sys
from functools import partial

import click
from icecream import ic
from rich.markup import escape

from kubectl_copy_secret import __version__, console
from kubectl_copy_secret.cluster import Cluster
from kubectl_copy_secret.core.copier import SecretCopier
from kubectl_copy_secret.exceptions import ClusterConnectionError, SourceEnumerationError
from kubectl_copy_secret.models import AllSecrets, ByName, CopyEvent, CopyReport, CopyRequest, EventKind, Selector

# Secret names are DNS subdomains, namespaces are DNS labels (RFC 1123)
_DNS_SUBDOMAIN_MAX_LENGTH = 253
_DNS_SUBDOMAIN_PATTERN = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$"
_DNS_LABEL_MAX_LENGTH = 63
_DNS_LABEL_PATTERN = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$"

_EXAMPLES = """\b
Examples:
  # copy a single secret from the origin ns to the destination ns
  kubectl copy-secret --origin origin-ns --destination destination-ns --secret secret-name

  # copy several secrets
  kubectl copy-secret --origin origin-ns --destination destination-ns --secret one,two

  # copy all secrets from the origin ns to the destination ns
  kubectl copy-secret --origin origin-ns --destination destination-ns --all
"""


def validate_k8s_name(name: str) -> bool | str:
    """Validate a Kubernetes resource name (DNS subdomain).

    Args:
        name: The name to validate.

    Returns:
        True if valid, or an error message string if invalid.

    """
    if not name:
        return "Name cannot be empty"
    if len(name) > _DNS_SUBDOMAIN_MAX_LENGTH:
        return f"Name must be {_DNS_SUBDOMAIN_MAX_LENGTH} characters or less"
    if not re.match(_DNS_SUBDOMAIN_PATTERN, name):
        return "Name must consist of lowercase alphanumeric characters, '-' or '.', and must start and end with an alphanumeric character"
    return True


def validate_namespace_name(name: str) -> bool | str:
    """Validate a namespace name (DNS label).

    Returns:
        True if valid, or an error message string if invalid.

    """
    if not name:
        return "Namespace cannot be empty"
    if len(name) > _DNS_LABEL_MAX_LENGTH:
        return f"Namespace must be {_DNS_LABEL_MAX_LENGTH} characters or less"
    if not re.match(_DNS_LABEL_PATTERN, name):
        return "Namespace must consist of lowercase alphanumeric characters or '-', and must start and end with an alphanumeric character"
    return True


def _namespace_option(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return value
    result = validate_namespace_name(value)
    if result is not True:
        raise click.BadParameter(str(result))
    return value


def _secret_names_option(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> tuple[str, ...]:
    """Flatten repeated and comma separated --secret values, keeping their order."""
    names: list[str] = []
    for chunk in value:
        for name in (part.strip() for part in chunk.split(",")):
            if not name:
                continue
            result = validate_k8s_name(name)
            if result is not True:
                raise click.BadParameter(f"{name!r}: {result}")
            names.append(name)
    return tuple(names)


def build_selector(secret_names: tuple[str, ...], all_secrets: bool) -> Selector:
    """Turn the --secret/--all flags into a selector.

    Raises:
        click.UsageError: Unless exactly one of the two flags is set.

    """
    if secret_names and all_secrets:
        raise click.UsageError("--secret and --all are mutually exclusive")
    if all_secrets:
        return AllSecrets()
    if not secret_names:
        raise click.UsageError("one of --secret or --all is required")
    return ByName(names=secret_names)


def render_event(event: CopyEvent, *, verbose: bool) -> None:
    """Print a single copy event.

    Skips and placement failures are always shown; everything else only
    in verbose mode.

    Args:
        event: The event to render.
        verbose: Whether progress events should be shown.

    """
    namespace = console.highlight(event.namespace)
    names = console.highlight_all(event.names)
    match event.kind:
        case EventKind.RESOLVING if verbose:
            if event.names:
                console.action(f"Getting secrets {names} from the {namespace} namespace")
            else:
                console.action(f"Getting all secrets in the {namespace} namespace")
        case EventKind.SKIPPED_NOT_FOUND:
            console.warning(f"{names} could not be found in the {namespace} namespace so they will be skipped")
        case EventKind.SKIPPED_LOOKUP_FAILED:
            console.warning(
                f"{names} could not be read from the {namespace} namespace so they will be skipped: "
                f"{escape(event.reason or '')}"
            )
        case EventKind.FOUND if verbose:
            console.step(f"{names} secret found")
        case EventKind.PLACING if verbose:
            console.action(f"Creating secret {names} in the {namespace} namespace")
        case EventKind.COPIED if verbose:
            console.success(f"Created secret {names} in the {namespace} namespace")
        case EventKind.PLACEMENT_FAILED:
            console.error(
                f"Error putting secret {names} in the {namespace} namespace: {escape(event.reason or '')}"
            )


def render_summary(report: CopyReport) -> None:
    """Print the summary panel of a finished run."""
    console.newline()
    console.summary_panel(
        "Copy Summary",
        {
            "Origin": report.request.origin,
            "Destination": report.request.destination,
            "Copied": str(len(report.copied)),
            "Failed": str(len(report.failed)),
            "Skipped": str(len(report.skipped)),
        },
        border_style="yellow" if report.failed or report.skipped else "green",
    )


@click.command(name="copy-secret", help="Copy secret(s) from one namespace to another", epilog=_EXAMPLES)
@click.option(
    "--origin", required=True, callback=_namespace_option, help="the namespace name to copy secrets from"
)
@click.option(
    "--destination", required=True, callback=_namespace_option, help="the namespace name to copy secrets to"
)
@click.option(
    "--secret",
    "secret_names",
    multiple=True,
    callback=_secret_names_option,
    help="a comma separated list (can be one) of secrets to copy",
)
@click.option(
    "--all", "all_secrets", is_flag=True, help="copy all secrets from the origin to the destination"
)
@click.option("--verbose", is_flag=True, help="additional output for debugging")
@click.option("--kubeconfig", required=False, help="path to the kubeconfig file to use")
@click.option("--context", required=False, help="the kubeconfig context to use")
@click.option("--select", is_flag=True, default=False, help="prompt for context select")
@click.option("--debug", is_flag=True, help="print debug information")
@click.version_option(__version__, "--version", "-v", message="%(version)s")
def cli(
    origin: str,
    destination: str,
    secret_names: tuple[str, ...],
    all_secrets: bool,
    verbose: bool,
    kubeconfig: str | None,
    context: str | None,
    select: bool,
    debug: bool,
) -> None:
    """Copy the selected secrets and report what happened.

    Only a cluster configuration failure or a failed listing of the origin
    namespace makes the command exit non-zero; per-secret failures are
    reported but do not change the exit status.

    """
    if debug:
        ic.enable()
    else:
        ic.disable()

    request = CopyRequest(origin=origin, destination=destination, selector=build_selector(secret_names, all_secrets))
    ic(request)

    try:
        cluster = Cluster(select_context=select, context=context, kubeconfig=kubeconfig)
        copier = SecretCopier(cluster.secret_store(), on_event=partial(render_event, verbose=verbose))
        with console.spinner("Copying secrets..."):
            report = copier.run(request)
    except ClusterConnectionError as e:
        console.error(f"Cluster connection failed: {e}")
        sys.exit(1)
    except SourceEnumerationError as e:
        console.error(escape(str(e)))
        sys.exit(1)

    render_summary(report)


if __name__ == "__main__":
    cli()
