"""Kubernetes cluster configuration.

This module provides the Cluster class, which resolves the kubeconfig and
context to work with and hands out a secret store bound to that cluster.
"""

import click
import questionary
from icecream import ic
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from kubectl_copy_secret import console
from kubectl_copy_secret.exceptions import ClusterConnectionError
from kubectl_copy_secret.store import KubernetesSecretStore
from kubectl_copy_secret.styles import POINTER, PROMPT_STYLE, QMARK

IN_CLUSTER_CONTEXT = "in-cluster"


class Cluster:
    """Manages the connection settings for the target cluster.

    The kubeconfig is tried first. When no kubeconfig is usable and the
    caller did not ask for a specific one, the in-cluster service account
    configuration is used instead.

    Attributes:
        kubeconfig: Path to the kubeconfig file, or None for the default.
        context: The active context name, or "in-cluster".

    """

    def __init__(self, *, select_context: bool, context: str | None = None, kubeconfig: str | None = None) -> None:
        """Load the cluster configuration.

        Args:
            select_context: If True, prompt the user to select a context.
            context: Explicit context name; ignored when select_context is set.
            kubeconfig: Explicit kubeconfig path.

        Raises:
            ClusterConnectionError: If no usable configuration is found.
            click.Abort: If the user cancels context selection.

        """
        self.kubeconfig: str | None = kubeconfig
        explicit = select_context or context is not None or kubeconfig is not None
        try:
            self.context: str = self._set_context(select_context=select_context, context=context)
            config.load_kube_config(config_file=self.kubeconfig, context=self.context)
        except ConfigException as kube_err:
            if explicit:
                raise ClusterConnectionError(f"Invalid or missing kubeconfig: {kube_err}") from kube_err
            self.context = self._load_in_cluster(kube_err)
        console.action(f"Working with {console.highlight(self.context)} cluster")

    def _set_context(self, *, select_context: bool, context: str | None) -> str:
        """Pick the context to work with.

        Args:
            select_context: If True, prompt user to select a context.
            context: Explicit context name.

        Returns:
            The selected, requested or current context name.

        Raises:
            ConfigException: If the kubeconfig cannot be read.
            ClusterConnectionError: If the requested context does not exist.
            click.Abort: If user cancels context selection.

        """
        contexts, current_context = config.list_kube_config_contexts(config_file=self.kubeconfig)
        context_names: list[str] = [c["name"] for c in contexts]
        ic(context_names)

        if select_context:
            selected: str | None = questionary.select(
                "Select context to work with",
                choices=context_names,
                default=current_context["name"] if current_context else None,
                style=PROMPT_STYLE,
                pointer=POINTER,
                qmark=QMARK,
            ).ask()
            if selected is None:
                console.warning("Context selection cancelled.")
                raise click.Abort()
            return selected

        if context is not None:
            if context not in context_names:
                raise ClusterConnectionError(f"Context {context!r} not found in kubeconfig")
            return context

        if not current_context:
            raise ConfigException("No current context is set in the kubeconfig")
        return str(current_context["name"])

    @staticmethod
    def _load_in_cluster(kube_err: ConfigException) -> str:
        """Fall back to the in-cluster service account configuration.

        Raises:
            ClusterConnectionError: If this is not running inside a cluster either.

        """
        try:
            config.load_incluster_config()
        except ConfigException as err:
            raise ClusterConnectionError(
                f"No usable cluster configuration (kubeconfig: {kube_err}; in-cluster: {err})"
            ) from err
        return IN_CLUSTER_CONTEXT

    def secret_store(self) -> KubernetesSecretStore:
        """Return a secret store bound to this cluster."""
        return KubernetesSecretStore(client.CoreV1Api())

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"Cluster(context={self.context!r}, kubeconfig={self.kubeconfig!r})"
