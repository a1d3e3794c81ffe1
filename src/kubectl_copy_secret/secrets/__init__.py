"""Secret copy pipeline subpackage.

This package contains the sourcing, transformation and placement steps
that the SecretCopier runs in sequence.
"""

from kubectl_copy_secret.secrets.placement import place_secret
from kubectl_copy_secret.secrets.sourcing import source_all, source_by_name, source_secrets
from kubectl_copy_secret.secrets.transform import prepare_for_destination

__all__ = [
    # sourcing
    "source_secrets",
    "source_by_name",
    "source_all",
    # transform
    "prepare_for_destination",
    # placement
    "place_secret",
]
