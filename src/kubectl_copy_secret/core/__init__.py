"""Core infrastructure subpackage.

This package contains the SecretCopier, which runs a copy request end to end.
"""

from kubectl_copy_secret.core.copier import SecretCopier

__all__ = [
    "SecretCopier",
]
