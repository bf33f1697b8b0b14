"""vmsetup: one-shot provisioning for a fresh Linux VM (Docker + nginx + neofetch)."""

from vmsetup.context import InvocationContext, resolve_invocation_context
from vmsetup.errors import ProvisionError
from vmsetup.osdetect import DistroProfile, Family, PackageManager, detect_distro

__all__ = [
    "DistroProfile",
    "Family",
    "InvocationContext",
    "PackageManager",
    "ProvisionError",
    "detect_distro",
    "resolve_invocation_context",
    "main",
]


def __getattr__(name):
    if name == "main":
        from vmsetup.runner import main
        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
