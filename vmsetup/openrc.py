"""Service control for OpenRC hosts (Alpine)."""


def enable_service(prov, name: str) -> bool:
    """Add a service to the default runlevel and start it. Never raises."""
    added = prov.best_effort(["rc-update", "add", name, "default"])
    started = prov.best_effort(["rc-service", name, "start"])
    return added and started
