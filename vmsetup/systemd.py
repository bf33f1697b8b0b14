"""Service control for systemd hosts (Debian, RHEL and Fedora families)."""


def enable_service(prov, name: str) -> bool:
    """Enable and start a unit. Failures are logged and reported, not raised.

    Some images supervise the daemon another way, so a failing systemctl is
    not a reason to stop provisioning.
    """
    enabled = prov.best_effort(["systemctl", "enable", name])
    started = prov.best_effort(["systemctl", "start", name])
    return enabled and started
