"""Completion report printed at the end of a successful run."""

from rich.markup import escape

from vmsetup.config import DOCKER_GROUP, PROFILE_NAME, SYSINFO_PACKAGE


def summary_lines(report, ctx):
    """Return (level, message) pairs describing what the run did.

    level is one of "ok", "info" or "warn".
    """
    lines = []
    if report.docker_installed and report.docker_running:
        lines.append(("ok", "Docker CE installed and running"))
    elif report.docker_installed:
        lines.append(("warn", "Docker CE installed but the service is not confirmed running"))

    if report.network_created:
        lines.append(("ok", f"Docker network '{report.network_name}' created"))
    elif report.network_name:
        lines.append(("info", f"Docker network '{report.network_name}' already present"))

    if ctx.is_root:
        lines.append(("info", f"Running as root; {DOCKER_GROUP} group unchanged"))
    elif report.group_added:
        lines.append(("ok", f"User '{ctx.actual_user}' added to the {DOCKER_GROUP} group"))
    elif report.group_added is False:
        lines.append(("warn", f"User '{ctx.actual_user}' could not be added to the {DOCKER_GROUP} group"))

    if report.scaffold_dir:
        lines.append(("ok", f"nginx structure created at {report.scaffold_dir}"))

    if report.sysinfo_installed:
        lines.append(("ok", f"{SYSINFO_PACKAGE} installed"))
    elif report.sysinfo_installed is False:
        lines.append(("warn", f"{SYSINFO_PACKAGE} not installed (see error above)"))

    if report.profile_patched:
        lines.append(("ok", f"~/{PROFILE_NAME} updated with {SYSINFO_PACKAGE} and public IP"))
    elif report.profile_patched is False:
        lines.append(("info", f"~/{PROFILE_NAME} already patched"))
    return lines


def print_summary(log, report, ctx) -> None:
    """Print the closing banner, per-step results and manual next steps."""
    log.console.print()
    log.banner("Setup Complete!", style="green")

    for level, msg in summary_lines(report, ctx):
        if level == "ok":
            log.success(msg)
        elif level == "warn":
            log.warn(msg)
        else:
            log.info(msg)

    scaffold_dir = escape(str(report.scaffold_dir or "~/nginx"))
    out = log.console
    out.print()
    out.print("[bold yellow]Next steps:[/bold yellow]")
    step = 1
    if not ctx.is_root:
        out.print(f"  {step}. Log out and back in to activate {DOCKER_GROUP} group membership")
        out.print(f"     (or run: [cyan]newgrp {DOCKER_GROUP}[/cyan])")
        step += 1
    out.print(f"  {step}. Start nginx:")
    out.print(f"     [cyan]cd {scaffold_dir} && docker compose up -d[/cyan]")
    step += 1
    out.print(f"  {step}. Verify nginx is running:")
    out.print("     [cyan]curl http://localhost[/cyan]")
    out.print()
