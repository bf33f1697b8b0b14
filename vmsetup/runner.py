"""Entry point for provisioning a VM.

Invoked as:
    setup-vm [network-name]
or:
    python3 -m vmsetup.runner [network-name]

Runs the setup steps in order and stops at the first fatal error. Nothing
already done is rolled back. The exit status is 0 on success, the failing
command's status when a mandatory command fails, and 1 for other fatal
errors.
"""

import sys
import traceback

from vmsetup.base import Provisioner
from vmsetup.config import OS_RELEASE_PATH
from vmsetup.context import resolve_invocation_context
from vmsetup.errors import ProvisionError
from vmsetup.logging import ProvisionLogger
from vmsetup.osdetect import detect_distro
from vmsetup.summary import print_summary

USAGE = "Usage: setup-vm [network-name]"


def run(argv, log: ProvisionLogger = None, environ=None, stdin=None,
        os_release: str = OS_RELEASE_PATH) -> int:
    """Provision this host and return the process exit status."""
    log = log or ProvisionLogger()

    if len(argv) > 1:
        log.error(USAGE)
        return 1
    network_arg = argv[0] if argv else None

    log.banner("VM Setup", "Docker + nginx + neofetch")
    try:
        ctx = resolve_invocation_context(environ, log=log)
        distro = detect_distro(os_release)
        log.info(
            f"Detected distribution: {distro.id} (family: {distro.family.value}, "
            f"package manager: {distro.package_manager.value})"
        )
        report = Provisioner(ctx, distro, log).provision(network_arg, stdin=stdin)
    except ProvisionError as e:
        log.error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        log.error("Interrupted.")
        return 130
    except Exception as e:
        log.error(f"An unexpected error occurred: {e}")
        traceback.print_exc(file=sys.stderr)
        return 1

    try:
        print_summary(log, report, ctx)
    except Exception as e:
        log.warn(f"Setup finished but the summary could not be printed: {e}")
    return 0


def main():
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
