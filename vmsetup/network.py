"""Docker network provisioning.

The network name comes from the command line or, failing that, from an
interactive prompt. Creation treats "already exists" as success: the
compose file declares the network external, so all that matters is that
it is there afterwards.
"""

import sys

from vmsetup.config import USAGE
from vmsetup.errors import NoInteractiveInputError

PROMPT = "Enter the Docker network name to create: "


def _isatty(stream) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def resolve_network_name(argument, log, stdin=None) -> str:
    """Return the network name to use.

    A non-empty `argument` is used verbatim. Otherwise the operator is
    prompted until they type something non-blank; surrounding whitespace is
    dropped from typed answers.

    Raises:
        NoInteractiveInputError: no argument and stdin is not a terminal.
    """
    if argument:
        return argument

    stdin = sys.stdin if stdin is None else stdin
    if not _isatty(stdin):
        raise NoInteractiveInputError(
            f"No TTY detected and no network name provided. {USAGE}"
        )

    while True:
        try:
            answer = log.prompt(PROMPT)
        except EOFError:
            raise NoInteractiveInputError(
                f"Input closed before a network name was entered. {USAGE}"
            ) from None
        name = answer.strip()
        if name:
            return name
        log.error("Network name cannot be empty. Please try again.")


def ensure_network(prov, name: str) -> bool:
    """Create the Docker network `name`.

    Returns True if it was created, False if creation failed (most often
    because it already exists). Neither case is an error.
    """
    prov.log.info(f"Creating Docker network: {name}")
    result = prov._run(["docker", "network", "create", name], check=False, quiet=True)
    if result.returncode == 0:
        prov.log.success(f"Docker network '{name}' created.")
        return True
    prov.log.info(f"Docker network '{name}' may already exist. Continuing.")
    return False
