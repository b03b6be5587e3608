import logging
import sys


def setup_logging(debug: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure root logger according to CLI flags.
    """
    level = logging.DEBUG if debug else logging.INFO
    if quiet:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    # Quiet noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logging.getLogger("solarhub_engine")

