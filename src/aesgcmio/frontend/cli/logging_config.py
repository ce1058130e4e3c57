"""Root logger setup for the aesgcmio command line tool."""

import logging
import sys


def configure_logging(level: int = logging.INFO) -> None:
    # stdout may carry ciphertext or plaintext ("-"), so log records go to stderr.
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
