# pylint: disable=C0103,C0301

""" readview entry point """

import logging
import os
import sys

from .errors import ReadViewError
from .handle_args import handle_args
from .pipeline import SaveOptions, run_view
from . import __version__


logger = logging.getLogger(__name__)


def run(args):
    return run_view(
        args.input_path,
        args.output_path,
        match_all_bits=args.match_all_bits,
        match_no_bits=args.match_no_bits,
        options=SaveOptions.from_args(args),
    )


def main(argv=None):

    argv = sys.argv[1:] if argv is None else argv

    try:
        args = handle_args(argv)
    except ValueError as err:
        logger.error("%s", err)
        sys.exit(1)

    logger.info("Version: %s", __version__)
    logger.info("Command: %s %s", os.path.basename(sys.argv[0]), " ".join(argv))

    try:
        run(args)
    except ReadViewError as err:
        logger.error("Encountered problems viewing `%s`:", args.input_path)
        logger.error("%s", err)
        logger.error("Shutting down.")
        sys.exit(1)


if __name__ == "__main__":
    main()
