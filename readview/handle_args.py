# pylint: disable=C0301,C0103,W1203
""" command line handling """

import argparse
import logging
import textwrap

from . import __version__
from . import __tool__

from .pipeline import PARQUET_CODECS
from .ui.validation import check_flag_mask, check_input_path, check_output_path, resolve_output_format


logger = logging.getLogger(__name__)


LOG_LEVELS = {
    1: logging.DEBUG,
    2: logging.INFO,
    3: logging.WARNING,
    4: logging.ERROR,
}

PARQUET_OPTIONS = (
    ("parquet_compression_codec", "gzip"),
    ("parquet_block_size", 131072),
    ("parquet_page_size", 1048576),
    ("parquet_disable_dictionary", False),
)


def flag_mask(string):
    """ decimal, 0x-hex or 0o-octal, as samtools accepts them """
    try:
        return int(string, 0)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"invalid flag mask: `{string}`") from err


def validate_args(args):

    logger.debug(f"args: {args.__dict__}")

    if not check_input_path(args.input_path):
        raise ValueError(f"Cannot find input at `{args.input_path}`.")

    check_output_path(args.output_path, force_overwrite=args.force_overwrite)

    args.match_all_bits = check_flag_mask("-f", args.match_all_bits)
    args.match_no_bits = check_flag_mask("-F", args.match_no_bits)

    if args.match_all_bits & args.match_no_bits & 0xFFF:
        logger.warning(
            "-f %#x and -F %#x share bits %#x. No read can pass.",
            args.match_all_bits, args.match_no_bits, args.match_all_bits & args.match_no_bits & 0xFFF,
        )

    if args.cpus < 1:
        raise ValueError(f"--cpus needs to be at least 1, got {args.cpus}.")

    args.record_format = resolve_output_format(args.output_path, args.output_format)
    if args.record_format.htslib_format:
        changed = [
            f"--{option}" for option, default in PARQUET_OPTIONS if getattr(args, option) != default
        ]
        if changed:
            raise ValueError(f"{', '.join(changed)} only apply to parquet output, not {args.record_format.alias}.")

    return args


def add_view_args(view_ap):
    view_ap.add_argument(
        "input_path",
        metavar="INPUT",
        type=str,
        help="The parquet record table, BAM or SAM file to view. Input from STDIN can be specified with '-'.",
    )
    view_ap.add_argument(
        "output_path",
        metavar="OUTPUT",
        type=str,
        help=textwrap.dedent(
            """\
            Location to write output data. Paths ending in .sam or .bam are written
            as SAM/BAM, everything else as a parquet record table."""
        ),
    )
    view_ap.add_argument(
        "-f",
        dest="match_all_bits",
        metavar="N",
        type=flag_mask,
        default=0,
        help="Restrict to reads that match all of the bits in <N>.",
    )
    view_ap.add_argument(
        "-F",
        dest="match_no_bits",
        metavar="N",
        type=flag_mask,
        default=0,
        help="Restrict to reads that match none of the bits in <N>.",
    )
    view_ap.add_argument(
        "--output_format",
        type=str,
        choices=("sam", "bam", "parquet"),
        help="Output format. Overrides the format derived from the output path.",
    )
    view_ap.add_argument(
        "--cpus", "-t",
        type=int, default=1,
        help="Number of htslib threads for BAM (de)compression.",
    )
    view_ap.add_argument(
        "--force_overwrite",
        action="store_true",
        help="Overwrite existing output."
    )
    view_ap.add_argument(
        "--parquet_compression_codec",
        type=str,
        choices=PARQUET_CODECS,
        default="gzip",
        help="Parquet compression codec.",
    )
    view_ap.add_argument(
        "--parquet_block_size",
        type=int,
        default=131072,
        help="Parquet row group size [reads].",
    )
    view_ap.add_argument(
        "--parquet_page_size",
        type=int,
        default=1048576,
        help="Parquet data page size [bytes].",
    )
    view_ap.add_argument(
        "--parquet_disable_dictionary",
        action="store_true",
        help="Disable dictionary encoding in parquet output.",
    )


def add_log_level_arg(ap, default=2):
    ap.add_argument(
        "-l", "--log_level",
        type=int,
        choices=sorted(LOG_LEVELS),
        default=default,
        help="1=debug, 2=info, 3=warning, 4=error",
    )


def handle_args(args):

    log_ap = argparse.ArgumentParser(prog=__tool__, add_help=False)
    add_log_level_arg(log_ap)
    log_args, _ = log_ap.parse_known_args(args)

    logging.basicConfig(
        level=LOG_LEVELS[log_args.log_level],
        format='[%(asctime)s] %(message)s'
    )

    ap = argparse.ArgumentParser(
        prog=__tool__,
        formatter_class=argparse.RawTextHelpFormatter,
        parents=(log_ap,),
    )
    ap.add_argument(
        "--version", "-v", action="version", version="%(prog)s " + __version__
    )

    subparsers = ap.add_subparsers(dest="command", required=True)
    view_ap = subparsers.add_parser(
        "view",
        formatter_class=argparse.RawTextHelpFormatter,
        help="View certain reads from an alignment-record file.",
    )
    # no default here, a -l given before "view" has to survive the subparser
    add_log_level_arg(view_ap, default=argparse.SUPPRESS)
    add_view_args(view_ap)

    return validate_args(ap.parse_args(args))
