""" load -> filter -> save """

import logging
from dataclasses import dataclass

from ..alignment import build_view_filters, describe_mask, filter_records
from .record_source import load
from .record_writer import SaveOptions, save


logger = logging.getLogger(__name__)


@dataclass
class ViewStats:
    total: int = 0
    passed: int = 0

    @property
    def filtered(self):
        return self.total - self.passed

    def __str__(self):
        return f"Total:{self.total} Passed filters: {self.passed} Filtered: {self.filtered}"


def _counted(records, stats):
    for record in records:
        stats.total += 1
        yield record


def run_view(input_path, output_path, match_all_bits=0, match_no_bits=0, options=None):
    """ Copy the reads of input_path that pass the flag masks to output_path. """
    options = options if options is not None else SaveOptions()

    filters = build_view_filters(match_all_bits, match_no_bits)
    if filters:
        logger.info(
            "Flag filters: all of %s, none of %s",
            describe_mask(match_all_bits) or "-",
            describe_mask(match_no_bits) or "-",
        )
    else:
        logger.info("No flag filters set, copying all reads.")

    stats = ViewStats()
    source = load(input_path, threads=options.threads)
    stats.passed = save(
        filter_records(_counted(source, stats), filters),
        output_path,
        options=options,
        source=source,
    )

    logger.info("%s", stats)
    return stats
