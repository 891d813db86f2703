""" Flag filters

Turns SAM flag bitmasks into read predicates. Each of the twelve flag bits
has a fixed truth value per record; a mask contributes one predicate per set
bit, comparing that truth value against the required state. All predicates
are combined with a logical AND.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List

from .alignment_record import AlignmentRecord
from .samflags import SamFlags


ReadFilter = Callable[[AlignmentRecord], bool]


@dataclass(frozen=True)
class FlagBit:
    """ Truth value of one sam flag bit, read off the record view. """
    bit: int
    field: str
    inverted: bool = False
    requires_paired: bool = False

    def is_set(self, read):
        value = getattr(read, self.field)
        if self.inverted:
            value = not value
        if self.requires_paired:
            return read.read_paired and value
        return value


# The record view stores "mapped"/"primary" where sam stores "unmapped"/"secondary",
# hence the inversions. For 0x8 the view stores "mate mapped", which is also False
# whenever the read is unpaired; 0x8 is only set if the read is paired *and*
# its mate is not mapped.
FLAG_BITS = (
    FlagBit(SamFlags.PAIRED, "read_paired"),
    FlagBit(SamFlags.PROPERLY_PAIRED, "proper_pair"),
    FlagBit(SamFlags.UNMAPPED, "read_mapped", inverted=True),
    FlagBit(SamFlags.MATE_UNMAPPED, "mate_mapped", inverted=True, requires_paired=True),
    FlagBit(SamFlags.REVERSE, "read_negative_strand"),
    FlagBit(SamFlags.MATE_REVERSE, "mate_negative_strand"),
    FlagBit(SamFlags.FIRST_IN_PAIR, "first_of_pair"),
    FlagBit(SamFlags.SECOND_IN_PAIR, "second_of_pair"),
    FlagBit(SamFlags.SECONDARY_ALIGNMENT, "primary_alignment", inverted=True),
    FlagBit(SamFlags.QUAL_CHECK_FAILURE, "failed_vendor_quality_checks"),
    FlagBit(SamFlags.PCR_OPTICAL_DUPLICATE, "duplicate_read"),
    FlagBit(SamFlags.SUPPLEMENTARY_ALIGNMENT, "supplementary_alignment"),
)


def _make_filter(flag_bit, ensure_value):
    def read_filter(read):
        return flag_bit.is_set(read) == ensure_value
    read_filter.__name__ = f"flag_{flag_bit.bit:#05x}_is_{str(ensure_value).lower()}"
    return read_filter


def build_filters(mask: int, require_set: bool = True) -> List[ReadFilter]:
    """ One predicate per flag bit set in mask, in bit order 0x1 .. 0x800.

    With require_set=True a read passes if it has every bit in mask set
    (samtools -f), with require_set=False if it has none of them (samtools -F).
    Bits beyond 0x800 are ignored.
    """
    return [
        _make_filter(flag_bit, require_set)
        for flag_bit in FLAG_BITS
        if mask & flag_bit.bit
    ]


def build_view_filters(match_all_bits: int = 0, match_no_bits: int = 0) -> List[ReadFilter]:
    return build_filters(match_all_bits) + build_filters(match_no_bits, require_set=False)


def combine_filters(filters: Iterable[ReadFilter]) -> ReadFilter:
    """ AND over all filters; no filters accepts everything. """
    filters = tuple(filters)

    def combined(read):
        return all(read_filter(read) for read_filter in filters)
    return combined


def filter_records(records: Iterable[AlignmentRecord], filters: List[ReadFilter]) -> Iterator[AlignmentRecord]:
    if not filters:
        yield from records
        return
    accept = combine_filters(filters)
    for read in records:
        if accept(read):
            yield read


def describe_mask(mask: int) -> List[str]:
    return SamFlags.describe(mask)
