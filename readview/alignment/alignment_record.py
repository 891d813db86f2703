""" alignment record view """

from dataclasses import dataclass, field

import pysam

from .samflags import SamFlags


FLAG_FIELDS = (
    "read_paired",
    "proper_pair",
    "read_mapped",
    "mate_mapped",
    "read_negative_strand",
    "mate_negative_strand",
    "first_of_pair",
    "second_of_pair",
    "primary_alignment",
    "failed_vendor_quality_checks",
    "duplicate_read",
    "supplementary_alignment",
)


# pylint: disable=R0902
@dataclass(frozen=True)
class AlignmentRecord:
    """ Read-only view of one alignment.

    Holds the SAM columns of the alignment and exposes the flag word as named
    boolean fields. Pair-dependent fields are False for unpaired reads: there
    is no mate to be mapped, on the reverse strand or first/second of.
    """
    qname: str = "*"
    flag: int = 0
    ref_name: str = "*"
    ref_pos: int = 0
    map_quality: int = 0
    cigar: str = "*"
    next_ref_name: str = "*"
    next_ref_pos: int = 0
    tlen: int = 0
    seq: str = "*"
    qual: str = "*"
    tags: tuple = field(default=())

    @classmethod
    def from_pysam_alignment(cls, pysam_aln):
        """ ref_pos/next_ref_pos are 1-based, as in sam text """
        aln = pysam_aln.to_dict()
        return cls(
            aln["name"],
            int(aln["flag"]),
            aln["ref_name"],
            int(aln["ref_pos"]),
            int(aln["map_quality"]),
            aln["cigar"],
            aln["next_ref_name"],
            int(aln["next_ref_pos"]),
            int(aln["length"]),
            aln["seq"],
            aln["qual"],
            tuple(aln.get("tags", ())),
        )

    def to_pysam_alignment(self, header):
        """ header: pysam.AlignmentHeader the reference names resolve against """
        columns = [
            self.qname,
            str(self.flag),
            self.ref_name,
            str(self.ref_pos),
            str(self.map_quality),
            self.cigar,
            self.next_ref_name,
            str(self.next_ref_pos),
            str(self.tlen),
            self.seq,
            self.qual,
        ]
        return pysam.AlignedSegment.fromstring("\t".join(columns + list(self.tags)), header)

    def to_row(self):
        """ sam columns plus the boolean flag view, for record tables """
        row = {
            "qname": self.qname,
            "flag": self.flag,
            "ref_name": self.ref_name,
            "ref_pos": self.ref_pos,
            "map_quality": self.map_quality,
            "cigar": self.cigar,
            "next_ref_name": self.next_ref_name,
            "next_ref_pos": self.next_ref_pos,
            "tlen": self.tlen,
            "seq": self.seq,
            "qual": self.qual,
            "tags": list(self.tags),
        }
        row.update((name, getattr(self, name)) for name in FLAG_FIELDS)
        return row

    @classmethod
    def from_row(cls, row):
        """ boolean flag columns are derived data and are not read back """
        return cls(
            str(row["qname"]),
            int(row["flag"]),
            str(row["ref_name"]),
            int(row["ref_pos"]),
            int(row["map_quality"]),
            str(row["cigar"]),
            str(row["next_ref_name"]),
            int(row["next_ref_pos"]),
            int(row["tlen"]),
            str(row["seq"]),
            str(row["qual"]),
            tuple(str(tag) for tag in row["tags"]) if row["tags"] is not None else (),
        )

    # flag view -- only the paired bits depend on each other
    @property
    def read_paired(self):
        return SamFlags.is_paired(self.flag)

    @property
    def proper_pair(self):
        return self.read_paired and SamFlags.is_set(self.flag, SamFlags.PROPERLY_PAIRED)

    @property
    def read_mapped(self):
        return not SamFlags.is_unmapped(self.flag)

    @property
    def mate_mapped(self):
        # inversion of sam's "mate unmapped"; defaults to False without a mate
        return self.read_paired and not SamFlags.is_set(self.flag, SamFlags.MATE_UNMAPPED)

    @property
    def read_negative_strand(self):
        return SamFlags.is_reverse_strand(self.flag)

    @property
    def mate_negative_strand(self):
        return self.read_paired and SamFlags.is_set(self.flag, SamFlags.MATE_REVERSE)

    @property
    def first_of_pair(self):
        return self.read_paired and SamFlags.is_set(self.flag, SamFlags.FIRST_IN_PAIR)

    @property
    def second_of_pair(self):
        return self.read_paired and SamFlags.is_set(self.flag, SamFlags.SECOND_IN_PAIR)

    @property
    def primary_alignment(self):
        return SamFlags.is_primary(self.flag)

    @property
    def failed_vendor_quality_checks(self):
        return SamFlags.is_set(self.flag, SamFlags.QUAL_CHECK_FAILURE)

    @property
    def duplicate_read(self):
        return SamFlags.is_set(self.flag, SamFlags.PCR_OPTICAL_DUPLICATE)

    @property
    def supplementary_alignment(self):
        return SamFlags.is_set(self.flag, SamFlags.SUPPLEMENTARY_ALIGNMENT)

    def __str__(self):
        return f"{self.qname}:{self.ref_name}:{self.ref_pos}({self.cigar};{self.flag};{self.map_quality})"
