"""Pytest configuration and fixtures."""

import pysam
import pytest

from readview.alignment import AlignmentRecord, SamFlags


HEADER = {
    "HD": {"VN": "1.6", "SO": "unsorted"},
    "SQ": [
        {"SN": "chr1", "LN": 1000},
        {"SN": "chr2", "LN": 500},
    ],
}


@pytest.fixture
def header():
    return {"HD": dict(HEADER["HD"]), "SQ": [dict(sq) for sq in HEADER["SQ"]]}


@pytest.fixture
def make_record():
    """Factory fixture for mapped 10bp alignments on chr1."""

    def _make(qname="read1", flag=0, **fields):
        paired = flag & SamFlags.PAIRED
        mate_mapped = paired and not flag & SamFlags.MATE_UNMAPPED
        unmapped = flag & SamFlags.UNMAPPED
        values = {
            "ref_name": "*" if unmapped else "chr1",
            "ref_pos": 0 if unmapped else 101,
            "map_quality": 0 if unmapped else 60,
            "cigar": "*" if unmapped else "10M",
            "next_ref_name": "=" if mate_mapped and not unmapped else "*",
            "next_ref_pos": 301 if mate_mapped else 0,
            "tlen": 0,
            "seq": "ACGTACGTAC",
            "qual": "IIIIIIIIII",
            "tags": ("NM:i:0",),
        }
        values.update(fields)
        return AlignmentRecord(qname=qname, flag=flag, **values)

    return _make


@pytest.fixture
def mixed_records(make_record):
    """One record per typical flag combination."""
    return [
        make_record("single", 0),
        make_record("single_rev", SamFlags.REVERSE),
        make_record("single_unmapped", SamFlags.UNMAPPED),
        make_record("pair_r1", 0x1 | 0x2 | 0x20 | 0x40),
        make_record("pair_r2", 0x1 | 0x2 | 0x10 | 0x80),
        make_record("orphan_r1", 0x1 | 0x8 | 0x40),
        make_record("secondary", 0x1 | 0x2 | 0x40 | 0x100),
        make_record("qcfail", 0x200),
        make_record("dup", 0x1 | 0x2 | 0x40 | 0x400),
        make_record("suppl", 0x800),
    ]


@pytest.fixture
def write_sam(tmp_path, header):
    """Write records to a sam (or bam, by suffix) file and return its path."""

    def _write(records, name="input.sam"):
        path = tmp_path / name
        mode = "wb" if name.endswith(".bam") else "w"
        with pysam.AlignmentFile(str(path), mode, header=header) as aln_out:
            for record in records:
                aln_out.write(record.to_pysam_alignment(aln_out.header))
        return path

    return _write
