"""Tests for the sam flag filters."""

import pytest

from readview.alignment import (
    AlignmentRecord,
    SamFlags,
    build_filters,
    build_view_filters,
    combine_filters,
    describe_mask,
    filter_records,
)


def passes(record, match_all_bits=0, match_no_bits=0):
    return combine_filters(build_view_filters(match_all_bits, match_no_bits))(record)


# flag words for which the sam bit and the record view agree bit by bit
SIMPLE_BITS = (0x1, 0x10, 0x200, 0x400, 0x800)
PAIRED_BITS = (0x2, 0x20, 0x40, 0x80)


class TestBuildFilters:
    def test_empty_mask_builds_no_filters(self):
        assert build_filters(0) == []
        assert build_filters(0, require_set=False) == []

    def test_one_filter_per_set_bit(self):
        assert len(build_filters(0xFFF)) == 12
        assert len(build_filters(0x1 | 0x4 | 0x800)) == 3

    def test_bits_beyond_0x800_are_ignored(self):
        assert build_filters(0x1000) == []
        assert len(build_filters(0x1001)) == 1

    def test_filters_are_emitted_in_bit_order(self):
        names = [f.__name__ for f in build_filters(0x800 | 0x4 | 0x1)]
        assert names == ["flag_0x001_is_true", "flag_0x004_is_true", "flag_0x800_is_true"]

    def test_match_none_filters_are_named_after_required_state(self):
        names = [f.__name__ for f in build_filters(0x100, require_set=False)]
        assert names == ["flag_0x100_is_false"]


class TestSingleBits:
    @pytest.mark.parametrize("bit", SIMPLE_BITS)
    def test_simple_bit_match_all(self, make_record, bit):
        assert passes(make_record(flag=bit), match_all_bits=bit)
        assert not passes(make_record(flag=0), match_all_bits=bit)

    @pytest.mark.parametrize("bit", SIMPLE_BITS)
    def test_simple_bit_match_none(self, make_record, bit):
        assert not passes(make_record(flag=bit), match_no_bits=bit)
        assert passes(make_record(flag=0), match_no_bits=bit)

    @pytest.mark.parametrize("bit", PAIRED_BITS)
    def test_pair_bits_require_a_paired_read(self, make_record, bit):
        assert passes(make_record(flag=SamFlags.PAIRED | bit), match_all_bits=bit)
        # without 0x1 the pair bits carry no meaning
        assert not passes(make_record(flag=bit), match_all_bits=bit)
        assert passes(make_record(flag=bit), match_no_bits=bit)

    def test_paired(self, make_record):
        assert not passes(make_record(flag=0), match_all_bits=0x1)
        assert passes(make_record(flag=0x1 | 0x8 | 0x400 | 0x10), match_all_bits=0x1)

    def test_read_unmapped(self, make_record):
        mapped, unmapped = make_record(flag=0), make_record(flag=SamFlags.UNMAPPED)
        assert mapped.read_mapped and not unmapped.read_mapped
        assert not passes(mapped, match_all_bits=0x4)
        assert passes(unmapped, match_all_bits=0x4)
        assert passes(mapped, match_no_bits=0x4)
        assert not passes(unmapped, match_no_bits=0x4)

    def test_secondary(self, make_record):
        primary, secondary = make_record(flag=0), make_record(flag=SamFlags.SECONDARY_ALIGNMENT)
        assert not passes(primary, match_all_bits=0x100)
        assert passes(secondary, match_all_bits=0x100)
        assert passes(primary, match_no_bits=0x100)
        assert not passes(secondary, match_no_bits=0x100)


class TestMateUnmapped:
    def test_unpaired_read_is_not_mate_unmapped(self, make_record):
        read = make_record(flag=0)
        assert not read.mate_mapped
        assert not passes(read, match_all_bits=0x8)

    def test_paired_read_with_unmapped_mate(self, make_record):
        read = make_record(flag=SamFlags.PAIRED | SamFlags.MATE_UNMAPPED)
        assert not read.mate_mapped
        assert passes(read, match_all_bits=0x8)
        assert not passes(read, match_no_bits=0x8)

    def test_paired_read_with_mapped_mate(self, make_record):
        read = make_record(flag=SamFlags.PAIRED)
        assert read.mate_mapped
        assert not passes(read, match_all_bits=0x8)
        assert passes(read, match_no_bits=0x8)

    def test_unpaired_read_passes_match_none(self, make_record):
        # the pairing check is part of the bit, so it also holds for -F
        assert passes(make_record(flag=0), match_no_bits=0x8)

    def test_stray_mate_unmapped_bit_on_unpaired_read(self, make_record):
        read = make_record(flag=SamFlags.MATE_UNMAPPED)
        assert not passes(read, match_all_bits=0x8)
        assert passes(read, match_no_bits=0x8)


class TestCombination:
    def test_no_masks_accept_everything(self, mixed_records):
        accept = combine_filters(build_view_filters(0, 0))
        assert all(accept(read) for read in mixed_records)

    def test_empty_filter_list_accepts(self, make_record):
        assert combine_filters([])(make_record(flag=0xFFF))

    def test_masks_are_anded(self, make_record):
        paired_primary = make_record(flag=0x1)
        paired_secondary = make_record(flag=0x1 | 0x100)
        single_primary = make_record(flag=0)

        assert passes(paired_primary, match_all_bits=0x1, match_no_bits=0x100)
        assert not passes(paired_secondary, match_all_bits=0x1, match_no_bits=0x100)
        assert not passes(single_primary, match_all_bits=0x1, match_no_bits=0x100)

    def test_all_bits_of_match_all_mask_are_required(self, make_record):
        assert passes(make_record(flag=0x1 | 0x40 | 0x10), match_all_bits=0x1 | 0x40)
        assert not passes(make_record(flag=0x1 | 0x80), match_all_bits=0x1 | 0x40)

    def test_any_bit_of_match_none_mask_rejects(self, make_record):
        assert not passes(make_record(flag=0x400), match_no_bits=0x400 | 0x800)
        assert not passes(make_record(flag=0x800), match_no_bits=0x400 | 0x800)
        assert passes(make_record(flag=0x200), match_no_bits=0x400 | 0x800)

    def test_contradicting_masks_reject_everything(self, mixed_records):
        accept = combine_filters(build_view_filters(0x1, 0x1))
        assert not any(accept(read) for read in mixed_records)

    def test_every_flag_word_agrees_with_samtools_semantics(self, make_record):
        # outside 0x8 and the pair bits, -f/-F is a plain bit test on the flag word
        for flag in range(0, 0x1000, 0x11):
            if flag & (0x8 | 0x2 | 0x20 | 0x40 | 0x80) and not flag & 0x1:
                continue
            read = make_record(flag=flag)
            for mask in SIMPLE_BITS + PAIRED_BITS + (0x4, 0x8, 0x100):
                assert passes(read, match_all_bits=mask) == (flag & mask == mask)
                assert passes(read, match_no_bits=mask) == (flag & mask == 0)


class TestFilterRecords:
    def test_selects_matching_reads_in_order(self, mixed_records):
        filters = build_view_filters(0x1, 0x100 | 0x400)
        kept = [read.qname for read in filter_records(mixed_records, filters)]
        assert kept == ["pair_r1", "pair_r2", "orphan_r1"]

    def test_without_filters_passes_everything(self, mixed_records):
        assert list(filter_records(mixed_records, [])) == mixed_records

    def test_filtering_twice_is_idempotent(self, mixed_records):
        filters = build_view_filters(0x1, 0x8)
        once = list(filter_records(mixed_records, filters))
        twice = list(filter_records(once, filters))
        assert once == twice
        assert [read.qname for read in once] == ["pair_r1", "pair_r2", "secondary", "dup"]

    def test_is_lazy(self, make_record):
        def reads():
            yield make_record("a", 0x1)
            raise AssertionError("read past the first record")

        assert next(filter_records(reads(), build_filters(0x1))).qname == "a"

    def test_filters_never_raise_on_default_record(self):
        filters = build_view_filters(0xFFF, 0) + build_view_filters(0, 0xFFF)
        results = [read_filter(AlignmentRecord()) for read_filter in filters]
        assert all(isinstance(result, bool) for result in results)


def test_describe_mask():
    assert describe_mask(0) == []
    assert describe_mask(0x904) == ["UNMAPPED", "SECONDARY_ALIGNMENT", "SUPPLEMENTARY_ALIGNMENT"]
    assert describe_mask(0x1000) == []
