""" SamFlags """


class SamFlags:
    PAIRED = 0x1
    PROPERLY_PAIRED = 0x2
    UNMAPPED = 0x4
    MATE_UNMAPPED = 0x8
    REVERSE = 0x10
    MATE_REVERSE = 0x20
    FIRST_IN_PAIR = 0x40
    SECOND_IN_PAIR = 0x80
    SECONDARY_ALIGNMENT = 0x100
    QUAL_CHECK_FAILURE = 0x200
    PCR_OPTICAL_DUPLICATE = 0x400
    SUPPLEMENTARY_ALIGNMENT = 0x800

    ALL_FLAGS = 0xFFF

    NAMES = {
        PAIRED: "PAIRED",
        PROPERLY_PAIRED: "PROPERLY_PAIRED",
        UNMAPPED: "UNMAPPED",
        MATE_UNMAPPED: "MATE_UNMAPPED",
        REVERSE: "REVERSE",
        MATE_REVERSE: "MATE_REVERSE",
        FIRST_IN_PAIR: "FIRST_IN_PAIR",
        SECOND_IN_PAIR: "SECOND_IN_PAIR",
        SECONDARY_ALIGNMENT: "SECONDARY_ALIGNMENT",
        QUAL_CHECK_FAILURE: "QUAL_CHECK_FAILURE",
        PCR_OPTICAL_DUPLICATE: "PCR_OPTICAL_DUPLICATE",
        SUPPLEMENTARY_ALIGNMENT: "SUPPLEMENTARY_ALIGNMENT",
    }

    @staticmethod
    def is_set(flag, bit):
        return bool(flag & bit)

    @staticmethod
    def is_paired(flag):
        return bool(flag & SamFlags.PAIRED)

    @staticmethod
    def is_reverse_strand(flag):
        return bool(flag & SamFlags.REVERSE)

    @staticmethod
    def is_unmapped(flag):
        return bool(flag & SamFlags.UNMAPPED)

    @staticmethod
    def is_primary(flag):
        return not bool(flag & SamFlags.SECONDARY_ALIGNMENT)

    @staticmethod
    def set_bits(mask):
        """ flag bits set in mask, lowest first; bits beyond 0x800 are dropped """
        return [bit for bit in SamFlags.NAMES if mask & bit]

    @staticmethod
    def describe(mask):
        return [SamFlags.NAMES[bit] for bit in SamFlags.set_bits(mask)]
