""" readview: SAM flag based read filtering """

import os
from enum import Enum, unique


__version__ = "0.3.1"
__tool__ = "readview"


@unique
class RecordFormat(Enum):
    SAM = ("sam", True, "w")
    BAM = ("bam", True, "wb")
    PARQUET = ("parquet", False, None)

    def __init__(self, alias, htslib_format, write_mode):
        self.alias = alias
        # sam/bam are read and written through pysam, parquet through pyarrow
        self.htslib_format = htslib_format
        self.write_mode = write_mode

    @classmethod
    def parse(cls, string):
        for member in cls.__members__.values():
            if member.alias == string.lower():
                return member
        return None

    @classmethod
    def from_path(cls, path):
        """ sam/bam by extension, everything else is a parquet record table """
        if path == "-":
            # stdin is autodetected by htslib, stdout gets sam text
            return cls.SAM
        ext = os.path.splitext(path.rstrip("/"))[1].lower().lstrip(".")
        fmt = cls.parse(ext)
        return fmt if fmt is not None else cls.PARQUET
