""" saving alignment records """

import itertools
import json
import logging
from dataclasses import dataclass

import pandas as pd
import pyarrow
import pyarrow.parquet as pq
import pysam

from .. import RecordFormat
from ..alignment import FLAG_FIELDS
from ..errors import RecordFormatError, RecordPipelineError
from .record_source import HEADER_METADATA_KEY, RecordSource


logger = logging.getLogger(__name__)


PARQUET_CODECS = ("uncompressed", "snappy", "gzip", "brotli", "zstd", "lz4")

RECORD_TABLE_SCHEMA = pyarrow.schema(
    [
        ("qname", pyarrow.string()),
        ("flag", pyarrow.int32()),
        ("ref_name", pyarrow.string()),
        ("ref_pos", pyarrow.int64()),
        ("map_quality", pyarrow.int32()),
        ("cigar", pyarrow.string()),
        ("next_ref_name", pyarrow.string()),
        ("next_ref_pos", pyarrow.int64()),
        ("tlen", pyarrow.int64()),
        ("seq", pyarrow.string()),
        ("qual", pyarrow.string()),
        ("tags", pyarrow.list_(pyarrow.string())),
    ]
    + [(name, pyarrow.bool_()) for name in FLAG_FIELDS]
)


@dataclass
class SaveOptions:
    """ Output settings. Everything past threads only applies to record tables. """
    output_format: RecordFormat = None
    threads: int = 1
    compression: str = "gzip"
    row_group_size: int = 131072
    data_page_size: int = 1048576
    use_dictionary: bool = True

    @classmethod
    def from_args(cls, args):
        return cls(
            output_format=args.record_format,
            threads=args.cpus,
            compression=args.parquet_compression_codec,
            row_group_size=args.parquet_block_size,
            data_page_size=args.parquet_page_size,
            use_dictionary=not args.parquet_disable_dictionary,
        )


def _chunked(records, size):
    records = iter(records)
    while True:
        chunk = list(itertools.islice(records, size))
        if not chunk:
            return
        yield chunk


def write_alignment_file(records, header, destination, fmt, threads=1):
    if header is None:
        raise RecordFormatError(f"Cannot write {fmt.alias} output to {destination} without an alignment header.")

    n_written = 0
    try:
        # pylint: disable=E1101
        with pysam.AlignmentFile(destination, fmt.write_mode, header=header, threads=threads) as aln_out:
            for record in records:
                aln_out.write(record.to_pysam_alignment(aln_out.header))
                n_written += 1
    except (OSError, ValueError) as err:
        raise RecordPipelineError(destination, err) from err

    return n_written


def write_record_table(records, header, destination, options):
    schema = RECORD_TABLE_SCHEMA
    if header is not None:
        schema = schema.with_metadata({HEADER_METADATA_KEY: json.dumps(header).encode()})

    compression = "none" if options.compression == "uncompressed" else options.compression

    n_written = 0
    try:
        with pq.ParquetWriter(
            destination,
            schema,
            compression=compression,
            data_page_size=options.data_page_size,
            use_dictionary=options.use_dictionary,
        ) as table_out:
            for chunk in _chunked(records, options.row_group_size):
                frame = pd.DataFrame([record.to_row() for record in chunk], columns=schema.names)
                table_out.write_table(
                    pyarrow.Table.from_pandas(frame, schema=schema, preserve_index=False),
                    row_group_size=options.row_group_size,
                )
                n_written += len(chunk)
    except (OSError, pyarrow.ArrowException) as err:
        raise RecordPipelineError(destination, err) from err

    return n_written


def save(records, destination, options=None, source=None):
    """ Write records to destination and return how many were written.

    The alignment header comes from source, which defaults to records itself
    when records is a RecordSource. Filtered record streams pass the source
    they were read from.
    """
    options = options if options is not None else SaveOptions()
    fmt = options.output_format or RecordFormat.from_path(destination)

    if source is None and isinstance(records, RecordSource):
        source = records

    records = iter(records)
    # a streamed input only knows its header once reading has started
    first = next(records, None)
    header = source.header if source is not None else None
    if first is not None:
        records = itertools.chain([first], records)

    logger.info("Saving %s records to %s", fmt.alias, destination)

    if fmt.htslib_format:
        return write_alignment_file(records, header, destination, fmt, threads=options.threads)
    return write_record_table(records, header, destination, options)
