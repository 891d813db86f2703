""" loading alignment records """

import json
import logging

import pyarrow
import pyarrow.parquet as pq
import pysam

from .. import RecordFormat
from ..alignment import AlignmentRecord
from ..errors import RecordPipelineError


logger = logging.getLogger(__name__)

HEADER_METADATA_KEY = b"readview.header"


class RecordSource:
    """ Alignment records of one input, read lazily.

    header is the sam header as a dict (pysam AlignmentHeader.to_dict()), or
    None for record tables that were written without one.
    """

    def __init__(self, path, fmt=None, threads=1, batch_size=65536):
        self.path = path
        self.fmt = fmt if fmt is not None else RecordFormat.from_path(path)
        self.threads = threads
        self.batch_size = batch_size
        self.header = None
        self._read_header()

    def _read_header(self):
        try:
            if self.fmt.htslib_format:
                if self.path == "-":
                    # nothing to peek at on a stream, the header is read along with the records
                    return
                # pylint: disable=E1101
                with pysam.AlignmentFile(self.path, self._read_mode(), check_sq=False) as aln_stream:
                    self.header = aln_stream.header.to_dict()
            else:
                metadata = pq.read_schema(self.path).metadata or {}
                header = metadata.get(HEADER_METADATA_KEY)
                if header is not None:
                    self.header = json.loads(header)
                else:
                    logger.warning("%s carries no alignment header.", self.path)
        except (OSError, ValueError, pyarrow.ArrowException) as err:
            raise RecordPipelineError(self.path, err) from err

    def _read_mode(self):
        return "rb" if self.fmt == RecordFormat.BAM else "r"

    def __iter__(self):
        if self.fmt.htslib_format:
            yield from self._iter_alignment_file()
        else:
            yield from self._iter_record_table()

    def _iter_alignment_file(self):
        try:
            # pylint: disable=E1101
            aln_stream = pysam.AlignmentFile(self.path, self._read_mode(), check_sq=False, threads=self.threads)
        except (OSError, ValueError) as err:
            raise RecordPipelineError(self.path, err) from err

        with aln_stream:
            if self.header is None:
                self.header = aln_stream.header.to_dict()
            for pysam_aln in aln_stream:
                yield AlignmentRecord.from_pysam_alignment(pysam_aln)

    def _iter_record_table(self):
        try:
            table = pq.ParquetFile(self.path)
        except (OSError, pyarrow.ArrowException) as err:
            raise RecordPipelineError(self.path, err) from err

        with table:
            for batch in table.iter_batches(batch_size=self.batch_size):
                for row in batch.to_pandas().to_dict("records"):
                    yield AlignmentRecord.from_row(row)


def load(path, fmt=None, threads=1):
    """ Open path as a lazy RecordSource; fmt defaults to the path's format. """
    source = RecordSource(path, fmt=fmt, threads=threads)
    logger.info("Loading %s records from %s", source.fmt.alias, path)
    return source
