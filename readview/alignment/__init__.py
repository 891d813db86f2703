# flake8: noqa

""" alignment records and flag filters """

from .alignment_record import AlignmentRecord, FLAG_FIELDS
from .flag_filters import build_filters, build_view_filters, combine_filters, filter_records, describe_mask
from .samflags import SamFlags
