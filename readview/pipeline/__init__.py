# flake8: noqa

""" record pipeline """

from .record_source import RecordSource, load
from .record_writer import SaveOptions, save, PARQUET_CODECS
from .view_runner import ViewStats, run_view
