# pylint: disable=C0103

""" validation """
import logging
import os

from .. import RecordFormat


logger = logging.getLogger(__name__)


def check_input_path(f):
    """ stdin or an existing file """
    return f == "-" or os.path.isfile(f)


def check_output_path(f, force_overwrite=False):
    """ docstring """
    if f == "-":
        return True
    if os.path.exists(f) and not force_overwrite:
        raise ValueError(f"Output `{f}` exists. Specify --force_overwrite to overwrite.")
    out_dir = os.path.dirname(f)
    if out_dir and not os.path.isdir(out_dir):
        raise ValueError(f"Output directory `{out_dir}` does not exist.")
    return True


def check_flag_mask(name, mask):
    """ masks are taken as-is, only the low 12 bits are meaningful """
    if mask < 0:
        logger.warning("%s=%d is negative. Its two's-complement bits %#x are used.", name, mask, mask & 0xFFF)
    elif mask > 0xFFF:
        logger.warning("%s=%#x has bits beyond 0x800 set. These are ignored.", name, mask)
    return mask


def resolve_output_format(output_path, output_format=None):
    if output_format is not None:
        return RecordFormat.parse(output_format)
    return RecordFormat.from_path(output_path)
