# Utils module for Medoid Lab
from .csv_utils import detect_delimiter, detect_encoding
from .timing import Timer, timed

__all__ = [
    'detect_delimiter',
    'detect_encoding',
    'Timer',
    'timed',
]
