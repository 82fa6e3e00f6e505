# medoids/services/ingestion_service.py
"""
Service for ingesting point datasets (CSV/Excel files or raw coordinate pairs).

This is the validation boundary of the system: everything past it is a
well-formed Point with finite numeric coordinates.
"""
from io import BytesIO
import math
from numbers import Real
from typing import Iterable, Optional, Sequence
import zipfile

import numpy as np
import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from ..config import AppConfig
from ..domain.errors import InvalidPointError
from ..domain.point import Dataset, Point
from ..logging_config import get_logger
from ..utils.csv_utils import detect_delimiter, detect_encoding
from ..utils.timing import timed

logger = get_logger('ingestion_service')


class IngestionService:
    """
    Handles loading and validation of point datasets.

    Responsibilities:
    - Load CSV and Excel files
    - Detect encoding, delimiter and coordinate columns
    - Reject non-numeric or non-finite coordinates
    """

    def __init__(self, config: AppConfig):
        """
        Initialize the ingestion service.

        Args:
            config: Application configuration
        """
        self.config = config

    # ------------------------------------------------------------------
    # Raw coordinates
    # ------------------------------------------------------------------

    def point_from_pair(self, pair: Sequence, row: Optional[int] = None) -> Point:
        """
        Validate one (x, y) pair.

        Args:
            pair: Two numeric coordinates
            row: Optional position for error messages

        Returns:
            Point with the given coordinates

        Raises:
            InvalidPointError: If the pair is malformed
        """
        if isinstance(pair, Point):
            pair = pair.as_tuple()
        if isinstance(pair, (str, bytes)) or not hasattr(pair, '__len__') or len(pair) != 2:
            raise InvalidPointError(f"expected an (x, y) pair, got {pair!r}", row=row)

        coords = []
        for value in pair:
            # bool is a Real subclass but never a coordinate
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidPointError(f"coordinate {value!r} is not a number", row=row)
            if not math.isfinite(value):
                raise InvalidPointError(f"coordinate {value!r} is not finite", row=row)
            coords.append(_to_python_number(value))

        return Point(coords[0], coords[1])

    def build_dataset(self, name: str, pairs: Iterable[Sequence]) -> Dataset:
        """
        Build a validated dataset from coordinate pairs.

        Args:
            name: Dataset name
            pairs: Iterable of (x, y) pairs

        Returns:
            Dataset containing one Point per pair

        Raises:
            InvalidPointError: On the first malformed pair
        """
        points = [self.point_from_pair(pair, row=i) for i, pair in enumerate(pairs)]
        return Dataset(name=name, points=points)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def load_file(self, file_bytes: bytes, filename: str) -> pd.DataFrame:
        """
        Load a point file (CSV or Excel) into a DataFrame.

        Args:
            file_bytes: Raw bytes of the file
            filename: Original filename (used for format detection)

        Returns:
            DataFrame containing the raw rows

        Raises:
            ValueError: If file format is not supported or the workbook is unreadable
        """
        logger.info(f"Loading point file: {filename}")

        file_obj = BytesIO(file_bytes)
        filename_lower = filename.lower()

        if filename_lower.endswith('.csv'):
            return self._load_csv(file_obj, file_bytes)
        elif filename_lower.endswith('.xlsx'):
            return self._load_excel(file_obj, filename)
        else:
            raise ValueError(f"Unsupported file format: {filename}")

    def _load_csv(self, file_obj: BytesIO, file_bytes: bytes) -> pd.DataFrame:
        encoding = detect_encoding(
            file_bytes,
            fallback=self.config.ingestion.fallback_encoding
        )
        logger.debug(f"Detected encoding: {encoding}")

        sample = file_bytes[:4096].decode(encoding, errors='ignore')
        delimiter = detect_delimiter(sample, self.config.ingestion.csv_delimiters)
        logger.debug(f"Detected delimiter: {repr(delimiter)}")

        file_obj.seek(0)
        df = pd.read_csv(file_obj, delimiter=delimiter, encoding=encoding)
        logger.info(f"Loaded CSV with {len(df)} rows, {len(df.columns)} columns")
        return df

    def _load_excel(self, file_obj: BytesIO, filename: str) -> pd.DataFrame:
        try:
            df = pd.read_excel(file_obj, engine='openpyxl')
        except (zipfile.BadZipFile, InvalidFileException, KeyError) as e:
            # openpyxl reports a corrupt or non-workbook archive in several ways
            raise ValueError(f"Could not read {filename}: not a valid .xlsx workbook ({e})") from e
        logger.info(f"Loaded Excel with {len(df)} rows, {len(df.columns)} columns")
        return df

    def detect_coordinate_columns(self, df: pd.DataFrame) -> tuple:
        """
        Identify the x and y columns of a DataFrame.

        Configured column names are tried first; otherwise the first two
        numeric columns are used.

        Args:
            df: DataFrame to analyze

        Returns:
            Tuple of (x_column, y_column)

        Raises:
            InvalidPointError: If no coordinate columns can be found
        """
        columns = [str(c).strip() for c in df.columns]
        df.columns = columns

        x_col = next((c for c in self.config.ingestion.x_columns if c in columns), None)
        y_col = next((c for c in self.config.ingestion.y_columns if c in columns), None)
        if x_col and y_col:
            return x_col, y_col

        numeric = [c for c in columns if pd.api.types.is_numeric_dtype(df[c])]
        if len(numeric) >= 2:
            logger.debug(f"No named coordinate columns, using {numeric[0]!r} and {numeric[1]!r}")
            return numeric[0], numeric[1]

        raise InvalidPointError(f"No x/y coordinate columns found in {columns}")

    def dataframe_to_dataset(self, df: pd.DataFrame, name: str) -> Dataset:
        """
        Convert a DataFrame with coordinate columns to a dataset.

        Args:
            df: Raw DataFrame
            name: Dataset name

        Returns:
            Validated Dataset

        Raises:
            InvalidPointError: If a row has a missing or non-numeric coordinate
        """
        x_col, y_col = self.detect_coordinate_columns(df)

        coords = df[[x_col, y_col]].apply(pd.to_numeric, errors='coerce')
        invalid = ~np.isfinite(coords.to_numpy(dtype=float)).all(axis=1)
        if invalid.any():
            bad_row = int(np.flatnonzero(invalid)[0])
            raw = tuple(df.iloc[bad_row][[x_col, y_col]])
            raise InvalidPointError(f"invalid coordinates {raw!r}", row=bad_row)

        points = [
            Point(_to_python_number(x), _to_python_number(y))
            for x, y in coords.itertuples(index=False, name=None)
        ]
        logger.info(f"Dataset '{name}': {len(points)} points from columns {x_col!r}/{y_col!r}")
        return Dataset(name=name, points=points)

    @timed("Load dataset")
    def load_dataset(self, file_bytes: bytes, filename: str, name: Optional[str] = None) -> Dataset:
        """
        Load and validate a dataset file in one call.

        Args:
            file_bytes: Raw bytes of the file
            filename: Original filename
            name: Dataset name (default: filename)

        Returns:
            Validated Dataset
        """
        df = self.load_file(file_bytes, filename)
        return self.dataframe_to_dataset(df, name or filename)


def _to_python_number(value) -> float:
    """Unwrap numpy scalars and keep integral values as int."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
