from collections import namedtuple
import logging

import numpy

from .exception import MalformedInput


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

# Number of decimals kept in normalized values
PRECISION = 4


NormalizationRange = namedtuple('NormalizationRange', ['min', 'max'])


def parse_number(value):
    """ Returns `value` as a finite float, or None when it does not parse
    """
    if isinstance(value, bool) or value is None:
        return None

    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, TypeError):
        return None

    return number if numpy.isfinite(number) else None


def fit(rows, ignore_columns=()):
    """ Compute the per-column min and max over `rows`

    Parameters
    ----------
    rows: list of dict
        The rows to scan. Cells that don't parse as numbers are skipped.

    ignore_columns: iterable of str, default=()
        Columns that are never normalized (e.g., the label column)

    Returns
    -------
    params: dict
        Maps each column with at least one numeric cell to its
        :class:`NormalizationRange`

    """
    if len(rows) == 0:
        raise MalformedInput("Cannot fit normalization to zero rows")

    ignore_columns = set(ignore_columns)
    params = {}

    for row in rows:
        for column, cell in row.items():
            if column in ignore_columns:
                continue

            value = parse_number(cell)
            if value is None:
                continue

            if column not in params:
                params[column] = NormalizationRange(min=value, max=value)
            else:
                bounds = params[column]
                params[column] = NormalizationRange(
                    min=min(bounds.min, value), max=max(bounds.max, value))

    return params


def transform(rows, params):
    """ Min-max scale the numeric cells of `rows` using `params`. Columns
    absent from `params` and cells that don't parse are copied unchanged.
    The rows are not modified; new rows are returned.
    """
    transformed = []

    for irow, row in enumerate(rows):
        new_row = {}

        for column, cell in row.items():
            value = parse_number(cell)

            if value is None or column not in params:
                new_row[column] = cell
                continue

            bounds = params[column]
            if bounds.max == bounds.min:
                msg = ("Column `{}` has zero range (min = max = {}); "
                       "cannot normalize row {}")
                raise MalformedInput(msg.format(column, bounds.min, irow))

            scaled = (value - bounds.min) / (bounds.max - bounds.min)
            new_row[column] = round(scaled, PRECISION)

        transformed.append(new_row)

    return transformed


class Normalizer:
    """ Min-max normalization fitted once from the training rows and then
    applied, unchanged, to any other rows
    """
    def __init__(self, ignore_columns=()):
        self.ignore_columns = tuple(ignore_columns)
        self.params = None

    @property
    def is_fitted(self):
        return self.params is not None

    def fit(self, rows):
        self.params = fit(rows, ignore_columns=self.ignore_columns)

        degenerate = [column for column, bounds in self.params.items()
                      if bounds.min == bounds.max]
        if degenerate:
            msg = "Columns with zero range cannot be normalized: {}"
            logger.warning(msg.format(', '.join(sorted(degenerate))))

        return self.params

    def transform(self, rows):
        if not self.is_fitted:
            raise RuntimeError("Normalizer must be fit before transform")
        return transform(rows, self.params)

    def fit_transform(self, rows):
        self.fit(rows)
        return self.transform(rows)
