import logging

import pandas

from bpnn.core.datasets_handler import filter_blank_rows


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def load_rows(filename, **read_csv_kwargs):
    """ Read a CSV file with a header line into a list of rows

    Parameters
    ----------
    filename: str
        The CSV file

    read_csv_kwargs: dict
        Extra keyword arguments for :func:`pandas.read_csv`, e.g., `sep`

    Returns
    -------
    rows: list of dict
        One dict per non-blank line, mapping column name to the cell text

    """
    frame = pandas.read_csv(
        filename, dtype=str, keep_default_na=False, skip_blank_lines=True,
        **read_csv_kwargs)

    # Header names may carry stray whitespace
    frame.columns = [str(column).strip() for column in frame.columns]

    rows = filter_blank_rows(frame.to_dict(orient='records'))

    msg = "Read {} rows with columns {} from {}"
    logger.info(msg.format(len(rows), list(frame.columns), filename))

    return rows
