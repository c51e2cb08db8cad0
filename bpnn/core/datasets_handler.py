from collections import namedtuple
import logging

import numpy

from .exception import ClassMismatch, MalformedInput
from .normalizer import parse_number


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


TRAINING_DATASET_KEY = 'training'
TESTING_DATASET_KEY = 'testing'
DATASET_KEYS = (
    TRAINING_DATASET_KEY,
    TESTING_DATASET_KEY
)

DEFAULT_TRAINING_FRACTION = 0.7

# Guards floor(n * fraction) against products like 0.7 * n landing just
# below an integer
_FLOOR_EPSILON = 1e-9


# Yielded by `iterate_examples`
DatasetExample = namedtuple('DatasetExample', ['index', 'inputs', 'label'])


def validate_random_state(random_state):
    """ Returns a RandomState, creating an unseeded one (with a warning) when
    `random_state` is None
    """
    if not random_state:
        random_state = numpy.random.RandomState()
        msg = ("RandomState not provided; results will "
               "not be reproducible")
        logger.warning(msg)
    elif not isinstance(random_state, numpy.random.RandomState):
        msg = "`random_state` ({}) not instance numpy.random.RandomState"
        raise TypeError(msg.format(type(random_state)))

    return random_state


def is_blank_row(row):
    """ Returns True when every cell of `row` is empty or whitespace
    """
    for cell in row.values():
        if cell is None:
            continue
        if isinstance(cell, str) and cell.strip() == '':
            continue
        return False
    return True


def filter_blank_rows(rows):
    """ Drop the rows whose cells are all empty (e.g., trailing CSV lines)
    """
    kept = [row for row in rows if not is_blank_row(row)]

    if len(kept) != len(rows):
        msg = "Dropped {} blank row(s)"
        logger.info(msg.format(len(rows) - len(kept)))

    return kept


def validate_rows(rows, label_column):
    """ Raise `MalformedInput` if there are no rows or a row lacks a label
    """
    if len(rows) == 0:
        raise MalformedInput("The dataset has zero rows")

    for irow, row in enumerate(rows):
        if label_column not in row:
            msg = "Row {} is missing the label column `{}`"
            raise MalformedInput(msg.format(irow, label_column))


def feature_columns(rows, label_column):
    """ The ordered list of input columns, fixed from the first row. Input
    vectors are always built in this order.
    """
    validate_rows(rows, label_column)

    columns = [column for column in rows[0] if column != label_column]

    if len(columns) == 0:
        msg = "Rows have no input columns besides the label `{}`"
        raise MalformedInput(msg.format(label_column))

    return columns


class ClassMapping:
    """ Maps each label to a zero-based index in first-seen order
    """
    def __init__(self, labels=()):
        self._index = {}
        self._labels = []
        for label in labels:
            self.add(label)

    @classmethod
    def from_rows(cls, rows, label_column):
        validate_rows(rows, label_column)
        return cls(row[label_column] for row in rows)

    def add(self, label):
        """ Add `label` if not yet present; returns its index
        """
        if label not in self._index:
            self._index[label] = len(self._labels)
            self._labels.append(label)
        return self._index[label]

    @property
    def labels(self):
        return list(self._labels)

    def index(self, label):
        try:
            return self._index[label]
        except KeyError:
            msg = "Label `{}` is not in the class mapping {}"
            raise ClassMismatch(msg.format(label, self._labels))

    def label(self, index):
        return self._labels[index]

    def one_hot(self, label):
        """ Desired output vector for `label`
        """
        vector = numpy.zeros(len(self))
        vector[self.index(label)] = 1.0
        return vector

    def __contains__(self, label):
        return label in self._index

    def __len__(self):
        return len(self._labels)

    def __iter__(self):
        return iter(self._labels)

    def __eq__(self, other):
        if not isinstance(other, ClassMapping):
            return NotImplemented
        return self._labels == other._labels

    def __repr__(self):
        return "<ClassMapping {}>".format(self._index)


def input_vector(row, columns, index=None):
    """ Parse the cells of `row` at `columns` into a float array
    """
    inputs = numpy.zeros(len(columns))

    for icolumn, column in enumerate(columns):
        if column not in row:
            msg = "Row {} is missing the input column `{}`"
            raise MalformedInput(msg.format(index, column))

        value = parse_number(row[column])
        if value is None:
            msg = "Row {}, column `{}`: value {!r} is not numeric"
            raise MalformedInput(msg.format(index, column, row[column]))

        inputs[icolumn] = value

    return inputs


def iterate_examples(rows, columns, label_column):
    """ Iterates through the rows, yielding a `DatasetExample` per row with
    the inputs ordered by `columns`
    """
    for index, row in enumerate(rows):
        if label_column not in row:
            msg = "Row {} is missing the label column `{}`"
            raise MalformedInput(msg.format(index, label_column))

        yield DatasetExample(
            index=index,
            inputs=input_vector(row, columns, index=index),
            label=row[label_column])


def n_training_examples(n_examples, training_fraction):
    """ Number of a class's `n_examples` assigned to training. A class too
    small to leave any test example (round(n * (1 - fraction)) == 0) goes
    entirely to training. Every non-empty class keeps at least one
    training example, so small fractions never leave a class untrained.
    """
    n_testing = n_examples * (1 - training_fraction)
    if int(numpy.floor(n_testing + 0.5)) == 0:
        return n_examples
    n_training = int(
        numpy.floor(n_examples * training_fraction + _FLOOR_EPSILON))
    return max(n_training, min(n_examples, 1))


def stratified_split(rows, label_column,
                     training_fraction=DEFAULT_TRAINING_FRACTION,
                     random_state=None, shuffle=True):
    """ Split `rows` into training and testing datasets so that each class
    is represented in both proportionally

    Parameters
    ----------
    rows: list of dict
        The (normalized) rows

    label_column: str
        The name of the label column

    training_fraction: float, default=0.7
        The fraction of each class that is placed in the training dataset

    random_state: numpy.random.RandomState, default=None
        Provide for reproducible results

    shuffle: bool, default=True
        If True, each dataset is permuted after the per-class selection;
        otherwise rows are grouped by class in first-seen order

    Returns
    -------
    datasets: dict
        `datasets['training']` and `datasets['testing']` are lists of rows

    """
    validate_rows(rows, label_column)

    if not 0 < training_fraction < 1:
        msg = "`training_fraction` ({}) must be in the interval (0, 1)"
        raise ValueError(msg.format(training_fraction))

    random_state = validate_random_state(random_state)

    # Group row indices by class, in first-seen order
    class_indices = {}
    for index, row in enumerate(rows):
        class_indices.setdefault(row[label_column], []).append(index)

    training_indices = []
    testing_indices = []

    for label, indices in class_indices.items():
        n_training = n_training_examples(len(indices), training_fraction)
        permuted = random_state.permutation(indices)

        training_indices.extend(permuted[:n_training])
        testing_indices.extend(permuted[n_training:])

        if n_training == len(indices):
            msg = "Class `{}` ({} row(s)) is absent from the testing dataset"
            logger.warning(msg.format(label, len(indices)))

    if shuffle:
        training_indices = random_state.permutation(training_indices)
        testing_indices = random_state.permutation(testing_indices)

    datasets = {
        TRAINING_DATASET_KEY: [rows[i] for i in training_indices],
        TESTING_DATASET_KEY: [rows[i] for i in testing_indices],
    }

    msg = "Split {} rows into {} training and {} testing rows"
    logger.info(msg.format(len(rows),
                           len(datasets[TRAINING_DATASET_KEY]),
                           len(datasets[TESTING_DATASET_KEY])))

    return datasets
