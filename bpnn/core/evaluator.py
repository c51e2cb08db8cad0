from collections import namedtuple
import logging

import numpy

from .datasets_handler import ClassMapping, iterate_examples
from .exception import ClassMismatch, ConfigurationError, MalformedInput


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


EvaluationReport = namedtuple(
    'EvaluationReport',
    ['confusion_matrix', 'global_accuracy', 'per_class_accuracy',
     'class_mapping'])


def confusion_matrix(true_classes, predicted_classes, n_classes):
    """ Count matrix with rows indexed by the true class and columns by the
    predicted class
    """
    if len(true_classes) != len(predicted_classes):
        msg = "Mismatch in number of samples: true ({}), predicted ({})"
        raise ValueError(msg.format(len(true_classes),
                                    len(predicted_classes)))

    matrix = numpy.zeros((n_classes, n_classes), dtype=int)

    for true_class, predicted_class in zip(true_classes, predicted_classes):
        matrix[true_class, predicted_class] += 1

    return matrix


def accuracies(matrix):
    """ Global and per-class accuracies, in percent, of a confusion matrix

    Returns
    -------
    global_accuracy, per_class_accuracy: float, ndarray
        The per-class accuracy of a class without samples is 0.

    """
    matrix = numpy.asarray(matrix)
    total = matrix.sum()

    if total == 0:
        raise MalformedInput("Cannot compute accuracy of zero samples")

    diagonal = numpy.diag(matrix).astype(float)
    row_sums = matrix.sum(axis=1)

    global_accuracy = 100.0 * diagonal.sum() / total

    per_class_accuracy = numpy.zeros(matrix.shape[0])
    nonempty = row_sums > 0
    per_class_accuracy[nonempty] = \
        100.0 * diagonal[nonempty] / row_sums[nonempty]

    return float(global_accuracy), per_class_accuracy


def check_class_mapping(testing_mapping, training_mapping):
    """ Raise `ClassMismatch` when a testing label is unknown to training
    """
    unknown = [label for label in testing_mapping
               if label not in training_mapping]

    if unknown:
        msg = "Testing labels {} are absent from the training classes {}"
        raise ClassMismatch(msg.format(unknown, training_mapping.labels))

    same_order = all([
        training_mapping.index(label) == index
        for index, label in enumerate(testing_mapping)])

    if not same_order:
        msg = ("Testing labels appear in a different order {} than training "
               "{}; using the training class indices")
        logger.warning(msg.format(testing_mapping.labels,
                                  training_mapping.labels))


def evaluate(network, rows, class_mapping, label_column, columns):
    """ Run `network` over the `rows` and tally the predictions

    Parameters
    ----------
    network: Network
        A trained network; it is not modified

    rows: list of dict
        Normalized testing rows

    class_mapping: ClassMapping
        The class mapping the network was trained with

    label_column: str
        The name of the label column

    columns: list of str
        The ordered input columns the network was trained with

    Returns
    -------
    report: EvaluationReport
        The confusion matrix (rows = true class, columns = predicted class,
        indexed by `class_mapping`), the global and per-class accuracies
        in percent, and `class_mapping`

    """
    if len(rows) == 0:
        raise MalformedInput("The testing dataset has zero rows")

    if network.config.n_output != len(class_mapping):
        msg = ("Network has {} output units but the class mapping has {} "
               "classes")
        raise ConfigurationError(
            msg.format(network.config.n_output, len(class_mapping)))

    testing_mapping = ClassMapping.from_rows(rows, label_column)
    check_class_mapping(testing_mapping, class_mapping)

    true_classes = []
    predicted_classes = []

    for example in iterate_examples(rows, columns, label_column):
        true_classes.append(class_mapping.index(example.label))
        predicted_classes.append(network.predict(example.inputs))

    matrix = confusion_matrix(
        true_classes, predicted_classes, n_classes=len(class_mapping))
    global_accuracy, per_class_accuracy = accuracies(matrix)

    msg = "Accuracy over {} testing rows = {:.2f}%"
    logger.info(msg.format(len(rows), global_accuracy))

    return EvaluationReport(
        confusion_matrix=matrix,
        global_accuracy=global_accuracy,
        per_class_accuracy=per_class_accuracy,
        class_mapping=class_mapping)
