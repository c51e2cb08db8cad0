import unittest

import numpy
from sklearn.metrics import confusion_matrix as sklearn_confusion_matrix

from bpnn.core.config import NetworkConfig
from bpnn.core.datasets_handler import ClassMapping
from bpnn.core.evaluator import accuracies, confusion_matrix, evaluate
from bpnn.core.exception import (
    ClassMismatch, ConfigurationError, MalformedInput)
from bpnn.core.network import Network, Weights


def make_identity_network(n_output=2):
    """ A network whose prediction is the index of the largest input
    """
    config = NetworkConfig(n_input=2, n_hidden=2, n_output=n_output)
    hidden_output = numpy.zeros((n_output, 2))
    hidden_output[:2, :2] = numpy.eye(2)
    return Network(config, weights=Weights(numpy.eye(2), hidden_output))


class TestEvaluator(unittest.TestCase):

    def setUp(self):
        self.columns = ['x0', 'x1']
        self.rows = [
            {'x0': 1.0, 'x1': 0.0, 'label': 'a'},
            {'x0': 0.0, 'x1': 1.0, 'label': 'b'},
            {'x0': 0.9, 'x1': 0.1, 'label': 'a'},
            {'x0': 0.2, 'x1': 0.8, 'label': 'a'},
        ]

    def test_confusion_matrix_helper(self):
        matrix = confusion_matrix([0, 0, 1, 1], [0, 1, 1, 1], n_classes=2)

        numpy.testing.assert_array_equal(matrix, [[1, 1], [0, 2]])

        global_accuracy, per_class_accuracy = accuracies(matrix)
        self.assertEqual(numpy.trace(matrix), 3)
        self.assertEqual(matrix.sum() - numpy.trace(matrix), 1)
        self.assertEqual(global_accuracy, 75.0)
        numpy.testing.assert_allclose(per_class_accuracy, [50.0, 100.0])

    def test_confusion_matrix_length_mismatch(self):
        with self.assertRaises(ValueError):
            confusion_matrix([0, 1], [0], n_classes=2)

    def test_accuracies_of_nothing(self):
        with self.assertRaises(MalformedInput):
            accuracies(numpy.zeros((2, 2), dtype=int))

    def test_evaluate(self):
        network = make_identity_network()
        mapping = ClassMapping(['a', 'b'])

        report = evaluate(network, self.rows, mapping, 'label', self.columns)

        numpy.testing.assert_array_equal(
            report.confusion_matrix, [[2, 1], [0, 1]])
        self.assertEqual(report.global_accuracy, 75.0)
        numpy.testing.assert_allclose(
            report.per_class_accuracy, [200.0 / 3, 100.0])
        self.assertIs(report.class_mapping, mapping)

        # Cross check with scikit-learn
        predicted = [network.predict([row['x0'], row['x1']])
                     for row in self.rows]
        expected = sklearn_confusion_matrix(
            [mapping.index(row['label']) for row in self.rows], predicted,
            labels=[0, 1])
        numpy.testing.assert_array_equal(report.confusion_matrix, expected)

    def test_class_without_samples(self):
        network = make_identity_network(n_output=3)
        mapping = ClassMapping(['a', 'b', 'c'])

        report = evaluate(network, self.rows, mapping, 'label', self.columns)

        self.assertEqual(report.confusion_matrix.shape, (3, 3))
        self.assertEqual(report.per_class_accuracy[2], 0.0)
        self.assertEqual(report.global_accuracy, 75.0)

    def test_unknown_testing_label(self):
        rows = self.rows + [{'x0': 0.5, 'x1': 0.4, 'label': 'z'}]

        with self.assertRaises(ClassMismatch):
            evaluate(make_identity_network(), rows, ClassMapping(['a', 'b']),
                     'label', self.columns)

    def test_testing_order_differs_from_training(self):
        # "b" is seen first here, but is index 1 in training
        rows = [self.rows[1], self.rows[0]] + self.rows[2:]

        with self.assertLogs('evaluator', level='WARNING'):
            report = evaluate(make_identity_network(), rows,
                              ClassMapping(['a', 'b']), 'label', self.columns)

        # Indices still follow the training mapping
        numpy.testing.assert_array_equal(
            report.confusion_matrix, [[2, 1], [0, 1]])

    def test_zero_rows(self):
        with self.assertRaises(MalformedInput):
            evaluate(make_identity_network(), [], ClassMapping(['a', 'b']),
                     'label', self.columns)

    def test_output_size_mismatch(self):
        with self.assertRaises(ConfigurationError):
            evaluate(make_identity_network(), self.rows,
                     ClassMapping(['a', 'b', 'c']), 'label', self.columns)


if __name__ == '__main__':
    unittest.main()
