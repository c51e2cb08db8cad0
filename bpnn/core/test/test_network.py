import unittest

import numpy

from bpnn.core.config import NetworkConfig
from bpnn.core.network import Network, Weights


class TestNetwork(unittest.TestCase):

    def setUp(self):
        self.random_state = numpy.random.RandomState(1234)
        self.config = NetworkConfig(
            n_input=3, n_hidden=4, n_output=2, activation='logistic')

    def test_weight_shapes_and_range(self):
        network = Network(self.config, random_state=self.random_state)

        self.assertEqual(network.input_hidden.shape, (4, 3))
        self.assertEqual(network.hidden_output.shape, (2, 4))

        for weights in network.weights:
            self.assertTrue((weights >= -1).all())
            self.assertTrue((weights < 1).all())

    def test_forward(self):
        network = Network(self.config, random_state=self.random_state)
        inputs = numpy.array([0.1, 0.5, 0.9])

        forward = network.forward(inputs)

        hidden_pre = network.input_hidden.dot(inputs)
        hidden_post = 1 / (1 + numpy.exp(-hidden_pre))
        output_pre = network.hidden_output.dot(hidden_post)
        output_post = 1 / (1 + numpy.exp(-output_pre))

        numpy.testing.assert_allclose(forward.hidden_pre, hidden_pre)
        numpy.testing.assert_allclose(forward.hidden_post, hidden_post)
        numpy.testing.assert_allclose(forward.output_pre, output_pre)
        numpy.testing.assert_allclose(forward.output_post, output_post)

    def test_forward_wrong_shape(self):
        network = Network(self.config, random_state=self.random_state)

        with self.assertRaises(ValueError):
            network.forward([0.1, 0.2])

    def test_predict_first_max_on_ties(self):
        config = self.config.replace(activation='linear', n_output=3)
        weights = Weights(input_hidden=numpy.ones((4, 3)),
                          hidden_output=numpy.array([
                              [0., 0., 0., 0.],
                              [1., 1., 1., 1.],
                              [1., 1., 1., 1.]]))
        network = Network(config, weights=weights)

        self.assertEqual(network.predict([1.0, 1.0, 1.0]), 1)

        network.set_weights(numpy.ones((4, 3)), numpy.zeros((3, 4)))
        self.assertEqual(network.predict([1.0, 1.0, 1.0]), 0)

    def test_weights_are_copies(self):
        network = Network(self.config, random_state=self.random_state)
        weights = network.weights
        weights.input_hidden[...] = 0

        self.assertFalse((network.input_hidden == 0).all())

    def test_set_weights_wrong_shape(self):
        network = Network(self.config, random_state=self.random_state)

        with self.assertRaises(ValueError):
            network.set_weights(numpy.zeros((3, 4)), numpy.zeros((2, 4)))

        with self.assertRaises(ValueError):
            network.set_weights(numpy.zeros((4, 3)), numpy.zeros((4, 2)))

    def test_reproducible_initialization(self):
        network1 = Network(self.config,
                           random_state=numpy.random.RandomState(7))
        network2 = Network(self.config,
                           random_state=numpy.random.RandomState(7))

        numpy.testing.assert_array_equal(network1.input_hidden,
                                         network2.input_hidden)
        numpy.testing.assert_array_equal(network1.hidden_output,
                                         network2.hidden_output)

    def test_bad_config(self):
        with self.assertRaises(TypeError):
            Network({'n_input': 3}, random_state=self.random_state)


if __name__ == '__main__':
    unittest.main()
