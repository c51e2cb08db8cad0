import unittest

from bpnn.core.config import NetworkConfig, round_half_up
from bpnn.core.exception import ConfigurationError


class TestNetworkConfig(unittest.TestCase):

    def test_defaults(self):
        config = NetworkConfig(n_input=6, n_hidden=5, n_output=5)

        self.assertEqual(config.activation, 'linear')
        self.assertEqual(config.learning_rate, 0.2)
        self.assertEqual(config.max_epochs, 2000)
        self.assertEqual(config.error_threshold, 0.00001)

    def test_from_dataset_hidden_size(self):
        self.assertEqual(NetworkConfig.from_dataset(2, 2).n_hidden, 2)
        self.assertEqual(NetworkConfig.from_dataset(4, 3).n_hidden, 4)
        self.assertEqual(NetworkConfig.from_dataset(6, 5).n_hidden, 6)
        self.assertEqual(
            NetworkConfig.from_dataset(6, 5, n_hidden=3).n_hidden, 3)

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(3.5), 4)
        self.assertEqual(round_half_up(3.4), 3)

    def test_invalid_learning_rate(self):
        for learning_rate in (0, -0.1, 1.5, 'fast', None, True):
            with self.assertRaises(ConfigurationError):
                NetworkConfig(2, 2, 2, learning_rate=learning_rate)

        # The upper bound is included
        self.assertEqual(NetworkConfig(2, 2, 2, learning_rate=1).learning_rate,
                         1.0)

    def test_invalid_sizes(self):
        with self.assertRaises(ConfigurationError):
            NetworkConfig(0, 2, 2)
        with self.assertRaises(ConfigurationError):
            NetworkConfig(2, -1, 2)
        with self.assertRaises(ConfigurationError):
            NetworkConfig(2, 2, 2.5)

    def test_invalid_max_epochs(self):
        with self.assertRaises(ConfigurationError):
            NetworkConfig(2, 2, 2, max_epochs=0)

    def test_invalid_error_threshold(self):
        with self.assertRaises(ConfigurationError):
            NetworkConfig(2, 2, 2, error_threshold=-1)
        with self.assertRaises(ConfigurationError):
            NetworkConfig(2, 2, 2, error_threshold='small')

    def test_unknown_activation(self):
        with self.assertRaises(ConfigurationError):
            NetworkConfig(2, 2, 2, activation='softmax')

    def test_replace(self):
        config = NetworkConfig(2, 2, 2)
        changed = config.replace(activation='logistic', learning_rate=0.5)

        self.assertEqual(changed.activation, 'logistic')
        self.assertEqual(changed.learning_rate, 0.5)
        self.assertEqual(config.activation, 'linear')
        self.assertEqual(changed.replace(activation='linear',
                                         learning_rate=0.2), config)


if __name__ == '__main__':
    unittest.main()
