import numbers

import numpy

from .activation import ACTIVATIONS, LINEAR
from .exception import ConfigurationError


DEFAULT_ACTIVATION = LINEAR
DEFAULT_LEARNING_RATE = 0.2
DEFAULT_MAX_EPOCHS = 2000
DEFAULT_ERROR_THRESHOLD = 0.00001


def round_half_up(value):
    """ Round to the nearest integer with halves rounded up (Python's
    builtin `round` rounds halves to even)
    """
    return int(numpy.floor(value + 0.5))


def validate_learning_rate(learning_rate):
    """ Returns `learning_rate` as a float; raises if outside of (0, 1]
    """
    if (not isinstance(learning_rate, numbers.Real) or
            isinstance(learning_rate, bool)):
        msg = "`learning_rate` ({}) must be a real number"
        raise ConfigurationError(msg.format(learning_rate))

    if not 0 < learning_rate <= 1:
        msg = "`learning_rate` ({}) must be in the interval (0, 1]"
        raise ConfigurationError(msg.format(learning_rate))

    return float(learning_rate)


def _validate_positive_int(name, value):
    if (not isinstance(value, numbers.Integral) or
            isinstance(value, bool) or value <= 0):
        msg = "`{}` ({}) must be a positive integer"
        raise ConfigurationError(msg.format(name, value))
    return int(value)


class NetworkConfig:
    """ Layer sizes and training parameters for a single hidden layer
    network
    """

    def __init__(self, n_input, n_hidden, n_output,
                 activation=DEFAULT_ACTIVATION,
                 learning_rate=DEFAULT_LEARNING_RATE,
                 max_epochs=DEFAULT_MAX_EPOCHS,
                 error_threshold=DEFAULT_ERROR_THRESHOLD):
        """
        Parameters
        ----------
        n_input: int
            Number of input units, i.e., the number of non-label columns

        n_hidden: int
            Number of hidden units

        n_output: int
            Number of output units, i.e., the number of distinct classes

        activation: str, default='linear'
            One of 'linear', 'logistic', or 'hyperbolic'. The same
            activation is used by the hidden and output layers.

        learning_rate: float, default=0.2
            The gradient step, in the interval (0, 1]

        max_epochs: int, default=2000
            The maximum number of passes over the training data

        error_threshold: float, default=0.00001
            Training stops once the epoch error falls at or below this
            value. It is also the flatness tolerance of the plateau check.

        """
        self.n_input = _validate_positive_int('n_input', n_input)
        self.n_hidden = _validate_positive_int('n_hidden', n_hidden)
        self.n_output = _validate_positive_int('n_output', n_output)
        self.max_epochs = _validate_positive_int('max_epochs', max_epochs)

        if activation not in ACTIVATIONS:
            msg = "Unknown activation `{}`; should be one of {}"
            raise ConfigurationError(
                msg.format(activation, sorted(ACTIVATIONS)))
        self.activation = activation

        self.learning_rate = validate_learning_rate(learning_rate)

        try:
            self.error_threshold = float(error_threshold)
        except (ValueError, TypeError):
            msg = "`error_threshold` ({}) must be numeric"
            raise ConfigurationError(msg.format(error_threshold))

        if not numpy.isfinite(self.error_threshold) or \
                self.error_threshold < 0:
            msg = "`error_threshold` ({}) must be finite and non-negative"
            raise ConfigurationError(msg.format(error_threshold))

    @classmethod
    def from_dataset(cls, n_input, n_output, n_hidden=None, **kwargs):
        """ Build a config from the dataset schema. The default number of
        hidden units is the rounded average of the input and output sizes.
        """
        if n_hidden is None:
            n_hidden = round_half_up((n_input + n_output) / 2)
        return cls(n_input=n_input, n_hidden=n_hidden, n_output=n_output,
                   **kwargs)

    def replace(self, **kwargs):
        """ Returns a copy of this config with the given fields changed
        """
        params = self.as_dict()
        params.update(kwargs)
        return NetworkConfig(**params)

    def as_dict(self):
        return dict(
            n_input=self.n_input,
            n_hidden=self.n_hidden,
            n_output=self.n_output,
            activation=self.activation,
            learning_rate=self.learning_rate,
            max_epochs=self.max_epochs,
            error_threshold=self.error_threshold,
        )

    def __eq__(self, other):
        if not isinstance(other, NetworkConfig):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return ("<NetworkConfig {n_input}-{n_hidden}-{n_output} "
                "activation={activation} learning_rate={learning_rate} "
                "max_epochs={max_epochs} "
                "error_threshold={error_threshold}>").format(**self.as_dict())
