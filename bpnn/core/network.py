"""
A single hidden layer neural network for classification.

Input (R^n) => Hidden (R^h) => Output (R^c)

There are no bias terms. For a single input vector, the computation
chain is::

    hidden_pre = dot(W_ih, input)
    hidden_post = f(hidden_pre)
    output_pre = dot(W_ho, hidden_post)
    output_post = f(output_pre)

where `f` is the configured activation, applied elementwise.
"""
from collections import namedtuple

import numpy

from .activation import get_activation
from .config import NetworkConfig
from .datasets_handler import validate_random_state


# The interval from which initial weights are drawn uniformly
WEIGHT_INIT_LOW = -1.0
WEIGHT_INIT_HIGH = 1.0


Weights = namedtuple('Weights', ['input_hidden', 'hidden_output'])

ForwardPass = namedtuple(
    'ForwardPass', ['hidden_pre', 'hidden_post', 'output_pre', 'output_post'])


class Network:
    """ Holds the weight matrices of the network and computes its forward
    pass.

    params: input_hidden, where input_hidden[i, j] = weight from input j
                to hidden unit i.
            hidden_output, where hidden_output[k, i] = weight from hidden
                unit i to output unit k.
    """
    def __init__(self, config, random_state=None, weights=None):
        """
        Parameters
        ----------
        config: NetworkConfig
            The layer sizes and activation.

        random_state: numpy.random.RandomState, default=None
            Provide a RandomState object for reproducible results. Unused
            when `weights` is given.

        weights: Weights, default=None
            Initial weights; the default draws them uniformly from [-1, 1).
        """
        if not isinstance(config, NetworkConfig):
            msg = "`config` ({}) not instance of NetworkConfig"
            raise TypeError(msg.format(type(config)))

        self.config = config
        self.activation = get_activation(config.activation)

        if weights is None:
            self.randomize_weights(random_state)
        else:
            self.set_weights(*weights)

    def __repr__(self):
        return "<Network ninput=%d, nhidden=%d, noutput=%d, activation=%s>" % (
            self.config.n_input, self.config.n_hidden,
            self.config.n_output, self.activation.name)

    @property
    def weight_shapes(self):
        return Weights(
            input_hidden=(self.config.n_hidden, self.config.n_input),
            hidden_output=(self.config.n_output, self.config.n_hidden))

    def randomize_weights(self, random_state=None):
        """ Draw all the weights uniformly from [-1, 1)
        """
        random_state = validate_random_state(random_state)
        shapes = self.weight_shapes

        self.input_hidden = random_state.uniform(
            WEIGHT_INIT_LOW, WEIGHT_INIT_HIGH, size=shapes.input_hidden)
        self.hidden_output = random_state.uniform(
            WEIGHT_INIT_LOW, WEIGHT_INIT_HIGH, size=shapes.hidden_output)

    @property
    def weights(self):
        """ A copy of the current weights
        """
        return Weights(input_hidden=self.input_hidden.copy(),
                       hidden_output=self.hidden_output.copy())

    def set_weights(self, input_hidden, hidden_output):
        """ Set the weights to (copies of) those provided in the arguments.
        """
        input_hidden = numpy.array(input_hidden, dtype=float)
        hidden_output = numpy.array(hidden_output, dtype=float)
        shapes = self.weight_shapes

        if input_hidden.shape != shapes.input_hidden:
            msg = "`input_hidden` was shape {} but should be shape {}"
            raise ValueError(msg.format(input_hidden.shape,
                                        shapes.input_hidden))

        if hidden_output.shape != shapes.hidden_output:
            msg = "`hidden_output` was shape {} but should be shape {}"
            raise ValueError(msg.format(hidden_output.shape,
                                        shapes.hidden_output))

        self.input_hidden = input_hidden
        self.hidden_output = hidden_output

    def forward(self, inputs):
        """
        Parameters
        ----------
        inputs: ndarray, shape=(n_input,)
            A single input vector

        Returns
        -------
        forward_pass: ForwardPass
            The pre- and post-activation values of both layers
        """
        inputs = numpy.asarray(inputs, dtype=float)

        if inputs.shape != (self.config.n_input,):
            msg = "`inputs` was shape {} but should be shape {}"
            raise ValueError(msg.format(inputs.shape, (self.config.n_input,)))

        hidden_pre = numpy.dot(self.input_hidden, inputs)
        hidden_post = self.activation.function(hidden_pre)
        output_pre = numpy.dot(self.hidden_output, hidden_post)
        output_post = self.activation.function(output_pre)

        return ForwardPass(hidden_pre=hidden_pre, hidden_post=hidden_post,
                           output_pre=output_pre, output_post=output_post)

    def predict(self, inputs):
        """ The index of the largest output unit (the first one on ties)
        """
        return int(numpy.argmax(self.forward(inputs).output_post))

    def all_finite(self):
        return bool(numpy.isfinite(self.input_hidden).all() and
                    numpy.isfinite(self.hidden_output).all())
