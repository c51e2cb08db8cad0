""" Activation functions available to the network. Each derivative takes the
pre-activation value and applies the activation itself before evaluating
the derivative formula, i.e., :code:`derivative(x)` is f'(x), not a
function of f(x).
"""
from collections import namedtuple

import numpy
from scipy.special import expit

from .exception import ConfigurationError


LINEAR = 'linear'
LOGISTIC = 'logistic'
HYPERBOLIC = 'hyperbolic'

# The slope of the linear activation
LINEAR_SLOPE = 0.1


Activation = namedtuple('Activation', ['name', 'function', 'derivative'])


def linear(x):
    return numpy.asarray(x, dtype=float) * LINEAR_SLOPE


def linear_derivative(x):
    return numpy.full_like(numpy.asarray(x, dtype=float), LINEAR_SLOPE)


def logistic(x):
    return expit(numpy.asarray(x, dtype=float))


def logistic_derivative(x):
    fx = logistic(x)
    return fx * (1 - fx)


def hyperbolic(x):
    return numpy.tanh(numpy.asarray(x, dtype=float))


def hyperbolic_derivative(x):
    fx = hyperbolic(x)
    return 1 - fx**2


ACTIVATIONS = {
    LINEAR: Activation(LINEAR, linear, linear_derivative),
    LOGISTIC: Activation(LOGISTIC, logistic, logistic_derivative),
    HYPERBOLIC: Activation(HYPERBOLIC, hyperbolic, hyperbolic_derivative),
}


def get_activation(name):
    """ Get the :class:`Activation` registered under `name`
    """
    try:
        return ACTIVATIONS[name]
    except KeyError:
        msg = "Unknown activation `{}`; should be one of {}"
        raise ConfigurationError(msg.format(name, sorted(ACTIVATIONS)))
