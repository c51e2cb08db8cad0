from collections import namedtuple

import numpy


# Number of most recent epochs examined for a plateau
PLATEAU_WINDOW = 50

# Minimum number of epochs between two plateau interventions
PLATEAU_COOLDOWN = 50


# Returned by plateau callbacks
PlateauDecision = namedtuple(
    'PlateauDecision', ['continue_training', 'learning_rate'])
PlateauDecision.__new__.__defaults__ = (None,)


def mean_absolute_deviation(values):
    values = numpy.asarray(values, dtype=float)
    return float(numpy.abs(values - values.mean()).mean())


def is_plateau(error_history, epoch, tol, window=PLATEAU_WINDOW):
    """ Returns True when the errors of the `window` epochs ending at `epoch`
    (1-based, inclusive) have a mean absolute deviation of at most `tol`.
    Returns False until a full window of history is available.
    """
    if epoch < window or len(error_history) < epoch:
        return False

    recent = error_history[epoch-window:epoch]

    return mean_absolute_deviation(recent) <= tol


class PlateauMonitor:
    """ Applies :func:`is_plateau` with a cooldown so that a new plateau is
    not reported in the epochs right after an intervention
    """
    def __init__(self, tol, window=PLATEAU_WINDOW, cooldown=PLATEAU_COOLDOWN):
        if window <= 0:
            raise ValueError("`window` must be positive")
        if cooldown < 0:
            raise ValueError("`cooldown` must be non-negative")

        self.tol = tol
        self.window = window
        self.cooldown = cooldown
        self.last_intervention = 0

    def check(self, error_history, epoch):
        if epoch - self.last_intervention < self.cooldown:
            return False
        return is_plateau(error_history, epoch, self.tol, window=self.window)

    def record_intervention(self, epoch):
        self.last_intervention = epoch
