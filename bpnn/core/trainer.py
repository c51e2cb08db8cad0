from collections import namedtuple
import logging
import os

import numpy

from .config import NetworkConfig, validate_learning_rate
from .datasets_handler import (
    ClassMapping, feature_columns, iterate_examples, validate_random_state)
from .exception import ConfigurationError, MalformedInput, TrainingDiverged
from .network import Network
from .plateau import PlateauDecision, PlateauMonitor


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

# Epoch error taken from the last sample of the epoch
LAST_SAMPLE_ERROR = 'last_sample'
# Epoch error averaged over all samples of the epoch
MEAN_ERROR = 'mean'
ERROR_MODES = (LAST_SAMPLE_ERROR, MEAN_ERROR)

# Values of `TrainingResult.stop_reason`
STOP_MAX_EPOCHS = 'max_epochs'
STOP_ERROR_THRESHOLD = 'error_threshold'
STOP_PLATEAU = 'plateau_stop'


TrainingResult = namedtuple(
    'TrainingResult',
    ['weights', 'error_history', 'stop_reason', 'epochs', 'learning_rate'])


def setup_logging(filename='train-log.txt', level=logging.DEBUG):
    """ Sets up logging formatting and writes the log to `filename`,
    replacing any previous log file of that name
    """
    if os.path.exists(filename):
        os.remove(filename)

    line_fmt = ("[%(asctime)s] [%(name)s:%(lineno)d] "
                "%(levelname)-8s %(message)s")

    date_fmt = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        filename=filename, format=line_fmt,
        datefmt=date_fmt, level=level)


def sample_error(error):
    """ The scalar error of a single sample from its per-unit output error
    """
    return float(numpy.mean(0.5 * error**2))


class Trainer:
    """ Trains a :class:`Network` by online backpropagation: the weights are
    updated after every sample, so sample `n` sees the updates of sample
    `n-1` within the same epoch.
    """
    def __init__(self, config, label_column, columns=None,
                 plateau_callback=None, on_epoch=None, random_state=None,
                 error_mode=LAST_SAMPLE_ERROR, class_mapping=None):
        """
        Parameters
        ----------
        config: NetworkConfig
            Layer sizes and training parameters

        label_column: str
            The name of the label column of the training rows

        columns: list of str, default=None
            The ordered input columns. The default uses every non-label
            column of the first training row, in order.

        plateau_callback: callable, default=None
            Has signature::

                plateau_callback(error_history, epoch)

            and returns a :class:`PlateauDecision`. It is called once each
            time a plateau is detected. The default (None) disables the
            plateau check.

        on_epoch: callable or list of callables, default=None
            Called after each epoch as :code:`on_epoch(epoch, error)`

        random_state: numpy.random.RandomState, default=None
            Used for the weight initialization

        error_mode: str, default='last_sample'
            'last_sample' records the error of the last sample of each
            epoch; 'mean' records the mean error over the epoch's samples.

        class_mapping: ClassMapping, default=None
            The default builds the mapping from the training rows

        """
        if not isinstance(config, NetworkConfig):
            msg = "`config` ({}) not instance of NetworkConfig"
            raise ConfigurationError(msg.format(type(config)))

        if error_mode not in ERROR_MODES:
            msg = "`error_mode` ({}) should be one of {}"
            raise ConfigurationError(msg.format(error_mode, ERROR_MODES))

        if plateau_callback is not None and not callable(plateau_callback):
            raise TypeError("`plateau_callback` must be callable")

        if on_epoch is None:
            on_epoch = []
        elif not isinstance(on_epoch, list):
            on_epoch = [on_epoch]

        if not all([callable(func) for func in on_epoch]):
            msg = "All on_epoch items must be callable"
            raise TypeError(msg)

        self.config = config
        self.label_column = label_column
        self.columns = None if columns is None else list(columns)
        self.plateau_callback = plateau_callback
        self.on_epoch = on_epoch
        self.random_state = validate_random_state(random_state)
        self.error_mode = error_mode
        self.class_mapping = class_mapping

        self.learning_rate = config.learning_rate
        self.plateau_monitor = PlateauMonitor(tol=config.error_threshold)

        self.network = None
        self.error_history = []
        self.epoch = 0

    def _log_with_epoch(self, msg, level='info'):
        """ Write to the logger with the current epoch number prepended
        to the log message
        """
        full_message = "(Epoch = {:04d}) {:s}".format(self.epoch, msg)

        if level == 'info':
            logger.info(full_message)
        elif level == 'debug':
            logger.debug(full_message)
        elif level == 'warning':
            logger.warning(full_message)
        elif level == 'error':
            logger.error(full_message)
        else:
            raise ValueError("Unknown log level: {}".format(level))

    def _prepare_examples(self, rows):
        """ Validate the rows against the config and build the input
        vectors and desired outputs. Runs before any weight exists.
        """
        if len(rows) == 0:
            raise MalformedInput("The training dataset has zero rows")

        if self.columns is None:
            self.columns = feature_columns(rows, self.label_column)

        if self.class_mapping is None:
            self.class_mapping = ClassMapping.from_rows(
                rows, self.label_column)

        if len(self.columns) != self.config.n_input:
            msg = "Config has {} input units but the data has {} columns"
            raise ConfigurationError(
                msg.format(self.config.n_input, len(self.columns)))

        if len(self.class_mapping) != self.config.n_output:
            msg = "Config has {} output units but the data has {} classes"
            raise ConfigurationError(
                msg.format(self.config.n_output, len(self.class_mapping)))

        examples = list(iterate_examples(
            rows, self.columns, self.label_column))

        inputs = numpy.array([example.inputs for example in examples])
        desired = numpy.array([self.class_mapping.one_hot(example.label)
                               for example in examples])

        return inputs, desired

    def backpropagate(self, inputs, desired):
        """ Forward one sample, update the weights in place, and return the
        per-unit output error
        """
        network = self.network
        derivative = network.activation.derivative

        forward = network.forward(inputs)

        error = desired - forward.output_post
        output_gradient = error * derivative(forward.output_pre)

        # Uses the hidden => output weights from before this update
        hidden_gradient = derivative(forward.hidden_pre) * numpy.dot(
            network.hidden_output.T, output_gradient)

        network.hidden_output += self.learning_rate * numpy.outer(
            output_gradient, forward.hidden_post)
        network.input_hidden += self.learning_rate * numpy.outer(
            hidden_gradient, inputs)

        return error

    def run_epoch(self, inputs, desired):
        """ One pass over all the samples in order. Returns the epoch error.
        """
        errors = numpy.zeros(len(inputs))

        for isample in range(len(inputs)):
            error = self.backpropagate(inputs[isample], desired[isample])
            errors[isample] = sample_error(error)

        if self.error_mode == MEAN_ERROR:
            return float(errors.mean())
        else:
            return float(errors[-1])

    def _check_finite(self, epoch_error):
        if not numpy.isfinite(epoch_error) or not self.network.all_finite():
            msg = ("Training diverged at epoch {} (error = {}); try a "
                   "smaller learning rate or another activation")
            msg = msg.format(self.epoch, epoch_error)
            self._log_with_epoch(msg, level='error')
            raise TrainingDiverged(msg)

    def _handle_plateau(self):
        """ Ask the plateau callback whether to continue. Returns False when
        training should stop.
        """
        msg = "Plateau detected over the last {} epochs"
        self._log_with_epoch(msg.format(self.plateau_monitor.window))

        decision = self.plateau_callback(list(self.error_history), self.epoch)
        self.plateau_monitor.record_intervention(self.epoch)

        if not isinstance(decision, PlateauDecision):
            msg = "Plateau callback returned {} instead of a PlateauDecision"
            raise TypeError(msg.format(type(decision)))

        if not decision.continue_training:
            self._log_with_epoch("Plateau callback stopped training")
            return False

        if decision.learning_rate is not None:
            learning_rate = validate_learning_rate(decision.learning_rate)
            msg = "Learning rate changed from {:.7f} to {:.7f}"
            self._log_with_epoch(msg.format(self.learning_rate,
                                            learning_rate))
            self.learning_rate = learning_rate

        return True

    def train(self, rows):
        """ Train a new network on `rows`

        Returns
        -------
        result: TrainingResult
            The final weights, the per-epoch error history, why training
            stopped, the number of epochs run and the final learning rate.

        """
        inputs, desired = self._prepare_examples(rows)

        self.network = Network(self.config, random_state=self.random_state)
        self.learning_rate = self.config.learning_rate
        self.plateau_monitor = PlateauMonitor(tol=self.config.error_threshold)
        self.error_history = []
        self.epoch = 0

        msg = "Training {} on {} samples"
        logger.info(msg.format(self.network, len(inputs)))

        stop_reason = STOP_MAX_EPOCHS

        for self.epoch in range(1, self.config.max_epochs+1):

            epoch_error = self.run_epoch(inputs, desired)
            self.error_history.append(epoch_error)

            self._check_finite(epoch_error)

            self._log_with_epoch(
                "Error = {:.7f}".format(epoch_error), level='debug')

            for func in self.on_epoch:
                func(self.epoch, epoch_error)

            if epoch_error <= self.config.error_threshold:
                msg = "Error {:.7f} reached the threshold {:.7f}"
                self._log_with_epoch(
                    msg.format(epoch_error, self.config.error_threshold))
                stop_reason = STOP_ERROR_THRESHOLD
                break

            if (self.plateau_callback is not None and
                    self.plateau_monitor.check(self.error_history,
                                               self.epoch)):
                if not self._handle_plateau():
                    stop_reason = STOP_PLATEAU
                    break

        msg = "Training finished after {} epoch(s) ({}), final error {:.7f}"
        logger.info(msg.format(self.epoch, stop_reason,
                               self.error_history[-1]))

        return TrainingResult(
            weights=self.network.weights,
            error_history=list(self.error_history),
            stop_reason=stop_reason,
            epochs=self.epoch,
            learning_rate=self.learning_rate)


def train(rows, config, label_column, plateau_callback=None, **kwargs):
    """ Train a network on `rows`; see :class:`Trainer` for the keyword
    arguments. Returns a :class:`TrainingResult`.
    """
    trainer = Trainer(config=config, label_column=label_column,
                      plateau_callback=plateau_callback, **kwargs)
    return trainer.train(rows)
