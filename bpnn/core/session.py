import logging

from .config import NetworkConfig
from .datasets_handler import (
    DEFAULT_TRAINING_FRACTION, TESTING_DATASET_KEY, TRAINING_DATASET_KEY,
    ClassMapping, feature_columns, filter_blank_rows, input_vector,
    stratified_split, validate_random_state)
from .evaluator import evaluate
from .exception import MalformedInput, ModelAlreadyFit, ModelNotFit
from .normalizer import Normalizer
from .trainer import LAST_SAMPLE_ERROR, Trainer


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def _requires_load(method):
    """ Decorator for methods that require loaded rows
    """
    def method_wrapped(self, *args, **kwargs):
        if not self.is_loaded:
            raise RuntimeError("No rows have been loaded yet")

        return method(self, *args, **kwargs)

    return method_wrapped


def _requires_fit(method):
    """ Decorator for methods that require a trained network
    """
    def method_wrapped(self, *args, **kwargs):
        if not self._is_fitted:
            raise ModelNotFit("This session has not been trained yet")

        return method(self, *args, **kwargs)

    return method_wrapped


class TrainingSession:
    """ Holds the state of one training run: the normalization parameters,
    the input column order, the class mapping, the training and testing
    datasets, the network and its error history.

    Usage::

        session = TrainingSession(label_column='class', random_state=rs)
        session.load(rows)
        session.configure(activation='logistic', max_epochs=500)
        session.fit(plateau_callback=always_continue)
        report = session.evaluate()

    """
    def __init__(self, label_column,
                 training_fraction=DEFAULT_TRAINING_FRACTION,
                 random_state=None):
        """
        Parameters
        ----------
        label_column: str
            The name of the column holding the class labels

        training_fraction: float, default=0.7
            Fraction of each class placed in the training dataset

        random_state: numpy.random.RandomState, default=None
            Used for the split and the weight initialization. Provide for
            reproducible results.

        """
        self.label_column = label_column
        self.training_fraction = training_fraction
        self.random_state = validate_random_state(random_state)

        self.normalizer = Normalizer(ignore_columns=(label_column,))
        self.columns = None
        self.class_mapping = None
        self.training_data = None
        self.testing_data = None

        self.config = None
        self.network = None
        self.training_result = None
        self._is_fitted = False

    @property
    def is_loaded(self):
        return self.training_data is not None

    @property
    def normalization_params(self):
        return self.normalizer.params

    def load(self, rows):
        """ Normalize `rows` and split them into the training and testing
        datasets. The normalization bounds are fit on all loaded rows.
        """
        if self._is_fitted:
            raise ModelAlreadyFit("This session has already been trained")

        rows = filter_blank_rows(rows)

        # Fixes the input column order for the whole session
        columns = feature_columns(rows, self.label_column)

        normalized = self.normalizer.fit_transform(rows)

        # Any earlier config describes the previous schema
        self.config = None
        self.training_result = None

        datasets = stratified_split(
            normalized, self.label_column,
            training_fraction=self.training_fraction,
            random_state=self.random_state)

        self.columns = columns
        self.training_data = datasets[TRAINING_DATASET_KEY]
        self.testing_data = datasets[TESTING_DATASET_KEY]
        self.class_mapping = ClassMapping.from_rows(
            self.training_data, self.label_column)

        msg = "Loaded {} rows: {} input columns, {} classes"
        logger.info(msg.format(len(rows), len(columns),
                               len(self.class_mapping)))

    @_requires_load
    def configure(self, **kwargs):
        """ Derive a :class:`NetworkConfig` from the loaded data. Keyword
        arguments are passed to :meth:`NetworkConfig.from_dataset`.
        """
        self.config = NetworkConfig.from_dataset(
            n_input=len(self.columns),
            n_output=len(self.class_mapping),
            **kwargs)
        return self.config

    @_requires_load
    def fit(self, plateau_callback=None, on_epoch=None,
            error_mode=LAST_SAMPLE_ERROR):
        """ Train the network on the training dataset. Uses the default
        configuration if :meth:`configure` wasn't called.

        Returns
        -------
        result: TrainingResult

        """
        if self._is_fitted:
            raise ModelAlreadyFit("This session has already been trained")

        if self.config is None:
            self.configure()

        trainer = Trainer(
            config=self.config,
            label_column=self.label_column,
            columns=self.columns,
            plateau_callback=plateau_callback,
            on_epoch=on_epoch,
            random_state=self.random_state,
            error_mode=error_mode,
            class_mapping=self.class_mapping)

        self.training_result = trainer.train(self.training_data)
        self.network = trainer.network
        self._is_fitted = True

        return self.training_result

    @property
    @_requires_fit
    def error_history(self):
        return self.training_result.error_history

    @_requires_load
    def normalize_external(self, rows):
        """ Normalize rows from another source with the bounds fit on the
        loaded rows
        """
        return self.normalizer.transform(filter_blank_rows(rows))

    @_requires_fit
    def evaluate(self, rows=None):
        """ Evaluate the network on the testing dataset or, if given, on
        external (raw, not yet normalized) `rows`

        Returns
        -------
        report: EvaluationReport

        """
        if rows is None:
            rows = self.testing_data
        else:
            rows = self.normalize_external(rows)

        if len(rows) == 0:
            raise MalformedInput("There are no rows to evaluate")

        return evaluate(self.network, rows, self.class_mapping,
                        self.label_column, self.columns)

    @_requires_fit
    def predict(self, row):
        """ The predicted label of a single raw row
        """
        normalized = self.normalizer.transform([row])[0]
        inputs = input_vector(normalized, self.columns)
        return self.class_mapping.label(self.network.predict(inputs))

    def __repr__(self):
        return "<TrainingSession label_column={!r} fitted={}>".format(
            self.label_column, self._is_fitted)
