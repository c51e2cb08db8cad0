

class MalformedInput(ValueError):
    """ Raised when the provided rows cannot be used, e.g., a row missing the
    label column, an empty dataset, or a column that cannot be normalized
    """


class ConfigurationError(ValueError):
    """ Raised when network or training parameters are invalid
    """


class ClassMismatch(KeyError):
    """ Raised when a label is not part of the training class mapping
    """

    def __str__(self):
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ''


class TrainingDiverged(ArithmeticError):
    """ Raised when the training error or the weights become non-finite
    """


class ModelNotFit(Exception):
    """ Raised when trying access properties or methods that require a
    trained network
    """


class ModelAlreadyFit(Exception):
    """ Raised when attempting to train a session that has already been
    trained
    """
