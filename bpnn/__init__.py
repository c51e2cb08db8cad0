# flake8: noqa

from ._version import version as __version__

from .core.config import NetworkConfig
from .core.evaluator import EvaluationReport, evaluate
from .core.exception import (
    ClassMismatch,
    ConfigurationError,
    MalformedInput,
    ModelAlreadyFit,
    ModelNotFit,
    TrainingDiverged,
)
from .core.network import Network, Weights
from .core.normalizer import Normalizer
from .core.plateau import PlateauDecision, PlateauMonitor, is_plateau
from .core.session import TrainingSession
from .core.trainer import Trainer, TrainingResult, train
