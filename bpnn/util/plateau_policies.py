""" This module provides a few plateau callbacks that can be passed as the
`plateau_callback` of :class:`bpnn.core.trainer.Trainer` or
:meth:`bpnn.core.session.TrainingSession.fit`
"""
from bpnn.core.config import validate_learning_rate
from bpnn.core.exception import ConfigurationError
from bpnn.core.plateau import PlateauDecision


def always_continue(error_history, epoch):
    """ Keep training with the same learning rate
    """
    return PlateauDecision(continue_training=True)


def stop_on_plateau(error_history, epoch):
    """ Stop training at the first plateau
    """
    return PlateauDecision(continue_training=False)


def scale_learning_rate(factor, initial_learning_rate, minimum=1e-6):
    """ Multiply the learning rate by `factor` at every plateau and stop once
    it would fall below `minimum`. Usage::

        policy = scale_learning_rate(0.5, config.learning_rate)
        trainer = Trainer(config, 'class', plateau_callback=policy)
    """
    if not 0 < factor:
        raise ConfigurationError("`factor` must be positive")

    state = {'learning_rate': validate_learning_rate(initial_learning_rate)}

    def plateau_callback(error_history, epoch):
        learning_rate = min(state['learning_rate'] * factor, 1.0)

        if learning_rate < minimum:
            return PlateauDecision(continue_training=False)

        state['learning_rate'] = learning_rate
        return PlateauDecision(
            continue_training=True, learning_rate=learning_rate)

    return plateau_callback


def _ask_yes_no(question, input_func):
    while True:
        answer = input_func(question + " [y/n] ").strip().lower()
        if answer in ('y', 'yes'):
            return True
        if answer in ('n', 'no'):
            return False


def console_prompt(input_func=input, print_func=print):
    """ Ask a person on the console whether to continue training and
    whether to change the learning rate
    """

    def plateau_callback(error_history, epoch):
        msg = "The error has plateaued at {:.7f} (epoch {})."
        print_func(msg.format(error_history[-1], epoch))

        if not _ask_yes_no("Continue training?", input_func):
            return PlateauDecision(continue_training=False)

        if not _ask_yes_no("Change the learning rate?", input_func):
            return PlateauDecision(continue_training=True)

        while True:
            answer = input_func("New learning rate in (0, 1]: ")
            try:
                learning_rate = validate_learning_rate(float(answer))
            except (ValueError, ConfigurationError):
                print_func("Invalid learning rate: {}".format(answer))
                continue

            return PlateauDecision(
                continue_training=True, learning_rate=learning_rate)

    return plateau_callback
