""" This module provides a few simple `on_epoch` functions that can be
passed to the trainer to receive the error after each epoch
"""
import logging


def collect_errors(error_list):
    """ Collects the epoch errors. Errors are appended to :code:`error_list`
    and so an empty list should be provided. Usage::

        errors = []
        session.fit(on_epoch=[collect_errors(errors), ...])
    """

    def on_epoch(epoch, error):
        error_list.append(error)

    return on_epoch


def log_progress(every=100, logger=None):
    """ Log the error every :code:`every` epochs
    """
    logger = logger or logging.getLogger('progress')

    def on_epoch(epoch, error):
        if epoch % every == 0:
            logger.info("Epoch {:d}: mean error = {:.7f}".format(epoch, error))

    return on_epoch


def plot_error_curve(line_kwargs=None, pause=0.001):
    """ Plot the epoch errors onto the current matplotlib axis, updating the
    line as training progresses. :code:`line_kwargs` is a dictionary
    of keyword arguments that, if provided, is supplied to the `plot` function
    """

    import matplotlib.pyplot as plt
    epochs = []
    errors = []
    lines = []
    kwargs = line_kwargs or {'color': 'blue', 'label': 'Mean Error'}

    def on_epoch(epoch, error):
        epochs.append(epoch)
        errors.append(error)

        if not lines:
            lines.append(plt.plot(epochs, errors, **kwargs)[0])
            plt.xlabel('Epoch')
            plt.ylabel('Error')
        else:
            lines[0].set_data(epochs, errors)
            plt.gca().relim()
            plt.gca().autoscale_view()

        plt.pause(pause)

    return on_epoch
