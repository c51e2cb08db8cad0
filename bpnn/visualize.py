import numpy as np
import matplotlib.pyplot as plt


def plot_error_history(error_history, ax=None,
                       line_kwargs=dict(c='b', ls='-', lw=1)):
    """ Plot the per-epoch error of a training run

    Parameters
    ----------
    error_history: list of float
        The errors, one per epoch (epochs are numbered from 1)

    ax: matplotlib.axes.Axes, default=None
        Where to plot; the default creates a new figure

    line_kwargs: args
        Any keyword arguments that can be passed to `matplotlib.pyplot.plot`.
    """
    if len(error_history) == 0:
        raise ValueError("`error_history` is empty.")

    if ax is None:
        _, ax = plt.subplots()

    epochs = np.arange(1, len(error_history)+1)
    ax.plot(epochs, error_history, **line_kwargs)
    ax.set_xlabel('Epoch')
    ax.set_ylabel('Mean Error')
    ax.set_title('Mean Error per Epoch')

    return ax


def plot_confusion_matrix(report, ax=None, cmap=plt.cm.Blues):
    """ Show the confusion matrix of an `EvaluationReport` with the counts
    written in each cell and the per-class accuracies on the y-axis labels
    """
    matrix = np.asarray(report.confusion_matrix)
    labels = [str(label) for label in report.class_mapping.labels]

    if matrix.shape != (len(labels), len(labels)):
        raise ValueError("Confusion matrix shape does not match the labels.")

    if ax is None:
        _, ax = plt.subplots()

    ax.imshow(matrix, cmap=cmap, interpolation='nearest')

    for i in range(matrix.shape[0]):
        for j in range(matrix.shape[1]):
            ax.text(j, i, str(matrix[i, j]), ha='center', va='center')

    ax.set_xticks(np.arange(len(labels)))
    ax.set_xticklabels(labels)
    ax.set_yticks(np.arange(len(labels)))
    ax.set_yticklabels([
        "{} ({:.1f}%)".format(label, accuracy)
        for label, accuracy in zip(labels, report.per_class_accuracy)])

    ax.set_xlabel('Predicted class')
    ax.set_ylabel('True class')
    ax.set_title('Accuracy = {:.2f}%'.format(report.global_accuracy))

    return ax
