import sys

import matplotlib.pyplot as plt
import numpy as np

from bpnn import TrainingSession
from bpnn.core.trainer import setup_logging
from bpnn.util import console_prompt, scale_learning_rate
from bpnn.util.on_epoch import log_progress
from bpnn.util.rows import load_rows
from bpnn.visualize import plot_confusion_matrix, plot_error_history


random_state = np.random.RandomState(1234)

setup_logging('iris-train-log.txt')

# Load the data (see create_data.py) ##########################################

rows = load_rows('iris.csv')

session = TrainingSession(label_column='species', random_state=random_state)
session.load(rows)

# Configure and train #########################################################

config = session.configure(
    activation='logistic', learning_rate=0.2,
    max_epochs=1000, error_threshold=0.00001)

# Pass `--interactive` to be asked what to do when the error plateaus;
# otherwise the learning rate is halved at each plateau.
if '--interactive' in sys.argv:
    plateau_callback = console_prompt()
else:
    plateau_callback = scale_learning_rate(0.5, config.learning_rate)

result = session.fit(plateau_callback=plateau_callback,
                     on_epoch=log_progress(every=100))

print("Stopped after {} epochs ({})".format(result.epochs, result.stop_reason))

# Evaluate on the held-out rows ###############################################

report = session.evaluate()

print("Confusion matrix (rows = true, columns = predicted):")
print(report.confusion_matrix)
print("Global accuracy: {:.2f}%".format(report.global_accuracy))
for label, accuracy in zip(report.class_mapping.labels,
                           report.per_class_accuracy):
    print("  {}: {:.2f}%".format(label, accuracy))

fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(11, 4.5))
plot_error_history(result.error_history, ax=ax1)
plot_confusion_matrix(report, ax=ax2)
plt.tight_layout()
plt.show()
