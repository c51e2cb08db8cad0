import unittest
import warnings

import matplotlib
matplotlib.use('Agg')  # noqa: E402

import matplotlib.pyplot as plt
import numpy

from bpnn.util.on_epoch import collect_errors, log_progress, plot_error_curve


class TestOnEpoch(unittest.TestCase):

    def test_collect_errors(self):
        errors = []
        on_epoch = collect_errors(errors)

        for epoch, error in enumerate([0.3, 0.2, 0.1], start=1):
            on_epoch(epoch, error)

        self.assertEqual(errors, [0.3, 0.2, 0.1])

    def test_log_progress(self):
        on_epoch = log_progress(every=2)

        with self.assertLogs('progress', level='INFO') as logs:
            for epoch in range(1, 6):
                on_epoch(epoch, 0.1)

        self.assertEqual(len(logs.output), 2)
        self.assertIn('Epoch 4', logs.output[-1])


class TestPlotErrorCurve(unittest.TestCase):

    def setUp(self):
        plt.figure()

    def tearDown(self):
        plt.close('all')

    def run_epochs(self, on_epoch, errors):
        # Agg is non-interactive; `plt.pause` may warn about showing
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', UserWarning)
            for epoch, error in enumerate(errors, start=1):
                on_epoch(epoch, error)

    def test_single_line_updated(self):
        errors = [0.5, 2.5, 0.1]
        self.run_epochs(plot_error_curve(pause=0), errors)

        ax = plt.gca()
        line, = ax.get_lines()

        numpy.testing.assert_array_equal(line.get_xdata(), [1, 2, 3])
        numpy.testing.assert_array_equal(line.get_ydata(), errors)
        self.assertEqual(line.get_label(), 'Mean Error')
        self.assertEqual(ax.get_xlabel(), 'Epoch')
        self.assertEqual(ax.get_ylabel(), 'Error')

        # The limits follow the data added after the first epoch
        ymin, ymax = ax.get_ylim()
        self.assertLessEqual(ymin, 0.1)
        self.assertGreaterEqual(ymax, 2.5)
        xmin, xmax = ax.get_xlim()
        self.assertGreaterEqual(xmax, 3)

    def test_line_kwargs(self):
        on_epoch = plot_error_curve(
            line_kwargs={'color': 'red', 'label': 'Error'}, pause=0)
        self.run_epochs(on_epoch, [0.3, 0.2])

        line, = plt.gca().get_lines()
        self.assertEqual(line.get_color(), 'red')
        self.assertEqual(line.get_label(), 'Error')


if __name__ == '__main__':
    unittest.main()
