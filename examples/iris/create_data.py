import numpy as np
import pandas as pd

from sklearn.datasets import load_iris


# Write the iris dataset to a CSV file with a header line and the class
# names as labels, which is the format `bpnn.util.rows.load_rows` reads.
iris = load_iris()

frame = pd.DataFrame(iris.data, columns=[
    'sepal_length', 'sepal_width', 'petal_length', 'petal_width'])
frame['species'] = np.array(iris.target_names)[iris.target]

frame.to_csv('iris.csv', index=False)
