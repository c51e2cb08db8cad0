# flake8: noqa

from .datasets_handler import (
    ClassMapping,
    DatasetExample,
    filter_blank_rows,
    stratified_split,
)
