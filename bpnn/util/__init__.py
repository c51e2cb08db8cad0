# flake8: noqa

from .plateau_policies import (
    always_continue,
    console_prompt,
    scale_learning_rate,
    stop_on_plateau,
)
