"""Evaluation-counting wrapper around user objectives.

Objectives may be plain NumPy callables or torch-native functions (for example
a variational energy built from tensor operations). Either way the optimizers
see a callable returning a Python ``float`` and read the evaluation count from
the wrapper, which is the unit every budget is measured in.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
import torch


def as_float(value: Any) -> float:
    """Convert a scalar objective value to ``float``.

    Accepts Python numbers, NumPy scalars or size-1 arrays and size-1 torch
    tensors (detached before conversion).

    Raises:
        ValueError: If the value holds more than one element.
    """
    if isinstance(value, torch.Tensor):
        if value.numel() != 1:
            raise ValueError(
                f"objective must return a scalar, got a tensor of shape {tuple(value.shape)}"
            )
        return float(value.detach().item())
    arr = np.asarray(value)
    if arr.size != 1:
        raise ValueError(f"objective must return a scalar, got an array of shape {arr.shape}")
    return float(arr.item())


class ObjectiveFunction:
    """Callable that forwards points to ``fun`` and counts evaluations.

    Args:
        fun: Objective callable.
        torch_input: Pass points as float64 torch tensors instead of arrays.
            The tensor shares memory with the optimizer's buffer.

    Non-finite return values are passed through unchanged; the optimizers do
    not define their behavior on NaN or infinite objective values.
    """

    def __init__(self, fun: Callable[[Any], Any], torch_input: bool = False) -> None:
        if not callable(fun):
            raise TypeError(f"objective must be callable, got {type(fun).__name__}")
        self.fun = fun
        self.torch_input = bool(torch_input)
        self.nfev = 0

    def __call__(self, x: np.ndarray) -> float:
        self.nfev += 1
        if self.torch_input:
            return as_float(self.fun(torch.as_tensor(x, dtype=torch.float64)))
        return as_float(self.fun(x))

    def __repr__(self) -> str:
        name = getattr(self.fun, "__name__", type(self.fun).__name__)
        return f"ObjectiveFunction({name}, nfev={self.nfev})"


__all__ = ["ObjectiveFunction", "as_float"]
