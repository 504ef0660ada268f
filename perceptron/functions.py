import math
from enum import Enum


def _sigmoid(x: float) -> float:
    # Branch on sign so math.exp never overflows
    if x >= 0:
        return 1 / (1 + math.exp(-x))
    z = math.exp(x)
    return z / (1 + z)


def _sigmoid_derivative(x: float) -> float:
    s = _sigmoid(x)
    return s * (1 - s)


def _sign(x: float) -> int:
    return -1 if x < 0 else (1 if x > 0 else 0)


class Activation(Enum):
    """Node activation. Derivatives are taken w.r.t. the node's total input."""
    SIGMOID = "sigmoid"
    RELU = "relu"
    TANH = "tanh"

    def output(self, x: float) -> float:
        return _ACTIVATIONS[self][0](x)

    def derivative(self, x: float) -> float:
        return _ACTIVATIONS[self][1](x)


class ErrorFunction(Enum):
    MEAN_SQUARED_ERROR = "meanSquaredError"

    def error(self, output: float, target: float) -> float:
        return _ERRORS[self][0](output, target)

    def derivative(self, output: float, target: float) -> float:
        return _ERRORS[self][1](output, target)


class Regularization(Enum):
    """Weight penalty applied to a link."""
    L1 = "l1"
    L2 = "l2"

    def output(self, weight: float) -> float:
        return _REGULARIZATIONS[self][0](weight)

    def derivative(self, weight: float) -> float:
        return _REGULARIZATIONS[self][1](weight)


_ACTIVATIONS = {
    Activation.SIGMOID: (_sigmoid, _sigmoid_derivative),
    Activation.RELU: (lambda x: max(0.0, x), lambda x: 0 if x <= 0 else 1),
    Activation.TANH: (math.tanh, lambda x: 1 - math.tanh(x) ** 2),
}

_ERRORS = {
    ErrorFunction.MEAN_SQUARED_ERROR: (
        lambda output, target: 0.5 * (output - target) ** 2,
        lambda output, target: output - target,
    ),
}

_REGULARIZATIONS = {
    Regularization.L1: (abs, _sign),
    Regularization.L2: (lambda w: 0.5 * w ** 2, lambda w: w),
}


def resolve(kind, value):
    """Return ``value`` as a member of enum ``kind``, accepting member names or values."""
    if isinstance(value, kind):
        return value
    try:
        return kind(value)
    except ValueError:
        pass
    if isinstance(value, str) and value.upper() in kind.__members__:
        return kind[value.upper()]
    options = ", ".join(m.value for m in kind)
    raise ValueError(f"Unknown {kind.__name__} '{value}'. Expected one of: {options}")
