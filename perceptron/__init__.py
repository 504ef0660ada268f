from .config import Config
from .functions import Activation, ErrorFunction, Regularization
from .network import Link, Node, NeuralNetwork
from .walkthrough import Walkthrough

__all__ = [
    "Config",
    "Activation",
    "ErrorFunction",
    "Regularization",
    "Link",
    "Node",
    "NeuralNetwork",
    "Walkthrough",
]
