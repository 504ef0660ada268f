import random
from typing import Optional

from ...functions import Regularization
from .node import Node


class Link:
    """A weighted edge from a node to a node in the next layer."""
    def __init__(
        self,
        source: Node,
        destination: Node,
        regularization_function: Regularization,
        weight: Optional[float] = None,
    ):
        self.id = f"{source.id}-{destination.id}"
        self.source = source
        self.destination = destination
        self.weight = random.random() - 0.5 if weight is None else weight
        self.is_dead = False
        self.regularization_function = regularization_function

        self.error_derivative = 0.0
        self.accumulated_error_derivative = 0.0
        self.num_accumulated_derivatives = 0

    def reset_accumulators(self):
        self.accumulated_error_derivative = 0.0
        self.num_accumulated_derivatives = 0

    def __repr__(self):
        status = "D" if self.is_dead else "A"
        return f"Link({self.source.id}->{self.destination.id}, w={self.weight:.2f}, {status})"
