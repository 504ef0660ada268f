from typing import List

from ...functions import Activation


class Node:
    """A neuron: sums weighted inputs plus bias and applies its activation."""
    def __init__(self, id: str, activation_function: Activation, bias: float = 0.1):
        self.id = id
        self.activation_function = activation_function
        self.bias = bias
        self.input_links: List["Link"] = []
        self.output_links: List["Link"] = []

        # Per-pass state
        self.total_input = 0.0
        self.output = 0.0
        self.output_derivative = 0.0
        self.input_derivative = 0.0

        # Accumulated across passes, used for bias updates
        self.accumulated_input_derivative = 0.0
        self.num_accumulated_derivatives = 0

    def update_output(self) -> float:
        """Recompute ``total_input`` and ``output``. Source nodes must already be up to date."""
        self.total_input = self.bias
        for link in self.input_links:
            self.total_input += link.weight * link.source.output
        self.output = self.activation_function.output(self.total_input)
        return self.output

    def reset_accumulators(self):
        self.accumulated_input_derivative = 0.0
        self.num_accumulated_derivatives = 0

    def __repr__(self):
        return f"Node(id={self.id}, bias={self.bias:.2f}, activation='{self.activation_function.value}')"
