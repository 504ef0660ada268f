import logging
import numbers
import random
from typing import Dict, Iterator, List, Optional, Sequence

import matplotlib.pyplot as plt
import networkx as nx

from ..config import Config
from ..functions import Activation, ErrorFunction, Regularization, resolve
from .graph import Link, Node

logger = logging.getLogger(__name__)


class NeuralNetwork:
    """Fully connected feed-forward network with a single output node."""
    def __init__(
        self,
        network_shape: Sequence[int],
        activation_function,
        output_activation_function,
        regularization_function,
        rng: Optional[random.Random] = None,
        bias: float = 0.1,
        validate: bool = True,
    ):
        self._check_shape(network_shape)
        activation_function = resolve(Activation, activation_function)
        output_activation_function = resolve(Activation, output_activation_function)
        regularization_function = resolve(Regularization, regularization_function)

        self.validate = validate
        self.layers: List[List[Node]] = []
        self.nodes: Dict[str, Node] = {}
        self.links: Dict[str, Link] = {}
        rng = rng if rng is not None else random

        num_layers = len(network_shape)
        for i in range(num_layers):
            layer = []
            for j in range(network_shape[i]):
                node = Node(
                    f"{i}-{j}",
                    output_activation_function if i == num_layers - 1 else activation_function,
                    bias=bias,
                )
                layer.append(node)
                self.nodes[node.id] = node
            self.layers.append(layer)

        # Fully connect adjacent layers
        for i in range(num_layers - 1):
            for source in self.layers[i]:
                for destination in self.layers[i + 1]:
                    link = Link(source, destination, regularization_function, weight=rng.random() - 0.5)
                    source.output_links.append(link)
                    destination.input_links.append(link)
                    self.links[link.id] = link

        logger.debug(f"Built network shape={list(network_shape)} nodes={len(self.nodes)} links={len(self.links)}")

    @classmethod
    def from_config(cls, config: Config) -> "NeuralNetwork":
        seed = getattr(config, "seed", None)
        return cls(
            config.network_shape,
            config.activation,
            config.output_activation,
            config.regularization,
            rng=random.Random(seed) if seed is not None else None,
            bias=getattr(config, "bias", 0.1),
            validate=getattr(config, "validate", True),
        )

    @staticmethod
    def _check_shape(network_shape: Sequence[int]):
        if len(network_shape) < 2:
            raise ValueError("network_shape needs at least an input and an output layer")
        for size in network_shape:
            if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size < 1:
                raise ValueError(f"Layer sizes must be positive integers, got {size!r}")
        if network_shape[-1] != 1:
            raise ValueError(f"Output layer must have exactly one node, got {network_shape[-1]}")

    @property
    def output_node(self) -> Node:
        return self.layers[-1][0]

    def iter_nodes(self, ignore_inputs: bool = False) -> Iterator[Node]:
        for i, layer in enumerate(self.layers):
            if ignore_inputs and i == 0:
                continue
            yield from layer

    # --- propagation ---
    def forward_propagation(self, inputs: Sequence[float]) -> float:
        """Push ``inputs`` through the network and return the output node's value."""
        input_layer = self.layers[0]
        if self.validate and len(inputs) != len(input_layer):
            raise ValueError(f"Expected {len(input_layer)} inputs, got {len(inputs)}")

        # Input nodes pass values through without activation
        for node, value in zip(input_layer, inputs):
            node.output = value

        for layer in self.layers[1:]:
            for node in layer:
                node.update_output()
        return self.output_node.output

    def back_propagation(self, target: float, error_function):
        """
        Compute error derivatives for the last forward pass and add them to the
        node and link accumulators. Weights and biases are left untouched.
        """
        error_function = resolve(ErrorFunction, error_function)
        output_node = self.output_node
        output_node.output_derivative = error_function.derivative(output_node.output, target)

        for i in range(len(self.layers) - 1, 0, -1):
            layer = self.layers[i]

            for node in layer:
                node.input_derivative = node.output_derivative * node.activation_function.derivative(node.total_input)
                node.accumulated_input_derivative += node.input_derivative
                node.num_accumulated_derivatives += 1

            for node in layer:
                for link in node.input_links:
                    link.error_derivative = node.input_derivative * link.source.output
                    link.accumulated_error_derivative += link.error_derivative
                    link.num_accumulated_derivatives += 1

            # Input nodes get no derivatives
            if i == 1:
                continue
            for node in self.layers[i - 1]:
                node.output_derivative = 0.0
                for link in node.output_links:
                    node.output_derivative += link.weight * link.destination.input_derivative

    # --- helpers ---
    def reset_accumulators(self):
        for node in self.iter_nodes():
            node.reset_accumulators()
        for link in self.links.values():
            link.reset_accumulators()

    def error(self, target: float, error_function) -> float:
        error_function = resolve(ErrorFunction, error_function)
        return error_function.error(self.output_node.output, target)

    def regularization_penalty(self) -> float:
        return sum(link.regularization_function.output(link.weight) for link in self.links.values())

    def to_digraph(self) -> nx.DiGraph:
        G = nx.DiGraph()
        for i, layer in enumerate(self.layers):
            for node in layer:
                G.add_node(node.id, layer=i, bias=node.bias, output=node.output)
        for link in self.links.values():
            G.add_edge(
                link.source.id,
                link.destination.id,
                weight=link.weight,
                error_derivative=link.error_derivative,
                dead=link.is_dead,
            )
        return G

    @staticmethod
    def visualize_network(network: "NeuralNetwork", ax=None):
        """
        Draw a NeuralNetwork layer by layer.
        Inputs = green, hidden = blue, output = red.
        Live links = solid, dead links = dashed.
        """
        G = network.to_digraph()
        last_layer = len(network.layers) - 1

        pos = {}
        node_colors = []
        for node_id, data in G.nodes(data=True):
            layer = data["layer"]
            index = int(node_id.split("-")[1])
            pos[node_id] = (layer, -index)
            if layer == 0:
                node_colors.append("lightgreen")
            elif layer == last_layer:
                node_colors.append("salmon")
            else:
                node_colors.append("lightblue")

        nx.draw_networkx_nodes(G, pos, node_color=node_colors, node_size=800, ax=ax)

        styles = ["dashed" if data["dead"] else "solid" for _, _, data in G.edges(data=True)]
        nx.draw_networkx_edges(G, pos, edgelist=G.edges(), edge_color="black", style=styles, ax=ax)

        labels = {n: n for n in G.nodes()}
        nx.draw_networkx_labels(G, pos, labels=labels, font_size=8, ax=ax)

        edge_labels = {(u, v): f"{data['weight']:.2f}" for u, v, data in G.edges(data=True)}
        nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, font_size=6, ax=ax)

        if ax is None:
            plt.show()
