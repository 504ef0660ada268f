import copy
import torch
import torch.nn as nn

from ..functions import Activation
from .neural_network import NeuralNetwork

_TORCH_ACTIVATIONS = {
    Activation.SIGMOID: torch.sigmoid,
    Activation.RELU: torch.relu,
    Activation.TANH: torch.tanh,
}


class TorchNetwork(nn.Module):
    def __init__(self, network: NeuralNetwork):
        """Mirror a NeuralNetwork as an autograd module with the same weights and biases."""
        super().__init__()
        self.network = network

        self.links = list(network.links.values())
        self.sorted_nodes = list(network.iter_nodes())
        self.node_index = {node.id: idx for idx, node in enumerate(self.sorted_nodes)}
        self.num_inputs = len(network.layers[0])

        # Register weights and biases, float64 to match the manual pass
        self.weights = nn.Parameter(torch.tensor([l.weight for l in self.links], dtype=torch.float64))
        self.biases = nn.Parameter(torch.tensor([n.bias for n in self.sorted_nodes], dtype=torch.float64))

        # Build edge index tensors
        src = [self.node_index[l.source.id] for l in self.links]
        dst = [self.node_index[l.destination.id] for l in self.links]
        self.register_buffer("src_idx", torch.tensor(src, dtype=torch.long))
        self.register_buffer("dst_idx", torch.tensor(dst, dtype=torch.long))

    def forward(self, x):
        batch_size = x.size(0)
        values = [None] * len(self.sorted_nodes)

        # Fill input activations
        for i in range(self.num_inputs):
            values[i] = x[:, i].to(torch.float64)

        for idx in range(self.num_inputs, len(self.sorted_nodes)):
            node = self.sorted_nodes[idx]

            # Gather contributions from all incoming edges
            mask = (self.dst_idx == idx).nonzero(as_tuple=True)[0]
            total = self.biases[idx].expand(batch_size)
            for edge in mask.tolist():
                total = total + self.weights[edge] * values[self.src_idx[edge].item()]

            values[idx] = _TORCH_ACTIVATIONS[node.activation_function](total)

        return values[-1]

    def export_network(self) -> NeuralNetwork:
        """
        Return a copy of the source network with the module's weights and biases.
        """
        new_network = copy.deepcopy(self.network)

        for i, link in enumerate(new_network.links.values()):
            link.weight = self.weights[i].detach().item()

        for node in new_network.iter_nodes():
            node.bias = self.biases[self.node_index[node.id]].detach().item()

        return new_network
