from .graph import Link, Node
from .neural_network import NeuralNetwork
from .torch_net import TorchNetwork

__all__ = ["Link", "Node", "NeuralNetwork", "TorchNetwork"]
