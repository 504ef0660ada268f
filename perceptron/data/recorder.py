import os
import pandas as pd

from ..network import NeuralNetwork
from .pass_record import PassRecord

NODE_COLUMNS = [
    "id", "layer", "bias", "total_input", "output", "output_derivative",
    "input_derivative", "accumulated_input_derivative", "num_accumulated_derivatives",
]
LINK_COLUMNS = [
    "id", "source", "destination", "weight", "is_dead", "error_derivative",
    "accumulated_error_derivative", "num_accumulated_derivatives", "regularization",
]
PASS_COLUMNS = ["step", "inputs", "target", "output", "error", "output_derivative", "timestamp"]


def nodes_frame(network: NeuralNetwork) -> pd.DataFrame:
    """One row per node, in layer order."""
    rows = []
    for i, layer in enumerate(network.layers):
        for node in layer:
            rows.append({
                "id": node.id,
                "layer": i,
                "bias": node.bias,
                "total_input": node.total_input,
                "output": node.output,
                "output_derivative": node.output_derivative,
                "input_derivative": node.input_derivative,
                "accumulated_input_derivative": node.accumulated_input_derivative,
                "num_accumulated_derivatives": node.num_accumulated_derivatives,
            })
    return pd.DataFrame(rows, columns=NODE_COLUMNS)


def links_frame(network: NeuralNetwork) -> pd.DataFrame:
    """One row per link, in construction order."""
    rows = [
        {
            "id": link.id,
            "source": link.source.id,
            "destination": link.destination.id,
            "weight": link.weight,
            "is_dead": link.is_dead,
            "error_derivative": link.error_derivative,
            "accumulated_error_derivative": link.accumulated_error_derivative,
            "num_accumulated_derivatives": link.num_accumulated_derivatives,
            "regularization": link.regularization_function.value,
        }
        for link in network.links.values()
    ]
    return pd.DataFrame(rows, columns=LINK_COLUMNS)


class PassRecorder:
    """Appends PassRecords to a CSV file."""
    def __init__(self, path: str):
        self.path = path

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        if not os.path.exists(path):
            df = pd.DataFrame(columns=PASS_COLUMNS)
            df.to_csv(path, index=False)

    def log(self, record: PassRecord) -> None:
        df = pd.DataFrame(
            {
                "step": [record.step],
                "inputs": [" ".join(str(x) for x in record.inputs)],
                "target": [record.target],
                "output": [record.output],
                "error": [record.error],
                "output_derivative": [record.output_derivative],
                "timestamp": [record.timestamp],
            }
        )
        df.to_csv(self.path, mode="a", header=False, index=False)

    def load(self) -> pd.DataFrame:
        return pd.read_csv(self.path)
