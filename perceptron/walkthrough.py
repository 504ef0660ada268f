import logging
import os
from typing import List, Optional

import matplotlib.pyplot as plt
import torch

from .config import Config
from .data import PassRecord, PassRecorder
from .functions import ErrorFunction, resolve
from .network import NeuralNetwork, TorchNetwork

logger = logging.getLogger(__name__)
class Walkthrough:
    """
    Runs forward and backward passes over the configured samples so the
    resulting derivatives can be inspected. Weights and biases never change.
    """
    def __init__(self, config: Config) -> None:
        self.config = config
        self.error_function = resolve(ErrorFunction, getattr(config, "error_function", "meanSquaredError"))
        self.stats_path: Optional[str] = getattr(config, "stats_path", None)
        self.network: Optional[NeuralNetwork] = None
        self.gradient_check = getattr(config, "gradient_check", True)
        self.gradient_tolerance = getattr(config, "gradient_tolerance", 1e-8)
        self.gradient_gap: Optional[float] = None

    def run(self) -> List[PassRecord]:
        if len(self.config.inputs) != len(self.config.targets):
            raise ValueError(
                f"Got {len(self.config.inputs)} input rows but {len(self.config.targets)} targets"
            )

        self.network = NeuralNetwork.from_config(self.config)
        self.network.reset_accumulators()
        recorder = PassRecorder(self.stats_path) if self.stats_path else None

        logger.info(f"Starting walkthrough over {len(self.config.targets)} samples")

        records = []
        for step, (inputs, target) in enumerate(zip(self.config.inputs, self.config.targets)):
            try:
                output = self.network.forward_propagation(inputs)
                self.network.back_propagation(target, self.error_function)
            except Exception:
                logger.error(f"Step {step}: pass failed for inputs={inputs}", exc_info=True)
                raise

            record = PassRecord(
                step=step,
                inputs=list(inputs),
                target=target,
                output=output,
                error=self.network.error(target, self.error_function),
                output_derivative=self.network.output_node.output_derivative,
            )
            records.append(record)
            if recorder is not None:
                recorder.log(record)
            logger.info(f"Step {step}: inputs={record.inputs} target={target} output={output:.6f} error={record.error:.6f}")

        self.log_summary()
        if self.gradient_check:
            self.check_gradients()
        return records

    def log_summary(self) -> None:
        if self.network is None:
            raise RuntimeError("No network to summarise, call run() first")
        penalty = self.network.regularization_penalty()
        grads = " | ".join(
            f"{link.id}: {link.accumulated_error_derivative / link.num_accumulated_derivatives:.6f}"
            for link in self.network.links.values()
            if link.num_accumulated_derivatives
        )
        logger.info(f"[Summary] regularization penalty={penalty:.6f} | mean link derivatives -> {grads}")

    def check_gradients(self) -> float:
        """
        Compare the derivatives accumulated by run() with torch autograd on the
        summed error over the same samples. Returns the largest absolute gap.
        """
        if self.network is None:
            raise RuntimeError("No network to check, call run() first")
        if self.error_function is not ErrorFunction.MEAN_SQUARED_ERROR:
            raise ValueError(f"No autograd reference for {self.error_function.value}")

        module = TorchNetwork(self.network)
        x = torch.tensor(self.config.inputs, dtype=torch.float64)
        y = torch.tensor(self.config.targets, dtype=torch.float64)
        loss = (0.5 * (module(x) - y) ** 2).sum()
        loss.backward()

        gaps = [
            abs(module.weights.grad[i].item() - link.accumulated_error_derivative)
            for i, link in enumerate(self.network.links.values())
        ]
        gaps += [
            abs(module.biases.grad[module.node_index[node.id]].item() - node.accumulated_input_derivative)
            for node in self.network.iter_nodes(ignore_inputs=True)
        ]
        self.gradient_gap = max(gaps)

        if self.gradient_gap > self.gradient_tolerance:
            logger.warning(f"[Gradient check] max gap {self.gradient_gap:.3e} exceeds tolerance {self.gradient_tolerance:.1e}")
        else:
            logger.info(f"[Gradient check] max gap {self.gradient_gap:.3e}")
        return self.gradient_gap

    def save_figure(self, path: Optional[str] = None) -> str:
        if self.network is None:
            self.network = NeuralNetwork.from_config(self.config)
        path = path or self.config.figure_path

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        fig, ax = plt.subplots(figsize=(8, 6))
        NeuralNetwork.visualize_network(self.network, ax=ax)
        ax.set_axis_off()
        fig.savefig(path)
        plt.close(fig)
        logger.info(f"Saved network figure to {path}")
        return path
