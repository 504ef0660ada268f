from typing import List
from dataclasses import dataclass, field
import time


@dataclass
class PassRecord:
    step: int
    inputs: List[float]
    target: float
    output: float
    error: float
    output_derivative: float

    timestamp: float = field(default_factory=time.time)
