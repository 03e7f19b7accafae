#!/usr/bin/env python3
import qcircuits as qc
from qcircuits.ops import (
    Hgate,
    RYgate,
    CXgate,
    CZgate,
    Measure,
    MeasureX,
)

import numpy as np

circuit = qc.Circuit()

with circuit.context:
    # prepare the state to teleport
    RYgate(np.pi / 3) | 1

    # shared Bell pair
    Hgate() | 2
    CXgate() | (2, 3)

    # Bell measurement
    CXgate() | (1, 2)
    MeasureX() | (1, 1)
    Measure() | (2, 2)

# corrections, written as controlled gates acting before the measurements
fixed = circuit[:4]
fixed.push(CXgate(), 2, 3)
fixed.push(Hgate(), 1)
fixed.push(CZgate(), 1, 3)

circuit.print()
print("depth:", circuit.depth())

decomposed = fixed.decompose()
decomposed.print()
print(np.round(decomposed.matrix(), 3))
