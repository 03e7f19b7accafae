#!/usr/bin/env python3
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import numpy as np

import qcircuits as qc
from qcircuits import ops
from qcircuits.compilers import Predicate

# Toffoli with a symbolic phase on the target
a = qc.FreeParameter("a")
circuit = qc.Circuit()
circuit.push(ops.CCXgate(), 1, 2, 3)
circuit.push(ops.Control(2, ops.RZgate(a)), 1, 2, 3)

# elementary gate set: U, CX and the global phase
elementary = circuit.decompose()
print(len(elementary), "elementary gates")

# keep the controlled phases, decompose everything else
phases = circuit.decompose(Predicate(lambda op: op.name in ("U", "Control") and op.num_qubits <= 2))
phases.print()

values = {a: np.pi / 5}
U = circuit.evaluate(values).matrix()
V = elementary.evaluate(values).matrix(3)
print("equal:", np.allclose(U, V))
