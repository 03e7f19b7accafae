# Copyright 2019-2020 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Compiler targeting the elementary gate set: generic single-qubit gates and CX."""
from qcircuits import ops

from .compiler import Compiler


class Elementary(Compiler):
    """Compiler for the elementary gate set.

    Every unitary circuit is decomposed into :class:`~.Ugate`, :func:`~.CXgate`
    and :class:`~.GPhase` gates. Non-unitary operations and custom matrices are kept.
    """

    short_name = "elementary"

    primitives = {
        # single qubit gates
        "Ugate",
        "GPhase",
        # gates given by their matrix
        "CustomGate",
        # non-unitary operations
        "Barrier",
        "Measure",
        "Reset",
        "Amplitude",
    }

    def supports(self, op):
        if isinstance(op, ops.Control):
            return op.num_controls == 1 and isinstance(op.op, ops.Xgate)
        return super().supports(op)
