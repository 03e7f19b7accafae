# Copyright 2019 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
r"""Unit tests for the Circuit class"""
import pytest

import numpy as np

import qcircuits as qc
from qcircuits import ops
from qcircuits import circuit_utils as cu
from qcircuits.circuit_utils import (
    Instruction,
    ArityError,
    CircuitError,
    NonInvertibleError,
    OperationError,
)
from qcircuits.parameters import FreeParameter


pytestmark = pytest.mark.frontend


@pytest.fixture
def circuit():
    """Circuit fixture."""
    return qc.Circuit()


@pytest.fixture
def bell():
    """Circuit preparing a Bell state and measuring it."""
    c = qc.Circuit()
    with c.context:
        ops.Hgate() | 1
        ops.CXgate() | (1, 2)
        ops.Measure() | (1, 1)
        ops.Measure() | (2, 2)
    return c


class TestCircuit:
    """Tests for the basic Circuit functionality"""

    def test_empty(self, circuit):
        """An empty circuit has no size on any axis."""
        assert len(circuit) == 0
        assert circuit.num_qubits == 0
        assert circuit.num_bits == 0
        assert circuit.num_zvars == 0
        assert circuit.depth() == 0
        assert list(circuit) == []

    def test_with_block(self, circuit):
        """Gates are added to a circuit using a with block."""
        with circuit.context as c:
            assert c is circuit
            ops.Hgate() | 1
            ops.CXgate() | (1, 2)

        assert circuit.instructions == [
            Instruction(ops.Hgate(), 1),
            Instruction(ops.CXgate(), 1, 2),
        ]
        assert cu.Circuit_current_context is None

    def test_outside_context(self):
        """Operations cannot be applied outside of a circuit context."""
        with pytest.raises(CircuitError, match="only be applied inside a Circuit context"):
            ops.Hgate() | 1

    def test_nested_context(self, circuit):
        """Only one circuit context can be active."""
        other = qc.Circuit()
        with circuit.context:
            with pytest.raises(RuntimeError, match="Only one Circuit context"):
                with other.context:
                    pass
        assert cu.Circuit_current_context is None

    def test_context_exit_on_error(self, circuit):
        """The context is cleared even if the block raises."""
        with pytest.raises(ArityError):
            with circuit.context:
                ops.CXgate() | 1
        assert cu.Circuit_current_context is None
        assert len(circuit) == 0

    def test_counts(self, bell):
        """Register sizes are given by the largest indices used."""
        assert len(bell) == 4
        assert bell.num_qubits == 2
        assert bell.num_bits == 2
        assert bell.num_zvars == 0

        bell.push(ops.Amplitude("00"), 3)
        assert bell.num_zvars == 3

    def test_end_to_end(self, circuit):
        """Counts follow the pushes, including broadcast ones."""
        circuit.push(ops.Hgate(), 1)
        assert circuit.num_qubits == 1
        assert len(circuit) == 1

        circuit.push(ops.CXgate(), 1, [2, 3, 4])
        assert circuit.num_qubits == 4
        assert len(circuit) == 4

    def test_iteration_restartable(self, bell):
        """The circuit can be iterated several times in insertion order."""
        first = list(bell)
        second = list(bell)
        assert first == second == bell.instructions

    def test_indexing(self, bell):
        """Integer indices give instructions, slices give circuits."""
        assert bell[0] == Instruction(ops.Hgate(), 1)
        assert bell[-1] == Instruction(ops.Measure(), 2, 2)

        head = bell[:2]
        assert isinstance(head, qc.Circuit)
        assert len(head) == 2
        assert head.num_bits == 0

    def test_equality(self, bell):
        """Circuits are equal if their instruction lists are."""
        assert bell == bell.copy()
        assert bell != bell[:3]

    def test_copy_is_independent(self, bell):
        """Appending to a copy does not change the original."""
        c = bell.copy()
        c.push(ops.Xgate(), 3)
        assert len(c) == 5
        assert len(bell) == 4

    def test_print(self, bell):
        """Printing uses one line per instruction."""
        lines = []
        bell.print(lines.append)
        assert lines == [
            "H | (q[1])",
            "CX | (q[1], q[2])",
            "Measure | (q[1], c[1])",
            "Measure | (q[2], c[2])",
        ]
        assert str(bell) == "\n".join(lines)

    def test_repr(self, bell):
        """Summary representation."""
        assert repr(bell) == "<Circuit: 4 instructions, 2 qubits, 2 bits, 0 zvars>"


class TestPush:
    """Tests for adding instructions to circuits"""

    def test_broadcast(self, circuit):
        """A scalar argument is repeated along a collection."""
        res = circuit.push(ops.CXgate(), [1, 2, 3], 4)
        assert res is circuit
        assert circuit.instructions == [
            Instruction(ops.CXgate(), 1, 4),
            Instruction(ops.CXgate(), 2, 4),
            Instruction(ops.CXgate(), 3, 4),
        ]

    def test_broadcast_shortest(self, circuit):
        """The shortest collection truncates the broadcast."""
        circuit.push(ops.SWAPgate(), [1, 2, 3], [4, 5])
        assert [inst.qubits for inst in circuit] == [(1, 4), (2, 5)]

    def test_broadcast_in_context(self, circuit):
        """The pipe syntax broadcasts like push."""
        with circuit.context:
            ops.Hgate() | ([1, 2, 3],)
            ops.Measure() | (range(1, 4), range(1, 4))
        assert len(circuit) == 6
        assert circuit.num_bits == 3

    def test_empty_collection(self, circuit):
        """An empty collection adds no instructions."""
        circuit.push(ops.Hgate(), [])
        assert len(circuit) == 0

    def test_all_or_nothing(self, circuit):
        """A failing broadcast does not append anything."""
        with pytest.raises(IndexError):
            circuit.push(ops.CXgate(), [1, 2, 3], 2)
        assert len(circuit) == 0

    def test_operation_class(self, circuit):
        """Classes without parameters are instantiated, barriers sized by the targets."""
        circuit.push(ops.Hgate, 1)
        circuit.push(ops.Barrier, 1, 2, 3)
        assert circuit[0].op == ops.Hgate()
        assert circuit[1].op == ops.Barrier(3)
        assert circuit[1].qubits == (1, 2, 3)

    def test_append(self, circuit):
        """Only instructions can be appended."""
        inst = Instruction(ops.Xgate(), 2)
        circuit.append(inst)
        assert circuit[0] is inst

        with pytest.raises(TypeError, match="Expected an Instruction"):
            circuit.append(ops.Xgate())

    def test_insert(self, bell):
        """Instructions, operations and circuits can be inserted at a position."""
        bell.insert(1, Instruction(ops.Zgate(), 1))
        assert bell[1] == Instruction(ops.Zgate(), 1)

        bell.insert(0, ops.Xgate(), [1, 2])
        assert bell[0] == Instruction(ops.Xgate(), 1)
        assert bell[1] == Instruction(ops.Xgate(), 2)

        other = qc.Circuit([Instruction(ops.Ygate(), 3)])
        bell.insert(len(bell), other)
        assert bell[-1] == Instruction(ops.Ygate(), 3)
        assert len(bell) == 8

    def test_insert_instruction_with_targets(self, circuit):
        """Targets cannot be given with an instruction."""
        with pytest.raises(TypeError):
            circuit.insert(0, Instruction(ops.Xgate(), 1), 2)

    def test_extend(self, bell):
        """Appending another circuit."""
        c = qc.Circuit([Instruction(ops.Xgate(), 1)])
        c.extend(bell)
        assert len(c) == 5
        assert c[1:] == bell

        with pytest.raises(TypeError):
            c.extend([ops.Xgate()])


class TestCircuitMethods:
    """Tests for circuit transformations and derived quantities"""

    def test_inverse(self, circuit):
        """The inverse reverses the order and inverts each instruction."""
        circuit.push(ops.Sgate(), 1)
        circuit.push(ops.CXgate(), 1, 2)
        circuit.push(ops.RXgate(0.3), 2)

        inv = circuit.inverse()
        assert inv.instructions == [
            Instruction(ops.RXgate(-0.3), 2),
            Instruction(ops.CXgate(), 1, 2),
            Instruction(ops.SDGgate(), 1),
        ]
        assert np.allclose(inv.matrix() @ circuit.matrix(), np.identity(4))

    def test_inverse_measurement(self, bell):
        """Measurements cannot be inverted."""
        with pytest.raises(NonInvertibleError):
            bell.inverse()

    def test_evaluate(self, circuit):
        """Free parameters are substituted in all instructions."""
        a = FreeParameter("a")
        b = FreeParameter("b")
        circuit.push(ops.RZgate(a), 1)
        circuit.push(ops.CRXgate(2 * b), 1, 2)
        assert circuit.is_symbolic()

        half = circuit.evaluate({a: 0.1})
        assert half.is_symbolic()

        res = circuit.evaluate({"a": 0.1, "b": 0.2})
        assert not res.is_symbolic()
        assert res[0].op.p[0] == pytest.approx(0.1)
        assert res[1].op.op.p[0] == pytest.approx(0.4)
        # the original is unchanged
        assert circuit.is_symbolic()

    def test_depth(self, circuit):
        """Depth is the longest chain of dependent instructions."""
        circuit.push(ops.Hgate(), [1, 2, 3, 4])
        assert circuit.depth() == 1

        circuit.push(ops.CXgate(), 1, 2)
        circuit.push(ops.CXgate(), 3, 4)
        assert circuit.depth() == 2

        circuit.push(ops.CXgate(), 2, 3)
        assert circuit.depth() == 3

    def test_depth_classical_wires(self, circuit):
        """Instructions sharing a classical bit depend on each other."""
        circuit.push(ops.Measure(), 1, 1)
        circuit.push(ops.Measure(), 2, 1)
        assert circuit.depth() == 2

    def test_matrix(self, bell):
        """Matrix of a unitary circuit, qubit 1 is the most significant."""
        c = bell[:2]
        expected = np.array(
            [[1, 0, 1, 0], [0, 1, 0, 1], [0, 1, 0, -1], [1, 0, -1, 0]]
        ) / np.sqrt(2)
        assert np.allclose(c.matrix(), expected)

        X = ops.Xgate().matrix()
        c = qc.Circuit([Instruction(ops.Xgate(), 2)])
        assert np.allclose(c.matrix(3), np.kron(np.kron(np.identity(2), X), np.identity(2)))

    def test_matrix_skips_barriers(self, circuit):
        """Barriers do not change the matrix."""
        circuit.push(ops.Barrier, 1, 2)
        assert np.allclose(circuit.matrix(), np.identity(4))

    def test_matrix_non_unitary(self, bell):
        """Measurements have no matrix."""
        with pytest.raises(OperationError):
            bell.matrix()


class TestDecompose:
    """Tests for the decompose entry points"""

    def test_operation(self):
        """Operations are applied to the first targets."""
        res = qc.decompose(ops.SWAPgate())
        assert isinstance(res, qc.Circuit)
        assert res.instructions == [
            Instruction(ops.CXgate(), 1, 2),
            Instruction(ops.CXgate(), 2, 1),
            Instruction(ops.CXgate(), 1, 2),
        ]

    def test_instruction(self):
        """Instructions keep their targets."""
        res = qc.decompose(Instruction(ops.Hgate(), 3))
        assert len(res) == 1
        assert res[0].qubits == (3,)
        assert isinstance(res[0].op, ops.Ugate)

    def test_circuit_unchanged(self, bell):
        """The input circuit is not modified."""
        orig = bell.copy()
        res = bell.decompose()
        assert bell == orig
        assert len(res) == 4

    def test_invalid(self):
        """Only operations, instructions and circuits can be decomposed."""
        with pytest.raises(TypeError, match="Cannot decompose"):
            qc.decompose(42)

    def test_unknown_compiler(self, bell):
        """Compilers are looked up by name."""
        with pytest.raises(CircuitError, match="Unknown compiler 'foo'"):
            bell.decompose("foo")

    def test_invalid_compiler(self, bell):
        """Compilers must be compilers, names or predicates."""
        with pytest.raises(TypeError, match="Expected a compiler"):
            bell.decompose(3)

    def test_predicate(self, bell):
        """A predicate defines the gate set."""
        res = bell.decompose(lambda op: True)
        assert res == bell

        res = bell.decompose(lambda op: op.name != "H")
        assert isinstance(res[0].op, ops.Ugate)
        assert res[1:] == bell[1:]
