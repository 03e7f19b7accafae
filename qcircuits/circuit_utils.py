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
"""
This module contains the :class:`Instruction` class, the exceptions raised by the
circuit model, and various utility functions used within the :class:`~.Circuit` class.
"""

from collections.abc import Sequence
import numbers

import networkx as nx
import numpy as np

from .parameters import par_evaluate, par_is_symbolic


__all__ = [
    "Circuit_current_context",
    "ArityError",
    "TargetError",
    "CircuitError",
    "OperationError",
    "NonInvertibleError",
    "DecompositionError",
    "Instruction",
    "shortest_zip",
    "list_to_grid",
    "grid_to_DAG",
    "DAG_to_list",
    "list_to_DAG",
    "circuit_equivalence",
]


Circuit_current_context = None
"""Context for inputting a Circuit. Used to be a class attribute of :class:`.Circuit`, placed
here to avoid cyclic imports."""


class ArityError(ValueError):
    """Exception raised when the number of targets or the control/repeat count
    does not match what an operation requires.

    E.g., applying a two-qubit gate to three qubits, or ``Control(0, op)``.
    """


class TargetError(IndexError):
    """Exception raised by :class:`Instruction` when it encounters an invalid target index.

    E.g., a non-positive index, or the same qubit used twice by one instruction.
    """


class CircuitError(RuntimeError):
    """Exception raised by :class:`.Circuit` when it encounters an illegal
    operation in the quantum circuit.

    E.g., applying an operation outside of a circuit context.
    """


class OperationError(RuntimeError):
    """Exception raised when an operation is asked for something it cannot provide.

    E.g., the unitary matrix of a measurement.
    """


class NonInvertibleError(OperationError):
    """Exception raised when inverting an intrinsically irreversible operation,
    such as a measurement or a reset."""


class DecompositionError(CircuitError):
    """Exception raised when an operation cannot be decomposed any further,
    or the decomposition does not terminate within the configured depth.
    """


def _check_targets(targets, num, kind):
    """Validates one of the target tuples of an instruction.

    Args:
        targets (Sequence[int]): target indices
        num (int): number of targets the operation requires
        kind (str): register kind, used in error messages

    Returns:
        tuple[int]: the validated targets

    Raises:
        ArityError: wrong number of targets
        TargetError: non-positive or repeated targets
    """
    if len(targets) != num:
        raise ArityError(
            "Wrong number of targets: given {} for {}-{} operation".format(len(targets), num, kind)
        )

    for t in targets:
        if not isinstance(t, numbers.Integral) or isinstance(t, bool):
            raise TypeError("Target {}s must be integers, got {!r}".format(kind, t))

    targets = tuple(int(t) for t in targets)

    if any(t < 1 for t in targets):
        raise TargetError("Target {}s must be positive and >=1".format(kind))

    if len(set(targets)) != len(targets):
        raise TargetError("Target {}s cannot be repeated".format(kind))

    return targets


def _as_tuple(targets):
    """Accept a single index in addition to a Sequence."""
    if targets is None:
        return ()
    if isinstance(targets, (Sequence, range, np.ndarray)):
        return tuple(targets)
    return (targets,)


class Instruction:
    """Represents a quantum operation applied on specific qubits, classical bits
    and z-registers.

    The targets are either given as a single flat list of ``N + M + L`` indices,
    which is split positionally into qubits, bits and z-registers, or as explicit
    tuples using the keyword arguments. All indices are 1-based.

    An Instruction instance is immutable once created, and can be shared between
    several :class:`.Circuit` instances.

    >>> Instruction(ops.CXgate(), 1, 2)
    >>> Instruction(ops.Measure(), qubits=(1,), bits=(3,))

    Args:
        op (~qcircuits.ops.Operation): quantum operation to apply
        *targets (int): flat list of target indices

    Keyword Args:
        qubits (Sequence[int]): qubit targets
        bits (Sequence[int]): classical bit targets
        zvars (Sequence[int]): z-register targets
    """

    __slots__ = ("_op", "_qubits", "_bits", "_zvars")

    def __init__(self, op, *targets, qubits=None, bits=None, zvars=None):
        nq, nb, nz = op.arity

        if targets:
            if qubits is not None or bits is not None or zvars is not None:
                raise TypeError("Targets must be given either positionally or by keyword, not both.")
            if len(targets) != nq + nb + nz:
                raise ArityError(
                    "Wrong number of targets: given {} for ({}, {}, {}) operation {}".format(
                        len(targets), nq, nb, nz, op
                    )
                )
            qubits = targets[:nq]
            bits = targets[nq : nq + nb]
            zvars = targets[nq + nb :]

        self._op = op
        self._qubits = _check_targets(_as_tuple(qubits), nq, "qubit")
        self._bits = _check_targets(_as_tuple(bits), nb, "bit")
        self._zvars = _check_targets(_as_tuple(zvars), nz, "zvar")

    @property
    def op(self):
        """Operation: quantum operation to apply"""
        return self._op

    @property
    def qubits(self):
        """tuple[int]: qubits the operation acts on"""
        return self._qubits

    @property
    def bits(self):
        """tuple[int]: classical bits the operation writes to"""
        return self._bits

    @property
    def zvars(self):
        """tuple[int]: z-registers the operation writes to"""
        return self._zvars

    @property
    def targets(self):
        """tuple[int]: flat list of all the targets, qubits first"""
        return self._qubits + self._bits + self._zvars

    @property
    def name(self):
        """str: name of the operation"""
        return self._op.name

    def __str__(self):
        wires = ["q[{}]".format(q) for q in self._qubits]
        wires += ["c[{}]".format(b) for b in self._bits]
        wires += ["z[{}]".format(z) for z in self._zvars]
        return "{} | ({})".format(self._op, ", ".join(wires))

    def __repr__(self):
        return "<Instruction: {}>".format(self)

    def __eq__(self, other):
        if not isinstance(other, Instruction):
            return NotImplemented
        return (
            self._op == other.op
            and self._qubits == other.qubits
            and self._bits == other.bits
            and self._zvars == other.zvars
        )

    def __hash__(self):
        return hash((self._op, self._qubits, self._bits, self._zvars))

    def get_dependencies(self):
        """Wires the instruction acts on.

        Returns:
            list[tuple[str, int]]: register kind and index of each wire
        """
        deps = [("q", q) for q in self._qubits]
        deps += [("c", b) for b in self._bits]
        deps += [("z", z) for z in self._zvars]
        return deps

    def is_symbolic(self):
        """Returns True iff the operation has unresolved free parameters."""
        return self._op.is_symbolic()

    def matrix(self):
        """Unitary matrix of the operation, see :meth:`.Operation.matrix`."""
        return self._op.matrix()

    def inverse(self):
        """Instruction applying the inverse operation to the same targets.

        Returns:
            Instruction: inverted instruction
        """
        return Instruction(self._op.inverse(), qubits=self._qubits, bits=self._bits, zvars=self._zvars)

    def evaluate(self, values):
        """Instruction with values substituted for the free parameters of the operation.

        Args:
            values (Mapping[Union[FreeParameter, str], Any]): values of the free parameters

        Returns:
            Instruction: evaluated instruction
        """
        return Instruction(
            self._op.evaluate(values), qubits=self._qubits, bits=self._bits, zvars=self._zvars
        )

    def decompose(self):
        """One-level decomposition of the operation on the targets of this instruction.

        Returns:
            list[Instruction]: decomposition
        """
        return self._op.decompose(self._qubits, self._bits, self._zvars)


def _is_collection(x):
    return isinstance(x, (Sequence, range, np.ndarray)) and not isinstance(x, str)


def shortest_zip(*args):
    """Broadcasts target arguments position-wise.

    Collection arguments are iterated simultaneously, scalar arguments are repeated.
    The iteration stops at the end of the shortest collection; if there
    are no collections a single tuple is produced.

    >>> list(shortest_zip([1, 2, 3], 4))
    [(1, 4), (2, 4), (3, 4)]

    Args:
        *args (Union[int, Sequence[int]]): target arguments

    Returns:
        list[tuple]: one tuple of targets per broadcast position
    """
    lengths = [len(a) for a in args if _is_collection(a)]
    n = min(lengths) if lengths else 1
    return [tuple(a[i] if _is_collection(a) else a for a in args) for i in range(n)]


def list_to_grid(ls):
    """Transforms a list of Instructions to a grid representation.

    The grid is a mapping from wires to lists of positions of the :class:`Instruction`
    instances touching that wire, in temporal order. The same position will appear in each
    list that corresponds to one of the wires of the instruction.

    Args:
        ls (Iterable[Instruction]): quantum circuit
    Returns:
        dict[tuple[str, int], list[int]]: same circuit in grid form
    """
    grid = {}
    for i, inst in enumerate(ls):
        for wire in inst.get_dependencies():
            grid.setdefault(wire, []).append(i)
    return grid


def grid_to_DAG(grid, ls):
    """Transforms a grid of Instructions to a DAG representation.

    In the DAG (directed acyclic graph) each node is the position of an :class:`Instruction`
    in the circuit, stored with the instruction itself as the ``"instruction"`` node
    attribute. Edges point from instructions to their immediate followers.

    Args:
        grid (dict[tuple[str, int], list[int]]): quantum circuit in grid form
        ls (Sequence[Instruction]): quantum circuit
    Returns:
        networkx.DiGraph[int]: same circuit in DAG form
    """
    DAG = nx.DiGraph()
    for i, inst in enumerate(ls):
        DAG.add_node(i, instruction=inst)

    for _, q in grid.items():
        for i in range(1, len(q)):
            DAG.add_edge(q[i - 1], q[i])
    return DAG


def list_to_DAG(ls):
    """Transforms a list of Instructions to a DAG representation.

    Args:
        ls (Iterable[Instruction]): quantum circuit
    Returns:
        networkx.DiGraph[int]: same circuit in DAG form
    """
    ls = list(ls)
    return grid_to_DAG(list_to_grid(ls), ls)


def DAG_to_list(dag):
    """Transforms an Instruction DAG to a list representation.

    The list contains the :class:`Instruction` instances in topological order,
    ties broken by the original positions.

    Args:
        dag (networkx.DiGraph[int]): quantum circuit
    Returns:
        list[Instruction]: same circuit in list form
    """
    temp = nx.algorithms.dag.lexicographical_topological_sort(dag)
    return [dag.nodes[n]["instruction"] for n in temp]


def _params_match(p1, p2, atol, rtol):
    """Compares two parameter lists, numerically when both are free of symbols."""
    if len(p1) != len(p2):
        return False

    for a, b in zip(p1, p2):
        if isinstance(a, str) or isinstance(b, str) or par_is_symbolic(a) or par_is_symbolic(b):
            if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
                if not np.array_equal(a, b):
                    return False
            elif a != b:
                return False
        elif np.shape(a) != np.shape(b) or not np.allclose(
            par_evaluate(a), par_evaluate(b), atol=atol, rtol=rtol
        ):
            return False
    return True


def _operations_match(op1, op2, compare_params, atol, rtol):
    """Structural comparison of two operations, recursing through wrappers."""
    if type(op1) is not type(op2) or op1.arity != op2.arity:
        return False

    if op1.is_wrapper:
        if op1.wrapper_value != op2.wrapper_value:
            return False
        return _operations_match(op1.op, op2.op, compare_params, atol, rtol)

    if compare_params:
        return _params_match(op1.p, op2.p, atol, rtol)
    return True


def circuit_equivalence(circuit1, circuit2, compare_params=True, atol=1e-6, rtol=0):
    r"""Checks if two circuits are equivalent.

    This function converts the instruction lists into directed acyclic graphs,
    and runs the NetworkX `is_isomorphic` graph function in order
    to determine if the two circuits are equivalent, i.e. identical up to the
    reordering of instructions acting on disjoint wires.

    .. note::

        When checking for parameter equality between two parameters
        :math:`a` and :math:`b`, we use the following formula:

        .. math:: |a - b| \leq (\texttt{atol} + \texttt{rtol}\times|b|)

    Args:
        circuit1 (Iterable[Instruction]): quantum circuit
        circuit2 (Iterable[Instruction]): quantum circuit
        compare_params (bool): Set to ``False`` to turn off comparing operation parameters;
            equivalency will only take into account the operation kinds, wires and order.
        atol (float): the absolute tolerance parameter for checking
            parameter equality
        rtol (float): the relative tolerance parameter for checking
            parameter equality

    Returns:
        bool: returns ``True`` if two circuits are equivalent
    """
    if circuit1 is circuit2:
        return True

    DAG1 = list_to_DAG(circuit1)
    DAG2 = list_to_DAG(circuit2)

    def node_match(n1, n2):
        """Returns True if both nodes apply matching operations to the same wires"""
        i1 = n1["instruction"]
        i2 = n2["instruction"]
        if i1.get_dependencies() != i2.get_dependencies():
            return False
        return _operations_match(i1.op, i2.op, compare_params, atol, rtol)

    return nx.is_isomorphic(DAG1, DAG2, node_match=node_match)
