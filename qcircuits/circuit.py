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
This module implements the :class:`.Circuit` class which acts as a representation for quantum circuits.

Quantum circuit representation
------------------------------

A circuit is an ordered list of :class:`.Instruction` instances, listed in the temporal order
they are applied. The order is not completely fixed though: instructions acting on disjoint
wires commute with each other. Three different (but equivalent) representations of the
circuit are used.

* The instruction list kept by :class:`.Circuit`.
* The grid, which essentially mimics a quantum circuit diagram.
  It is a mapping from wires (qubits, classical bits and z-registers) to lists of instruction
  positions touching that wire, where each list is temporally ordered.
* The DAG, obtained by making each instruction a node, and drawing an edge from each
  instruction to all its immediate followers along each wire it touches.
  It can be converted back into an instruction list by consuming it in a topological order.

.. currentmodule:: qcircuits.circuit_utils

The three representations can be converted to each other
using the functions :func:`list_to_grid`, :func:`grid_to_DAG` and :func:`DAG_to_list`.

.. currentmodule:: qcircuits.circuit
"""
import networkx as nx
import numpy as np

import qcircuits.circuit_utils as cu
from qcircuits import ops
from qcircuits import configuration
from qcircuits.compilers import Compiler, Predicate, compiler_db
from qcircuits.decompositions import embed_matrix

from .circuit_utils import Instruction, CircuitError


# for automodapi, do not include the classes that should appear under the top-level qcircuits namespace
__all__ = []


def _get_compiler(compiler):
    """Resolves the compiler argument of the decomposition functions.

    Args:
        compiler (Union[None, str, Compiler, Callable]): a compiler, the short name of a
            registered compiler, or a predicate on operations. ``None`` selects the compiler
            named in the configuration.

    Returns:
        Compiler: compiler instance
    """
    if compiler is None:
        compiler = configuration.SESSION_CONFIG["decomposition"]["compiler"]

    if isinstance(compiler, Compiler):
        return compiler

    if isinstance(compiler, str):
        if compiler not in compiler_db:
            raise CircuitError("Unknown compiler '{}'.".format(compiler))
        return compiler_db[compiler]()

    if callable(compiler):
        return Predicate(compiler)

    raise TypeError("Expected a compiler, a compiler name or a predicate, got {!r}.".format(compiler))


class Circuit:
    """Represents a quantum circuit acting on qubits, classical bits and z-registers.

    The circuit class provides a context manager for appending :mod:`~qcircuits.ops`
    to the circuit using the syntax

    .. code-block:: python3

        ops.GateName(arg1, arg2, ...) | (target1, target2, ...)

    where ``ops.GateName`` is a valid quantum operation, and the targets are 1-based
    indices: first the qubits, then the classical bits, then the z-registers.
    All operations are appended to the circuit in the order they are
    listed within the context.

    Instructions can also be added with :meth:`push`, which broadcasts over
    collections of targets, :meth:`append` and :meth:`insert`.

    **Example:**

    .. code-block:: python3

        from qcircuits import Circuit, ops

        circuit = Circuit()

        with circuit.context:
            ops.Hgate() | 1
            ops.CXgate() | (1, 2)

        circuit.push(ops.Measure(), [1, 2], [1, 2])

    The size of the circuit is not fixed: it is given by the largest index used
    by its instructions.

    Args:
        instructions (Iterable[Instruction]): initial instructions
    """

    def __init__(self, instructions=()):
        #: list[Instruction]: Instructions constituting the quantum circuit in temporal order
        self.instructions = []
        self.extend(instructions)

    def __str__(self):
        """String representation, one instruction per line."""
        return "\n".join(str(inst) for inst in self.instructions)

    def __repr__(self):
        return "<Circuit: {} instructions, {} qubits, {} bits, {} zvars>".format(
            len(self), self.num_qubits, self.num_bits, self.num_zvars
        )

    def __len__(self):
        """Number of instructions in the circuit.

        Returns:
            int: number of instructions
        """
        return len(self.instructions)

    def __iter__(self):
        return iter(self.instructions)

    def __getitem__(self, key):
        if isinstance(key, slice):
            return Circuit(self.instructions[key])
        return self.instructions[key]

    def __eq__(self, other):
        if not isinstance(other, Circuit):
            return NotImplemented
        return self.instructions == other.instructions

    def print(self, print_fn=print):
        """Print the circuit contents.

        **Example:**

        .. code-block:: python

            circuit = Circuit()

            with circuit.context:
                ops.Hgate() | 1
                ops.CXgate() | (1, 2)
                ops.Measure() | (2, 1)

        >>> circuit.print()
        H | (q[1])
        CX | (q[1], q[2])
        Measure | (q[2], c[1])

        Args:
            print_fn (function): optional custom function to use for string printing
        """
        for inst in self.instructions:
            print_fn(str(inst))

    @property
    def context(self):
        """Syntactic sugar for defining a Circuit using the :code:`with` statement.

        The Circuit object itself acts as the context manager.
        """
        return self

    def __enter__(self):
        """Enter the context for this circuit.

        Returns:
            Circuit: the circuit itself
        """
        if cu.Circuit_current_context is None:
            cu.Circuit_current_context = self
        else:
            raise RuntimeError("Only one Circuit context can be active at a time.")
        return self

    def __exit__(self, ex_type, ex_value, ex_tb):
        """Exit the quantum circuit context."""
        cu.Circuit_current_context = None

    @property
    def num_qubits(self):
        """Number of qubits the circuit acts on, the largest qubit index used.

        Returns:
            int: number of qubits
        """
        return max((max(inst.qubits, default=0) for inst in self.instructions), default=0)

    @property
    def num_bits(self):
        """Number of classical bits the circuit acts on, the largest bit index used.

        Returns:
            int: number of classical bits
        """
        return max((max(inst.bits, default=0) for inst in self.instructions), default=0)

    @property
    def num_zvars(self):
        """Number of z-registers the circuit acts on, the largest z-register index used.

        Returns:
            int: number of z-registers
        """
        return max((max(inst.zvars, default=0) for inst in self.instructions), default=0)

    def append(self, inst):
        """Append an instruction to the circuit.

        Args:
            inst (Instruction): instruction to append

        Returns:
            Circuit: the circuit itself
        """
        if not isinstance(inst, Instruction):
            raise TypeError("Expected an Instruction, got {!r}.".format(inst))
        self.instructions.append(inst)
        return self

    @staticmethod
    def _build(op, targets):
        """Broadcasts an operation over targets, see :meth:`push`."""
        insts = []
        for t in cu.shortest_zip(*targets):
            if isinstance(op, type):
                temp = op.from_num_targets(len(t)) if hasattr(op, "from_num_targets") else op()
            else:
                temp = op
            insts.append(Instruction(temp, *t))
        return insts

    def push(self, op, *targets):
        """Append an operation to the circuit, broadcast over the given targets.

        Collection arguments (lists, tuples, ranges, arrays) are iterated position-wise while
        scalar arguments are repeated; one instruction is created per position, up to the length
        of the shortest collection. All the instructions are validated before any of them is appended.

        ``op`` can also be an operation class without parameters. Variable-size
        operations such as :class:`~.Barrier` are then sized by the number of targets.

        >>> circuit.push(ops.Hgate(), [1, 2, 3])
        >>> circuit.push(ops.CXgate(), [1, 2], 3)
        >>> circuit.push(ops.Barrier, 1, 2, 3)

        Args:
            op (Union[Operation, type]): operation to append
            *targets (Union[int, Sequence[int]]): targets of the operation, qubits first

        Returns:
            Circuit: the circuit itself
        """
        self.instructions.extend(self._build(op, targets))
        return self

    def insert(self, index, obj, *targets):
        """Insert an instruction, an operation applied to targets, or a whole circuit
        before the given position.

        Args:
            index (int): position of the insertion
            obj (Union[Instruction, Operation, type, Circuit]): what to insert
            *targets (Union[int, Sequence[int]]): targets, if ``obj`` is an operation

        Returns:
            Circuit: the circuit itself
        """
        if isinstance(obj, Instruction):
            if targets:
                raise TypeError("Targets cannot be given with an Instruction.")
            new = [obj]
        elif isinstance(obj, Circuit):
            new = list(obj.instructions)
        else:
            new = self._build(obj, targets)

        self.instructions[index:index] = new
        return self

    def extend(self, other):
        """Append all the instructions of a circuit or an iterable of instructions.

        Args:
            other (Iterable[Instruction]): instructions to append

        Returns:
            Circuit: the circuit itself
        """
        new = list(other)
        for inst in new:
            if not isinstance(inst, Instruction):
                raise TypeError("Expected an Instruction, got {!r}.".format(inst))
        self.instructions.extend(new)
        return self

    def copy(self):
        """Independent copy of the circuit. The immutable instructions are shared."""
        return Circuit(self.instructions)

    def inverse(self):
        """Inverse of the circuit.

        Returns:
            Circuit: the instructions inverted, in reverse order

        Raises:
            NonInvertibleError: the circuit contains an irreversible operation
        """
        return Circuit(inst.inverse() for inst in reversed(self.instructions))

    def is_symbolic(self):
        """Returns True iff any of the instructions depends on a free parameter."""
        return any(inst.is_symbolic() for inst in self.instructions)

    def evaluate(self, values):
        """Substitute values for the free parameters of the circuit.

        Args:
            values (Mapping[Union[FreeParameter, str], Any]): values of the free parameters

        Returns:
            Circuit: circuit with the substituted parameters
        """
        return Circuit(inst.evaluate(values) for inst in self.instructions)

    def decompose(self, compiler=None):
        """Decompose the circuit into the gate set of a compiler.

        See :func:`decompose`.

        Args:
            compiler (Union[None, str, Compiler, Callable]): target gate set

        Returns:
            Circuit: decomposed circuit
        """
        return decompose(self, compiler)

    def depth(self):
        """Depth of the circuit.

        The depth is the number of instructions on the longest path of the
        dependency DAG, where instructions depend on the earlier instructions
        sharing a qubit, a classical bit or a z-register with them.

        Returns:
            int: circuit depth
        """
        if not self.instructions:
            return 0
        DAG = cu.list_to_DAG(self.instructions)
        return nx.dag_longest_path_length(DAG) + 1

    def matrix(self, num_qubits=None):
        """Unitary matrix of the circuit.

        Barriers are ignored. Meant to check decompositions of small circuits,
        the cost grows exponentially with the number of qubits.

        Args:
            num_qubits (int): size of the register, by default :attr:`num_qubits`

        Returns:
            array[complex]: unitary matrix, qubit 1 is the most significant bit

        Raises:
            OperationError: the circuit contains a non-unitary operation
        """
        if num_qubits is None:
            num_qubits = self.num_qubits

        U = np.identity(2**num_qubits, dtype=complex)
        for inst in self.instructions:
            if ops._is_barrier(inst.op):  # pylint: disable=protected-access
                continue
            U = embed_matrix(inst.matrix(), inst.qubits, num_qubits) @ U
        return U


def decompose(obj, compiler=None):
    """Decompose an operation, an instruction or a circuit into the gate set of a compiler.

    The input is not modified.

    **Example:**

    >>> qcircuits.decompose(ops.CCXgate()).print()

    Args:
        obj (Union[Operation, Instruction, Circuit]): what to decompose; operations
            are applied to the first qubits, bits and z-registers
        compiler (Union[None, str, Compiler, Callable]): target gate set, see
            :func:`_get_compiler`

    Returns:
        Circuit: decomposed circuit

    Raises:
        DecompositionError: an operation has no decomposition, or the decomposition
            did not terminate within the configured depth
    """
    if isinstance(obj, ops.Operation):
        nq, nb, nz = obj.arity
        seq = [
            Instruction(
                obj, qubits=range(1, nq + 1), bits=range(1, nb + 1), zvars=range(1, nz + 1)
            )
        ]
    elif isinstance(obj, Instruction):
        seq = [obj]
    elif isinstance(obj, Circuit):
        seq = obj.instructions
    else:
        raise TypeError("Cannot decompose {!r}.".format(obj))

    return Circuit(_get_compiler(compiler).decompose(seq))
