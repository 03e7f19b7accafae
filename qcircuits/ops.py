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
r"""
This module defines the quantum operations of the qubit circuit language:
the :class:`Operation` contract, gates, measurements, resets and barriers,
and the composite wrappers :class:`Control`, :class:`Power`, :class:`Inverse`
and :class:`Parallel`.

Every operation acts on ``num_qubits`` qubits, ``num_bits`` classical bits and
``num_zvars`` z-registers. Operations are applied to concrete targets either by
building an :class:`~.Instruction`, by :meth:`.Circuit.push`, or inside a circuit context:

.. code-block:: python

    circuit = Circuit()
    with circuit.context:
        ops.Hgate() | 1
        ops.CXgate() | (1, 2)
        ops.Measure() | (1, 1)
"""
from collections.abc import Sequence
from fractions import Fraction
import copy
import numbers

import numpy as np

import qcircuits.circuit_utils as cu
import qcircuits.decompositions as dec
from .circuit_utils import (
    Instruction,
    ArityError,
    CircuitError,
    OperationError,
    NonInvertibleError,
    DecompositionError,
)
from .parameters import (
    FreeParameter,
    ParameterError,
    is_object_array,
    par_evaluate,
    par_is_symbolic,
    par_str,
    par_substitute,
)

# pylint: disable=abstract-method
# pylint: disable=protected-access
# pylint: disable=unused-argument


def _seq_to_list(s):
    "Converts a Sequence or a single object into a list."
    if not isinstance(s, Sequence):
        s = [s]
    return list(s)


def _check_exponent(p):
    """Validates the exponent of a power, normalizing integral values to ``int``."""
    if not isinstance(p, numbers.Real) or p < 0:
        raise ValueError("Exponent should be a non-negative real number, got {}.".format(p))
    if float(p).is_integer():
        return int(p)
    return p


def _is_integer(p):
    return float(p).is_integer()


def _exponent_str(p):
    if isinstance(p, numbers.Integral):
        return str(p)
    if isinstance(p, Fraction):
        return "({})".format(p)
    return "({})".format(par_str(p))


def _power_periodic(gate, p, period, identity):
    """Closed-form integer powers of a gate whose powers cycle with a fixed period.

    Args:
        gate (Gate): gate to raise to a power
        p (int, float): exponent
        period (int): smallest ``k > 0`` such that ``gate ** k`` is the identity
        identity (Gate): identity gate acting on the same qubits

    Returns:
        Gate: the identity, the gate itself, its inverse, or a :class:`Power` wrapper
    """
    if _is_integer(p):
        k = int(p) % period
        if k == 0:
            return identity
        if k == 1:
            return gate
        if k == period - 1:
            return gate.inverse()
    return Power(gate, p)


class Operation:
    """Abstract base class for quantum operations acting on qubits, classical bits
    and z-registers.

    The arity of an operation is given by the attributes :attr:`num_qubits`,
    :attr:`num_bits` and :attr:`num_zvars`. Operations of variable size set them
    in their constructor.

    Operations are immutable values: two operations of the same kind with equal
    parameters compare (and hash) equal.

    Args:
        par (Sequence[Any]): Operation parameters. An empty sequence if no parameters
            are required.
    """

    # default: one-qubit operation
    #: int: number of qubits the operation acts on
    num_qubits = 1
    #: int: number of classical bits the operation writes to
    num_bits = 0
    #: int: number of z-registers the operation writes to
    num_zvars = 0
    #: str: name of the operation
    name = None
    #: tuple[str]: names of the parameters, in the order they are stored in ``p``
    param_names = ()
    #: bool: whether the operation wraps another operation
    is_wrapper = False

    def __init__(self, par):
        #: list[Any]: operation parameters
        self.p = list(par)
        self._check_arity()

    def _check_arity(self):
        arity = self.arity
        if any(n < 0 for n in arity) or not any(arity):
            raise ArityError(
                "Operations must act on at least one qubit, bit or z-register, got arity {}".format(
                    arity
                )
            )

    @property
    def arity(self):
        """Number of qubits, classical bits and z-registers the operation acts on.

        Returns:
            tuple[int]: (num_qubits, num_bits, num_zvars)
        """
        return (self.num_qubits, self.num_bits, self.num_zvars)

    @property
    def param_values(self):
        """tuple[Any]: values of the parameters, in the order of :attr:`param_names`"""
        return tuple(self.p)

    def _name(self):
        return self.name or self.__class__.__name__

    def __str__(self):
        """String representation for the Operation.

        Returns:
            str: string representation
        """
        if not self.p:
            return self._name()

        temp = [par_str(i) for i in self.p]
        return self._name() + "(" + ", ".join(temp) + ")"

    def __repr__(self):
        return "<{}: {}>".format(self.__class__.__name__, self)

    def _key(self):
        """Hashable representation of the payload of the operation."""
        return tuple(self.p)

    def __eq__(self, other):
        if not isinstance(other, Operation):
            return NotImplemented
        return type(self) is type(other) and self.arity == other.arity and self._key() == other._key()

    def __hash__(self):
        return hash((self.__class__.__name__, self.arity, self._key()))

    def __or__(self, reg):
        """Apply the operation to targets inside a circuit context.

        Appends the Operation to the active :class:`.Circuit` instance, broadcasting
        over collection arguments like :meth:`.Circuit.push`.

        Args:
            reg (int, Sequence[int]): targets of the operation, qubits first

        Returns:
            list[int]: the targets
        """
        reg = _seq_to_list(reg)
        if cu.Circuit_current_context is None:
            raise CircuitError("Operations can only be applied inside a Circuit context.")
        cu.Circuit_current_context.push(self, *reg)
        return reg

    def __pow__(self, p):
        return self.power(p)

    def is_symbolic(self):
        """Returns True iff any of the parameters depends on a free parameter."""
        return any(par_is_symbolic(p) for p in self.p)

    def evaluate(self, values):
        """Substitutes values for the free parameters of the operation.

        Args:
            values (Mapping[Union[FreeParameter, str], Any]): values of the free parameters

        Returns:
            Operation: copy of the operation with the substituted parameters
        """
        # NOTE deepcopy would make copies of the parameters
        temp = copy.copy(self)
        temp.p = [par_substitute(p, values) for p in self.p]
        return temp

    def matrix(self):
        """Unitary matrix of the operation.

        Returns:
            array[complex]: square matrix of dimension ``2**num_qubits``

        Raises:
            OperationError: the operation is not unitary
        """
        raise OperationError("{} is not a unitary operation and has no matrix.".format(self))

    def inverse(self):
        """Inverse of the operation.

        Raises:
            NonInvertibleError: the operation is irreversible
        """
        raise NonInvertibleError("{} cannot be inverted.".format(self))

    @property
    def H(self):
        """Inverse of the operation, see :meth:`inverse`.

        H stands for hermitian conjugate.
        """
        return self.inverse()

    def power(self, p):
        """Operation raised to a power.

        Raises:
            OperationError: the operation cannot be raised to a power
        """
        raise OperationError("{} cannot be raised to a power.".format(self))

    def decompose(self, qubits=None, bits=None, zvars=None):
        """One-level decomposition of the operation into more elementary operations.

        Args:
            qubits (Sequence[int]): qubits the operation is acting on, ``1..num_qubits`` by default
            bits (Sequence[int]): classical bits the operation is acting on, ``1..num_bits`` by default
            zvars (Sequence[int]): z-registers the operation is acting on, ``1..num_zvars`` by default

        Returns:
            list[Instruction]: decomposition as a list of operations acting on the given targets
        """
        qubits = tuple(range(1, self.num_qubits + 1)) if qubits is None else tuple(qubits)
        bits = tuple(range(1, self.num_bits + 1)) if bits is None else tuple(bits)
        zvars = tuple(range(1, self.num_zvars + 1)) if zvars is None else tuple(zvars)
        return self._decompose(qubits, bits, zvars)

    def _decompose(self, qubits, bits, zvars):
        """Internal decomposition method defined by subclasses.

        NOTE: Does not evaluate Operation parameters, symbolic parameters remain symbolic.

        Args:
            qubits (tuple[int]): qubits the operation is acting on
            bits (tuple[int]): classical bits the operation is acting on
            zvars (tuple[int]): z-registers the operation is acting on

        Returns:
            list[Instruction]: decomposition
        """
        raise DecompositionError("No decomposition available: {}".format(self))


# ====================================================================
# Derived operation classes
# ====================================================================


class Preparation(Operation):
    """Abstract base class for operations that demolish
    the previous state of the qubits entirely.
    """


class Measurement(Operation):
    """Abstract base class for qubit measurements.

    A measurement acts on one qubit and stores its outcome in one classical bit.
    """

    num_bits = 1

    def __init__(self):
        super().__init__([])


class Gate(Operation):
    """Abstract base class for unitary quantum gates.

    Gates act on qubits only. Their matrix is computed by :meth:`_matrix`
    from the numerical values of the parameters.
    """

    def matrix(self):
        if self.is_symbolic():
            raise ParameterError(
                "{}: cannot compute the matrix of a gate with free parameters.".format(self)
            )
        return self._matrix(*par_evaluate(self.p))

    def _matrix(self, *args):
        """Internal matrix method defined by subclasses, called with numerical parameters."""
        raise NotImplementedError("Missing matrix: {}".format(self))

    def inverse(self):
        return Inverse(self)

    def power(self, p):
        p = _check_exponent(p)
        if p == 1:
            return self
        return self._power(p)

    def _power(self, p):
        return Power(self, p)

    def _decompose_controlled(self, num_controls, qubits):
        """Decomposition rule specific to the controlled version of the gate.

        Args:
            num_controls (int): number of control qubits
            qubits (tuple[int]): control qubits followed by the qubits of the gate

        Returns:
            list[Instruction], None: decomposition, or None if the generic rule applies
        """
        return None


# ====================================================================
# Non-unitary operations
# ====================================================================


class Measure(Measurement):
    r"""Measures a qubit in the computational (Z) basis and stores the outcome
    in a classical bit.
    """
    name = "Measure"


class MeasureX(Measurement):
    r"""Measures a qubit in the X basis.

    Implemented by rotating the X basis onto the computational basis
    before a :class:`Measure`, and back afterwards.
    """
    name = "MeasureX"

    def _decompose(self, qubits, bits, zvars):
        q = qubits[0]
        return [
            Instruction(Hgate(), q),
            Instruction(Measure(), q, bits[0]),
            Instruction(Hgate(), q),
        ]


class MeasureY(Measurement):
    r"""Measures a qubit in the Y basis.

    The rotation :math:`HS^\dagger` maps :math:`\ket{+i}` onto :math:`\ket{0}`.
    """
    name = "MeasureY"

    def _decompose(self, qubits, bits, zvars):
        q = qubits[0]
        return [
            Instruction(SDGgate(), q),
            Instruction(Hgate(), q),
            Instruction(Measure(), q, bits[0]),
            Instruction(Hgate(), q),
            Instruction(Sgate(), q),
        ]


class Reset(Preparation):
    r"""Resets a qubit to :math:`\ket{0}`."""
    name = "Reset"

    def __init__(self):
        super().__init__([])


class ResetX(Reset):
    r"""Resets a qubit to :math:`\ket{+}`."""
    name = "ResetX"

    def _decompose(self, qubits, bits, zvars):
        q = qubits[0]
        return [Instruction(Hgate(), q), Instruction(Reset(), q), Instruction(Hgate(), q)]


class ResetY(Reset):
    r"""Resets a qubit to :math:`\ket{+i}`."""
    name = "ResetY"

    def _decompose(self, qubits, bits, zvars):
        q = qubits[0]
        return [
            Instruction(SDGgate(), q),
            Instruction(Hgate(), q),
            Instruction(Reset(), q),
            Instruction(Hgate(), q),
            Instruction(Sgate(), q),
        ]


class Barrier(Operation):
    """Prevents the reordering of operations across it.

    A barrier does nothing to the state of the qubits. It is its own inverse
    and any power of it is itself.

    Args:
        num_qubits (int): number of qubits the barrier spans
    """
    name = "Barrier"

    def __init__(self, num_qubits=1):
        self.num_qubits = num_qubits
        super().__init__([])

    @classmethod
    def from_num_targets(cls, n):
        """Barrier spanning ``n`` qubits."""
        return cls(n)

    def inverse(self):
        return self

    def power(self, p):
        _check_exponent(p)
        return self


class Amplitude(Operation):
    """Stores the amplitude of a computational basis state in a z-register.

    Args:
        bitstring (str): basis state, one character ``"0"`` or ``"1"`` per qubit
    """
    name = "Amplitude"
    num_qubits = 0
    num_zvars = 1
    param_names = ("bitstring",)

    def __init__(self, bitstring):
        if not bitstring or set(bitstring) - {"0", "1"}:
            raise ValueError("Expected a non-empty string of zeros and ones, got {!r}.".format(bitstring))
        super().__init__([bitstring])


# ====================================================================
# Single-qubit gates
# ====================================================================


class IDgate(Gate):
    r"""Identity gate."""
    name = "ID"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.identity(2, dtype=complex)

    def inverse(self):
        return self

    def _power(self, p):
        return self

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(0, 0, 0), qubits[0])]


class Xgate(Gate):
    r"""Pauli X gate.

    .. math:: X = \begin{pmatrix} 0 & 1 \\ 1 & 0 \end{pmatrix}

    Controlled with one qubit it is the :func:`CXgate`, one of the elementary
    gates every decomposition ends up with.
    """
    name = "X"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.array([[0, 1], [1, 0]], dtype=complex)

    def inverse(self):
        return self

    def _power(self, p):
        return _power_periodic(self, p, 2, IDgate())

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(np.pi, 0, np.pi), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            raise DecompositionError("No decomposition available: CX")

        if num_controls == 2:
            a, b, c = qubits
            return [
                Instruction(Hgate(), c),
                Instruction(CXgate(), b, c),
                Instruction(TDGgate(), c),
                Instruction(CXgate(), a, c),
                Instruction(Tgate(), c),
                Instruction(CXgate(), b, c),
                Instruction(TDGgate(), c),
                Instruction(CXgate(), a, c),
                Instruction(Tgate(), b),
                Instruction(Tgate(), c),
                Instruction(Hgate(), c),
                Instruction(CXgate(), a, b),
                Instruction(Tgate(), a),
                Instruction(TDGgate(), b),
                Instruction(CXgate(), a, b),
            ]

        if num_controls == 3:
            a, b, c, d = qubits
            phase = np.pi / 8
            seq = [Instruction(Hgate(), d)]
            seq += [Instruction(Pgate(phase), q) for q in (a, b, c, d)]
            # (control, target, sign of the following phase); sign 0 means no phase
            steps = [
                (a, b, -1), (a, b, 0),
                (b, c, -1), (a, c, 1), (b, c, -1), (a, c, 0),
                (c, d, -1), (b, d, 1), (c, d, -1), (a, d, 1),
                (c, d, -1), (b, d, 1), (c, d, -1), (a, d, 0),
            ]  # fmt: skip
            for ctrl, tgt, sign in steps:
                seq.append(Instruction(CXgate(), ctrl, tgt))
                if sign:
                    seq.append(Instruction(Pgate(sign * phase), tgt))
            seq.append(Instruction(Hgate(), d))
            return seq

        return None


class Ygate(Gate):
    r"""Pauli Y gate.

    .. math:: Y = \begin{pmatrix} 0 & -i \\ i & 0 \end{pmatrix}
    """
    name = "Y"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.array([[0, -1j], [1j, 0]], dtype=complex)

    def inverse(self):
        return self

    def _power(self, p):
        return _power_periodic(self, p, 2, IDgate())

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(np.pi, np.pi / 2, np.pi / 2), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            return [Instruction(SDGgate(), t), Instruction(CXgate(), c, t), Instruction(Sgate(), t)]
        return None


class Zgate(Gate):
    r"""Pauli Z gate.

    .. math:: Z = \begin{pmatrix} 1 & 0 \\ 0 & -1 \end{pmatrix}
    """
    name = "Z"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.diag([1, -1]).astype(complex)

    def inverse(self):
        return self

    def _power(self, p):
        return _power_periodic(self, p, 2, IDgate())

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Pgate(np.pi), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            return [Instruction(Hgate(), t), Instruction(CXgate(), c, t), Instruction(Hgate(), t)]
        return None


class Hgate(Gate):
    r"""Hadamard gate.

    .. math:: H = \frac{1}{\sqrt{2}}\begin{pmatrix} 1 & 1 \\ 1 & -1 \end{pmatrix}
    """
    name = "H"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.array([[1, 1], [1, -1]], dtype=complex) / np.sqrt(2)

    def inverse(self):
        return self

    def _power(self, p):
        return _power_periodic(self, p, 2, IDgate())

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(np.pi / 2, 0, np.pi), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            return [
                Instruction(Sgate(), t),
                Instruction(Hgate(), t),
                Instruction(Tgate(), t),
                Instruction(CXgate(), c, t),
                Instruction(TDGgate(), t),
                Instruction(Hgate(), t),
                Instruction(SDGgate(), t),
            ]
        return None


class Sgate(Gate):
    r"""Phase gate :math:`S = \text{diag}(1, i)`, the square root of :math:`Z`."""
    name = "S"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return dec.pmatrix(np.pi / 2)

    def inverse(self):
        return SDGgate()

    def _power(self, p):
        if _is_integer(p):
            return [IDgate(), self, Zgate(), SDGgate()][int(p) % 4]
        return Power(self, p)

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(0, 0, np.pi / 2), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            return [Instruction(CPgate(np.pi / 2), *qubits)]
        return None


class SDGgate(Gate):
    r"""Adjoint of the phase gate, :math:`S^\dagger = \text{diag}(1, -i)`."""
    name = "SDG"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return dec.pmatrix(-np.pi / 2)

    def inverse(self):
        return Sgate()

    def _power(self, p):
        if _is_integer(p):
            return [IDgate(), self, Zgate(), Sgate()][int(p) % 4]
        return Power(self, p)

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(0, 0, -np.pi / 2), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            return [Instruction(CPgate(-np.pi / 2), *qubits)]
        return None


class Tgate(Gate):
    r""":math:`T = \text{diag}(1, e^{i\pi/4})`, the square root of :math:`S`."""
    name = "T"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return dec.pmatrix(np.pi / 4)

    def inverse(self):
        return TDGgate()

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(0, 0, np.pi / 4), qubits[0])]


class TDGgate(Gate):
    r"""Adjoint of the :math:`T` gate."""
    name = "TDG"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return dec.pmatrix(-np.pi / 4)

    def inverse(self):
        return Tgate()

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(0, 0, -np.pi / 4), qubits[0])]


class SXgate(Gate):
    r"""Square root of the Pauli X gate.

    .. math:: \sqrt{X} = \frac{1}{2}\begin{pmatrix} 1+i & 1-i \\ 1-i & 1+i \end{pmatrix}
        = e^{i\pi/4} S^\dagger H S^\dagger
    """
    name = "SX"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.array([[1 + 1j, 1 - 1j], [1 - 1j, 1 + 1j]], dtype=complex) / 2

    def inverse(self):
        return SXDGgate()

    def _decompose(self, qubits, bits, zvars):
        q = qubits[0]
        return [
            Instruction(SDGgate(), q),
            Instruction(Hgate(), q),
            Instruction(SDGgate(), q),
            Instruction(GPhase(1, np.pi / 4), q),
        ]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            return [Instruction(Hgate(), t), Instruction(CPgate(np.pi / 2), c, t), Instruction(Hgate(), t)]
        return None


class SXDGgate(Gate):
    r"""Adjoint of the square root of the Pauli X gate."""
    name = "SXDG"

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.array([[1 - 1j, 1 + 1j], [1 + 1j, 1 - 1j]], dtype=complex) / 2

    def inverse(self):
        return SXgate()

    def _decompose(self, qubits, bits, zvars):
        q = qubits[0]
        return [
            Instruction(Sgate(), q),
            Instruction(Hgate(), q),
            Instruction(Sgate(), q),
            Instruction(GPhase(1, -np.pi / 4), q),
        ]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            return [Instruction(Hgate(), t), Instruction(CPgate(-np.pi / 2), c, t), Instruction(Hgate(), t)]
        return None


class Ugate(Gate):
    r"""Generic single-qubit unitary gate.

    .. math::

        U(\theta, \phi, \lambda, \gamma) = e^{i\gamma}
        \begin{pmatrix}
            \cos(\theta/2) & -e^{i\lambda}\sin(\theta/2) \\
            e^{i\phi}\sin(\theta/2) & e^{i(\phi+\lambda)}\cos(\theta/2)
        \end{pmatrix}

    Every single-qubit unitary can be written in this form, which is why
    powers of a numerical U gate are again U gates.

    Args:
        theta (float): polar rotation angle
        phi (float): first phase
        lam (float): second phase
        gamma (float): global phase
    """
    name = "U"
    param_names = ("theta", "phi", "lam", "gamma")

    def __init__(self, theta, phi, lam, gamma=0):
        super().__init__([theta, phi, lam, gamma])

    def _matrix(self, theta, phi, lam, gamma):
        return dec.umatrix(theta, phi, lam, gamma)

    def inverse(self):
        theta, phi, lam, gamma = self.p
        return Ugate(-theta, -lam, -phi, -gamma)

    def _power(self, p):
        if self.is_symbolic():
            return Power(self, p)
        return Ugate(*dec.u_parameters(dec.matrix_power(self.matrix(), p)))

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            theta, phi, lam, gamma = self.p
            return [
                Instruction(Pgate(gamma), c),
                Instruction(Pgate((lam + phi) / 2), c),
                Instruction(Pgate((lam - phi) / 2), t),
                Instruction(CXgate(), c, t),
                Instruction(Ugate(-theta / 2, 0, -(phi + lam) / 2), t),
                Instruction(CXgate(), c, t),
                Instruction(Ugate(theta / 2, phi, 0), t),
            ]
        return None


class Pgate(Gate):
    r"""Phase shift gate.

    .. math:: P(\lambda) = \begin{pmatrix} 1 & 0 \\ 0 & e^{i\lambda} \end{pmatrix}

    Args:
        lam (float): phase
    """
    name = "P"
    param_names = ("lam",)

    def __init__(self, lam):
        super().__init__([lam])

    def _matrix(self, lam):
        return dec.pmatrix(lam)

    def inverse(self):
        return Pgate(-self.p[0])

    def _power(self, p):
        return Pgate(self.p[0] * p)

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(0, 0, self.p[0]), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            lam = self.p[0]
            return [
                Instruction(Pgate(lam / 2), c),
                Instruction(CXgate(), c, t),
                Instruction(Pgate(-lam / 2), t),
                Instruction(CXgate(), c, t),
                Instruction(Pgate(lam / 2), t),
            ]
        return None


class RXgate(Gate):
    r"""Rotation around the X axis.

    .. math:: R_X(\theta) = e^{-i\theta X/2} = U(\theta, -\pi/2, \pi/2)

    Args:
        theta (float): rotation angle
    """
    name = "RX"
    param_names = ("theta",)

    def __init__(self, theta):
        super().__init__([theta])

    def _matrix(self, theta):
        c = np.cos(theta / 2)
        s = np.sin(theta / 2)
        return np.array([[c, -1j * s], [-1j * s, c]], dtype=complex)

    def inverse(self):
        return RXgate(-self.p[0])

    def _power(self, p):
        return RXgate(self.p[0] * p)

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(self.p[0], -np.pi / 2, np.pi / 2), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            theta = self.p[0]
            return [
                Instruction(Pgate(np.pi / 2), t),
                Instruction(CXgate(), c, t),
                Instruction(Ugate(-theta / 2, 0, 0), t),
                Instruction(CXgate(), c, t),
                Instruction(Ugate(theta / 2, -np.pi / 2, 0), t),
            ]
        return None


class RYgate(Gate):
    r"""Rotation around the Y axis.

    .. math:: R_Y(\theta) = e^{-i\theta Y/2} = U(\theta, 0, 0)

    Args:
        theta (float): rotation angle
    """
    name = "RY"
    param_names = ("theta",)

    def __init__(self, theta):
        super().__init__([theta])

    def _matrix(self, theta):
        c = np.cos(theta / 2)
        s = np.sin(theta / 2)
        return np.array([[c, -s], [s, c]], dtype=complex)

    def inverse(self):
        return RYgate(-self.p[0])

    def _power(self, p):
        return RYgate(self.p[0] * p)

    def _decompose(self, qubits, bits, zvars):
        return [Instruction(Ugate(self.p[0], 0, 0), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            theta = self.p[0]
            return [
                Instruction(RYgate(theta / 2), t),
                Instruction(CXgate(), c, t),
                Instruction(RYgate(-theta / 2), t),
                Instruction(CXgate(), c, t),
            ]
        return None


class RZgate(Gate):
    r"""Rotation around the Z axis.

    .. math:: R_Z(\lambda) = e^{-i\lambda Z/2} = e^{-i\lambda/2} P(\lambda)

    Args:
        lam (float): rotation angle
    """
    name = "RZ"
    param_names = ("lam",)

    def __init__(self, lam):
        super().__init__([lam])

    def _matrix(self, lam):
        return np.diag([np.exp(-0.5j * lam), np.exp(0.5j * lam)])

    def inverse(self):
        return RZgate(-self.p[0])

    def _power(self, p):
        return RZgate(self.p[0] * p)

    def _decompose(self, qubits, bits, zvars):
        lam = self.p[0]
        return [Instruction(Ugate(0, 0, lam), qubits[0]), Instruction(GPhase(1, -lam / 2), qubits[0])]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            c, t = qubits
            lam = self.p[0]
            return [
                Instruction(RZgate(lam / 2), t),
                Instruction(CXgate(), c, t),
                Instruction(RZgate(-lam / 2), t),
                Instruction(CXgate(), c, t),
            ]
        return None


class GPhase(Gate):
    r"""Global phase :math:`e^{i\lambda}` applied to a group of qubits.

    A global phase is unobservable on its own but becomes a relative
    phase once controlled: ``Control(1, GPhase(n, lam))`` is a phase gate on the control.

    Args:
        num_qubits (int): number of qubits
        lam (float): phase
    """
    name = "GPhase"
    param_names = ("lam",)

    def __init__(self, num_qubits, lam):
        self.num_qubits = num_qubits
        super().__init__([lam])

    def _matrix(self, lam):
        return np.exp(1j * lam) * np.identity(2**self.num_qubits, dtype=complex)

    def inverse(self):
        return GPhase(self.num_qubits, -self.p[0])

    def _power(self, p):
        return GPhase(self.num_qubits, self.p[0] * p)

    def _decompose_controlled(self, num_controls, qubits):
        controls = qubits[:num_controls]
        if num_controls == 1:
            return [Instruction(Pgate(self.p[0]), controls[0])]
        return [Instruction(Control(num_controls - 1, Pgate(self.p[0])), *controls)]


# ====================================================================
# Multi-qubit gates
# ====================================================================


class SWAPgate(Gate):
    r"""Exchanges the states of two qubits."""
    name = "SWAP"
    num_qubits = 2

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.array(
            [[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]], dtype=complex
        )

    def inverse(self):
        return self

    def _power(self, p):
        return _power_periodic(self, p, 2, Parallel(2, IDgate()))

    def _decompose(self, qubits, bits, zvars):
        a, b = qubits
        return [Instruction(CXgate(), a, b), Instruction(CXgate(), b, a), Instruction(CXgate(), a, b)]

    def _decompose_controlled(self, num_controls, qubits):
        if num_controls == 1:
            a, b, c = qubits
            return [
                Instruction(CXgate(), c, b),
                Instruction(CCXgate(), a, b, c),
                Instruction(CXgate(), c, b),
            ]
        return None


class ISWAPgate(Gate):
    r"""Swaps two qubits and multiplies the :math:`\ket{01}` and :math:`\ket{10}`
    amplitudes by :math:`i`."""
    name = "ISWAP"
    num_qubits = 2

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.array(
            [[1, 0, 0, 0], [0, 0, 1j, 0], [0, 1j, 0, 0], [0, 0, 0, 1]], dtype=complex
        )

    def _decompose(self, qubits, bits, zvars):
        a, b = qubits
        return [
            Instruction(Sgate(), a),
            Instruction(Sgate(), b),
            Instruction(Hgate(), a),
            Instruction(CXgate(), a, b),
            Instruction(CXgate(), b, a),
            Instruction(Hgate(), b),
        ]


class DCXgate(Gate):
    r"""Double CNOT gate, two CX gates with alternating controls.

    Its powers cycle with period three.
    """
    name = "DCX"
    num_qubits = 2

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return np.array(
            [[1, 0, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1], [0, 1, 0, 0]], dtype=complex
        )

    def _power(self, p):
        return _power_periodic(self, p, 3, Parallel(2, IDgate()))

    def _decompose(self, qubits, bits, zvars):
        a, b = qubits
        return [Instruction(CXgate(), a, b), Instruction(CXgate(), b, a)]


class RZXgate(Gate):
    r"""Two-qubit rotation generated by :math:`Z\otimes X`.

    .. math:: R_{ZX}(\theta) = e^{-i\theta Z\otimes X/2}

    Args:
        theta (float): rotation angle
    """
    name = "RZX"
    num_qubits = 2
    param_names = ("theta",)

    def __init__(self, theta):
        super().__init__([theta])

    def _matrix(self, theta):
        c = np.cos(theta / 2)
        s = np.sin(theta / 2)
        return np.array(
            [[c, -1j * s, 0, 0], [-1j * s, c, 0, 0], [0, 0, c, 1j * s], [0, 0, 1j * s, c]],
            dtype=complex,
        )

    def inverse(self):
        return RZXgate(-self.p[0])

    def _power(self, p):
        return RZXgate(self.p[0] * p)

    def _decompose(self, qubits, bits, zvars):
        a, b = qubits
        return [
            Instruction(Hgate(), b),
            Instruction(CXgate(), a, b),
            Instruction(RZgate(self.p[0]), b),
            Instruction(CXgate(), a, b),
            Instruction(Hgate(), b),
        ]


class ECRgate(Gate):
    r"""Echoed cross-resonance gate.

    .. math:: ECR = \frac{1}{\sqrt{2}}\left(X\otimes I - Y\otimes X\right)

    It is hermitian and hence its own inverse.
    """
    name = "ECR"
    num_qubits = 2

    def __init__(self):
        super().__init__([])

    def _matrix(self):
        return (
            np.array(
                [[0, 0, 1, 1j], [0, 0, 1j, 1], [1, -1j, 0, 0], [-1j, 1, 0, 0]], dtype=complex
            )
            / np.sqrt(2)
        )

    def inverse(self):
        return self

    def _power(self, p):
        return _power_periodic(self, p, 2, Parallel(2, IDgate()))

    def _decompose(self, qubits, bits, zvars):
        a, b = qubits
        return [
            Instruction(RZXgate(np.pi / 4), a, b),
            Instruction(Xgate(), a),
            Instruction(RZXgate(-np.pi / 4), a, b),
        ]


class QFTgate(Gate):
    r"""Quantum Fourier transform.

    .. math:: QFT\ket{j} = \frac{1}{\sqrt{2^n}}\sum_{k=0}^{2^n-1} e^{2\pi i jk/2^n}\ket{k}

    The first qubit is the most significant bit of :math:`j` and :math:`k`.

    Args:
        num_qubits (int): number of qubits
    """
    name = "QFT"

    def __init__(self, num_qubits):
        self.num_qubits = num_qubits
        super().__init__([])

    def __str__(self):
        return "QFT({})".format(self.num_qubits)

    def _matrix(self):
        return dec.qft_matrix(self.num_qubits)

    def _decompose(self, qubits, bits, zvars):
        n = len(qubits)
        seq = []
        for i in range(n):
            seq.append(Instruction(Hgate(), qubits[i]))
            for j in range(i + 1, n):
                seq.append(Instruction(CPgate(np.pi / 2 ** (j - i)), qubits[j], qubits[i]))
        for i in range(n // 2):
            seq.append(Instruction(SWAPgate(), qubits[i], qubits[n - 1 - i]))
        return seq


class CustomGate(Gate):
    r"""Gate defined directly by its unitary matrix.

    The matrix may contain symbolic entries, in which case it is stored as a
    NumPy object array and must be evaluated before :meth:`matrix` can be used.

    Args:
        U (array): square unitary matrix of dimension ``2**n``
    """
    name = "Custom"
    param_names = ("U",)

    def __init__(self, U):
        U = np.asarray(U)
        if U.ndim != 2 or U.shape[0] != U.shape[1]:
            raise ValueError("The matrix of a custom gate must be square.")

        num_qubits = int(np.log2(U.shape[0]))
        if U.shape[0] < 2 or 2**num_qubits != U.shape[0]:
            raise ValueError("The dimension of the matrix must be a power of two.")

        if not is_object_array(U):
            U = U.astype(complex)
            if not dec.is_unitary(U):
                raise ValueError("The matrix of a custom gate must be unitary.")

        self.num_qubits = num_qubits
        super().__init__([U])

    def _key(self):
        U = self.p[0]
        return (U.shape, tuple(U.flatten()))

    def _matrix(self, U):
        return np.asarray(U, dtype=complex)

    def inverse(self):
        return CustomGate(np.conj(self.p[0]).T)

    def _decompose(self, qubits, bits, zvars):
        if self.num_qubits == 1 and not self.is_symbolic():
            return [Instruction(Ugate(*dec.u_parameters(self.matrix())), qubits[0])]
        return super()._decompose(qubits, bits, zvars)


# ====================================================================
# Gate declarations
# ====================================================================


class GateDecl:
    r"""Declaration of a named, parametrized gate defined by a circuit.

    The body acts on qubits ``1..num_qubits`` and may depend on the free
    parameters given as arguments. Calling the declaration with values for the
    arguments gives a :class:`GateCall` gate, which decomposes into the body
    applied to its qubits.

    **Example:**

    .. code-block:: python

        theta = FreeParameter("theta")
        ansatz = GateDecl("ansatz", [theta], [
            Instruction(Xgate(), 1),
            Instruction(RXgate(theta), 2),
        ])
        circuit.push(ansatz(0.3), 4, 2)

    Args:
        name (str): name of the gate
        args (Sequence[Union[FreeParameter, str]]): arguments of the gate
        circuit (Iterable[Instruction]): body of the gate, e.g. a :class:`.Circuit`

    Raises:
        ValueError: the arguments are not free parameters, or the body is empty
            or acts on classical bits or z-registers
    """

    def __init__(self, name, args, circuit):
        args = tuple(FreeParameter(a) if isinstance(a, str) else a for a in args)
        if not all(isinstance(a, FreeParameter) for a in args):
            raise ValueError("The arguments of a gate declaration must be free parameters.")

        instructions = list(circuit)
        if not instructions:
            raise ValueError("The body of a gate declaration cannot be empty.")
        if any(inst.bits or inst.zvars for inst in instructions):
            raise ValueError("The body of a gate declaration must act on qubits only.")

        num_qubits = max(max(inst.qubits, default=0) for inst in instructions)
        if num_qubits == 0:
            raise ValueError("The body of a gate declaration must act on qubits.")

        #: str: name of the declared gate
        self.name = name
        #: tuple[FreeParameter]: arguments of the declared gate
        self.args = args
        #: tuple[Instruction]: body of the declared gate
        self.instructions = tuple(instructions)
        #: int: number of qubits the declared gate acts on
        self.num_qubits = num_qubits

    def __call__(self, *values):
        return GateCall(self, *values)

    def __str__(self):
        return "gate {}({})".format(self.name, ", ".join(a.name for a in self.args))

    def __repr__(self):
        return "<GateDecl: {}>".format(self)


class GateCall(Gate):
    """Gate obtained by calling a :class:`GateDecl` with values for its arguments.

    Args:
        decl (GateDecl): gate declaration
        *values (Any): values of the arguments, numbers or symbolic expressions
    """

    def __init__(self, decl, *values):
        if len(values) != len(decl.args):
            raise ValueError(
                "Gate {} expects {} arguments, got {}.".format(decl.name, len(decl.args), len(values))
            )
        #: GateDecl: the declaration of the gate
        self.decl = decl
        self.num_qubits = decl.num_qubits
        super().__init__(values)

    @property
    def name(self):
        return self.decl.name

    @property
    def param_names(self):
        return tuple(a.name for a in self.decl.args)

    def _key(self):
        return (self.decl, tuple(self.p))

    def _body(self, values, qubits):
        subs = dict(zip(self.decl.args, values))
        return [
            Instruction(inst.op.evaluate(subs), *(qubits[q - 1] for q in inst.qubits))
            for inst in self.decl.instructions
        ]

    def _matrix(self, *values):
        n = self.num_qubits
        U = np.identity(2**n, dtype=complex)
        for inst in self._body(values, tuple(range(1, n + 1))):
            if _is_barrier(inst.op):
                continue
            U = dec.embed_matrix(inst.matrix(), inst.qubits, n) @ U
        return U

    def _decompose(self, qubits, bits, zvars):
        return self._body(self.p, qubits)


# ====================================================================
# Composite wrappers
# ====================================================================


class Wrapper(Gate):
    """Abstract base class for operations built by transforming another operation.

    The parameters of a wrapper are the parameters of the wrapped operation.
    The wrapper-specific scalar (number of controls, exponent, number of repeats)
    is available as :attr:`wrapper_value`.
    """

    is_wrapper = True

    def __init__(self, op):
        #: Operation: the wrapped operation
        self.op = op
        self._check_arity()

    @property
    def p(self):
        """list[Any]: parameters of the wrapped operation"""
        return self.op.p

    @property
    def param_names(self):
        return self.op.param_names

    @property
    def wrapper_value(self):
        """Wrapper-specific scalar, None if there is none."""
        return None

    def _inner_str(self):
        if self.op.is_wrapper:
            return "(" + str(self.op) + ")"
        return str(self.op)

    def _key(self):
        return (self.wrapper_value, self.op)

    def is_symbolic(self):
        return self.op.is_symbolic()

    def evaluate(self, values):
        temp = copy.copy(self)
        temp.op = self.op.evaluate(values)
        return temp


def _is_unitary(op):
    """True if the operation is a gate, looking through wrappers to the wrapped operation."""
    inner = op
    while getattr(inner, "is_wrapper", False):
        inner = inner.op
    return isinstance(inner, Gate) and not (op.num_bits or op.num_zvars)


def _check_unitary(op, action):
    if not _is_unitary(op):
        raise OperationError("Only unitary gates can be {}, got {}.".format(action, op))


def _is_barrier(op):
    """True if the operation is a barrier, possibly repeated by :class:`Parallel`."""
    while isinstance(op, Parallel):
        op = op.op
    return isinstance(op, Barrier)


def _mcx_instructions(controls, target, free):
    """Multi-controlled X gate borrowing idle qubits as ancillas.

    Lemmas 7.2 and 7.3 of Barenco et al., Phys. Rev. A 52, 3457 (1995).
    The borrowed qubits may be in any state and are restored. Without
    free qubits a single :class:`Control` instruction is returned.

    Args:
        controls (Sequence[int]): control qubits
        target (int): target qubit
        free (Sequence[int]): idle qubits that may be borrowed

    Returns:
        list[Instruction]: gates with at most two controls, unless no qubit is free
    """
    controls = list(controls)
    free = list(free)
    n = len(controls)
    if n <= 2:
        op = Control(n, Xgate()) if n else Xgate()
        return [Instruction(op, *controls, target)]

    num_qubits = n + 1 + len(free)
    if num_qubits >= 2 * n - 1:
        # anc[j] accumulates the conjunction of the first j + 2 controls
        anc = free[len(free) - (n - 2) :]
        toffoli = CCXgate()
        top = [Instruction(toffoli, controls[-1], anc[-1], target)]
        ladder = [
            Instruction(toffoli, controls[j + 1], anc[j - 1], anc[j]) for j in range(n - 3, 0, -1)
        ]
        bottom = [Instruction(toffoli, controls[0], controls[1], anc[0])]
        half = top + ladder + bottom + ladder[::-1]
        return half + half

    if free:
        m = num_qubits // 2
        first = _mcx_instructions(controls[:m], free[0], controls[m:] + [target] + free[1:])
        second = _mcx_instructions(controls[m:] + [free[0]], target, controls[:m] + free[1:])
        return first + second + first + second

    return [Instruction(Control(n, Xgate()), *controls, target)]


class Control(Wrapper):
    r"""Controlled operation.

    The wrapped gate is applied to the last ``op.num_qubits`` qubits only if all
    the ``num_controls`` control qubits (the first ones) are in the :math:`\ket{1}` state.
    The matrix is the identity, except for the trailing block which is the matrix of
    the wrapped gate. Controls of controls are merged.

    The decomposition uses the rule specific to the wrapped gate if it supplies one
    (e.g. the seven-gate decomposition of the controlled Hadamard). Otherwise, one
    control on any gate, or several controls on a multi-qubit gate, decompose the
    gate and control every resulting instruction. Several controls on a single-qubit
    gate :math:`U` use the recursive construction of Barenco et al. with
    :math:`V^2 = U`:

    .. math::

        C^k(U) = C^{k-1}(V)_{c_1..c_{k-1},t}\; C^{k-1}(X)_{c_1..c_{k-1},c_k}\;
        C(V^\dagger)_{c_k,t}\; C^{k-1}(X)_{c_1..c_{k-1},c_k}\; C(V)_{c_k,t}

    (written as a matrix product, the rightmost factor is applied first).
    The :math:`C^{k-1}(X)` gates borrow the idle target qubit as an ancilla and
    are expanded into Toffoli gates, so the gate count grows polynomially with ``k``.

    Args:
        num_controls (int): number of control qubits, at least one
        op (Gate): gate to control
    """
    name = "Control"

    def __init__(self, num_controls, op):
        if not isinstance(num_controls, numbers.Integral) or num_controls < 1:
            raise ArityError("Number of controls must be >= 1, got {}.".format(num_controls))
        _check_unitary(op, "controlled")

        if isinstance(op, Control):
            num_controls += op.num_controls
            op = op.op

        #: int: number of control qubits
        self.num_controls = int(num_controls)
        self.num_qubits = self.num_controls + op.num_qubits
        super().__init__(op)

    @property
    def wrapper_value(self):
        return self.num_controls

    def __str__(self):
        prefix = "C" if self.num_controls == 1 else "C{}".format(self.num_controls)
        return prefix + self._inner_str()

    def matrix(self):
        return dec.control_matrix(self.num_controls, self.op.matrix())

    def inverse(self):
        return Control(self.num_controls, self.op.inverse())

    def power(self, p):
        p = _check_exponent(p)
        if p == 1:
            return self
        return Control(self.num_controls, self.op.power(p))

    def _decompose(self, qubits, bits, zvars):
        k = self.num_controls
        controls, targets = qubits[:k], qubits[k:]

        rule = self.op._decompose_controlled(k, qubits)
        if rule is not None:
            return rule

        if k == 1 or self.op.num_qubits > 1:
            return [
                Instruction(Control(k, inst.op), *(controls + inst.qubits))
                for inst in self.op.decompose(targets)
            ]

        V = self.op.power(Fraction(1, 2))
        last = controls[-1]
        t = targets[0]
        # the target is idle during the inner X gates and can be borrowed
        flip = _mcx_instructions(controls[:-1], last, [t])
        return (
            [Instruction(Control(1, V), last, t)]
            + flip
            + [Instruction(Control(1, V.inverse()), last, t)]
            + flip
            + [Instruction(Control(k - 1, V), *(controls[:-1] + targets))]
        )


class Power(Wrapper):
    r"""Gate raised to a real, non-negative power.

    The matrix is the principal matrix power of the matrix of the wrapped gate.
    Powers of powers are merged by multiplying the exponents.

    Use :meth:`Operation.power` rather than this constructor to benefit from the
    closed forms known for many gates.

    Args:
        op (Gate): gate to raise to a power
        exponent (int, Fraction, float): exponent
    """
    name = "Power"

    def __init__(self, op, exponent):
        exponent = _check_exponent(exponent)
        _check_unitary(op, "raised to a power")

        if isinstance(op, Power):
            exponent = _check_exponent(op.exponent * exponent)
            op = op.op

        #: int, Fraction, float: exponent
        self.exponent = exponent
        self.num_qubits = op.num_qubits
        super().__init__(op)

    @property
    def wrapper_value(self):
        return self.exponent

    def __str__(self):
        return self._inner_str() + "^" + _exponent_str(self.exponent)

    def matrix(self):
        return dec.matrix_power(self.op.matrix(), self.exponent)

    def inverse(self):
        if _is_integer(self.exponent):
            inv = self.op.inverse()
            # Inverse.power would come back here
            if not isinstance(inv, Inverse):
                return inv.power(self.exponent)
        return Inverse(self)

    def power(self, p):
        p = _check_exponent(p)
        if p == 1:
            return self
        return self.op.power(self.exponent * p)

    def _decompose(self, qubits, bits, zvars):
        p = self.exponent
        if p == 0:
            return [Instruction(IDgate(), q) for q in qubits]
        if _is_integer(p):
            return [Instruction(self.op, *qubits) for _ in range(int(p))]

        try:
            seq = self.op.decompose(qubits)
        except DecompositionError:
            seq = []

        if len(seq) == 1:
            return [Instruction(seq[0].op.power(p), *seq[0].qubits)]

        if not self.is_symbolic():
            if self.num_qubits == 1:
                return [Instruction(Ugate(*dec.u_parameters(self.matrix())), *qubits)]
            return [Instruction(CustomGate(self.matrix()), *qubits)]

        return super()._decompose(qubits, bits, zvars)


class Inverse(Wrapper):
    r"""Inverse of a gate.

    The matrix is the conjugate transpose of the matrix of the wrapped gate,
    and the decomposition is the decomposition of the wrapped gate in reverse
    order with every instruction inverted.

    Use :meth:`Operation.inverse` rather than this constructor to benefit from
    the closed forms known for many gates.

    Args:
        op (Gate): gate to invert
    """
    name = "Inverse"

    def __init__(self, op):
        if not _is_unitary(op):
            raise NonInvertibleError("{} cannot be inverted.".format(op))

        self.num_qubits = op.num_qubits
        super().__init__(op)

    def __str__(self):
        return self._inner_str() + "†"

    def matrix(self):
        return self.op.matrix().conj().T

    def inverse(self):
        return self.op

    def power(self, p):
        p = _check_exponent(p)
        if p == 1:
            return self
        if _is_integer(p):
            return self.op.power(p).inverse()
        return Power(self, p)

    def _decompose(self, qubits, bits, zvars):
        return [inst.inverse() for inst in reversed(self.op.decompose(qubits))]


class Parallel(Wrapper):
    r"""Transversal application of an operation to consecutive blocks of targets.

    ``Parallel(r, op)`` applies ``r`` independent copies of ``op``; copy ``i``
    acts on the ``i``-th block of ``op.num_qubits`` qubits, ``op.num_bits`` bits
    and ``op.num_zvars`` z-registers. The matrix is the ``r``-fold Kronecker
    power of the matrix of ``op``.

    Args:
        repeats (int): number of copies, at least one
        op (Operation): operation to repeat
    """
    name = "Parallel"

    def __init__(self, repeats, op):
        if not isinstance(repeats, numbers.Integral) or repeats < 1:
            raise ArityError("Number of repeats must be >= 1, got {}.".format(repeats))
        if not isinstance(op, Operation):
            raise TypeError("Expected an Operation, got {!r}.".format(op))

        #: int: number of copies
        self.repeats = int(repeats)
        self.num_qubits = self.repeats * op.num_qubits
        self.num_bits = self.repeats * op.num_bits
        self.num_zvars = self.repeats * op.num_zvars
        super().__init__(op)

    @property
    def wrapper_value(self):
        return self.repeats

    def __str__(self):
        return "Parallel({}, {})".format(self.repeats, self.op)

    def matrix(self):
        return dec.kron_power(self.op.matrix(), self.repeats)

    def inverse(self):
        return Parallel(self.repeats, self.op.inverse())

    def power(self, p):
        p = _check_exponent(p)
        if p == 1:
            return self
        if _is_integer(p):
            return Parallel(self.repeats, self.op.power(p))
        return Power(self, p)

    def _decompose(self, qubits, bits, zvars):
        nq, nb, nz = self.op.arity
        return [
            Instruction(
                self.op,
                qubits=qubits[i * nq : (i + 1) * nq],
                bits=bits[i * nb : (i + 1) * nb],
                zvars=zvars[i * nz : (i + 1) * nz],
            )
            for i in range(self.repeats)
        ]


# =======================================================================
# Controlled gates, e.g. ``CXgate() == Control(1, Xgate())``


def CXgate():
    """Controlled X gate (CNOT)."""
    return Control(1, Xgate())


def CYgate():
    """Controlled Y gate."""
    return Control(1, Ygate())


def CZgate():
    """Controlled Z gate."""
    return Control(1, Zgate())


def CHgate():
    """Controlled Hadamard gate."""
    return Control(1, Hgate())


def CSgate():
    """Controlled S gate."""
    return Control(1, Sgate())


def CSDGgate():
    """Controlled adjoint S gate."""
    return Control(1, SDGgate())


def CSXgate():
    """Controlled square root of X gate."""
    return Control(1, SXgate())


def CPgate(lam):
    """Controlled phase shift gate."""
    return Control(1, Pgate(lam))


def CRXgate(theta):
    """Controlled X rotation."""
    return Control(1, RXgate(theta))


def CRYgate(theta):
    """Controlled Y rotation."""
    return Control(1, RYgate(theta))


def CRZgate(lam):
    """Controlled Z rotation."""
    return Control(1, RZgate(lam))


def CUgate(theta, phi, lam, gamma=0):
    """Controlled generic single-qubit unitary."""
    return Control(1, Ugate(theta, phi, lam, gamma))


def CCXgate():
    """Toffoli gate."""
    return Control(2, Xgate())


def C3Xgate():
    """X gate with three controls."""
    return Control(3, Xgate())


def CSWAPgate():
    """Fredkin gate."""
    return Control(1, SWAPgate())


# =======================================================================
# here we list different classes of operations for unit testing purposes

zero_args_gates = (
    IDgate,
    Xgate,
    Ygate,
    Zgate,
    Hgate,
    Sgate,
    SDGgate,
    Tgate,
    TDGgate,
    SXgate,
    SXDGgate,
    SWAPgate,
    ISWAPgate,
    DCXgate,
    ECRgate,
)
one_args_gates = (Pgate, RXgate, RYgate, RZgate, RZXgate)
gates = zero_args_gates + one_args_gates + (Ugate, GPhase, QFTgate, CustomGate)

controlled_gates = (
    CXgate,
    CYgate,
    CZgate,
    CHgate,
    CSgate,
    CSDGgate,
    CSXgate,
    CPgate,
    CRXgate,
    CRYgate,
    CRZgate,
    CUgate,
    CCXgate,
    C3Xgate,
    CSWAPgate,
)

measurements = (Measure, MeasureX, MeasureY)
resets = (Reset, ResetX, ResetY)
wrappers = (Control, Power, Inverse, Parallel)

# =======================================================================
# exported symbols

__all__ = (
    [cls.__name__ for cls in gates + measurements + resets + wrappers]
    + [func.__name__ for func in controlled_gates]
    + ["Barrier", "Amplitude", "GateDecl", "GateCall"]
)
