# Copyright 2019-2022 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# The module docstring is in qcircuits/compilers/__init__.py
"""
**Module name:** :mod:`qcircuits.compilers.compiler`
"""

import abc
from typing import Callable, Sequence, Set

from qcircuits import configuration
from qcircuits.circuit_utils import DecompositionError, Instruction
from qcircuits.logger import create_logger


log = create_logger(__name__)


class Compiler(abc.ABC):
    """Abstract base class for describing circuit compilation.

    A compiler defines a target gate set through :meth:`supports`. Circuits are
    compiled by rewriting every unsupported instruction with the one-level
    decomposition of its operation until only supported operations remain.

    This information is used e.g. by :meth:`.Circuit.decompose`.
    """

    short_name = ""
    """str: short name of the compiler"""

    @property
    @abc.abstractmethod
    def primitives(self) -> Set[str]:
        """The primitive set of quantum operations directly supported
        by the compiler.

        Returns:
            set[str]: the class names of the supported operations
        """

    def supports(self, op) -> bool:
        """Checks if an operation is directly supported by the compiler.

        Args:
            op (~qcircuits.ops.Operation): quantum operation

        Returns:
            bool: ``True`` if the operation does not need to be decomposed
        """
        return op.__class__.__name__ in self.primitives

    def decompose(self, seq: Sequence[Instruction], max_depth: int = None) -> Sequence[Instruction]:
        """Recursively decompose all the instructions in a given sequence, until
        every one of them is supported by the compiler.

        Each unsupported instruction is replaced in place by the one-level decomposition of
        its operation (see :meth:`.Operation.decompose`), which is then processed in turn.
        The relative order of the instructions is preserved.

        Args:
            seq (Sequence[Instruction]): quantum circuit to decompose
            max_depth (int): maximum number of nested rewrites of a single instruction,
                by default the ``max_depth`` option of the ``[decomposition]``
                configuration section

        Returns:
            list[Instruction]: decomposed circuit

        Raises:
            DecompositionError: an operation has no decomposition, or the rewriting did
                not terminate within ``max_depth`` levels
        """
        if max_depth is None:
            max_depth = configuration.SESSION_CONFIG["decomposition"]["max_depth"]

        seq = list(seq)
        compiled = []

        # last element is processed first
        stack = [(inst, 0) for inst in reversed(seq)]
        while stack:
            inst, depth = stack.pop()

            if self.supports(inst.op):
                compiled.append(inst)
                continue

            if depth >= max_depth:
                raise DecompositionError(
                    "Decomposition of {} did not terminate within {} levels.".format(inst, max_depth)
                )

            temp = inst.decompose()
            log.debug("%s -> [%s]", inst, "; ".join(str(i) for i in temp))
            stack.extend((i, depth + 1) for i in reversed(temp))

        log.info(
            "Decomposed %d instructions into %d instructions supported by the '%s' compiler.",
            len(seq),
            len(compiled),
            self.short_name,
        )
        return compiled


class Predicate(Compiler):
    """Compiler defined by an arbitrary predicate on operations.

    **Example:**

    >>> only_u = Predicate(lambda op: op.name in ("U", "Control"))

    Args:
        func (Callable[[Operation], bool]): returns ``True`` for the supported operations
    """

    short_name = "predicate"
    primitives = set()

    def __init__(self, func: Callable):
        self.func = func

    def supports(self, op) -> bool:
        return bool(self.func(op))
