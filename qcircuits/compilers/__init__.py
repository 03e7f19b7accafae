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
"""
This subpackage implements the :class:`Compiler` class, an abstract base class used to define
target gate sets and to decompose quantum circuits into them.

A compiler answers one question, :meth:`Compiler.supports`: is this operation part of the
target gate set? :meth:`Compiler.decompose` then rewrites the unsupported instructions of a
circuit with their one-level decompositions until every remaining instruction is supported.

Note that the decomposition process is not perfect: it raises a :class:`.DecompositionError`
if an operation has no decomposition rule, or if the rewriting does not terminate within the
configured depth.

The compiler database :attr:`compiler_db` is a dictionary mapping the compiler short name
to the corresponding Compiler class. Arbitrary gate sets are given by wrapping a
predicate function in a :class:`Predicate` instance.
"""
from .compiler import Compiler, Predicate
from .elementary import Elementary

compilers = (Elementary,)

compiler_db = {c.short_name: c for c in compilers}
"""dict[str, ~qcircuits.compilers.Compiler]: Map from compiler name to the corresponding
class."""

__all__ = ["compiler_db", "Compiler", "Predicate"] + [i.__name__ for i in compilers]
