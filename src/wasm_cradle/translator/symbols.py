"""
Symbol/Local Table
==================

One flat, insertion-ordered table of the locals declared in a
translation unit. There is no nested scoping: a local declared anywhere
is visible everywhere after its declaration, and entries are never
removed.

The control-flow translator only records that a name was declared. The
arithmetic translator also records the value last assigned to it, when
that value is known at translation time.

Redeclaration Policy
--------------------
| Policy  | declare() of an existing name          |
|---------|----------------------------------------|
| allow   | silently succeeds (default)            |
| error   | raises DuplicateDeclarationError       |
"""

from dataclasses import dataclass
from typing import Optional

from wasm_cradle.errors import SourceLocation
from wasm_cradle.translator.errors import (
    DuplicateDeclarationError,
    UndeclaredIdentifierError,
)


REDECLARATION_POLICIES = ("allow", "error")


@dataclass
class LocalBinding:
    """
    A declared local.

    Attributes:
        name: Local name
        location: Where it was first declared
        value: Last assigned 32-bit value; None when unknown or never assigned
    """
    name: str
    location: Optional[SourceLocation] = None
    value: Optional[int] = None


class SymbolTable:
    """
    Insertion-ordered table of locals for a single translation.

    Attributes:
        redeclaration: "allow" or "error"
    """

    def __init__(self, redeclaration: str = "allow"):
        if redeclaration not in REDECLARATION_POLICIES:
            raise ValueError(f"unknown redeclaration policy '{redeclaration}'")
        self.redeclaration = redeclaration
        self._locals: dict[str, LocalBinding] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._locals

    def __len__(self) -> int:
        return len(self._locals)

    @property
    def names(self) -> list[str]:
        """Declared names in declaration order."""
        return list(self._locals)

    def is_declared(self, name: str) -> bool:
        return name in self._locals

    def declare(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> bool:
        """
        Declare a local.

        Returns:
            True if the name is new, False for a tolerated redeclaration

        Raises:
            DuplicateDeclarationError: Redeclaration under the "error" policy
        """
        existing = self._locals.get(name)
        if existing is not None:
            if self.redeclaration == "error":
                raise DuplicateDeclarationError(
                    name,
                    location=location,
                    original_location=existing.location,
                    source_line=source_line,
                )
            return False

        self._locals[name] = LocalBinding(name, location)
        return True

    def assign(
        self,
        name: str,
        value: Optional[int],
        location: Optional[SourceLocation] = None,
    ) -> bool:
        """
        Record an assignment, declaring the local on first use.

        Assignment to an existing local is never a redeclaration.

        Returns:
            True if this assignment declared the local
        """
        binding = self._locals.get(name)
        created = binding is None
        if created:
            binding = LocalBinding(name, location)
            self._locals[name] = binding
        binding.value = value
        return created

    def lookup(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> LocalBinding:
        """
        Look up a declared local.

        Raises:
            UndeclaredIdentifierError: If the name was never declared
        """
        binding = self._locals.get(name)
        if binding is None:
            raise UndeclaredIdentifierError(
                name,
                location=location,
                source_line=source_line,
                similar_identifiers=self._find_similar(name),
            )
        return binding

    def values(self) -> dict[str, Optional[int]]:
        """Snapshot of name -> last known value."""
        return {name: binding.value for name, binding in self._locals.items()}

    def _find_similar(self, name: str) -> list[str]:
        """
        Find declared names close to ``name`` for error hints.

        Uses a case-insensitive match or an edit distance of one.
        """
        name_lower = name.lower()
        similar = []

        for candidate in self._locals:
            candidate_lower = candidate.lower()
            if (
                candidate_lower == name_lower or
                abs(len(candidate) - len(name)) <= 1 and
                _edit_distance(name_lower, candidate_lower) <= 1
            ):
                similar.append(candidate)

        return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = range(len(s2) + 1)
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min((
                    distances[j],
                    distances[j + 1],
                    new_distances[-1]
                )))
        distances = new_distances

    return distances[-1]
