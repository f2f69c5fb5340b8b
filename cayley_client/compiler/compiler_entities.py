# Copyright 2017-present Kensho Technologies, LLC.
"""Base class for the parts a path is made of: selectors, traversal steps and finals."""

from abc import ABCMeta, abstractmethod
from typing import Any, Tuple


class PathEntity(metaclass=ABCMeta):
    """An abstract, immutable part of a path.

    Entities remember the arguments they were constructed with. Those arguments define
    how an entity is printed, and which other entities it is equal to.
    """

    __slots__ = ("_print_args",)

    def __init__(self, *args: Any) -> None:
        """Construct a new PathEntity from its defining arguments."""
        self._print_args = args

    @abstractmethod
    def validate(self) -> None:
        """Ensure that the PathEntity is valid."""
        raise NotImplementedError()

    def _get_identity(self) -> Tuple[Any, ...]:
        """Return everything that distinguishes this entity from others."""
        return (type(self),) + self._print_args

    def __repr__(self) -> str:
        """Return a human-readable representation of the PathEntity, i.e. Node('foo')."""
        printed_args = ", ".join(repr(arg) for arg in self._print_args)
        return "{}({})".format(type(self).__name__, printed_args)

    def __str__(self) -> str:
        """Return a human-readable representation of the PathEntity."""
        return self.__repr__()

    # pylint: disable=protected-access
    def __eq__(self, other: Any) -> bool:
        """Return True if the PathEntity objects are equal, and False otherwise."""
        if not isinstance(other, PathEntity):
            return NotImplemented
        return self._get_identity() == other._get_identity()

    # pylint: enable=protected-access

    def __ne__(self, other: Any) -> bool:
        """Check another object for non-equality against this one."""
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        """Return a hash consistent with __eq__."""
        return hash(self._get_identity())

    def to_gremlin(self) -> str:
        """Return the Gremlin representation of this entity."""
        raise NotImplementedError()

    def get_declarations(self) -> Tuple[Any, ...]:
        """Return the named declarations that must be hoisted before this entity is used."""
        # Only joins, follows and subpath selectors refer to other paths,
        # and they override this method.
        return ()
