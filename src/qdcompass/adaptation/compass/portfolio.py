"""
Operator set primitives for compass selection.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, Sequence, TypeVar

from qdcompass.foundation.exceptions import InvalidOperatorSetError

T = TypeVar("T")


@dataclass(frozen=True)
class OperatorArm(Generic[T]):
    """
    A registered operator with a stable id and display name.
    """

    op_id: str
    name: str
    operator: T


def _operator_name(operator: Any) -> str:
    for attr in ("name", "__name__"):
        value = getattr(operator, attr, None)
        if isinstance(value, str) and value:
            return value
    return type(operator).__name__


class OperatorSet(Generic[T]):
    """
    Ordered, immutable set of operators; indices are stable for its lifetime.

    Operators are held by reference and handed out as-is, never copied.
    """

    def __init__(self, arms: Sequence[OperatorArm[T]]):
        arms = tuple(arms)
        if len(arms) < 2:
            raise InvalidOperatorSetError(
                f"OperatorSet requires at least two operators, got {len(arms)}.",
                n_operators=len(arms),
            )
        self._arms = arms
        self._index: dict[str, int] = {}
        for idx, arm in enumerate(self._arms):
            if not arm.op_id:
                raise InvalidOperatorSetError("OperatorArm.op_id must be non-empty.", n_operators=len(arms))
            if arm.op_id in self._index:
                raise InvalidOperatorSetError(f"Duplicate operator id '{arm.op_id}'.", n_operators=len(arms))
            self._index[arm.op_id] = idx

    @classmethod
    def from_operators(cls, operators: Iterable[T]) -> OperatorSet[T]:
        arms: list[OperatorArm[T]] = []
        seen: set[str] = set()
        for idx, operator in enumerate(operators):
            name = _operator_name(operator)
            op_id = name
            suffix = idx
            while op_id in seen:
                op_id = f"{name}#{suffix}"
                suffix += 1
            seen.add(op_id)
            arms.append(OperatorArm(op_id=op_id, name=name, operator=operator))
        return cls(arms)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, T]]) -> OperatorSet[T]:
        arms = [OperatorArm(op_id=op_id, name=op_id, operator=operator) for op_id, operator in pairs]
        return cls(arms)

    def by_id(self, op_id: str) -> OperatorArm[T]:
        return self._arms[self._index[op_id]]

    def index_of(self, op_id: str) -> int:
        return self._index[op_id]

    def ids(self) -> list[str]:
        return [arm.op_id for arm in self._arms]

    def names(self) -> list[str]:
        return [arm.name for arm in self._arms]

    def operators(self) -> list[T]:
        return [arm.operator for arm in self._arms]

    def __len__(self) -> int:
        return len(self._arms)

    def __iter__(self) -> Iterator[OperatorArm[T]]:
        return iter(self._arms)

    def __getitem__(self, index: int) -> OperatorArm[T]:
        return self._arms[index]


__all__ = ["OperatorArm", "OperatorSet"]
