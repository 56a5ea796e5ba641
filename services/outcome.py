# services/outcome.py
"""
Result type for lookups and mutations that may miss.

Callers outside the service layer only ask "did it work?" (an Outcome is
falsy on a miss) and answer every miss with the same 404. The miss reason is
kept for tests and logs.
"""
import enum
from dataclasses import dataclass
from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")


class Miss(str, enum.Enum):
     NOT_FOUND = "not_found"
     NOT_OWNED = "not_owned"


@dataclass(frozen=True)
class Outcome(Generic[T]):
     value: Optional[T] = None
     miss: Optional[Miss] = None

     def __bool__(self) -> bool:
          return self.miss is None

     @classmethod
     def ok(cls, value: T) -> "Outcome[T]":
          return cls(value=value)

     @classmethod
     def not_found(cls) -> "Outcome[T]":
          return cls(miss=Miss.NOT_FOUND)

     @classmethod
     def not_owned(cls) -> "Outcome[T]":
          return cls(miss=Miss.NOT_OWNED)


def classify_miss(db: Session, model: Type, record_id: int) -> Outcome:
     """
     Explain why an ownership-filtered statement matched nothing.

     Only used after the filtered statement has already decided the result;
     the answer never changes what the caller sees.
     """
     if db.get(model, record_id) is None:
          return Outcome.not_found()
     return Outcome.not_owned()
