"""
Ok/Err results for the file loaders.

Panel options, frames and variables are read from disk by loaders that never
raise; each returns Ok(value) or Err(LoadError), and the caller decides how a
missing or malformed file is reported.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass
class LoadError:
    """
    Why a file could not be loaded.

    `cause` is None when the file does not exist, and holds the parser or
    validation exception otherwise.
    """
    message: str
    path: str | None = None
    cause: Exception | None = None

    @property
    def missing(self) -> bool:
        return self.cause is None


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or_raise(self, to_exception: Callable[[object], Exception]) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or_raise(self, to_exception: Callable[[E], Exception]):
        """Raise the exception `to_exception` builds from the error."""
        raise to_exception(self.error)


Result = Union[Ok[T], Err[E]]
