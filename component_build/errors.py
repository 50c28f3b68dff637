"""Build error taxonomy.

Fatal errors (read, parse, validation, resolution) abort a build before any
assembler starts. ``AssemblerError`` is collected per assembler and never
stops its siblings. Wrapped errors keep the original message and chain the
original exception as ``__cause__``.
"""

from __future__ import annotations


class BuildError(Exception):
    stage = "build"

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    @classmethod
    def wrap(cls, err: BaseException, **kwargs) -> BuildError:
        if isinstance(err, cls) and not kwargs:
            return err
        wrapped = cls(str(err) or type(err).__name__, cause=err, **kwargs)
        wrapped.__cause__ = err
        return wrapped


class ManifestReadError(BuildError):
    stage = "read"


class ManifestParseError(BuildError):
    stage = "parse"


class ManifestValidationError(BuildError):
    stage = "validate"


class ResolutionError(BuildError):
    stage = "resolve"


class AssemblerError(BuildError):
    stage = "assemble"

    def __init__(
        self, message: str, *, assembler: str, cause: BaseException | None = None
    ) -> None:
        super().__init__(message, cause=cause)
        self.assembler = assembler

    def __repr__(self) -> str:
        return f"AssemblerError({self.assembler!r}, {str(self)!r})"
