# spectracrawl/core/errors.py
from __future__ import annotations


class SpectraError(Exception):
    """Base class for every failure raised while merging a batch archive."""


class OutputDirectoryMissing(SpectraError, FileNotFoundError):
    pass


class ArchiveUnreadable(SpectraError):
    pass


class MalformedDataset(SpectraError):
    pass


class NonNumericSpectralBound(SpectraError, ValueError):
    pass


class InconsistentRunConditions(SpectraError):
    pass


class EmptyBatch(SpectraError):
    pass


class WriteFailure(SpectraError, OSError):
    pass


# ---------- condition codec ----------
class ConditionError(SpectraError, ValueError):
    pass


class MalformedConditionToken(ConditionError):
    pass


class UnknownConditionKey(ConditionError):
    pass


class NonNumericConditionValue(ConditionError):
    pass
