"""
Error taxonomy for the seed pipeline.

- MissingPrerequisiteError: an upstream entity set a phase needs is absent
- DistributionConfigError: a weighted distribution is unusable (raised at
  configuration-validation time, before any record is generated)
- PersistenceBatchError: a batch flush failed twice in a row

Pattern pool exhaustion is deliberately absent: an exhausted pool returns
None from its consume operation and the caller falls back to random selection.
"""


class CasegenError(Exception):
    """Base class for all errors raised by the seed pipeline."""

    pass


class MissingPrerequisiteError(CasegenError):
    """Raised when an upstream entity required by a phase is missing."""

    def __init__(self, phase: str, message: str) -> None:
        self.phase = phase
        super().__init__(f"[{phase}] {message}")


class DistributionConfigError(CasegenError):
    """Raised when a weighted distribution sums to zero or has a negative weight."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"Distribution '{name}': {message}")


class PersistenceBatchError(CasegenError):
    """
    Raised when a batch flush fails after its single retry.

    Batches flushed before the failing one stay committed.
    """

    def __init__(self, table: str, batch_index: int, cause: BaseException) -> None:
        self.table = table
        self.batch_index = batch_index
        self.cause = cause
        super().__init__(
            f"Batch {batch_index} of '{table}' failed after retry: {cause}"
        )
