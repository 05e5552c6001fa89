"""Error taxonomy for the Phillips curve pipeline.

Structural data faults (labels, dates, duplicates, ordering, missing sources)
abort the run for the affected source. ``InsufficientData`` is raised per
regression window and handled by the window fitter.
"""


class PhillipsCurveError(ValueError):
    """Base class for all pipeline errors."""


class UnrecognizedSeriesLabel(PhillipsCurveError):
    """A raw series label has no entry in the label map."""

    def __init__(self, labels: list[str]) -> None:
        self.labels = sorted(labels)
        super().__init__(f"Unrecognized series labels: {self.labels}")


class MissingAuxiliarySource(PhillipsCurveError):
    """A granularity mode needs an auxiliary source that was not supplied."""


class InvalidDate(PhillipsCurveError):
    """A year/month pair does not form a calendar month."""


class InvalidGranularity(PhillipsCurveError):
    """Granularity is neither 'monthly' nor 'quarterly'."""


class DuplicateObservation(PhillipsCurveError):
    """More than one value for the same (date, field)."""


class UnsortedInput(PhillipsCurveError):
    """Rows are not strictly ascending by date."""


class InsufficientData(PhillipsCurveError):
    """Too few observations (or a degenerate design) for the requested model."""


class InvalidParameter(PhillipsCurveError):
    """An argument value is outside its legal domain."""


class SchemaError(PhillipsCurveError):
    """A table is missing required columns."""


class EmptyJoinResult(UserWarning):
    """A date join produced no rows."""
