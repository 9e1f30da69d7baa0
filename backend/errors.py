"""Exceptions raised at the edges of the scorecard (input validation, scan sources)."""


class ScorecardError(Exception):
    pass


class InvalidInput(ScorecardError):
    """The user-supplied URL was rejected before reaching the grading core."""


class ScanSourceError(ScorecardError):
    """A scan data source could not produce observations for a host."""


class ScanTimeout(ScanSourceError):
    pass
