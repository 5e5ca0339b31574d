"""
POS Bootstrap — System Errors
===============================
If a ledger configuration invariant is violated at startup,
the checkout must refuse to run.
"""


class SystemBootstrapError(Exception):
    """
    Raised when a critical invariant is violated during boot.

    If this exception is raised:
    - No checkout may be processed
    - No fallback to defaults
    - Error message must be explicit
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"POS BOOTSTRAP FAILURE — {invariant}: {detail}"
        )
