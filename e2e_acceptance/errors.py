"""Error kinds raised by the suite support code."""


class E2EError(Exception):
    """Base class for suite errors."""


class ConfigMissingError(E2EError):
    """Raised when the config file or one of its required keys is absent.

    Fatal for the whole run: nothing can proceed without configuration.
    """


class PreconditionFailedError(E2EError):
    """Raised when a scenario finds a required runtime value missing.

    Fatal for that scenario only.
    """


class ReportWriteError(E2EError):
    """Raised when a report artifact cannot be written."""
