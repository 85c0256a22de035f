"""neols — ls-style listing renderer with themes, icons and tree output."""

__version__ = "0.1.0"


class NeolsError(Exception):
    """User-facing configuration error.

    Raised for invalid selector names and inconsistent rendering flags.
    Callers are expected to report the message and exit.
    """


class ThemeError(NeolsError):
    """A color theme does not define a style for every attribute tag."""
