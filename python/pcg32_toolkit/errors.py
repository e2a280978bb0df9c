from __future__ import annotations


class ArgumentError(ValueError):
    """Invalid argument passed to a generator operation."""

    def __init__(self, param_name: str, message: str) -> None:
        super().__init__(f"{message} (Parameter '{param_name}')")
        self.param_name = param_name
        self.message = message


class ArgumentOutOfRangeError(ArgumentError):
    pass


class ArgumentMissingError(ArgumentError, TypeError):
    def __init__(self, param_name: str, message: str = "Value cannot be None.") -> None:
        super().__init__(param_name, message)


class EntropyUnavailableError(OSError):
    """The OS entropy source failed or returned a short buffer."""
