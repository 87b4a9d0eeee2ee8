"""
Calculation engine exceptions.
"""


class InvalidInputError(ValueError):
    """Raised when a calculator input violates a domain constraint."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")
