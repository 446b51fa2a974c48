from typing import Optional

from .config import NO_PACKAGE_PLACEHOLDER


class ConversionError(ValueError):
    """Base class for failures reported to callers of the converter."""


class EmptyInputError(ConversionError):
    def __init__(self, message: str = "Java source code is empty. Please provide a class, interface or enum.") -> None:
        super().__init__(message)


class NoTypesFoundError(ConversionError):
    """
    Raised when non-empty input yields no class, interface or enum.
    Carries the package and import count that were detected, which usually
    tells the user whether the text was Java at all.
    """

    def __init__(self, package_name: Optional[str], import_count: int) -> None:
        self.package_name = package_name or NO_PACKAGE_PLACEHOLDER
        self.import_count = import_count
        super().__init__(
            "No class or interface declaration was found.\n\n"
            "Check that:\n"
            "- the class declaration uses valid syntax\n"
            "- public/private modifiers are placed correctly\n"
            "- braces are balanced\n\n"
            "Debug info:\n"
            f"Package: {self.package_name}\n"
            f"Imports: {self.import_count}"
        )
