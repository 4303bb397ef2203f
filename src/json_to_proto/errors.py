from __future__ import annotations

# Longest document excerpt carried by an InvalidJsonError
FRAGMENT_LIMIT = 80


class GenerationError(Exception):
    """Raised when no schema can be produced for the given input."""

    kind = "GenerationError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class EmptyInputError(GenerationError):
    kind = "EmptyInput"

    def __init__(self) -> None:
        super().__init__("Input is empty.")


class InvalidJsonError(GenerationError):
    kind = "InvalidJson"

    def __init__(self, detail: str, fragment: str) -> None:
        fragment = fragment.strip()
        if len(fragment) > FRAGMENT_LIMIT:
            fragment = fragment[:FRAGMENT_LIMIT] + "..."
        super().__init__(f"Invalid JSON - {detail} in document: {fragment}")
        self.detail = detail
        self.fragment = fragment


class NoDocumentsFoundError(GenerationError):
    kind = "NoDocumentsFound"

    def __init__(self) -> None:
        super().__init__("No valid JSON documents found.")


class UnsupportedRootTypeError(GenerationError):
    kind = "UnsupportedRootType"

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unsupported root JSON type: {type_name}")
        self.type_name = type_name


class NestingTooDeepError(GenerationError):
    kind = "NestingTooDeep"

    def __init__(self, path: str, max_depth: int) -> None:
        super().__init__(f"Nesting deeper than {max_depth} levels at '{path}'.")
        self.path = path
        self.max_depth = max_depth
