"""Custom exceptions for alpha centering."""


class AlphaCenterError(Exception):
    """Base exception for alpha centering errors."""

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(message)
        self.user_message = user_message or message


class InvalidArgumentError(AlphaCenterError):
    """An option value (padding, tolerance, config) could not be used."""

    def __init__(self, detail: str):
        super().__init__(f"Invalid argument: {detail}")


class ImageReadError(AlphaCenterError):
    """Failed to read input image."""

    def __init__(self, path: str):
        super().__init__(
            f"Could not read image: {path}",
            f"Could not read image file {path}. The file may be corrupted or in an unsupported format.",
        )


class NotPngError(AlphaCenterError):
    """Input decoded fine but is not a PNG."""

    def __init__(self, path: str):
        super().__init__(f"Not a png image: {path}", f"{path} is not a PNG image.")


class ImageWriteError(AlphaCenterError):
    """Failed to encode or write the output image."""

    def __init__(self, path: str):
        super().__init__(f"Could not write image: {path}")


class EmptyRegionError(AlphaCenterError):
    """Rectangle contains no pixel, usually because the image is fully transparent."""

    def __init__(self, detail: str = ""):
        msg = f"Empty image region: {detail}" if detail else "Empty image region"
        super().__init__(
            msg,
            "The image has no visible pixels. Try a lower tolerance.",
        )


class OutputExistsError(AlphaCenterError):
    """Output file is already there and overwriting was not requested."""

    def __init__(self, path: str):
        super().__init__(f"File {path} already exists.")


class InputIsDirectoryError(AlphaCenterError):
    """A directory was passed where an image file was expected."""

    def __init__(self, path: str):
        super().__init__(f"File {path} is a directory.")


class DuplicateOutputError(AlphaCenterError):
    """Two inputs of the same run map to the same output file."""

    def __init__(self, path: str, first: str):
        super().__init__(f"File {path} is already the output of {first} in this run.")
