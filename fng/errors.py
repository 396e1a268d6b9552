"""Exceptions raised by the File Name Generator backend."""


class FileNameGeneratorError(Exception):
    """Base class for all generator errors."""


class DataLoadError(FileNameGeneratorError):
    """The spreadsheet data could not be fetched."""


class PresetError(FileNameGeneratorError):
    """A preset operation was rejected."""
