"""
Domain errors.
Mapped to HTTP responses by the handlers registered in app.main.
"""


class RepairDeskError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SnapshotImportError(RepairDeskError):
    """A backup file was rejected; the stored snapshot is untouched."""


class CatalogImportError(RepairDeskError):
    """A catalog file was rejected; the stored catalog is untouched."""


class UnknownTableError(RepairDeskError):
    """Export requested for a collection that does not exist."""


class DeviceIdentificationError(RepairDeskError):
    """The classifier could not identify the device."""

    def __init__(self, message: str = "Impossible d'identifier l'appareil"):
        super().__init__(message)
