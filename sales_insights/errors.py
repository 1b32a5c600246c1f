"""Error kinds raised by the upload pipeline.

Every error derives from ``ValueError`` and carries a message that can be
shown to the user as-is.
"""

from __future__ import annotations

from typing import Optional


class SalesDataError(ValueError):
    """Base class for all failures of the ingestion pipeline."""

    default_message = "Ha ocurrido un error al procesar el archivo."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class UnsupportedFormat(SalesDataError):
    default_message = "Por favor, sube un archivo CSV o Excel."

    def __init__(self, filename: str = "", message: Optional[str] = None):
        self.filename = filename
        super().__init__(message)


class DecodeError(SalesDataError):
    """Wraps a parser or workbook decoder failure (see ``__cause__``)."""

    default_message = "No se pudo leer el archivo."


class EmptyOrInsufficientData(SalesDataError):
    default_message = "El archivo está vacío o no contiene datos suficientes."


class MissingRequiredColumn(SalesDataError):
    default_message = "El archivo no contiene las columnas necesarias (fecha, producto, ventas)."

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{self.default_message} Falta: {field}.")


class NoValidRecords(SalesDataError):
    default_message = "No se pudieron procesar los datos de ventas."
