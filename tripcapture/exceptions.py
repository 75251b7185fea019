"""
Exceptions applicatives / Application exceptions.

Les erreurs de stockage et de précondition sont récupérables : l'opérateur
peut relancer la même action immédiatement.
"""


class TripCaptureError(Exception):
    """Base application exception."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class StorageError(TripCaptureError):
    """Echec du stockage local / Local record store failure (init, read or write).

    `message` est court (renvoye au client) ; `detail` garde le texte complet du driver.
    """

    def __init__(self, message: str, detail: str | None = None):
        self.detail = detail
        super().__init__(message)


class CapturePreconditionError(TripCaptureError):
    """Sauvegarde refusée avant tout appel au stockage / Save rejected before touching the store."""

    title = "Capture Error"


class InvalidTripIdError(CapturePreconditionError):
    title = "Validation Error"

    def __init__(self, message: str = "Please enter a valid Trip ID"):
        super().__init__(message)


class LocationUnavailableError(CapturePreconditionError):
    title = "Location Error"

    def __init__(self, message: str = "Please wait for location to be acquired"):
        super().__init__(message)
