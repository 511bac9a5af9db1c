# passport_connectors/core/exceptions.py


class PassportError(Exception):
    """Erreur de base du client Passport"""
    pass


class TransportError(PassportError):
    """Passport injoignable : connexion refusée, DNS, timeout de connexion ou de lecture."""
    pass


class EncodingError(PassportError):
    """Le corps de la requête ne peut pas être sérialisé (type non supporté, référence cyclique)."""
    pass


class DecodingError(PassportError):
    """Le corps de la réponse est illisible ou d'un content-type non supporté."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class PreconditionViolation(PassportError):
    """Mauvaise utilisation du client (pas de méthode HTTP, double dispatch, ...)."""
    pass
