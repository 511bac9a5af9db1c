from datetime import datetime, timezone

# --- Fonctions utilitaires de conversion ---


def datetime_to_epoch_millis(value: datetime) -> int:
    """
    Convertit un datetime en instant Passport (millisecondes depuis l'epoch UTC).
    Un datetime naïf est considéré comme étant en UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def format_parameter_value(value) -> str:
    """
    Sérialise une valeur scalaire de paramètre d'URL.
      - bool      -> 'true' / 'false'
      - datetime  -> millisecondes epoch
      - autre     -> str(value)
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return str(datetime_to_epoch_millis(value))
    return str(value)
