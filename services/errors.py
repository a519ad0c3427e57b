# services/errors.py

class ServiceError(Exception):
    """A request the service refuses: missing field, unknown id, bad payload.

    The message is returned to the caller as-is.
    """
