class AppBaseException(Exception):
    """Base class for all application errors"""
    pass

class ResourceNotFoundError(AppBaseException):
    """Resource (file, database record) not found"""
    pass

class ValidationError(AppBaseException):
    """Rejected input: empty file, unsupported content type, bad parameters"""
    pass

class FileTooLargeError(ValidationError):
    """Upload exceeds the configured size limit"""
    pass

class DecodeError(AppBaseException):
    """Image data could not be decoded or re-encoded"""
    pass

class StorageError(AppBaseException):
    """Filesystem or database failure while persisting data"""
    pass
