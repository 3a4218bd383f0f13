class DomainError(Exception):
    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(DomainError):
    def __init__(self, field: str, message: str, details: dict | None = None):
        code = f"VAL_{field.upper()}_001"
        msg = f"Validation failed for {field}: {message}"
        super().__init__(code, msg, details or {"field": field})


class CatalogUnavailableError(DomainError):
    def __init__(self, message: str = "Failed to fetch exercises from database", details: dict | None = None):
        super().__init__("DB_CATALOG_001", message, details)
