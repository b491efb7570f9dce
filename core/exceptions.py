class DatasetSchemaError(ValueError):
    """Raised when the dishes table is missing columns or carries unexpected labels."""


class PriorSpecificationError(ValueError):
    """Raised for invalid prior parameters or priors on unknown coefficients."""
