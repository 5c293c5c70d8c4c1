# (C) 2021 GoodData Corporation


class CatalogMetadataError(Exception):
    """
    Base class of all errors raised by the catalog metadata engine itself. Errors coming out of the database
    driver or the query runner are never wrapped and propagate as they are.
    """

    def __init__(self, message):
        super(CatalogMetadataError, self).__init__(message)


class TypeLadderError(CatalogMetadataError):
    """
    Raised when column size of a NUMERIC, DECIMAL or DECFLOAT type cannot be derived because the underlying
    storage type has no entry in the precision ladder. Reported metadata would be wrong, so this is never
    defaulted.
    """

    def __init__(self, message):
        super(TypeLadderError, self).__init__(message)


class RowBoundsError(CatalogMetadataError, IndexError):
    def __init__(self, message):
        super(RowBoundsError, self).__init__(message)


class RowAssemblyError(CatalogMetadataError):
    def __init__(self, message):
        super(RowAssemblyError, self).__init__(message)
