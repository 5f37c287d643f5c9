"""Error taxonomy shared by the engine, loader, and API.

``DataIntegrityError`` covers malformed or inconsistent material data;
``InvalidParameter`` covers caller-supplied scalars outside their domain.
Undefined results (no baseline, no payback, zero MAC denominator) are not
errors: they are returned as ``None``.
"""


class DataIntegrityError(ValueError):
    """A material record or table violates a data invariant."""


class InvalidParameter(ValueError):
    """A caller-supplied parameter is outside its valid domain."""
