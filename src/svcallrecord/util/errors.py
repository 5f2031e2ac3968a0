class SVRecordError(ValueError):
    """Base class of all errors raised while converting or handling SV call records."""


class MalformedInputError(SVRecordError):
    """A field is present but structurally invalid, e.g. a bad strand string."""


class MissingFieldError(SVRecordError):
    """A required attribute or genotype field is absent."""


class UnsupportedMultiallelicError(SVRecordError):
    """More alt alleles than the SV type can be represented with."""


class InvalidStateError(SVRecordError):
    """A value is present but semantically impossible, e.g. a negative length."""
