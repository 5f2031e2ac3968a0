from enum import Enum

# types of SVs. The declaration order is the ordinal used when sorting calls.


class SVType(Enum):
    DEL = "DEL"
    INS = "INS"
    DUP = "DUP"
    INV = "INV"
    CNV = "CNV"
    BND = "BND"

    @property
    def ordinal(self) -> int:
        return _SV_TYPE_ORDER[self]

    @classmethod
    def from_name(cls, name: str) -> "SVType | None":
        """Returns the SVType with the given name or None if there is no such type."""
        try:
            return cls(name)
        except ValueError:
            return None


_SV_TYPE_ORDER = {svtype: i for i, svtype in enumerate(SVType)}

# INFO keys
END_KEY = "END"
SVTYPE = "SVTYPE"
SVLEN = "SVLEN"
ALGORITHMS_ATTRIBUTE = "ALGORITHMS"
CONTIG2_ATTRIBUTE = "CONTIG2"
END2_ATTRIBUTE = "END2"
STRANDS_ATTRIBUTE = "STRANDS"

# FORMAT keys
EXPECTED_COPY_NUMBER_FORMAT = "EXPECTED_COPY_NUMBER"
COPY_NUMBER_FORMAT = "COPY_NUMBER"

# keys that are first-class fields of a record and must not be stored as free-form attributes
INVALID_ATTRIBUTES = frozenset({
    END2_ATTRIBUTE,
    CONTIG2_ATTRIBUTE,
    SVTYPE,
    SVLEN,
    ALGORITHMS_ATTRIBUTE,
    STRANDS_ATTRIBUTE,
    END_KEY,
})

STRAND_PLUS = "+"
STRAND_MINUS = "-"

# serialized value of an undefined length
UNDEFINED_LENGTH = -1

# strands of these types are implied by the type
IMPLICIT_STRAND_TYPES = frozenset({SVType.DEL, SVType.INS, SVType.DUP, SVType.CNV})
# lengths of these types are derived from the loci
IMPLICIT_LENGTH_TYPES = frozenset({
    SVType.BND,
    SVType.DEL,
    SVType.DUP,
    SVType.CNV,
    SVType.INV,
})
