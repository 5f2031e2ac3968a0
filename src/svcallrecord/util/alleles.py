from collections.abc import Iterable

import attrs

from .datatypes import SVType
from .errors import MalformedInputError

NO_CALL_STRING = "."


def _would_be_symbolic(bases: str) -> bool:
    if len(bases) < 2:
        return False
    if bases.startswith("<") and bases.endswith(">"):
        return True
    # breakend notation t[p[, t]p], ]p]t, [p[t and single breakends .t / t.
    if "[" in bases or "]" in bases:
        return True
    return bases.startswith(".") or bases.endswith(".")


@attrs.frozen
class Allele:
    """A single REF or ALT allele. Symbolic alleles carry a tag such as <DEL> instead of bases."""

    bases: str
    is_reference: bool = False

    def __attrs_post_init__(self):
        if not self.bases:
            raise MalformedInputError("Allele bases must not be empty")
        if self.is_reference and (self.is_symbolic or self.is_no_call):
            raise MalformedInputError(
                f"Reference allele cannot be symbolic or a no-call: {self.bases}"
            )

    @property
    def is_symbolic(self) -> bool:
        return _would_be_symbolic(self.bases)

    @property
    def is_no_call(self) -> bool:
        return self.bases == NO_CALL_STRING

    @property
    def display_string(self) -> str:
        return self.bases

    def __str__(self) -> str:
        return self.bases + ("*" if self.is_reference else "")


def symbolic_allele(sv_type: SVType) -> Allele:
    return Allele(bases=f"<{sv_type.value}>")


REF_N = Allele(bases="N", is_reference=True)
NO_CALL = Allele(bases=NO_CALL_STRING)
DEL_ALLELE = symbolic_allele(SVType.DEL)
DUP_ALLELE = symbolic_allele(SVType.DUP)
INS_ALLELE = symbolic_allele(SVType.INS)
INV_ALLELE = symbolic_allele(SVType.INV)
CNV_ALLELE = symbolic_allele(SVType.CNV)
BND_ALLELE = symbolic_allele(SVType.BND)


def is_alt_allele(allele: Allele | None) -> bool:
    return allele is not None and not allele.is_no_call and not allele.is_reference


def contains_alt_allele(genotype) -> bool:
    """True if any allele of the genotype is a called non-reference allele."""
    return any(is_alt_allele(allele) for allele in genotype.alleles)


def sort_alleles(alleles: Iterable[Allele | None]) -> list[Allele | None]:
    """Sorts alleles by their display string with None first.

    Alleles with equal display strings keep their relative input order, since
    python's sort is stable.
    """
    return sorted(
        alleles,
        key=lambda a: (0, "") if a is None else (1, a.display_string),
    )
