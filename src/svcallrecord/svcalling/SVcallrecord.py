import json
from collections.abc import Mapping
from typing import Any

import attrs
import cattrs

from ..util.alleles import Allele
from ..util.datatypes import (IMPLICIT_STRAND_TYPES, INVALID_ATTRIBUTES,
                              STRAND_MINUS, STRAND_PLUS, SVType)
from ..util.errors import InvalidStateError, MalformedInputError
from .genotyping import Genotype


def sanitize_attributes(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Returns a copy of attributes without the keys that are first-class fields of an SVCallRecord."""
    new_attributes = dict(attributes)
    for key in INVALID_ATTRIBUTES:
        new_attributes.pop(key, None)
    return new_attributes


def get_strand_string(forward_strand: bool) -> str:
    return STRAND_PLUS if forward_strand else STRAND_MINUS


@attrs.frozen
class SVCallRecord:
    """Normalized structural variant call with two breakpoint loci.

    Strands are None where the SV type implies them (DEL, INS, DUP, CNV) and the
    length is None where it is derived from the loci. Free-form attributes never
    contain the reserved keys (see INVALID_ATTRIBUTES); they are stripped on
    construction.
    """

    id: str
    contig_a: str
    position_a: int
    strand_a: bool | None
    contig_b: str
    position_b: int
    strand_b: bool | None
    sv_type: SVType
    length: int | None
    algorithms: tuple[str, ...] = attrs.field(converter=tuple)
    alleles: tuple[Allele, ...] = attrs.field(converter=tuple)
    # the maps are left out of the hash
    genotypes: dict[str, Genotype] = attrs.field(
        converter=dict, factory=dict, hash=False
    )
    attributes: dict[str, Any] = attrs.field(
        converter=sanitize_attributes, factory=dict, hash=False
    )

    def __attrs_post_init__(self):
        if self.position_a < 1 or self.position_b < 1:
            raise InvalidStateError(
                f"Positions must be 1-based and positive, got {self.position_a} and {self.position_b} for record {self.id}"
            )
        if self.length is not None and self.length < 0:
            raise InvalidStateError(
                f"Length must be non-negative, got {self.length} for record {self.id}"
            )
        if self.sv_type not in IMPLICIT_STRAND_TYPES and (
            self.strand_a is None or self.strand_b is None
        ):
            raise InvalidStateError(
                f"Strands of {self.sv_type.value} record {self.id} must be defined, got {self.strand_a} and {self.strand_b}"
            )
        if not self.alt_alleles:
            raise MalformedInputError(f"Record {self.id} has no alt allele")

    @property
    def ref_allele(self) -> Allele | None:
        for allele in self.alleles:
            if allele.is_reference:
                return allele
        return None

    @property
    def alt_alleles(self) -> tuple[Allele, ...]:
        return tuple(a for a in self.alleles if not a.is_reference)

    @property
    def is_intrachromosomal(self) -> bool:
        return self.contig_a == self.contig_b

    @property
    def strand_string(self) -> str:
        """Two character strand code, e.g. +-. Both strands must be defined."""
        if self.strand_a is None or self.strand_b is None:
            raise InvalidStateError(
                f"Strands of {self.sv_type.value} record {self.id} are undefined"
            )
        return get_strand_string(self.strand_a) + get_strand_string(self.strand_b)

    def _log_id(self) -> str:
        return f"{self.id}:{self.sv_type.value}:{self.contig_a}:{self.position_a}-{self.contig_b}:{self.position_b}"

    def unstructure(self) -> dict:
        return converter.unstructure(self)

    @classmethod
    def from_unstructured(cls, data: dict) -> "SVCallRecord":
        return converter.structure(data, cls)

    def to_json(self) -> str:
        """Convert SVCallRecord to JSON string."""
        return json.dumps(self.unstructure(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "SVCallRecord":
        """Create SVCallRecord from JSON string."""
        return cls.from_unstructured(json.loads(json_str))


def copy_call_with_new_genotypes(
    record: SVCallRecord, genotypes: Mapping[str, Genotype]
) -> SVCallRecord:
    """Shallow copy of the record with the genotypes replaced."""
    return attrs.evolve(record, genotypes=genotypes)


converter = cattrs.Converter()
