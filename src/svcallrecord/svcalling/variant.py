from typing import Any

import attrs

from ..util.alleles import Allele
from ..util.datatypes import SVTYPE, SVType
from ..util.errors import MalformedInputError
from .genotyping import Genotype


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(v) for v in value)
    if isinstance(value, SVType):
        return value.value
    return str(value)


@attrs.frozen
class Variant:
    """VCF-style representation of a structural variant.

    Mirrors a single VCF data line: start is POS, alleles holds REF followed by
    the ALT alleles, attributes is the INFO column and genotypes the per-sample
    columns.
    """

    id: str
    contig: str
    start: int
    end: int
    alleles: tuple[Allele, ...] = attrs.field(converter=tuple)
    attributes: dict[str, Any] = attrs.field(
        converter=dict, factory=dict, hash=False
    )
    genotypes: dict[str, Genotype] = attrs.field(
        converter=dict, factory=dict, hash=False
    )

    def __attrs_post_init__(self):
        if self.start < 1:
            raise MalformedInputError(
                f"Variant {self.id} has non-positive start position {self.start}"
            )

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
    def sample_names(self) -> list[str]:
        return list(self.genotypes)

    @property
    def structural_variant_type(self) -> SVType | None:
        """The explicitly given SV type (SVTYPE), None if the variant carries none."""
        value = self.attributes.get(SVTYPE, None)
        if value is None or isinstance(value, SVType):
            return value
        name = self.get_attribute_as_string(SVTYPE)
        sv_type = SVType.from_name(name)
        if sv_type is None:
            raise MalformedInputError(f"Unknown {SVTYPE} {name} for variant {self.id}")
        return sv_type

    def has_attribute(self, key: str) -> bool:
        return key in self.attributes

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def get_attribute_as_int(self, key: str, default: int = 0) -> int:
        value = self.attributes.get(key, None)
        if value is None:
            return default
        if isinstance(value, (list, tuple)):
            if len(value) != 1:
                raise MalformedInputError(
                    f"Expected a single value for {key} of variant {self.id}, got {value}"
                )
            value = value[0]
        if isinstance(value, float) and not value.is_integer():
            raise MalformedInputError(
                f"{key}={value!r} of variant {self.id} is not an integer"
            )
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise MalformedInputError(
                f"{key}={value!r} of variant {self.id} is not an integer"
            ) from e

    def get_attribute_as_string(self, key: str, default: str | None = None) -> str | None:
        value = self.attributes.get(key, None)
        if value is None:
            return default
        return _format_value(value)

    def get_attribute_as_string_list(self, key: str) -> list[str]:
        value = self.attributes.get(key, None)
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [_format_value(v) for v in value]
        if isinstance(value, str):
            return value.split(",") if value else []
        return [_format_value(value)]
