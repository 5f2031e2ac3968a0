import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import attrs

from ..util.alleles import Allele
from ..util.errors import MalformedInputError

log = logging.getLogger(__name__)


@attrs.frozen
class Genotype:
    sample_name: str
    alleles: tuple[Allele, ...] = attrs.field(converter=tuple, factory=tuple)
    extended_attributes: dict[str, Any] = attrs.field(
        converter=dict, factory=dict, hash=False
    )  # FORMAT fields other than GT

    @property
    def ploidy(self) -> int:
        return len(self.alleles)

    def has_extended_attribute(self, key: str) -> bool:
        return key in self.extended_attributes

    def get_extended_attribute(self, key: str, default: Any = None) -> Any:
        return self.extended_attributes.get(key, default)

    def get_extended_attribute_as_int(self, key: str, default: int = 0) -> int:
        value = self.extended_attributes.get(key, None)
        if value is None:
            return default
        if isinstance(value, float) and not value.is_integer():
            raise MalformedInputError(
                f"FORMAT field {key}={value!r} of sample {self.sample_name} is not an integer"
            )
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise MalformedInputError(
                f"FORMAT field {key}={value!r} of sample {self.sample_name} is not an integer"
            ) from e

    def with_alleles(self, alleles: Iterable[Allele]) -> "Genotype":
        """Builds a new genotype from this one with the alleles replaced."""
        return attrs.evolve(self, alleles=tuple(alleles))

    def with_extended_attributes(self, attributes: Mapping[str, Any]) -> "Genotype":
        """Builds a new genotype from this one with the given FORMAT fields added or replaced."""
        return attrs.evolve(
            self, extended_attributes={**self.extended_attributes, **attributes}
        )


def populate_genotypes_for_missing_samples_with_alleles(
    genotypes: Mapping[str, Genotype],
    samples: Iterable[str],
    alleles: Sequence[Allele],
    attributes: Mapping[str, Any] | None = None,
) -> Mapping[str, Genotype]:
    """Adds a genotype for every sample in samples that has none yet.

    Existing genotypes are not touched. New genotypes get the given alleles (one per
    copy of the sample's ploidy) and attributes. If no sample is missing, the input
    mapping is returned as is.
    """
    missing_samples = [s for s in dict.fromkeys(samples) if s not in genotypes]
    if not missing_samples:
        return genotypes
    log.debug(f"Adding genotypes for {len(missing_samples)} missing samples")
    new_genotypes = dict(genotypes)
    for sample in missing_samples:
        new_genotypes[sample] = Genotype(
            sample_name=sample,
            alleles=tuple(alleles),
            extended_attributes=dict(attributes) if attributes is not None else {},
        )
    return new_genotypes
