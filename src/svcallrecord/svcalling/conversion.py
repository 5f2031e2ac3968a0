"""
Conversion between SVCallRecord and its VCF-style Variant representation.

to_variant and from_variant are not inverse to each other for deletions:
encoding synthesizes explicit genotype alleles from the EXPECTED_COPY_NUMBER and
COPY_NUMBER FORMAT fields, while decoding keeps the stored alleles and
genotypes as they are. The allele synthesis is a one-way transformation.
"""

import logging
from collections.abc import Mapping

from ..util.alleles import DEL_ALLELE, DUP_ALLELE, REF_N, Allele
from ..util.datatypes import (ALGORITHMS_ATTRIBUTE, CONTIG2_ATTRIBUTE,
                              COPY_NUMBER_FORMAT, END2_ATTRIBUTE, END_KEY,
                              EXPECTED_COPY_NUMBER_FORMAT,
                              IMPLICIT_LENGTH_TYPES, IMPLICIT_STRAND_TYPES,
                              STRAND_MINUS, STRAND_PLUS, STRANDS_ATTRIBUTE,
                              SVLEN, SVTYPE, UNDEFINED_LENGTH, SVType)
from ..util.errors import (InvalidStateError, MalformedInputError,
                           MissingFieldError, UnsupportedMultiallelicError)
from .genotyping import Genotype
from .SVcallrecord import SVCallRecord, sanitize_attributes
from .variant import Variant

log = logging.getLogger(__name__)


# region inference


def infer_sv_type(variant: Variant) -> SVType:
    """Determines the SV type of a variant.

    An explicit SVTYPE attribute wins. Otherwise the type is inferred from the alt
    alleles: the only supported multi-allelic type is CNV with exactly the alleles
    <DEL> and <DUP>, every other variant needs a single symbolic alt allele.
    """
    sv_type = variant.structural_variant_type
    if sv_type is not None:
        return sv_type
    alleles = variant.alt_alleles
    if not alleles:
        raise MalformedInputError(f"Missing alt allele for variant {variant.id}")
    if len(alleles) == 2 and DEL_ALLELE in alleles and DUP_ALLELE in alleles:
        return SVType.CNV
    if len(alleles) != 1:
        raise UnsupportedMultiallelicError(
            f"Non-CNV multiallelic variants not supported (variant {variant.id})"
        )
    allele = alleles[0]
    if not allele.is_symbolic:
        raise MalformedInputError(
            f"Expected symbolic alt allele for variant {variant.id}, got {allele.display_string}"
        )
    name = allele.display_string.replace("<", "").replace(">", "")
    sv_type = SVType.from_name(name)
    if sv_type is None:
        raise MalformedInputError(
            f"Unknown SV type {name} in alt allele of variant {variant.id}"
        )
    return sv_type


def parse_strands(variant: Variant, sv_type: SVType) -> tuple[bool | None, bool | None]:
    """Returns (strand_a, strand_b), where True is the forward strand.

    Both are None for types whose strands are implied (DEL, INS, DUP, CNV).
    """
    if sv_type in IMPLICIT_STRAND_TYPES:
        return None, None
    strands = variant.get_attribute_as_string(STRANDS_ATTRIBUTE)
    if strands is None:
        raise MissingFieldError(
            f"Strands field not found for variant {variant.id} of type {sv_type.value}"
        )
    if len(strands) != 2:
        raise MalformedInputError(
            f"Strands field is not 2 characters long for variant {variant.id}: {strands}"
        )
    if strands[0] not in (STRAND_PLUS, STRAND_MINUS):
        raise MalformedInputError(f"Valid start strand not found for variant {variant.id}")
    if strands[1] not in (STRAND_PLUS, STRAND_MINUS):
        raise MalformedInputError(f"Valid end strand not found for variant {variant.id}")
    return strands[0] == STRAND_PLUS, strands[1] == STRAND_PLUS


def get_algorithms(variant: Variant) -> list[str]:
    """Reads the non-empty list of calling algorithms."""
    algorithms = variant.get_attribute_as_string_list(ALGORITHMS_ATTRIBUTE)
    if not algorithms:
        raise MissingFieldError(
            f"Expected non-empty {ALGORITHMS_ATTRIBUTE} field for variant {variant.id}"
        )
    return algorithms


def get_length(variant: Variant) -> int | None:
    """Reads SVLEN, mapping the undefined length sentinel to None."""
    if not variant.has_attribute(SVLEN):
        raise MissingFieldError(f"Expected {SVLEN} field for variant {variant.id}")
    length = variant.get_attribute_as_int(SVLEN, UNDEFINED_LENGTH)
    if length == UNDEFINED_LENGTH:
        return None
    if length < 0:
        raise InvalidStateError(
            f"Length must be non-negative or {UNDEFINED_LENGTH} for variant {variant.id}"
        )
    return length


def _get_second_locus(variant: Variant, sv_type: SVType) -> tuple[str, int]:
    if sv_type != SVType.BND:
        return variant.contig, variant.end
    # CONTIG2 and END2 are only valid together, a null value counts as absent
    has_contig2 = variant.get_attribute(CONTIG2_ATTRIBUTE) is not None
    has_end2 = variant.get_attribute(END2_ATTRIBUTE) is not None
    if not has_contig2 and not has_end2:
        raise MissingFieldError(
            f"Attributes {END2_ATTRIBUTE} and {CONTIG2_ATTRIBUTE} are required for BND records (variant {variant.id})"
        )
    if has_contig2 != has_end2:
        present, missing = (
            (CONTIG2_ATTRIBUTE, END2_ATTRIBUTE)
            if has_contig2
            else (END2_ATTRIBUTE, CONTIG2_ATTRIBUTE)
        )
        raise MalformedInputError(
            f"Attribute {present} given without {missing} for BND variant {variant.id}"
        )
    return (
        variant.get_attribute_as_string(CONTIG2_ATTRIBUTE),
        variant.get_attribute_as_int(END2_ATTRIBUTE),
    )


# endregion
# region decode


def from_variant(variant: Variant, keep_attributes: bool = True) -> SVCallRecord:
    """Creates a new SVCallRecord from the given variant.

    Alleles and genotypes are taken over as they are. Free-form attributes are kept
    only if keep_attributes is set, reserved keys are always dropped.
    """
    sv_type = infer_sv_type(variant)
    algorithms = get_algorithms(variant)
    strand_a, strand_b = parse_strands(variant, sv_type)
    length = None if sv_type in IMPLICIT_LENGTH_TYPES else get_length(variant)
    contig_b, position_b = _get_second_locus(variant, sv_type)
    attributes = variant.attributes if keep_attributes else {}
    return SVCallRecord(
        id=variant.id,
        contig_a=variant.contig,
        position_a=variant.start,
        strand_a=strand_a,
        contig_b=contig_b,
        position_b=position_b,
        strand_b=strand_b,
        sv_type=sv_type,
        length=length,
        algorithms=algorithms,
        alleles=variant.alleles,
        genotypes=variant.genotypes,
        attributes=sanitize_attributes(attributes),
    )


def create(variant: Variant) -> SVCallRecord:
    """Creates a new SVCallRecord from the given variant, keeping its attributes."""
    return from_variant(variant, keep_attributes=True)


# endregion
# region encode


def _deletion_genotypes_from_copy_number(
    record: SVCallRecord, ref_allele: Allele, alt_allele: Allele
) -> dict[str, Genotype]:
    # the number of ref alleles is the copy number, the remaining copies carry the deletion
    new_genotypes: dict[str, Genotype] = {}
    for samplename, g in record.genotypes.items():
        for key in (EXPECTED_COPY_NUMBER_FORMAT, COPY_NUMBER_FORMAT):
            if not g.has_extended_attribute(key):
                raise MissingFieldError(
                    f"Deletion genotype of sample {samplename} is missing {key} field (record {record.id})"
                )
        expected_copy_number = g.get_extended_attribute_as_int(EXPECTED_COPY_NUMBER_FORMAT)
        copy_number = g.get_extended_attribute_as_int(COPY_NUMBER_FORMAT)
        num_alt_alleles = expected_copy_number - copy_number
        if copy_number < 0 or num_alt_alleles < 0:
            raise InvalidStateError(
                f"Invalid copy number {copy_number} for deletion genotype of sample {samplename} with expected copy number {expected_copy_number} (record {record.id})"
            )
        genotype_alleles = [ref_allele] * copy_number + [alt_allele] * num_alt_alleles
        new_genotypes[samplename] = g.with_alleles(genotype_alleles)
    return new_genotypes


def to_variant(record: SVCallRecord) -> Variant:
    """Creates the VCF-style representation of a record.

    For deletions the genotype alleles are rebuilt from the copy number FORMAT
    fields; all other genotypes are passed on unchanged.
    """
    sv_type = record.sv_type
    if sv_type in (SVType.INS, SVType.BND):
        end = record.position_a
    else:
        end = record.position_b
    end2 = record.position_a if sv_type == SVType.INS else record.position_b

    ref_allele = record.ref_allele
    if ref_allele is None:
        ref_allele = REF_N
    alt_alleles = record.alt_alleles
    alleles = (ref_allele, *alt_alleles)

    attributes = dict(record.attributes)
    attributes[END_KEY] = end
    attributes[SVTYPE] = sv_type.value
    attributes[ALGORITHMS_ATTRIBUTE] = list(record.algorithms)
    if sv_type == SVType.BND:
        attributes[CONTIG2_ATTRIBUTE] = record.contig_b
        attributes[END2_ATTRIBUTE] = end2
    else:
        attributes[SVLEN] = UNDEFINED_LENGTH if record.length is None else record.length
    if sv_type in (SVType.BND, SVType.INV):
        attributes[STRANDS_ATTRIBUTE] = record.strand_string

    genotypes: Mapping[str, Genotype]
    if sv_type == SVType.DEL:
        if len(alt_alleles) != 1:
            raise UnsupportedMultiallelicError(
                f"Encountered deletion with multiple ALT alleles (record {record.id})"
            )
        log.debug(f"Deriving genotype alleles from copy numbers for {record._log_id()}")
        genotypes = _deletion_genotypes_from_copy_number(
            record, ref_allele=ref_allele, alt_allele=alt_alleles[0]
        )
    else:
        genotypes = record.genotypes

    return Variant(
        id=record.id,
        contig=record.contig_a,
        start=record.position_a,
        end=end,
        alleles=alleles,
        attributes=attributes,
        genotypes=genotypes,
    )


# endregion
