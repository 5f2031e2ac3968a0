from collections.abc import Callable, Iterable
from functools import cmp_to_key
from typing import Any, Protocol

from ..util.errors import InvalidStateError
from .SVcallrecord import SVCallRecord


class ContigOrder(Protocol):
    """Maps a contig name to its rank, e.g. its index in a sequence dictionary."""

    def __call__(self, contig: str) -> int: ...


def contig_order_from_names(names: Iterable[str]) -> ContigOrder:
    """Builds a contig order from contig names given in their sort order."""
    index = {name: i for i, name in enumerate(names)}

    def contig_order(contig: str) -> int:
        rank = index.get(contig, None)
        if rank is None:
            raise InvalidStateError(f"Contig {contig} is not part of the contig order")
        return rank

    return contig_order


def _compare(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _compare_nullable(a: Any, b: Any) -> int:
    # None sorts before any defined value
    if a is None and b is not None:
        return -1
    if a is not None and b is None:
        return 1
    if a is None and b is None:
        return 0
    return _compare(a, b)


def compare_sv_locatables(
    first: SVCallRecord, second: SVCallRecord, contig_order: ContigOrder
) -> int:
    """Compares the first loci of two records, then their second loci."""
    compare_a = _compare(
        (contig_order(first.contig_a), first.position_a),
        (contig_order(second.contig_a), second.position_a),
    )
    if compare_a != 0:
        return compare_a
    return _compare(
        (contig_order(first.contig_b), first.position_b),
        (contig_order(second.contig_b), second.position_b),
    )


def compare_calls(
    first: SVCallRecord, second: SVCallRecord, contig_order: ContigOrder
) -> int:
    """Compares two records by first locus, second locus, SV type, start strand, end strand and length.

    The first non-equal comparison determines the result. Undefined strands and
    lengths sort before defined ones, the reverse strand before the forward strand.
    Returns -1, 0 or 1.
    """
    compare_locatables = compare_sv_locatables(first, second, contig_order)
    if compare_locatables != 0:
        return compare_locatables

    compare_type = _compare(first.sv_type.ordinal, second.sv_type.ordinal)
    if compare_type != 0:
        return compare_type

    compare_start_strand = _compare_nullable(first.strand_a, second.strand_a)
    if compare_start_strand != 0:
        return compare_start_strand

    compare_end_strand = _compare_nullable(first.strand_b, second.strand_b)
    if compare_end_strand != 0:
        return compare_end_strand

    return _compare_nullable(first.length, second.length)


def get_call_sort_key(contig_order: ContigOrder) -> Callable[[SVCallRecord], Any]:
    """Returns a key function for sorted() that orders records like compare_calls."""
    return cmp_to_key(lambda a, b: compare_calls(a, b, contig_order))


def sort_calls(
    records: Iterable[SVCallRecord], contig_order: ContigOrder
) -> list[SVCallRecord]:
    return sorted(records, key=get_call_sort_key(contig_order))
