import itertools

import pytest

from svcallrecord.svcalling.comparison import (compare_calls,
                                               compare_sv_locatables,
                                               contig_order_from_names,
                                               get_call_sort_key, sort_calls)
from svcallrecord.svcalling.SVcallrecord import SVCallRecord
from svcallrecord.util.alleles import DEL_ALLELE, Allele
from svcallrecord.util.datatypes import SVType
from svcallrecord.util.errors import InvalidStateError

CONTIG_ORDER = contig_order_from_names(["chr1", "chr2", "chrX"])
REF = Allele("C", is_reference=True)


def make_record(**kwargs) -> SVCallRecord:
    values = dict(
        id="var1",
        contig_a="chr1",
        position_a=100,
        strand_a=None,
        contig_b="chr1",
        position_b=500,
        strand_b=None,
        sv_type=SVType.DEL,
        length=None,
        algorithms=["manta"],
        alleles=[REF, DEL_ALLELE],
    )
    values.update(kwargs)
    return SVCallRecord(**values)


# records in ascending order, each one differs from its predecessor in the first compared field
ORDERED_RECORDS = [
    make_record(strand_a=None, strand_b=None, length=None),
    make_record(strand_a=None, strand_b=None, length=10),
    make_record(strand_a=None, strand_b=None, length=20),
    make_record(strand_a=None, strand_b=False),
    make_record(strand_a=None, strand_b=True),
    make_record(strand_a=False, strand_b=None),
    make_record(strand_a=False, strand_b=True),
    make_record(strand_a=True, strand_b=None),
    make_record(sv_type=SVType.INS),
    make_record(sv_type=SVType.DUP),
    make_record(sv_type=SVType.INV, strand_a=True, strand_b=False),
    make_record(sv_type=SVType.CNV),
    make_record(sv_type=SVType.BND, strand_a=False, strand_b=False),
    make_record(position_b=600),
    make_record(contig_b="chr2", position_b=1),
    make_record(position_a=101, position_b=1),
    make_record(contig_a="chr2", position_a=1, position_b=1),
    make_record(contig_a="chrX", position_a=1, contig_b="chr1", position_b=1),
]


def sign(x: int) -> int:
    return (x > 0) - (x < 0)


def test_contig_order_from_names():
    assert CONTIG_ORDER("chr1") == 0
    assert CONTIG_ORDER("chrX") == 2
    with pytest.raises(InvalidStateError, match="chrY"):
        CONTIG_ORDER("chrY")


def test_compare_sv_locatables():
    a = make_record()
    assert compare_sv_locatables(a, make_record(sv_type=SVType.BND, strand_a=True, strand_b=True), CONTIG_ORDER) == 0
    assert compare_sv_locatables(a, make_record(position_b=501), CONTIG_ORDER) == -1
    assert compare_sv_locatables(make_record(contig_a="chr2"), a, CONTIG_ORDER) == 1


def test_contig_order_wins_over_name():
    # reversed order, so sorting by contig name would give the opposite result
    order = contig_order_from_names(["chrX", "chr2", "chr1"])
    a = make_record(contig_a="chr1", contig_b="chr1")
    b = make_record(contig_a="chrX", contig_b="chrX")
    assert compare_calls(a, b, order) == 1
    assert compare_calls(b, a, order) == -1


class TestCompareCalls:
    def test_consecutive_pairs(self):
        for i, (a, b) in enumerate(itertools.pairwise(ORDERED_RECORDS)):
            assert compare_calls(a, b, CONTIG_ORDER) == -1, f"pair {i}: {a} vs {b}"
            assert compare_calls(b, a, CONTIG_ORDER) == 1, f"pair {i}: {b} vs {a}"

    def test_equal_fields(self):
        a = make_record(id="a", attributes={"QS": 1})
        b = make_record(id="b", attributes={"QS": 2})
        assert compare_calls(a, b, CONTIG_ORDER) == 0
        assert compare_calls(a, a, CONTIG_ORDER) == 0

    def test_antisymmetric(self):
        for a, b in itertools.product(ORDERED_RECORDS, repeat=2):
            assert compare_calls(a, b, CONTIG_ORDER) == -compare_calls(b, a, CONTIG_ORDER)

    def test_transitive(self):
        for a, b, c in itertools.product(ORDERED_RECORDS, repeat=3):
            ab = compare_calls(a, b, CONTIG_ORDER)
            bc = compare_calls(b, c, CONTIG_ORDER)
            if ab <= 0 and bc <= 0:
                assert compare_calls(a, c, CONTIG_ORDER) <= 0

    def test_consistent_with_list_order(self):
        for (i, a), (j, b) in itertools.product(enumerate(ORDERED_RECORDS), repeat=2):
            assert compare_calls(a, b, CONTIG_ORDER) == sign(i - j)

    def test_repeated_calls(self):
        a, b = ORDERED_RECORDS[3], ORDERED_RECORDS[7]
        results = {compare_calls(a, b, CONTIG_ORDER) for _ in range(5)}
        assert results == {-1}


def test_sort_calls():
    shuffled = list(reversed(ORDERED_RECORDS))
    shuffled = shuffled[::2] + shuffled[1::2]
    result = sort_calls(shuffled, CONTIG_ORDER)
    assert result == ORDERED_RECORDS
    assert sorted(shuffled, key=get_call_sort_key(CONTIG_ORDER)) == ORDERED_RECORDS
