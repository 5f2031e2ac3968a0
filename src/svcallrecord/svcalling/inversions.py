import logging

import attrs

from ..util.datatypes import SVType
from ..util.errors import InvalidStateError
from .SVcallrecord import SVCallRecord

log = logging.getLogger(__name__)


def expand_inversion(record: SVCallRecord) -> list[SVCallRecord]:
    """Converts an inversion into a pair of BND records with ++ and -- strandedness.

    Records of any other type are returned as the only element of the list.
    """
    if record.sv_type != SVType.INV:
        return [record]
    if not record.is_intrachromosomal:
        raise InvalidStateError(f"Inversion {record.id} is not intrachromosomal")
    log.debug(f"Expanding inversion {record._log_id()} into two breakends")
    positive_breakend = attrs.evolve(
        record, sv_type=SVType.BND, length=None, strand_a=True, strand_b=True
    )
    negative_breakend = attrs.evolve(
        record, sv_type=SVType.BND, length=None, strand_a=False, strand_b=False
    )
    return [positive_breakend, negative_breakend]
