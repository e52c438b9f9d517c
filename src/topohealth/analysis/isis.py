"""IS-IS adjacency index.

Flattens the nested link-state database into a lookup from adjacency
interface address to the metrics reported for it. The same address
can be advertised in several LSPs; entries keep discovery order and
the first one wins on lookup.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from topohealth.logging import get_logger
from topohealth.model.documents import IsisDocument

logger = get_logger(__name__)


@dataclass(frozen=True)
class IsisAdjacency:
    """One metric advertisement for an adjacency interface address."""

    address: str
    metric: int | float
    lsp_id: str
    system_id: str | None = None


IsisIndex = dict[str, list[IsisAdjacency]]


def build_isis_index(
    document: IsisDocument,
    vrf: str = "default",
    instance: str = "1",
    level: str = "2",
) -> IsisIndex:
    """Build the address -> adjacencies index for one IS-IS level.

    Neighbors without a metric and addresses without a value are skipped.
    """
    index: IsisIndex = {}

    for lsp_id, lsp in document.lsps(vrf=vrf, instance=instance, level=level).items():
        for neighbor in lsp.neighbors:
            if neighbor.metric is None:
                continue
            for entry in neighbor.adj_interface_addresses:
                address = entry.adj_interface_address
                if not address:
                    continue
                index.setdefault(address, []).append(
                    IsisAdjacency(
                        address=address,
                        metric=neighbor.metric,
                        lsp_id=lsp_id,
                        system_id=neighbor.system_id,
                    )
                )

    logger.debug("Built IS-IS index with %d adjacency addresses", len(index))
    return index


def lookup_metric(index: IsisIndex, addresses: Iterable[str]) -> int | float | None:
    """Metric of the first adjacency of the first address present in the index."""
    for address in addresses:
        adjacencies = index.get(address)
        if adjacencies:
            return adjacencies[0].metric
    return None
