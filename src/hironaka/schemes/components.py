"""
hironaka.schemes.components
===========================

Global components of ideal sheaves assembled from local decompositions.

Every chart ideal is decomposed on its own. A local component on chart ``U``
is then compared with the partial records collected so far: it belongs to a
record when its restriction to some overlap ``U & V`` is a proper ideal
equal to the restriction of the record's ideal on ``V``, and when no overlap
contradicts that. Records matched by the same component are merged.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.utils.exceptions import ConsistencyError
from hironaka.schemes.covering import Covering
from hironaka.schemes.sheaf import IdealSheaf
from hironaka.utils.log_config import logger

Record = Dict[int, Ideal]


def _compare_on_overlaps(covering: Covering, u: int, comp: Ideal, record: Record,
                         charts=None) -> Tuple[bool, bool]:
    """Return ``(found, contradicted)`` for ``comp`` on chart ``u`` against ``record``."""
    found = False
    contradicted = False
    for v, other in record.items():
        if charts is not None and v not in charts:
            continue
        if not covering.has_glueing(u, v):
            continue
        restricted = covering.restrict(u, v, comp)
        transported = covering.transport(u, v, other)
        if restricted == transported:
            if not restricted.is_one():
                found = True
        else:
            contradicted = True
    return found, contradicted


def match_on_intersections(covering: Covering, u: int, comp: Ideal, records: List[Record],
                           check: bool = True) -> List[int]:
    """Indices of the records ``comp`` (on chart ``u``) belongs to.

    Parameters
    ----------
    covering : Covering
        Where the records live.
    u : int
        Chart of the component.
    comp : Ideal
        Local prime or primary component on chart ``u``.
    records : list of dict
        Partial global components, chart index to local ideal.
    check : bool, default True
        Raise when a record both matches and contradicts the component.

    Raises
    ------
    ConsistencyError
        If ``check`` is set and a record is matched on one overlap and
        contradicted on another.
    """
    matches = []
    for k, record in enumerate(records):
        found, contradicted = _compare_on_overlaps(covering, u, comp, record)
        if check and found and contradicted:
            raise ConsistencyError(f"Component {comp} on chart {u} both matches and contradicts record {k}.")
        if found and not contradicted:
            matches.append(k)
    return matches


def _assign(records: List[Record], u: int, comp: Ideal, matches: List[int]) -> List[Record]:
    if not matches:
        records.append({u: comp})
        return records
    if len(matches) == 1:
        records[matches[0]][u] = comp
        return records
    target = records[matches[-1]]
    for k in matches[:-1]:
        target.update(records[k])
    target[u] = comp
    logger.debug("Merged records %s through chart %d", matches, u)
    dropped = set(matches[:-1])
    return [r for k, r in enumerate(records) if k not in dropped]


def _collect(sheaf: IdealSheaf, local: Callable[[Ideal], List[Ideal]], check: bool) -> List[IdealSheaf]:
    covering = sheaf.covering
    records: List[Record] = []
    todo = list(covering.indices)
    while todo:
        u = todo.pop()
        ideal = sheaf(u)
        if ideal.is_one():
            continue
        for comp in local(ideal):
            matches = match_on_intersections(covering, u, comp, records, check)
            records = _assign(records, u, comp, matches)

    out = []
    for record in records:
        for i in covering.indices:
            if i not in record:
                record[i] = covering[i].unit_ideal()
        out.append(IdealSheaf(covering, record, check=False))
    logger.info("Found %d global components", len(out))
    return out


def minimal_associated_points(sheaf: IdealSheaf, check: bool = False) -> List[IdealSheaf]:
    """Prime ideal sheaves of the irreducible components of the subscheme."""
    return _collect(sheaf, lambda ideal: ideal.minimal_primes(), check)


def associated_points(sheaf: IdealSheaf, check: bool = False) -> List[IdealSheaf]:
    """Prime ideal sheaves of all associated points, embedded ones included."""
    return _collect(sheaf, lambda ideal: [P for _, P in ideal.primary_decomposition()], check)


def primary_decomposition(sheaf: IdealSheaf) -> List[Tuple[IdealSheaf, IdealSheaf]]:
    """Primary decomposition of an ideal sheaf as ``(primary, prime)`` pairs.

    Components are matched on the charts already processed: the associated
    primes must agree on a non-trivial overlap and the primary ideals must
    agree there too.

    Raises
    ------
    NotImplementedError
        If a local component matches more than one global component.
    """
    covering = sheaf.covering
    primes: List[Record] = []
    primaries: List[Record] = []
    clean: List[int] = []
    dirty = list(covering.indices)
    while dirty:
        u = dirty.pop()
        ideal = sheaf(u)
        new_primes: List[Record] = []
        new_primaries: List[Record] = []
        for Q, P in ([] if ideal.is_one() else ideal.primary_decomposition()):
            if P.is_one():
                continue
            confirmed = []
            for k in range(len(primes)):
                found, contradicted = _compare_on_overlaps(covering, u, P, primes[k], clean)
                if not found or contradicted:
                    continue
                found, contradicted = _compare_on_overlaps(covering, u, Q, primaries[k], clean)
                if found and not contradicted:
                    confirmed.append(k)
            if len(confirmed) > 1:
                raise NotImplementedError("no unique match found; case not implemented")
            if confirmed:
                k = confirmed[0]
                primes[k][u] = P
                primaries[k][u] = Q
            else:
                unit = {v: covering[v].unit_ideal() for v in clean}
                new_primes.append({**unit, u: P})
                new_primaries.append({**unit, u: Q})
        clean.append(u)
        for k in range(len(primes)):
            if u not in primes[k]:
                primes[k][u] = covering[u].unit_ideal()
                primaries[k][u] = covering[u].unit_ideal()
        primes.extend(new_primes)
        primaries.extend(new_primaries)

    logger.info("Primary decomposition with %d components", len(primes))
    return [
        (IdealSheaf(covering, Q, check=False), IdealSheaf(covering, P, check=False))
        for Q, P in zip(primaries, primes)
    ]
