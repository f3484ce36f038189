"""
hironaka.schemes.chart
======================

Affine charts and the ring maps between their localizations.

A chart ``Spec(R / M)`` is stored as the ambient polynomial ring ``R`` and
the modulus ``M``. Ideals of the coordinate ring are represented by their
preimages in ``R``, so every chart ideal contains the modulus.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from hironaka.algorithms.ideals.ideal import Ideal
from hironaka.algorithms.polynomial.polynomial import (Polynomial,
                                                       PolynomialRing)
from hironaka.algorithms.utils.exceptions import (MapDomainError,
                                                  RingMismatchError,
                                                  UsageError)

Fraction = Tuple[Polynomial, Polynomial]


class Chart:
    """Affine patch ``Spec(ring / modulus)``.

    Parameters
    ----------
    ring : PolynomialRing
        Ambient polynomial ring.
    modulus : iterable, optional
        Generators of the ideal cutting out the patch.
    name : str, optional
        Label used in diagnostics.
    """

    def __init__(self, ring: PolynomialRing, modulus: Iterable = (), name: str = None):
        self._ring = ring
        self._modulus = Ideal(ring, modulus)
        self._name = name

    @property
    def ring(self) -> PolynomialRing:
        return self._ring

    @property
    def modulus(self) -> Ideal:
        return self._modulus

    @property
    def name(self) -> str:
        return self._name or f"Spec({self._ring})"

    def ideal(self, gens: Iterable = ()) -> Ideal:
        """Ideal of the coordinate ring generated by ``gens``, as a preimage."""
        return Ideal(self._ring, list(self._modulus.gens) + list(gens))

    def zero_ideal(self) -> Ideal:
        return self.ideal()

    def unit_ideal(self) -> Ideal:
        return Ideal(self._ring, [self._ring.one])

    def subscheme(self, ideal: Ideal, name: str = None) -> "Chart":
        """Closed subscheme cut out by ``ideal``."""
        if ideal.ring != self._ring:
            raise RingMismatchError(f"Ideal over {ideal.ring} does not live on {self.name}.")
        return Chart(self._ring, list(self._modulus.gens) + list(ideal.gens), name or self._name)

    def __repr__(self):
        return f"Chart({self.name})"


class RingMap:
    """Pullback of functions from ``domain`` to a localization of ``codomain``.

    Parameters
    ----------
    domain : PolynomialRing
        Ring whose elements are pulled back.
    codomain : PolynomialRing
        Ring receiving the images.
    images : sequence
        Image of every variable of ``domain``: a polynomial of ``codomain``
        or a ``(numerator, denominator)`` pair.

    Notes
    -----
    Denominators are units on the overlap the map is defined on, so ideals
    are mapped with denominators cleared.
    """

    def __init__(self, domain: PolynomialRing, codomain: PolynomialRing, images: Sequence):
        if len(images) != domain.ngens:
            raise UsageError(f"Expected {domain.ngens} images, got {len(images)}.")
        self._domain = domain
        self._codomain = codomain
        fractions: List[Fraction] = []
        for image in images:
            if isinstance(image, tuple):
                num, den = codomain(image[0]), codomain(image[1])
                if not den:
                    raise UsageError("Denominators of a ring map must be non-zero.")
            else:
                num, den = codomain(image), codomain.one
            fractions.append((num, den))
        self._images = tuple(fractions)

    @property
    def domain(self) -> PolynomialRing:
        return self._domain

    @property
    def codomain(self) -> PolynomialRing:
        return self._codomain

    @property
    def images(self) -> Tuple[Fraction, ...]:
        return self._images

    @classmethod
    def identity(cls, ring: PolynomialRing) -> "RingMap":
        return cls(ring, ring, ring.gens)

    def __call__(self, f: Polynomial) -> Fraction:
        """Image of ``f`` as a ``(numerator, denominator)`` pair."""
        if f.ring != self._domain:
            raise MapDomainError(f"{f} is not an element of the domain {self._domain} of the map.")
        R = self._codomain
        degrees = [f.degree(i) if f else 0 for i in range(self._domain.ngens)]
        den = R.one
        for (_, d), k in zip(self._images, degrees):
            if k:
                den = den * d ** k
        num_powers = {}
        den_powers = {}
        num = R.zero
        K = R.domain
        for m, c in f.iter_terms():
            term = R(K.convert_from(c, self._domain.domain))
            for i, e in enumerate(m):
                n_i, d_i = self._images[i]
                if e:
                    if (i, e) not in num_powers:
                        num_powers[(i, e)] = n_i ** e
                    term = term * num_powers[(i, e)]
                rest = degrees[i] - e
                if rest:
                    if (i, rest) not in den_powers:
                        den_powers[(i, rest)] = d_i ** rest
                    term = term * den_powers[(i, rest)]
            num = num + term
        return num, den

    def cleared(self, f: Polynomial) -> Polynomial:
        """Numerator of the image of ``f``."""
        return self(f)[0]

    def pullback(self, ideal: Ideal) -> Ideal:
        """Ideal generated by the images of the generators of ``ideal``."""
        if ideal.ring != self._domain:
            raise MapDomainError("Ideal is not defined over the domain of the map.")
        return Ideal(self._codomain, [self.cleared(g) for g in ideal.gens])

    def __repr__(self):
        images = ", ".join(f"({n})/({d})" if d != 1 else str(n) for n, d in self._images)
        return f"RingMap({self._domain} -> {self._codomain}: {images})"
