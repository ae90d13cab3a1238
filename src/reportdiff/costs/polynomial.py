"""Non-negative cost polynomials and their wire format.

A cost is either ``Top`` (unbounded or not analysable) or a polynomial with
non-negative integer coefficients over symbolic variables. The differential
only looks at a cost's degree class, so this module exposes a small
comparison and rendering surface (:class:`CostPolynomial`) on top of the
decoded value.

Wire format:
    ``"Top"``, or a JSON object
    ``{"constant": 3, "terms": [{"coeff": 2, "vars": {"n": 2, "m": 1}}]}``
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Protocol, Self, override, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from reportdiff.errors import PolynomialDecodeError

TOP_WIRE = "Top"

_DEGREE_NAMES = {0: "constant", 1: "linear", 2: "quadratic", 3: "cubic"}


@runtime_checkable
class CostPolynomial(Protocol):
    """Surface of a cost estimate used by the reconciler and summary builder."""

    @property
    def is_top(self) -> bool:
        """Whether the cost is unbounded."""
        ...

    @property
    def is_zero(self) -> bool:
        """Whether the cost is exactly zero."""
        ...

    @property
    def degree(self) -> int | None:
        """Polynomial degree, or None when the cost is top."""
        ...


class _WireTerm(BaseModel):
    model_config = ConfigDict(extra="forbid")

    coeff: int = Field(ge=0)
    vars: dict[str, int] = Field(default_factory=dict)


class _WirePolynomial(BaseModel):
    model_config = ConfigDict(extra="forbid")

    constant: int = Field(default=0, ge=0)
    terms: list[_WireTerm] = Field(default_factory=list)


type Monomial = tuple[tuple[str, int], ...]


class NonNegativePolynomial:
    """Decoded cost estimate.

    Monomials are stored as sorted ``(variable, exponent)`` tuples mapped to
    positive coefficients; the constant term is kept separately.
    """

    __slots__ = ("_constant", "_terms", "_top")

    def __init__(
        self,
        constant: int = 0,
        terms: Mapping[Monomial, int] | None = None,
        *,
        top: bool = False,
    ) -> None:
        """Create a polynomial; use :meth:`top` for the unbounded cost."""
        if constant < 0:
            raise ValueError(f"constant must be non-negative, got: {constant}")
        self._top = top
        self._constant = 0 if top else constant
        self._terms: dict[Monomial, int] = (
            {} if top else {m: c for m, c in (terms or {}).items() if c > 0}
        )

    @classmethod
    def top(cls) -> Self:
        """Return the unbounded cost."""
        return cls(top=True)

    @classmethod
    def of_int(cls, value: int) -> Self:
        """Return a constant cost."""
        return cls(constant=value)

    @classmethod
    def decode(cls, encoded: str) -> Self:
        """Decode a polynomial from its wire form.

        Raises:
            PolynomialDecodeError: If the string is neither ``"Top"`` nor a
                valid polynomial object

        """
        if encoded == TOP_WIRE:
            return cls.top()
        try:
            wire = _WirePolynomial.model_validate_json(encoded)
        except ValidationError as e:
            raise PolynomialDecodeError(
                f"Invalid cost polynomial {encoded!r}: {e}"
            ) from e

        terms: dict[Monomial, int] = {}
        constant = wire.constant
        for term in wire.terms:
            if any(exponent < 0 for exponent in term.vars.values()):
                raise PolynomialDecodeError(
                    f"Invalid cost polynomial {encoded!r}: negative exponent"
                )
            monomial = tuple(sorted((v, e) for v, e in term.vars.items() if e > 0))
            if not monomial:
                constant += term.coeff
                continue
            terms[monomial] = terms.get(monomial, 0) + term.coeff
        return cls(constant, terms)

    def encode(self) -> str:
        """Encode the polynomial into its wire form."""
        if self._top:
            return TOP_WIRE
        wire = {
            "constant": self._constant,
            "terms": [
                {"coeff": coeff, "vars": dict(monomial)}
                for monomial, coeff in sorted(self._terms.items())
            ],
        }
        return json.dumps(wire, separators=(",", ":"))

    @property
    def is_top(self) -> bool:
        """Whether the cost is unbounded."""
        return self._top

    @property
    def is_zero(self) -> bool:
        """Whether the cost is exactly zero."""
        return not self._top and self._constant == 0 and not self._terms

    @property
    def degree(self) -> int | None:
        """Maximum total exponent over all terms, None for top."""
        if self._top:
            return None
        return max(
            (sum(exp for _, exp in monomial) for monomial in self._terms), default=0
        )

    def pp(self) -> str:
        """Render the polynomial, e.g. ``3 + 2 * m * n^2``."""
        if self._top:
            return TOP_WIRE
        parts = [str(self._constant)] if self._constant or not self._terms else []
        for monomial, coeff in sorted(self._terms.items()):
            factors = [v if e == 1 else f"{v}^{e}" for v, e in monomial]
            if coeff != 1:
                factors.insert(0, str(coeff))
            parts.append(" * ".join(factors))
        return " + ".join(parts)

    def pp_degree(self) -> str:
        """Render the raw degree, ``Top`` for unbounded costs."""
        degree = self.degree
        return TOP_WIRE if degree is None else str(degree)

    def pp_degree_hum(self) -> str:
        """Render the degree class for humans, e.g. ``linear``."""
        degree = self.degree
        if degree is None:
            return TOP_WIRE
        return _DEGREE_NAMES.get(degree, f"degree {degree}")

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NonNegativePolynomial):
            return NotImplemented
        return (self._top, self._constant, self._terms) == (
            other._top,
            other._constant,
            other._terms,
        )

    @override
    def __hash__(self) -> int:
        return hash((self._top, self._constant, frozenset(self._terms.items())))

    @override
    def __repr__(self) -> str:
        return f"NonNegativePolynomial({self.pp()!r})"


def compare_by_degree(a: CostPolynomial, b: CostPolynomial) -> int:
    """Compare two costs by degree class.

    Top equals top and sorts above every bounded cost; bounded costs are
    ordered by degree, so zero and non-zero constants compare equal.

    Returns:
        Negative, zero or positive, like a classic ``cmp``

    """
    if a.is_top or b.is_top:
        return int(a.is_top) - int(b.is_top)
    a_degree = a.degree or 0
    b_degree = b.degree or 0
    return (a_degree > b_degree) - (a_degree < b_degree)
