from __future__ import annotations
from typing import List, Optional, Sequence
from dataclasses import dataclass, field
from monomial import Monomial
from coeff import Coeff


def _trim_and_interpret(monos: List[Monomial]) -> "Polynomial":
    """Build a polynomial from sorted, merged, zero-free monomials.

    Takes over ``monos``; collapses the empty list to zero and a lone
    exponent-0 constant term to that constant.
    """
    if len(monos) == 0:
        return Polynomial.zero()
    if len(monos) == 1 and monos[0].exp == 0 and monos[0].coeff.is_coeff():
        return monos[0].coeff
    return Polynomial(monos=monos)


@dataclass(eq=False, repr=False)
class Polynomial:
    """Polynomial in x_0, x_1, ... with 64-bit integer coefficients.

    Either a constant (``monos is None``, value in ``coeff``) or a non-empty
    list of monomials in x_0 whose coefficients are polynomials in x_1, x_2,
    and so on. Every public operation returns the canonical form: monomials
    strictly ascending by exponent, no zero coefficients, zero is always the
    constant 0, and a lone constant term is stored as a constant.
    """

    coeff: Coeff = field(default_factory=lambda: Coeff(0))
    monos: Optional[List[Monomial]] = None

    @staticmethod
    def zero() -> "Polynomial":
        return Polynomial(Coeff(0))

    @staticmethod
    def from_coeff(c: Coeff | int) -> "Polynomial":
        return Polynomial(Coeff(c))

    @staticmethod
    def variable(idx: int) -> "Polynomial":
        """The bare variable x_idx."""
        p = Polynomial(monos=[Monomial(Polynomial.from_coeff(1), 1)])
        for _ in range(idx):
            p = Polynomial(monos=[Monomial(p, 0)])
        return p

    @staticmethod
    def add_monos(monos: List[Monomial]) -> "Polynomial":
        """Canonicalize an arbitrary list of monomials into their sum.

        Takes over ``monos`` (it is sorted in place). Exponents may repeat
        and coefficients may be zero.
        """
        monos.sort(key=lambda m: m.exp)
        merged: List[Monomial] = []
        for m in monos:
            if merged and merged[-1].exp == m.exp:
                merged[-1] = merged[-1].add(m)
            else:
                merged.append(m)
        return _trim_and_interpret([m for m in merged if not m.coeff.is_zero()])

    @staticmethod
    def own_monos(monos: Optional[List[Monomial]]) -> "Polynomial":
        if not monos:
            return Polynomial.zero()
        return Polynomial.add_monos(monos)

    @staticmethod
    def clone_monos(monos: Optional[Sequence[Monomial]]) -> "Polynomial":
        if not monos:
            return Polynomial.zero()
        return Polynomial.add_monos([m.clone() for m in monos])

    def is_coeff(self) -> bool:
        return self.monos is None

    def is_zero(self) -> bool:
        return self.is_coeff() and self.coeff.is_zero()

    def clone(self) -> "Polynomial":
        if self.is_coeff():
            return Polynomial(Coeff(self.coeff))
        return Polynomial(monos=[m.clone() for m in self.monos])

    # --- addition ---

    def add(self, other: "Polynomial") -> "Polynomial":
        if self.is_coeff() and other.is_coeff():
            return Polynomial(self.coeff + other.coeff)
        if self.is_coeff():
            return other._add_coeff(self)
        if other.is_coeff():
            return self._add_coeff(other)
        return self._add_sums(other)

    def _add_coeff(self, c: "Polynomial") -> "Polynomial":
        if c.is_zero():
            return self.clone()
        head = self.monos[0]
        if head.exp == 0:
            new_head = head.coeff.add(c)
            monos = [] if new_head.is_zero() else [Monomial(new_head, 0)]
            monos.extend(m.clone() for m in self.monos[1:])
        else:
            monos = [Monomial(c.clone(), 0)]
            monos.extend(m.clone() for m in self.monos)
        return _trim_and_interpret(monos)

    def _add_sums(self, other: "Polynomial") -> "Polynomial":
        p, q = self.monos, other.monos
        i = j = 0
        monos: List[Monomial] = []
        while i < len(p) and j < len(q):
            if p[i].exp == q[j].exp:
                m = p[i].add(q[j])
                if not m.coeff.is_zero():
                    monos.append(m)
                i += 1
                j += 1
            elif p[i].exp < q[j].exp:
                monos.append(p[i].clone())
                i += 1
            else:
                monos.append(q[j].clone())
                j += 1
        monos.extend(m.clone() for m in p[i:])
        monos.extend(m.clone() for m in q[j:])
        return _trim_and_interpret(monos)

    def __add__(self, rhs: "Polynomial") -> "Polynomial":
        return self.add(rhs)

    # --- negation and subtraction ---

    def neg(self) -> "Polynomial":
        if self.is_coeff():
            return Polynomial(-self.coeff)
        return Polynomial(monos=[-m for m in self.monos])

    def __neg__(self) -> "Polynomial":
        return self.neg()

    def sub(self, other: "Polynomial") -> "Polynomial":
        return self.add(other.neg())

    def __sub__(self, rhs: "Polynomial") -> "Polynomial":
        return self.sub(rhs)

    # --- multiplication ---

    def mul(self, other: "Polynomial") -> "Polynomial":
        if self.is_coeff() and other.is_coeff():
            return Polynomial(self.coeff * other.coeff)
        if self.is_coeff():
            return other._mul_coeff(self)
        if other.is_coeff():
            return self._mul_coeff(other)
        prods: List[Monomial] = []
        for a in self.monos:
            for b in other.monos:
                prods.append(a.mul(b))
        return Polynomial.add_monos(prods)

    def _mul_coeff(self, c: "Polynomial") -> "Polynomial":
        if c.is_zero():
            return Polynomial.zero()
        # wrap-around can zero out single terms, so re-canonicalize
        return Polynomial.add_monos([m.mul_coeff(c) for m in self.monos])

    def __mul__(self, rhs: "Polynomial") -> "Polynomial":
        return self.mul(rhs)

    def pow(self, exp: int) -> "Polynomial":
        if exp < 0:
            raise ValueError(f"Negative exponent {exp}")
        if exp == 0:
            return Polynomial.from_coeff(1)
        if exp == 1:
            return self.clone()
        half = self.mul(self).pow(exp // 2)
        if exp & 1:
            return self.mul(half)
        return half

    def __pow__(self, exp: int) -> "Polynomial":
        return self.pow(exp)

    # --- degrees ---

    def deg(self) -> int:
        """Total degree; -1 for the zero polynomial."""
        if self.is_zero():
            return -1
        if self.is_coeff():
            return 0
        return max(m.degree() for m in self.monos)

    def deg_by(self, var_idx: int) -> int:
        """Degree in x_var_idx; -1 for the zero polynomial.

        A nonzero constant met before reaching depth ``var_idx`` counts as
        degree 0 in every deeper variable.
        """
        if self.is_zero():
            return -1
        if self.is_coeff():
            return 0
        if var_idx == 0:
            return self.monos[-1].exp
        return max(m.coeff.deg_by(var_idx - 1) for m in self.monos)

    # --- evaluation and composition ---

    def at(self, x: Coeff | int) -> "Polynomial":
        """Substitute ``x`` for x_0; x_1, x_2, ... become x_0, x_1, ..."""
        if self.is_coeff():
            return self.clone()
        x = Coeff(x)
        result = Polynomial.zero()
        for m in self.monos:
            result = result.add(m.at(x))
        return result

    def compose(self, substitutes: Sequence["Polynomial"]) -> "Polynomial":
        """Return p(q_0, q_1, ..., q_{k-1}, 0, 0, ...)."""
        return self.compose_from(substitutes, 0)

    def compose_from(self, substitutes: Sequence["Polynomial"], depth: int) -> "Polynomial":
        if self.is_coeff():
            return self.clone()
        result = Polynomial.zero()
        for m in self.monos:
            result = result.add(m.compose(substitutes, depth))
        return result

    # --- equality ---

    def is_eq(self, other: "Polynomial") -> bool:
        if self.is_coeff() and other.is_coeff():
            return self.coeff == other.coeff
        if self.is_coeff() or other.is_coeff():
            return False
        if len(self.monos) != len(other.monos):
            return False
        return all(a.is_eq(b) for a, b in zip(self.monos, other.monos))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.is_eq(other)

    def to_string(self) -> str:
        if self.is_coeff():
            return self.coeff.to_string()
        return "+".join(m.to_string() for m in self.monos)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Polynomial({self.to_string()!r})"
