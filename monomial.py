from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence
from coeff import Coeff

if TYPE_CHECKING:
	from polynomial import Polynomial

@dataclass(eq=False)
class Monomial:
	"""Term coeff * x_i^exp; the variable index i is the nesting depth."""
	coeff: Polynomial
	exp: int = 0
	def __post_init__(self) -> None:
		if self.exp < 0:
			raise ValueError(f"Negative exponent {self.exp}")
	def degree(self) -> int:
		return self.exp + self.coeff.deg()
	def clone(self) -> Monomial:
		return Monomial(self.coeff.clone(), self.exp)
	def add(self, other: Monomial) -> Monomial:
		assert self.exp == other.exp
		return Monomial(self.coeff.add(other.coeff), self.exp)
	def mul(self, other: Monomial) -> Monomial:
		return Monomial(self.coeff.mul(other.coeff), self.exp + other.exp)
	def mul_coeff(self, c: Polynomial) -> Monomial:
		assert c.is_coeff()
		return Monomial(self.coeff.mul(c), self.exp)
	def __neg__(self) -> Monomial:
		return Monomial(self.coeff.neg(), self.exp)
	def is_eq(self, other: Monomial) -> bool:
		return self.exp == other.exp and self.coeff.is_eq(other.coeff)
	def at(self, x: Coeff) -> Polynomial:
		# Local import to avoid circular dependency at module load time
		from polynomial import Polynomial
		return self.coeff.mul(Polynomial.from_coeff(x ** self.exp))
	def compose(self, substitutes: Sequence[Polynomial], depth: int) -> Polynomial:
		coeff = self.coeff.compose_from(substitutes, depth + 1)
		if self.exp == 0:
			return coeff
		if depth < len(substitutes):
			return coeff.mul(substitutes[depth].pow(self.exp))
		# x_depth has no substitute and is replaced with zero
		from polynomial import Polynomial
		return Polynomial.zero()
	def to_string(self) -> str:
		return f"({self.coeff.to_string()},{self.exp})"
	def __str__(self) -> str:
		return self.to_string()
