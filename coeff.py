from __future__ import annotations
import numpy as np

COEFF_MIN = int(np.iinfo(np.int64).min)
COEFF_MAX = int(np.iinfo(np.int64).max)
EXP_MAX = int(np.iinfo(np.int32).max)
UINT64_MAX = int(np.iinfo(np.uint64).max)

def _wrap(n: int) -> np.int64:
	# two's complement truncation, same as a C cast to a 64-bit signed integer
	return np.uint64(n & UINT64_MAX).astype(np.int64)

class Coeff:
	"""Signed 64-bit polynomial coefficient with wrap-around arithmetic."""
	__slots__ = ("_v",)
	def __init__(self, value: int | np.integer | Coeff = 0) -> None:
		if isinstance(value, Coeff):
			self._v = value._v
		else:
			self._v = _wrap(int(value))
	@staticmethod
	def fits(n: int) -> bool:
		return COEFF_MIN <= n <= COEFF_MAX
	@staticmethod
	def _of(other: Coeff | int) -> Coeff:
		return other if isinstance(other, Coeff) else Coeff(other)
	def __add__(self, other: Coeff | int) -> Coeff:
		return Coeff(int(self._v) + int(Coeff._of(other)._v))
	def __sub__(self, other: Coeff | int) -> Coeff:
		return Coeff(int(self._v) - int(Coeff._of(other)._v))
	def __mul__(self, other: Coeff | int) -> Coeff:
		return Coeff(int(self._v) * int(Coeff._of(other)._v))
	__radd__ = __add__
	__rmul__ = __mul__
	def __neg__(self) -> Coeff:
		return Coeff(-int(self._v))
	def __pow__(self, exp: int) -> Coeff:
		# repeated squaring, O(log exp) wrapped multiplications
		if exp < 0:
			raise ValueError(f"Negative exponent {exp}")
		if exp == 0:
			return Coeff(1)
		if exp == 1:
			return Coeff(self)
		half = (self * self) ** (exp // 2)
		if exp & 1:
			return self * half
		return half
	def __eq__(self, other: object) -> bool:
		if isinstance(other, Coeff):
			return int(self._v) == int(other._v)
		if isinstance(other, (int, np.integer)):
			return int(self._v) == int(other)
		return NotImplemented
	def __hash__(self) -> int:
		return hash(int(self._v))
	def __int__(self) -> int:
		return int(self._v)
	def is_zero(self) -> bool:
		return int(self._v) == 0
	def to_int(self) -> int:
		return int(self._v)
	def to_string(self) -> str:
		return str(int(self._v))
	def __str__(self) -> str:
		return self.to_string()
	def __repr__(self) -> str:
		return f"Coeff({int(self._v)})"
