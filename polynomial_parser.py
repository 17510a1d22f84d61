from __future__ import annotations
from typing import List, Tuple
from coeff import Coeff, EXP_MAX
from monomial import Monomial
from polynomial import Polynomial

class PolySyntaxError(ValueError):
	pass

# Lexer + recursive descent for "(coeff,exp)+(coeff,exp)..." with nested coefficients
class Tok:
	def __init__(self, kind: str, lex: str = "", pos: int = 0):
		self.kind, self.lex, self.pos = kind, lex, pos

def tokenize(text: str) -> List[Tok]:
	s = text
	i, n = 0, len(s)
	toks: List[Tok] = []
	while i < n:
		c = s[i]
		if c in "(),+":
			toks.append(Tok(c, c, i))
			i += 1; continue
		# number, optionally negative; no whitespace or explicit plus sign allowed
		if c in "0123456789-":
			j = i+1
			while j < n and s[j] in "0123456789":
				j += 1
			if j == i+1 and c == '-':
				raise PolySyntaxError(f"Dangling minus at {i}")
			toks.append(Tok('NUM', s[i:j], i))
			i = j; continue
		raise PolySyntaxError(f"Unexpected char {c!r} at {i}")
	toks.append(Tok('END', "", n))
	return toks

def _expect(toks: List[Tok], i: int, kind: str) -> int:
	if toks[i].kind != kind:
		raise PolySyntaxError(f"Expected {kind!r} at {toks[i].pos}, got {toks[i].lex!r}")
	return i + 1

def _read_number(toks: List[Tok], i: int) -> int:
	t = toks[i]
	if t.kind != 'NUM':
		raise PolySyntaxError(f"Expected a number at {t.pos}")
	return int(t.lex)

def read_poly(toks: List[Tok], i: int) -> Tuple[Polynomial, int]:
	"""Read a polynomial starting at token ``i``; return it and the next index."""
	if toks[i].kind == 'NUM':
		value = _read_number(toks, i)
		if not Coeff.fits(value):
			raise PolySyntaxError(f"Coefficient out of range at {toks[i].pos}")
		return Polynomial.from_coeff(value), i + 1
	if toks[i].kind != '(':
		raise PolySyntaxError(f"Expected a polynomial at {toks[i].pos}")
	monos: List[Monomial] = []
	m, i = read_mono(toks, i)
	monos.append(m)
	while toks[i].kind == '+':
		m, i = read_mono(toks, i + 1)
		monos.append(m)
	return Polynomial.own_monos(monos), i

def read_mono(toks: List[Tok], i: int) -> Tuple[Monomial, int]:
	i = _expect(toks, i, '(')
	coeff, i = read_poly(toks, i)
	i = _expect(toks, i, ',')
	if toks[i].kind != 'NUM' or toks[i].lex.startswith('-'):
		raise PolySyntaxError(f"Expected an exponent at {toks[i].pos}")
	exp = _read_number(toks, i)
	if exp > EXP_MAX:
		raise PolySyntaxError(f"Exponent out of range at {toks[i].pos}")
	i = _expect(toks, i + 1, ')')
	# zero coefficients are dropped by the canonicalizer
	return Monomial(coeff, exp), i

def parse_polynomial(text: str) -> Polynomial:
	toks = tokenize(text)
	p, i = read_poly(toks, 0)
	if toks[i].kind != 'END':
		raise PolySyntaxError(f"Trailing input at {toks[i].pos}")
	return p
