import random

from coeff import Coeff
from monomial import Monomial
from polynomial import Polynomial


def C(c):
    return Polynomial.from_coeff(c)


def S(*terms):
    """Sum built directly from (coefficient, exponent) pairs, already canonical."""
    return Polynomial(monos=[Monomial(C(p) if isinstance(p, int) else p, e) for p, e in terms])


def x(idx):
    return Polynomial.variable(idx)


def assert_canonical(p):
    if p.is_coeff():
        assert isinstance(p.coeff, Coeff)
        return
    assert p.monos, "a sum must not be empty"
    exps = [m.exp for m in p.monos]
    assert exps == sorted(set(exps)), f"exponents not strictly ascending: {exps}"
    for m in p.monos:
        assert not m.coeff.is_zero(), f"zero coefficient in {p}"
        assert_canonical(m.coeff)
    if len(p.monos) == 1:
        m = p.monos[0]
        assert not (m.exp == 0 and m.coeff.is_coeff()), f"uncollapsed constant {p}"


def random_poly(rng, depth=2, max_terms=3, max_exp=4, max_coeff=5):
    """Random canonical polynomial built through the canonicalizer."""
    if depth == 0 or rng.random() < 0.25:
        return C(rng.randint(-max_coeff, max_coeff))
    monos = [
        Monomial(random_poly(rng, depth - 1, max_terms, max_exp, max_coeff), rng.randint(0, max_exp))
        for _ in range(rng.randint(1, max_terms))
    ]
    return Polynomial.own_monos(monos)


def random_polys(seed, count, **kwargs):
    rng = random.Random(seed)
    return [random_poly(rng, **kwargs) for _ in range(count)]
