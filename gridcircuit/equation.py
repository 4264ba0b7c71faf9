"""Linear equation over named unknowns."""

from typing import Dict, List, Mapping


class Equation:
    """
    ``sum(coefficient * unknown) = constant``, assembled with chained calls::

        Equation().unknown('x', 3).unknown('y', -2).constant(9)

    No validation happens here; an equation is checked when it joins a
    ``SimultaneousEquations`` set.
    """

    def __init__(self):
        self._terms: Dict[str, float] = {}
        self._constant: float = 0

    def unknown(self, name: str, coefficient: float) -> "Equation":
        self._terms[name] = coefficient
        return self

    def constant(self, value: float) -> "Equation":
        self._constant = value
        return self

    @property
    def terms(self) -> Dict[str, float]:
        return dict(self._terms)

    @property
    def constant_value(self) -> float:
        return self._constant

    def unknowns(self) -> List[str]:
        return list(self._terms)

    def coefficient(self, name: str) -> float:
        return self._terms.get(name, 0)

    def substitute(self, known: Mapping[str, float]) -> "Equation":
        """New equation with every known unknown moved into the constant."""
        reduced = Equation()
        constant = self._constant
        for name, coefficient in self._terms.items():
            if name in known:
                constant -= coefficient * known[name]
            else:
                reduced.unknown(name, coefficient)
        return reduced.constant(constant)

    def evaluate(self, values: Mapping[str, float]) -> float:
        """Left-hand side evaluated at ``values``."""
        return sum(coefficient * values[name] for name, coefficient in self._terms.items())

    def __repr__(self) -> str:
        parts = []
        for name, coefficient in self._terms.items():
            sign = "-" if coefficient < 0 else "+"
            magnitude = abs(coefficient)
            term = name if magnitude == 1 else f"{magnitude:g}*{name}"
            if not parts:
                parts.append(term if sign == "+" else f"-{term}")
            else:
                parts.append(f"{sign} {term}")
        lhs = " ".join(parts) or "0"
        return f"{lhs} = {self._constant:g}"
