import decimal
import functools
import re
from decimal import Decimal

from kubernetes.utils import parse_quantity

from projectquota.errors import ParseError

# kubernetes.utils.parse_quantity is lenient (it takes "K", "mi", "NaN" and
# exponents), so the text is held to the strict grammar before normalizing.
QUANTITY_RE = re.compile(
    r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[KMGTPE]i|[numkMGTPE])?"
)

# Quantities are never rounded: arithmetic that cannot be represented
# exactly raises instead.
PARSE_CONTEXT = decimal.Context(
    prec=256,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[decimal.InvalidOperation, decimal.Inexact, decimal.Overflow],
)
EXACT_CONTEXT = decimal.Context(
    prec=decimal.MAX_PREC,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[decimal.InvalidOperation, decimal.Inexact, decimal.Overflow],
)


@functools.total_ordering
class Quantity:
    """A resource quantity normalized to its base unit.

    ``1Gi`` and ``1024Mi`` compare equal; so do ``500m`` and ``0.5``.
    """

    __slots__ = ("value", "_text")

    def __init__(self, value, text=None):
        self.value = Decimal(value)
        self._text = text

    @classmethod
    def parse(cls, text):
        if isinstance(text, Quantity):
            return text
        if isinstance(text, bool):
            raise ParseError(text)
        if isinstance(text, Decimal) and not text.is_finite():
            raise ParseError(text)
        if isinstance(text, (int, Decimal)):
            return cls(text)
        if not isinstance(text, str) or not QUANTITY_RE.fullmatch(text):
            raise ParseError(text)
        try:
            with decimal.localcontext(PARSE_CONTEXT):
                value = parse_quantity(text)
        except (decimal.Inexact, decimal.Overflow) as exc:
            raise ParseError(text) from exc
        return cls(value, text)

    @classmethod
    def zero(cls):
        return cls(0)

    def compare(self, other):
        if self.value < other.value:
            return -1
        if self.value > other.value:
            return 1
        return 0

    def is_zero(self):
        return self.value == 0

    def __add__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        with decimal.localcontext(EXACT_CONTEXT):
            return Quantity(self.value + other.value)

    def __sub__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        with decimal.localcontext(EXACT_CONTEXT):
            return Quantity(self.value - other.value)

    def __eq__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value < other.value

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        if self._text is not None:
            return self._text
        with decimal.localcontext(EXACT_CONTEXT):
            return format(self.value.normalize(), "f")

    def __repr__(self):
        return f"Quantity({str(self)!r})"


def compare(a, b):
    return a.compare(b)
