"""
Price Calculators
=================

Pure functions mapping (specification, rule set) to a ``PriceResult``.
No I/O and no shared state: the same inputs always give the same result,
so calculators are safe to call from concurrent requests.

Every result carries a ``breakdown`` with the intermediate terms. The
breakdown is enough to rebuild ``total`` by hand:

    document (auto-detect with page analysis)
        total = total_per_copy * copies
        total_per_copy = color_pages_total + bw_pages_total
        color_pages_total = color_pages * color_page_rate
        bw_pages_total = bw_pages * black_page_rate
        (also: total_pages)

    document (Color / Black & White / auto-detect without analysis)
        total = page_rate * pages * copies
        page_rate = base_rate + paper_type_rate

    tarpaulin
        total = base_cost + eyelet_cost + rope_cost + stand_cost
        base_cost = area * base price; eyelet_cost = eyelets * eyelet price
        (also: dimensions)

    lamination
        total = base_price * size_multiplier * quantity

    standard
        total = base_price * quantity

Amounts are unrounded Decimals; use ``quantize_money`` where a value is
stored or compared against a client-supplied amount.

Example::

    from decimal import Decimal
    from apps.pricing.calculators import calculate_price
    from apps.pricing.rule_sets import LaminationRuleSet
    from apps.pricing.specifications import LaminationSpec

    result = calculate_price(
        LaminationSpec(size='ID Size', quantity=10),
        LaminationRuleSet(base_price=Decimal('25'), size_multipliers={'ID Size': 1}),
    )
    result.total  # Decimal('250')
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Any, Mapping

from .choices import ColorMode
from .exceptions import RuleSetMismatch
from .rule_sets import (
    DocumentRuleSet,
    TarpaulinRuleSet,
    LaminationRuleSet,
    StandardRuleSet,
)
from .specifications import (
    DocumentSpec,
    TarpaulinSpec,
    LaminationSpec,
    StandardSpec,
)

CENT = Decimal('0.01')
# Largest amount the Decimal(12, 2) money columns hold
MAX_AMOUNT = Decimal('9999999999.99')
TWO = Decimal('2')


def quantize_money(value) -> Decimal:
    """Round to whole cents, half up."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceResult:
    unit_price: Decimal
    total: Decimal
    breakdown: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'breakdown', MappingProxyType(dict(self.breakdown)))

    def as_dict(self):
        return {
            'unit_price': self.unit_price,
            'total': self.total,
            'breakdown': dict(self.breakdown),
        }


def calculate_document_price(spec: DocumentSpec, rules: DocumentRuleSet) -> PriceResult:
    """
    Price a document print job.

    With ``Auto Detect`` and a page analysis, color and black pages are
    charged at their own rates and ``unit_price`` is the average per page.
    Otherwise every page is charged at one rate: the color rate, the black
    rate, or (auto-detect without analysis) the midpoint of the two.
    """
    paper_type_rate = rules.paper_type_surcharge(spec.paper_type)
    copies = Decimal(spec.copies)
    analysis = spec.page_analysis

    if spec.color_mode == ColorMode.AUTO_DETECT and analysis is not None:
        color_page_rate = rules.color_page_rate + paper_type_rate
        black_page_rate = rules.black_page_rate + paper_type_rate

        color_pages_total = analysis.color_pages * color_page_rate
        bw_pages_total = analysis.bw_pages * black_page_rate
        total_per_copy = color_pages_total + bw_pages_total

        return PriceResult(
            unit_price=total_per_copy / max(analysis.total_pages, 1),
            total=total_per_copy * copies,
            breakdown={
                'color_pages': analysis.color_pages,
                'bw_pages': analysis.bw_pages,
                'total_pages': analysis.total_pages,
                'color_page_rate': color_page_rate,
                'black_page_rate': black_page_rate,
                'color_pages_total': color_pages_total,
                'bw_pages_total': bw_pages_total,
                'total_per_copy': total_per_copy,
                'copies': spec.copies,
            },
        )

    if spec.color_mode == ColorMode.COLOR:
        base_rate = rules.color_page_rate
    elif spec.color_mode == ColorMode.BLACK_AND_WHITE:
        base_rate = rules.black_page_rate
    else:
        # Auto Detect before the document has been analysed
        base_rate = (rules.color_page_rate + rules.black_page_rate) / TWO

    page_rate = base_rate + paper_type_rate
    pages = spec.page_count or (analysis.page_count if analysis else 0) or 1

    return PriceResult(
        unit_price=page_rate,
        total=page_rate * pages * copies,
        breakdown={
            'base_rate': base_rate,
            'paper_type_rate': paper_type_rate,
            'page_rate': page_rate,
            'pages': pages,
            'copies': spec.copies,
        },
    )


def calculate_tarpaulin_price(spec: TarpaulinSpec, rules: TarpaulinRuleSet) -> PriceResult:
    """
    Price a tarpaulin.

    ``unit_price`` is the dimensional cost of the one tarp; eyelets, rope
    and stand are added to the total once per order.
    """
    area = spec.area
    base_cost = area * rules.base_price
    eyelet_cost = spec.eyelets * rules.eyelet_price
    rope_cost = rules.rope_price if spec.include_rope else Decimal('0')
    stand_cost = rules.stand_price if spec.include_stand else Decimal('0')

    return PriceResult(
        unit_price=base_cost,
        total=base_cost + eyelet_cost + rope_cost + stand_cost,
        breakdown={
            'dimensions': f'{spec.width_ft} × {spec.height_ft} ft',
            'area': area,
            'base_cost': base_cost,
            'eyelets': spec.eyelets,
            'eyelet_cost': eyelet_cost,
            'rope_cost': rope_cost,
            'stand_cost': stand_cost,
        },
    )


def calculate_lamination_price(spec: LaminationSpec, rules: LaminationRuleSet) -> PriceResult:
    size_multiplier = rules.size_multiplier(spec.size)
    unit_price = rules.base_price * size_multiplier

    return PriceResult(
        unit_price=unit_price,
        total=unit_price * spec.quantity,
        breakdown={
            'base_price': rules.base_price,
            'size_multiplier': size_multiplier,
            'quantity': spec.quantity,
        },
    )


def calculate_standard_price(spec: StandardSpec, rules: StandardRuleSet) -> PriceResult:
    return PriceResult(
        unit_price=rules.base_price,
        total=rules.base_price * spec.quantity,
        breakdown={
            'base_price': rules.base_price,
            'quantity': spec.quantity,
        },
    )


CALCULATORS = {
    DocumentSpec: (DocumentRuleSet, calculate_document_price),
    TarpaulinSpec: (TarpaulinRuleSet, calculate_tarpaulin_price),
    LaminationSpec: (LaminationRuleSet, calculate_lamination_price),
    StandardSpec: (StandardRuleSet, calculate_standard_price),
}


def calculate_price(spec, rules) -> PriceResult:
    """
    Price any service specification with its matching rule set.

    Raises:
        RuleSetMismatch: If ``rules`` belongs to another service type.
        TypeError: If ``spec`` is not a known specification type.
    """
    try:
        rule_set_type, calculator = CALCULATORS[type(spec)]
    except KeyError:
        raise TypeError(f"No calculator for specification type {type(spec).__name__}")

    if not isinstance(rules, rule_set_type):
        raise RuleSetMismatch(
            f"{type(rules).__name__} cannot price a {type(spec).__name__}; "
            f"expected {rule_set_type.__name__}"
        )

    return calculator(spec, rules)
