"""
Pricing rule sets.

A rule set is the typed, read-only form of a catalog service's
``pricing_rules`` JSON. Rule sets are built once per request by
``apps.pricing.serializers.load_rule_set`` and passed explicitly into the
calculators; there is no process-wide default table.

Option lookups (paper type surcharge, lamination size multiplier) fall back
to a neutral value when the option is not configured. The miss is logged at
WARNING so a gap in the configuration shows up in the logs without blocking
the sale.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from .choices import ServiceType

logger = logging.getLogger(__name__)

NO_SURCHARGE = Decimal('0')
NEUTRAL_MULTIPLIER = Decimal('1')


def _decimal(value):
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _freeze(mapping):
    return MappingProxyType({str(key): _decimal(value) for key, value in dict(mapping).items()})


def _coerce(rule_set, *names):
    for name in names:
        object.__setattr__(rule_set, name, _decimal(getattr(rule_set, name)))


@dataclass(frozen=True)
class DocumentRuleSet:
    color_page_rate: Decimal
    black_page_rate: Decimal
    paper_types: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self):
        _coerce(self, 'color_page_rate', 'black_page_rate')
        object.__setattr__(self, 'paper_types', _freeze(self.paper_types))

    def paper_type_surcharge(self, paper_type):
        """Per-page surcharge for ``paper_type``; 0 when not configured."""
        try:
            return self.paper_types[paper_type]
        except KeyError:
            logger.warning(
                "No surcharge configured for paper type %r; using %s",
                paper_type, NO_SURCHARGE
            )
            return NO_SURCHARGE


@dataclass(frozen=True)
class TarpaulinRuleSet:
    base_price: Decimal
    eyelet_price: Decimal
    rope_price: Decimal
    stand_price: Decimal

    def __post_init__(self):
        _coerce(self, 'base_price', 'eyelet_price', 'rope_price', 'stand_price')


@dataclass(frozen=True)
class LaminationRuleSet:
    base_price: Decimal
    size_multipliers: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self):
        _coerce(self, 'base_price')
        object.__setattr__(self, 'size_multipliers', _freeze(self.size_multipliers))

    def size_multiplier(self, size):
        """Price multiplier for ``size``; 1 when not configured."""
        try:
            return self.size_multipliers[str(size)]
        except KeyError:
            logger.warning(
                "No multiplier configured for lamination size %r; using %s",
                size, NEUTRAL_MULTIPLIER
            )
            return NEUTRAL_MULTIPLIER


@dataclass(frozen=True)
class StandardRuleSet:
    """Flat per-unit price taken from the service itself."""

    base_price: Decimal

    def __post_init__(self):
        _coerce(self, 'base_price')


RULE_SET_TYPES = {
    ServiceType.DOCUMENT: DocumentRuleSet,
    ServiceType.TARPAULIN: TarpaulinRuleSet,
    ServiceType.LAMINATION: LaminationRuleSet,
    ServiceType.STANDARD: StandardRuleSet,
}
