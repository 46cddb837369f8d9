"""Quoting against catalog services."""

import logging
from typing import NamedTuple

from .calculators import MAX_AMOUNT, PriceResult, calculate_price
from .exceptions import InvalidSpecification
from .serializers import parse_specification
from .specifications import ServiceSpecification

logger = logging.getLogger(__name__)


class Quote(NamedTuple):
    spec: ServiceSpecification
    result: PriceResult


def price_service(*, service, specification=None, quantity=None) -> Quote:
    """
    Parse and price one cart line for a catalog service.

    Args:
        service: A catalog ``Service``
        specification: Specification dict from the client
        quantity: Cart line quantity (fallback copies/quantity)

    Returns:
        Quote: the typed specification that was priced and its PriceResult

    Raises:
        InvalidRuleSet: If the service's pricing rules are misconfigured
        InvalidSpecification: If the specification is not priceable, or
            prices above the largest storable amount
    """
    rule_set = service.get_rule_set()
    spec = parse_specification(service.type, specification, quantity=quantity)
    result = calculate_price(spec, rule_set)

    if result.total > MAX_AMOUNT:
        raise InvalidSpecification(
            'specification',
            f'Price exceeds the largest amount accepted ({MAX_AMOUNT}).'
        )

    logger.debug(
        "Quoted service %s (%s): unit=%s total=%s",
        service.pk, service.type, result.unit_price, result.total
    )
    return Quote(spec=spec, result=result)


def quote_service(*, service, specification=None, quantity=None) -> PriceResult:
    """Price one cart line for a catalog service; see ``price_service``."""
    return price_service(service=service, specification=specification, quantity=quantity).result
