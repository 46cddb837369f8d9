"""
Service specifications.

One frozen dataclass per service type; together they form the
``ServiceSpecification`` union the calculators dispatch on. Constructing a
specification validates it, so a specification value that exists is
always priceable.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from .choices import (
    ServiceType,
    ColorMode,
    LaminationSize,
    COLOR_MODE_ALIASES,
    LAMINATION_SIZE_ALIASES,
)
from .exceptions import InvalidSpecification

# Largest accepted count and tarpaulin side
MAX_COUNT = 100000
MAX_DIMENSION_FT = Decimal('1000')


def _require_int(value, field, minimum, maximum=MAX_COUNT):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSpecification(field, 'A whole number is required.')
    if value < minimum:
        raise InvalidSpecification(field, f'Must be at least {minimum}.')
    if value > maximum:
        raise InvalidSpecification(field, f'Must be at most {maximum}.')
    return value


def _require_positive_decimal(value, field, maximum=MAX_DIMENSION_FT):
    if isinstance(value, bool) or value is None:
        raise InvalidSpecification(field, 'A number is required.')
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidSpecification(field, 'A number is required.')
    if not number.is_finite() or number <= 0:
        raise InvalidSpecification(field, 'Must be greater than 0.')
    if number > maximum:
        raise InvalidSpecification(field, f'Must be at most {maximum}.')
    return number


def _require_choice(value, choices, aliases, field):
    if value is None or value == '':
        raise InvalidSpecification(field, 'This field is required.')
    value = aliases.get(value, value)
    try:
        return choices(value)
    except ValueError:
        raise InvalidSpecification(
            field,
            f"'{value}' is not one of: {', '.join(choices.values)}."
        )


@dataclass(frozen=True)
class PageAnalysis:
    """Color/black page counts detected in an uploaded document."""

    page_count: int
    color_pages: int
    bw_pages: int

    def __post_init__(self):
        _require_int(self.page_count, 'page_analysis.page_count', 0)
        _require_int(self.color_pages, 'page_analysis.color_pages', 0)
        _require_int(self.bw_pages, 'page_analysis.bw_pages', 0)

    @property
    def total_pages(self):
        return self.color_pages + self.bw_pages


@dataclass(frozen=True)
class DocumentSpec:
    paper_size: str
    paper_type: str
    copies: int
    color_mode: ColorMode
    page_analysis: Optional[PageAnalysis] = None
    # Explicit page count; used when pricing per page without analysis
    page_count: Optional[int] = None

    def __post_init__(self):
        _require_int(self.copies, 'copies', 1)
        object.__setattr__(
            self,
            'color_mode',
            _require_choice(self.color_mode, ColorMode, COLOR_MODE_ALIASES, 'color_mode'),
        )
        if self.page_count is not None:
            _require_int(self.page_count, 'page_count', 1)
        if self.page_analysis is not None and not isinstance(self.page_analysis, PageAnalysis):
            raise InvalidSpecification('page_analysis', 'Invalid page analysis.')

    @property
    def quantity(self):
        """Copies are the priced quantity of a print job."""
        return self.copies


@dataclass(frozen=True)
class TarpaulinSpec:
    width_ft: Decimal
    height_ft: Decimal
    eyelets: int = 0
    include_rope: bool = False
    include_stand: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'width_ft', _require_positive_decimal(self.width_ft, 'width_ft'))
        object.__setattr__(self, 'height_ft', _require_positive_decimal(self.height_ft, 'height_ft'))
        _require_int(self.eyelets, 'eyelets', 0)
        object.__setattr__(self, 'include_rope', bool(self.include_rope))
        object.__setattr__(self, 'include_stand', bool(self.include_stand))

    @property
    def area(self):
        return self.width_ft * self.height_ft

    @property
    def quantity(self):
        # One tarp per line; add-ons are priced once
        return 1


@dataclass(frozen=True)
class LaminationSpec:
    size: LaminationSize
    quantity: int

    def __post_init__(self):
        object.__setattr__(
            self,
            'size',
            _require_choice(self.size, LaminationSize, LAMINATION_SIZE_ALIASES, 'size'),
        )
        _require_int(self.quantity, 'quantity', 1)


@dataclass(frozen=True)
class StandardSpec:
    quantity: int

    def __post_init__(self):
        _require_int(self.quantity, 'quantity', 1)


ServiceSpecification = Union[DocumentSpec, TarpaulinSpec, LaminationSpec, StandardSpec]

SPECIFICATION_TYPES = {
    ServiceType.DOCUMENT: DocumentSpec,
    ServiceType.TARPAULIN: TarpaulinSpec,
    ServiceType.LAMINATION: LaminationSpec,
    ServiceType.STANDARD: StandardSpec,
}
