"""
Pricing App - Variable-Specification Pricing

Turns one service specification plus the service's rule set into a
unit price, a total and an itemized breakdown. Everything under this
package except ``views`` and ``services`` is free of I/O.

Architecture:
- choices: ServiceType, ColorMode, LaminationSize, PaperSize
- specifications: typed specification values (one per service type)
- rule_sets: typed, immutable rule sets (one per service type)
- serializers: JSON -> specification / rule set parsing
- calculators: per-type price formulas and the dispatcher
- services: quoting against a catalog service
"""
