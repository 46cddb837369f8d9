"""
Catalog App - Print Shop Services

Holds the sellable services and their pricing rules. Rules are validated
into typed rule sets (see ``apps.pricing.rule_sets``) whenever a service is
saved through the API, the admin or the ``seed_catalog`` command.
"""
