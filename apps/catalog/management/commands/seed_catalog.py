"""
Management command to seed the default print shop services.

Usage:
    python manage.py seed_catalog
    python manage.py seed_catalog --update

Creates the document, tarpaulin, lamination and standard services with
their default pricing rules. Existing services (matched by name) are left
alone unless ``--update`` is given.
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.catalog.defaults import DEFAULT_SERVICES
from apps.catalog.models import Service, ServiceCategory


class Command(BaseCommand):
    help = 'Seed the default print shop services and pricing rules'

    def add_arguments(self, parser):
        parser.add_argument(
            '--update',
            action='store_true',
            help='Overwrite pricing of existing services with the defaults',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        created = updated = 0

        for display_order, data in enumerate(DEFAULT_SERVICES):
            service = Service.objects.filter(name=data['name']).first()
            if service and not options['update']:
                continue

            if service is None:
                service = Service(name=data['name'])
                created += 1
            else:
                updated += 1

            service.description = data['description']
            service.type = data['type']
            service.category = (
                ServiceCategory.STANDARD if data['type'] == 'standard'
                else ServiceCategory.DYNAMIC
            )
            service.base_price = Decimal(data['base_price'])
            service.pricing_rules = data['pricing_rules']
            service.display_order = display_order

            try:
                service.full_clean()
            except ValidationError as e:
                raise CommandError(f"Invalid default service '{data['name']}': {e}")
            service.save()

        self.stdout.write(self.style.SUCCESS(
            f'Services seeded: {created} created, {updated} updated.'
        ))
