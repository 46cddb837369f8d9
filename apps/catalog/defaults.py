"""Default services and pricing rules seeded into a fresh shop."""

DOCUMENT_RULES = {
    'colorPageRate': 2.0,
    'blackPageRate': 1.0,
    'paperTypes': {
        'Standard': 0.0,
        'Glossy': 1.0,
        'Matte': 1.5,
        'High Quality': 2.0,
    },
}

TARPAULIN_RULES = {
    'basePrice': 25,  # per sq.ft
    'eyeletPrice': 10,
    'ropePrice': 50,
    'standPrice': 200,
}

LAMINATION_RULES = {
    'basePrice': 25,  # per piece
    'sizeMultipliers': {
        'ID Size': 1.0,
        'Big ID': 1.5,
        'A4': 2.5,
        'Long': 2.0,
        'A5': 1.8,
    },
}

DEFAULT_SERVICES = [
    {
        'name': 'A4 Document Printing',
        'description': 'Standard A4 document printing service',
        'type': 'document',
        'base_price': '8.00',
        'pricing_rules': DOCUMENT_RULES,
    },
    {
        'name': 'Tarpaulin Printing',
        'description': 'Custom tarpaulin printing with various options',
        'type': 'tarpaulin',
        'base_price': '25.00',
        'pricing_rules': TARPAULIN_RULES,
    },
    {
        'name': 'ID Lamination',
        'description': 'Lamination service for IDs and cards',
        'type': 'lamination',
        'base_price': '25.00',
        'pricing_rules': LAMINATION_RULES,
    },
    {
        'name': 'Photocopying Service',
        'description': 'Quick photocopying service',
        'type': 'standard',
        'base_price': '2.00',
        'pricing_rules': None,
    },
    {
        'name': 'Business Card Printing',
        'description': 'Professional business card printing',
        'type': 'standard',
        'base_price': '150.00',
        'pricing_rules': None,
    },
]
