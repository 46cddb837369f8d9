"""Choice enums for pricing app."""

from django.db import models


class ServiceType(models.TextChoices):
    DOCUMENT = 'document', 'Document Printing'
    TARPAULIN = 'tarpaulin', 'Tarpaulin Printing'
    LAMINATION = 'lamination', 'Lamination'
    STANDARD = 'standard', 'Standard'


class ColorMode(models.TextChoices):
    COLOR = 'Color', 'Color'
    BLACK_AND_WHITE = 'Black & White', 'Black & White'
    AUTO_DETECT = 'Auto Detect', 'Auto Detect'


class LaminationSize(models.TextChoices):
    ID_SIZE = 'ID Size', 'ID Size'
    BIG_ID = 'Big ID', 'Big ID'
    A4 = 'A4', 'A4'
    LONG = 'Long', 'Long'
    A5 = 'A5', 'A5'


class PaperSize(models.TextChoices):
    """Informational only; paper size has no price effect."""

    A4 = 'A4', 'A4'
    LETTER = 'Letter', 'Letter'
    LONG = 'Long', 'Long'
    A5 = 'A5', 'A5'


# Identifier-style spellings accepted on input
COLOR_MODE_ALIASES = {
    'BlackAndWhite': ColorMode.BLACK_AND_WHITE,
    'AutoDetect': ColorMode.AUTO_DETECT,
}

LAMINATION_SIZE_ALIASES = {
    'IdSize': LaminationSize.ID_SIZE,
    'BigId': LaminationSize.BIG_ID,
}
