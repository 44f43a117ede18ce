"""
Salary range parsing used when importing job listings.

Listing exports describe compensation as free text such as
``"USD 80K–120K / year"``; this module turns that into the integer
``salary_min``/``salary_max``/``salary_currency`` columns of a job.
"""

import re
from typing import Dict, Optional, Union

from careerhub.utils.constants import DEFAULT_SALARY_CURRENCY

# "AED 8K–12K / month", "USD 80K–120K / year", "INR 8L–15L / year"
SALARY_RANGE_PATTERN = re.compile(
    r'([A-Z]{3})\s+([\d.]+)([KL])[\s–-]+([\d.]+)([KL])',
    re.IGNORECASE,
)

UNIT_MULTIPLIERS = {
    'K': 1_000,  # thousands
    'L': 100_000,  # lakhs
}

FALLBACK_SALARY = {'min': 50_000, 'max': 100_000, 'currency': DEFAULT_SALARY_CURRENCY}


def parse_salary_range(text: Optional[str]) -> Dict[str, Union[int, str]]:
    """
    Parse a salary range text into yearly integer bounds.

    Examples:
        "USD 80K–120K / year" → {'min': 80000, 'max': 120000, 'currency': 'USD'}
        "AED 8K–12K / month" → {'min': 96000, 'max': 144000, 'currency': 'AED'}
        "INR 8L–15L / year" → {'min': 800000, 'max': 1500000, 'currency': 'INR'}
        "Competitive" → {'min': 50000, 'max': 100000, 'currency': 'USD'}

    Monthly ranges (containing ``/ month``) are converted to yearly figures.
    The currency code is returned as written in the text.
    """
    if not text:
        return dict(FALLBACK_SALARY)

    match = SALARY_RANGE_PATTERN.search(text)
    if not match:
        return dict(FALLBACK_SALARY)

    currency = match.group(1)
    minimum = float(match.group(2)) * UNIT_MULTIPLIERS[match.group(3).upper()]
    maximum = float(match.group(4)) * UNIT_MULTIPLIERS[match.group(5).upper()]

    if '/ month' in text:
        minimum *= 12
        maximum *= 12

    return {'min': round(minimum), 'max': round(maximum), 'currency': currency}
