"""
Enumerations for portfolio correlation analysis.
"""

from enum import Enum


class RiskBucket(str, Enum):
    """
    Risk classification of a correlation magnitude.

    Inherits from str so values serialize directly to JSON and compare
    equal to their plain string form.

    Attributes:
        LOW: |r| below the low threshold (default 0.3).
        MEDIUM: |r| at or above the low threshold and below the high one.
        HIGH: |r| at or above the high threshold (default 0.7).

    Examples:
        >>> RiskBucket.HIGH.value
        'high'
        >>> RiskBucket.LOW == "low"
        True
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
