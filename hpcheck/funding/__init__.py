"""
Funding Module - Subsidy program matching.
"""

from .programs import FEDERAL_BUCKETS, REGIONAL_PROGRAMS, FundingProgram, KeywordBucket, RegionalProgram
from .matcher import FundingMatch, FundingMatcher

__all__ = [
    'FEDERAL_BUCKETS', 'REGIONAL_PROGRAMS', 'FundingProgram', 'KeywordBucket', 'RegionalProgram',
    'FundingMatch', 'FundingMatcher',
]
