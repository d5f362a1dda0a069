"""
SAVINGS GOAL PROJECTION ENGINE
Required monthly savings to reach a goal with compound returns
"""

from .models import InputDomain, ProjectionResult
from .normalizer import InputNormalizer
from .processor import ProjectionEngine, project

__all__ = ['ProjectionEngine', 'InputNormalizer', 'InputDomain', 'ProjectionResult', 'project']
