"""
Adapters package for the TW Angpao adaptor.

This package contains components for integrating with the upstream, including:
- Abstract interfaces that define the contracts for adapters
- The concrete TrueMoney voucher adaptor
"""

from . import interfaces

__all__ = [
    'interfaces',
]
