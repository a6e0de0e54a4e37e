"""Aircraft systems package.

This package contains the performance calculations for the supported aircraft.
"""
