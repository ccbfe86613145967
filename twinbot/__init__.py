"""Twinbot - coordination and targeting core for a two-robot team.

Two teammates share observations of a single opponent, arbitrate who leads,
flank or approach, and aim with linear targeting.
"""

__version__ = "0.1.0"
