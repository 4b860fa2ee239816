"""
Vaccine Helper knowledge base.

Contains clinical reference data:
- Vaccine regimens (initial series and booster cadence)
"""
