"""
SPFMatch
========
Sunscreen matching service.

Layers:
- questionnaire: Fitzpatrick scoring and facial skin-type extraction
- catalog: product lookup table (bundled or fetched from Google Sheets)
- matching: composite-key lookup and preference filtering
- reminder: UV-driven reapplication intervals and countdown timer
"""

__version__ = "1.4.0"
