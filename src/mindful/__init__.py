"""
Mindful - first-run onboarding for a mindfulness companion app.

Packages:
- mindful: configuration, CLI and web app
- onboarding: the onboarding flow itself (state, coordinator, payload)
"""

__version__ = "0.1.0"
