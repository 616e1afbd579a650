"""
i18n Manager: reconcile translation key trees and fill missing keys.
"""

__version__ = "1.0.0"
