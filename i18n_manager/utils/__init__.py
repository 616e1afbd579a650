"""
Utility modules

Import helpers directly from their module:

    from i18n_manager.utils.unified_logger import get_logger, LogType
"""

__all__ = []
