"""
Centralized configuration
"""
import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Setup debug logger for configuration
_config_logger = logging.getLogger('config')

# Check for DEBUG_MODE early (before .env is loaded, check environment)
_debug_mode = os.getenv('DEBUG_MODE', 'false').lower() == 'true'
if _debug_mode:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)

# .env is looked up in the current working directory
_env_file = Path.cwd() / '.env'
_dotenv_result = load_dotenv(_env_file)
if _debug_mode:
    _config_logger.debug(f"📁 Loaded .env from {_env_file.absolute()}: {_dotenv_result}")

# Translation services
SUPPORTED_SERVICES = ("openai", "google", "azure")
DEFAULT_SERVICE = os.getenv('DEFAULT_SERVICE', 'openai')

OPENAI_API_KEY = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-3.5-turbo')
OPENAI_API_ENDPOINT = os.getenv('OPENAI_API_ENDPOINT', 'https://api.openai.com/v1/chat/completions')
OPENAI_TEMPERATURE = float(os.getenv('OPENAI_TEMPERATURE', '0.3'))
OPENAI_MAX_TOKENS = int(os.getenv('OPENAI_MAX_TOKENS', '1000'))

GOOGLE_TRANSLATE_API_KEY = os.getenv('GOOGLE_TRANSLATE_API_KEY', '')
GOOGLE_TRANSLATE_ENDPOINT = os.getenv('GOOGLE_TRANSLATE_ENDPOINT',
                                      'https://translation.googleapis.com/language/translate/v2')

AZURE_TRANSLATOR_KEY = os.getenv('AZURE_TRANSLATOR_KEY', '')
AZURE_TRANSLATOR_REGION = os.getenv('AZURE_TRANSLATOR_REGION', 'westeurope')
AZURE_TRANSLATOR_ENDPOINT = os.getenv('AZURE_TRANSLATOR_ENDPOINT',
                                      'https://api.cognitive.microsofttranslator.com/translate')
AZURE_API_VERSION = "3.0"

REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '60'))

# Key tree traversal
MAX_TREE_DEPTH = int(os.getenv('MAX_TREE_DEPTH', '20'))
KEY_SEPARATOR = "."

# Default languages from environment
DEFAULT_SOURCE_LANGUAGE = os.getenv('DEFAULT_SOURCE_LANGUAGE', 'en')

# Export formatting
JSON_INDENT = 2

# Debug mode (reload after .env is loaded)
DEBUG_MODE = os.getenv('DEBUG_MODE', 'false').lower() == 'true'

GENERIC_TRANSLATION_ERROR = "Unknown error occurred during translation"

if DEBUG_MODE or _debug_mode:
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug("="*60)
    _config_logger.debug("📋 LOADED CONFIGURATION VALUES:")
    _config_logger.debug("="*60)
    _config_logger.debug(f"   DEFAULT_SERVICE: {DEFAULT_SERVICE}")
    _config_logger.debug(f"   OPENAI_MODEL: {OPENAI_MODEL}")
    _config_logger.debug(f"   AZURE_TRANSLATOR_REGION: {AZURE_TRANSLATOR_REGION}")
    _config_logger.debug(f"   REQUEST_TIMEOUT: {REQUEST_TIMEOUT}")
    _config_logger.debug(f"   MAX_TREE_DEPTH: {MAX_TREE_DEPTH}")
    _config_logger.debug(f"   OPENAI_API_KEY: {'***' + OPENAI_API_KEY[-4:] if OPENAI_API_KEY else '(not set)'}")
    _config_logger.debug(f"   GOOGLE_TRANSLATE_API_KEY: {'***' + GOOGLE_TRANSLATE_API_KEY[-4:] if GOOGLE_TRANSLATE_API_KEY else '(not set)'}")
    _config_logger.debug(f"   AZURE_TRANSLATOR_KEY: {'***' + AZURE_TRANSLATOR_KEY[-4:] if AZURE_TRANSLATOR_KEY else '(not set)'}")
    _config_logger.debug("="*60)


def get_api_key_for_service(service: str) -> str:
    """Return the configured credential for a translation service ('' if unset)."""
    keys = {
        "openai": OPENAI_API_KEY,
        "google": GOOGLE_TRANSLATE_API_KEY,
        "azure": AZURE_TRANSLATOR_KEY,
    }
    return keys.get(service, '')
